"""Tests for the dashboard map helpers."""

from __future__ import annotations

from dashboard.geo import MapConfig, build_figure, resolve_click
from tests.conftest import square
from terroir.state.models import Label, Region
from terroir.state.style import DEFAULT_STYLE, VISITED_STYLE


class TestResolveClick:
    def test_new_click_dispatched(self):
        assert resolve_click([{"location": "01"}], None) == ("01", "01")

    def test_repeat_rerun_not_dispatched(self):
        assert resolve_click([{"location": "01"}], "01") == (None, "01")

    def test_empty_selection_resets(self):
        assert resolve_click([], "01") == (None, None)

    def test_same_region_after_clearing(self):
        code, last = resolve_click([{"location": "01"}], None)
        _, last = resolve_click([], last)
        code, last = resolve_click([{"location": "01"}], last)
        assert code == "01"

    def test_points_without_location_ignored(self):
        assert resolve_click([{"lat": 1.0}], "75") == (None, None)


class TestBuildFigure:
    def test_visited_regions_colored(self):
        regions = [Region("01", "Ain", square(5, 46)), Region("75", "Paris", square(2, 48))]
        fig = build_figure(
            regions,
            styles={"01": VISITED_STYLE, "75": DEFAULT_STYLE},
            labels={"75": Label("75", (48.5, 2.5))},
            center=(46.6, 2.5),
            zoom=5,
            revision=3,
            config=MapConfig(),
        )
        assert list(fig.data[0].z) == [1, 0]
        assert list(fig.data[1].text) == ["75"]
        assert fig.layout.uirevision == 3
