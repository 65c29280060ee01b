"""Tests for the region-interaction state machine."""

from __future__ import annotations

import asyncio

import pytest

from tests.conftest import BOUNDARIES_URL, LOOKUP_URL, square
from terroir.pipeline import LoadedData, run_load
from terroir.state.camera import VIEWPORTS, CameraController
from terroir.state.errors import LoadFailure, UnknownViewportKey
from terroir.state.labels import LabelPlacement
from terroir.state.models import NOT_FOUND_FACT, LoadStatus, Region
from terroir.state.reveal import RevealGate
from terroir.state.selection import SelectionController
from terroir.state.session import QuizSession
from terroir.state.store import JoinedDataStore
from terroir.state.style import DEFAULT_STYLE, VISITED_STYLE
from terroir.state.visited import VisitedSetTracker


# ── Fixtures ──────────────────────────────────────────────────────────────

def loaded_store(client) -> JoinedDataStore:
    store = JoinedDataStore(loader=lambda: run_load(BOUNDARIES_URL, LOOKUP_URL, client=client))
    asyncio.run(store.load())
    return store


@pytest.fixture
def store(fake_network, boundaries_doc, lookup_csv) -> JoinedDataStore:
    return loaded_store(fake_network(boundaries_doc, lookup_csv))


@pytest.fixture
def session(store) -> QuizSession:
    return QuizSession(store)


# ── JoinedDataStore ───────────────────────────────────────────────────────

class TestJoinedDataStore:
    def test_starts_loading(self):
        assert JoinedDataStore().status is LoadStatus.LOADING

    def test_ready_model(self, store):
        assert store.status is LoadStatus.READY
        assert store.get("01") == "Volailles de Bresse"
        assert store.get("75") == "Jambon-beurre"
        assert store.get("971") == NOT_FOUND_FACT

    def test_scenario_ain_guadeloupe(self, fake_network):
        doc = {"features": [
            {"properties": {"code": "01", "nom": "Ain"}, "geometry": square(5, 46)},
            {"properties": {"code": "971", "nom": "Guadeloupe"}, "geometry": square(-62, 16)},
        ]}
        store = loaded_store(fake_network(doc, "code,specialite\n01,Volailles de Bresse\n"))
        assert store.facts == {"01": "Volailles de Bresse", "971": NOT_FOUND_FACT}

    def test_failure_sets_error(self, fake_network, lookup_csv):
        client = fake_network(None, lookup_csv)
        store = JoinedDataStore(loader=lambda: run_load(BOUNDARIES_URL, LOOKUP_URL, client=client))
        with pytest.raises(LoadFailure):
            asyncio.run(store.load())
        assert store.status is LoadStatus.ERROR
        assert "boundaries unreachable" in store.error
        assert store.regions == []
        assert store.facts == {}

    def test_result_after_teardown_is_ignored(self):
        async def slow_loader():
            store.close()
            return LoadedData(regions=[Region("01", "Ain", {})], lookup={}, facts={"01": "x"})

        store = JoinedDataStore(loader=slow_loader)
        assert asyncio.run(store.load()) == {}
        assert store.status is LoadStatus.LOADING
        assert store.regions == []

    def test_failure_after_teardown_keeps_state(self):
        async def failing_loader():
            store.close()
            raise LoadFailure("late")

        store = JoinedDataStore(loader=failing_loader)
        with pytest.raises(LoadFailure):
            asyncio.run(store.load())
        assert store.status is LoadStatus.LOADING
        assert store.error is None

    def test_unexpected_loader_error_sets_error(self):
        async def broken_loader():
            raise RuntimeError("boom")

        store = JoinedDataStore(loader=broken_loader)
        with pytest.raises(LoadFailure, match="boom"):
            asyncio.run(store.load())
        assert store.status is LoadStatus.ERROR
        assert "boom" in store.error

    def test_malformed_inputs_still_ready(self, fake_network):
        doc = {"features": [{"properties": {"code": "01", "nom": "Ain"}, "geometry": square(5, 46)}, "garbage"]}
        store = loaded_store(fake_network(doc, "code,Code,specialite\n01,01,Volailles\n"))
        assert store.status is LoadStatus.READY
        assert store.get("01") == "Volailles"

    def test_labels_belong_to_store(self, fake_network, lookup_csv):
        first = loaded_store(fake_network({"features": [{"properties": {"code": "01", "nom": "Ain"}, "geometry": square(5, 46)}]}, lookup_csv))
        second = loaded_store(fake_network({"features": [{"properties": {"code": "01", "nom": "Ain"}, "geometry": square(0, 0)}]}, lookup_csv))
        assert first.labels.compute_all(first.regions)["01"].anchor == pytest.approx((46.5, 5.5))
        assert second.labels.compute_all(second.regions)["01"].anchor == pytest.approx((0.5, 0.5))


# ── VisitedSetTracker / RevealGate ────────────────────────────────────────

class TestVisitedSetTracker:
    def test_mark_twice_is_idempotent(self):
        tracker = VisitedSetTracker()
        tracker.mark_visited("01")
        tracker.mark_visited("01")
        assert tracker.is_visited("01")
        assert len(tracker) == 1

    def test_unvisited(self):
        assert not VisitedSetTracker().is_visited("75")


class TestRevealGate:
    def test_reveal_and_reset(self):
        gate = RevealGate()
        assert not gate.is_shown()
        gate.reveal()
        gate.reveal()
        assert gate.is_shown()
        gate.reset()
        assert not gate.is_shown()


# ── SelectionController ───────────────────────────────────────────────────

class TestSelectionController:
    def test_select_resolves_and_marks(self, store):
        controller = SelectionController(store, VisitedSetTracker(), RevealGate())
        selection = controller.select_region("01", "Ain")
        assert selection.fact == "Volailles de Bresse"
        assert controller.visited.is_visited("01")
        assert controller.current == selection

    def test_hidden_after_every_select(self, store):
        controller = SelectionController(store, VisitedSetTracker(), RevealGate())
        for code, name in [("01", "Ain"), ("01", "Ain"), ("971", "Guadeloupe"), ("75", "Paris")]:
            controller.gate.reveal()
            controller.select_region(code, name)
            assert not controller.gate.is_shown()

    def test_reveal_then_reselect_resets(self, store):
        controller = SelectionController(store, VisitedSetTracker(), RevealGate())
        controller.select_region("01", "Ain")
        controller.gate.reveal()
        assert controller.gate.is_shown()
        controller.select_region("75", "Paris")
        assert not controller.gate.is_shown()
        assert controller.current.code == "75"

    def test_missing_fact_uses_sentinel(self, store):
        controller = SelectionController(store, VisitedSetTracker(), RevealGate())
        assert controller.select_region("971", "Guadeloupe").fact == NOT_FOUND_FACT

    def test_clear(self, store):
        controller = SelectionController(store, VisitedSetTracker(), RevealGate())
        controller.select_region("01", "Ain")
        controller.gate.reveal()
        controller.clear()
        assert controller.current is None
        assert not controller.gate.is_shown()
        assert controller.visited.is_visited("01")


# ── CameraController ──────────────────────────────────────────────────────

class TestCameraController:
    def test_initial_state(self):
        camera = CameraController()
        assert camera.state.key == "metropole"
        assert camera.state.viewport == VIEWPORTS["metropole"]

    def test_last_command_wins(self):
        camera = CameraController()
        first = camera.navigate_to("guyane")
        final = camera.navigate_to("mayotte")
        assert camera.state == final
        assert camera.state.viewport == VIEWPORTS["mayotte"]
        assert not camera.is_current(first.generation)
        assert camera.is_current(final.generation)

    def test_unknown_key(self):
        camera = CameraController()
        with pytest.raises(UnknownViewportKey):
            camera.navigate_to("atlantide")
        assert camera.state.key == "metropole"

    def test_catalog(self):
        assert set(VIEWPORTS) == {"metropole", "guadeloupe", "martinique", "guyane", "reunion", "mayotte"}


# ── LabelPlacement ────────────────────────────────────────────────────────

class TestLabelPlacement:
    def test_metropolitan_label_is_code(self):
        region = Region("75", "Paris", square(2.0, 48.0, 0.2))
        assert LabelPlacement().compute_label(region).text == "75"

    def test_overseas_label_is_name(self):
        region = Region("974", "La Réunion", square(55.0, -21.5, 0.6))
        assert LabelPlacement().compute_label(region).text == "La Réunion"

    def test_corsica_is_metropolitan(self):
        region = Region("2A", "Corse-du-Sud", square(8.5, 41.5))
        assert LabelPlacement().compute_label(region).text == "2A"

    def test_anchor_is_centroid(self):
        label = LabelPlacement().compute_label(Region("01", "Ain", square(5.0, 46.0)))
        assert label.anchor == pytest.approx((46.5, 5.5))

    def test_anchor_cached(self):
        placement = LabelPlacement()
        region = Region("01", "Ain", square(5.0, 46.0))
        first = placement.anchor_for(region)
        moved = Region("01", "Ain", square(0.0, 0.0))
        assert placement.anchor_for(moved) == first

    def test_compute_all_skips_missing_geometry(self):
        labels = LabelPlacement().compute_all([Region("01", "Ain", {}), Region("75", "Paris", square(2, 48))])
        assert set(labels) == {"75"}


# ── QuizSession ───────────────────────────────────────────────────────────

class TestQuizSession:
    def test_click_dispatch(self, session):
        selection = session.dispatch("click", "974", "La Réunion")
        assert selection.fact == "Rougail saucisse"
        assert session.visited.is_visited("974")
        assert session.visible_fact() is None
        session.reveal()
        assert session.visible_fact() == "Rougail saucisse"

    def test_name_resolved_from_store(self, session):
        assert session.select_region("01").name == "Ain"

    def test_unknown_code_ignored(self, session):
        assert session.select_region("99", "Nulle part") is None
        assert len(session.visited) == 0

    def test_reveal_without_selection_is_noop(self, session):
        session.reveal()
        assert not session.revealed

    def test_style_for(self, session):
        assert session.style_for("01") == DEFAULT_STYLE
        session.select_region("01")
        assert session.style_for("01") == VISITED_STYLE
        assert session.style_for("75") == DEFAULT_STYLE

    def test_hover_overlay(self, session):
        session.dispatch("hoverEnter", "75")
        hovered = session.style_for("75")
        assert hovered.weight == 2
        assert hovered.fill_color == DEFAULT_STYLE.fill_color
        session.dispatch("hoverExit", "75")
        assert session.style_for("75") == DEFAULT_STYLE

    def test_failed_load_is_inert(self, fake_network, lookup_csv):
        client = fake_network(None, lookup_csv)
        store = JoinedDataStore(loader=lambda: run_load(BOUNDARIES_URL, LOOKUP_URL, client=client))
        with pytest.raises(LoadFailure):
            asyncio.run(store.load())
        session = QuizSession(store)
        assert session.status is LoadStatus.ERROR
        assert session.select_region("01", "Ain") is None
        session.reveal()
        assert session.current is None
        assert len(session.visited) == 0
        # navigation does not depend on the data
        assert session.navigate_to("reunion").key == "reunion"

    def test_clicks_inert_while_loading(self):
        session = QuizSession(JoinedDataStore())
        assert session.dispatch("click", "01", "Ain") is None
        assert session.current is None
