"""Map rendering configuration and GeoJSON helpers for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass

import plotly.graph_objects as go

from terroir.state.models import Label, Region, RegionStyle
from terroir.state.style import DEFAULT_STYLE, VISITED_STYLE


@dataclass(frozen=True)
class MapConfig:
    """Everything the map figure needs that is not quiz state.

    Passed explicitly to ``build_figure``; there is no global default.
    """

    tile_style: str = "open-street-map"
    height: int = 600
    marker_symbol: str = "circle"
    marker_size: int = 4
    label_color: str = "#1f2937"
    label_size: int = 11
    default_fill: str = DEFAULT_STYLE.fill_color
    visited_fill: str = VISITED_STYLE.fill_color


def regions_geojson(regions: list[Region]) -> dict:
    """Rebuild a FeatureCollection keyed by region code."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": r.code,
                "properties": {"code": r.code, "nom": r.name},
                "geometry": r.geometry,
            }
            for r in regions
        ],
    }


def build_figure(
    regions: list[Region],
    styles: dict[str, RegionStyle],
    labels: dict[str, Label],
    center: tuple[float, float],
    zoom: int,
    revision: int,
    config: MapConfig,
) -> go.Figure:
    """Choropleth of the regions colored by style, with caption labels on top.

    ``revision`` only changes on a navigation command, so the view is left
    where the user panned it on every other rerun.
    """
    codes = [r.code for r in regions]
    fig = go.Figure()
    fig.add_trace(go.Choroplethmap(
        geojson=regions_geojson(regions),
        locations=codes,
        featureidkey="properties.code",
        z=[1 if styles[c].fill_color == config.visited_fill else 0 for c in codes],
        zmin=0,
        zmax=1,
        colorscale=[[0, config.default_fill], [1, config.visited_fill]],
        showscale=False,
        marker_opacity=DEFAULT_STYLE.fill_opacity,
        marker_line_color=DEFAULT_STYLE.color,
        marker_line_width=DEFAULT_STYLE.weight,
        text=[r.name for r in regions],
        hovertemplate="%{text} (%{location})<extra></extra>",
    ))
    placed = [labels[c] for c in codes if c in labels]
    fig.add_trace(go.Scattermap(
        lat=[lab.anchor[0] for lab in placed],
        lon=[lab.anchor[1] for lab in placed],
        mode="markers+text",
        text=[lab.text for lab in placed],
        textfont=dict(size=config.label_size, color=config.label_color),
        marker=dict(size=config.marker_size, symbol=config.marker_symbol),
        hoverinfo="skip",
        showlegend=False,
    ))
    fig.update_layout(
        map=dict(style=config.tile_style, center=dict(lat=center[0], lon=center[1]), zoom=zoom),
        uirevision=revision,
        margin=dict(l=0, r=0, t=0, b=0),
        height=config.height,
        showlegend=False,
    )
    return fig


def resolve_click(points: list[dict], last_click: str | None) -> tuple[str | None, str | None]:
    """Pick the region code to dispatch from a map selection.

    Returns ``(code_to_dispatch, new_last_click)``. An empty selection resets
    ``last_click`` so clicking the same region again is dispatched.
    """
    clicked = next((p.get("location") for p in points if p.get("location")), None)
    if clicked is None:
        return None, None
    if clicked == last_click:
        return None, last_click
    return clicked, clicked
