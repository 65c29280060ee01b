"""Region styles derived from visited / hover state."""

from __future__ import annotations

from dataclasses import replace

from terroir.state.models import RegionStyle

DEFAULT_STYLE = RegionStyle(fill_color="#22c55e")
VISITED_STYLE = RegionStyle(fill_color="#ef4444")


def style_for(visited: bool, hovered: bool = False) -> RegionStyle:
    """Pure style function; callers recompute it per region on demand."""
    style = VISITED_STYLE if visited else DEFAULT_STYLE
    if hovered:
        style = replace(style, weight=2, color="#666", dash_array="", fill_opacity=0.9)
    return style
