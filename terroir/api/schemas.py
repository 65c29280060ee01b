"""Pydantic schemas for API request validation and response serialization."""

from __future__ import annotations

import enum

from pydantic import BaseModel

from terroir.state.camera import VIEWPORTS

ViewportKey = enum.Enum("ViewportKey", {key: key for key in VIEWPORTS}, type=str)

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthOut(BaseModel):
    status: str
    data: str
    error: str | None = None
    uptime_seconds: float


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


class ViewportOut(BaseModel):
    key: str
    label: str
    lat: float
    lon: float
    zoom: int


class RegionOut(BaseModel):
    code: str
    name: str
    label: str | None = None
    anchor_lat: float | None = None
    anchor_lon: float | None = None
    overseas: bool = False


class RegionListOut(BaseModel):
    total: int
    data: list[RegionOut]


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class SelectIn(BaseModel):
    code: str


class NavigateIn(BaseModel):
    viewport: ViewportKey


class SelectionOut(BaseModel):
    code: str
    name: str
    fact: str | None = None  # hidden until revealed


class CameraOut(BaseModel):
    viewport: str
    label: str
    lat: float
    lon: float
    zoom: int
    generation: int


class SessionOut(BaseModel):
    id: str
    status: str
    selection: SelectionOut | None = None
    revealed: bool = False
    visited: list[str]
    camera: CameraOut


class StyleOut(BaseModel):
    code: str
    fill_color: str
    color: str
    weight: int
    opacity: float
    dash_array: str
    fill_opacity: float
