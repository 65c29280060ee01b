"""Plain data types shared by the interaction state machine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

NOT_FOUND_FACT = "Spécialité non trouvée"

# Department codes from 971 upward are the overseas territories (DOM-TOM).
OVERSEAS_MIN_CODE = 971


class LoadStatus(str, enum.Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class Region:
    """A department or overseas territory taken from the boundary document."""

    code: str
    name: str
    geometry: dict[str, Any] = field(compare=False, hash=False, repr=False)

    @property
    def is_overseas(self) -> bool:
        return self.code.isdigit() and int(self.code) >= OVERSEAS_MIN_CODE


@dataclass(frozen=True)
class Selection:
    code: str
    name: str
    fact: str


@dataclass(frozen=True)
class Viewport:
    center: tuple[float, float]  # (lat, lon)
    zoom: int
    label: str


@dataclass(frozen=True)
class CameraState:
    key: str
    viewport: Viewport
    generation: int = 0


@dataclass(frozen=True)
class Label:
    text: str
    anchor: tuple[float, float]  # (lat, lon)


@dataclass(frozen=True)
class RegionStyle:
    fill_color: str
    color: str = "white"
    weight: int = 1
    opacity: float = 1.0
    dash_array: str = "3"
    fill_opacity: float = 0.7
