"""LabelPlacement: caption text and anchor point for each region."""

from __future__ import annotations

import logging

from shapely.geometry import shape

from terroir.state.models import Label, Region

logger = logging.getLogger(__name__)


class LabelPlacement:
    """Overseas regions are captioned with their name, the rest with their code.

    Anchors are centroids, computed once per region code; geometry never
    changes after load.
    """

    def __init__(self):
        self._anchors: dict[str, tuple[float, float]] = {}

    def anchor_for(self, region: Region) -> tuple[float, float]:
        anchor = self._anchors.get(region.code)
        if anchor is None:
            centroid = shape(region.geometry).centroid
            anchor = (centroid.y, centroid.x)
            self._anchors[region.code] = anchor
        return anchor

    def compute_label(self, region: Region) -> Label:
        text = region.name if region.is_overseas else region.code
        return Label(text=text, anchor=self.anchor_for(region))

    def compute_all(self, regions: list[Region]) -> dict[str, Label]:
        labels = {}
        for region in regions:
            if not region.geometry:
                logger.warning("Region %s has no geometry, no label placed", region.code)
                continue
            labels[region.code] = self.compute_label(region)
        return labels
