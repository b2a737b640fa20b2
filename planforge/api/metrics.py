"""Room metrics — areas, coverage and free wall length."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from planforge.config import WALL_IDS, wall_length
from planforge.models.document import KitchenState
from planforge.validation.footprint import build_footprints


class RoomMetrics(BaseModel):
    room_area_mm2: int = 0
    occupied_area_mm2: int = 0
    coverage_ratio: float = 0.0
    object_count: int = 0
    room_perimeter_mm: int = 0
    wall_available_mm: dict[str, int] = Field(default_factory=dict)
    """Wall length minus the width of all openings on that wall."""

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def compute_room_metrics(state: KitchenState) -> RoomMetrics:
    size = state.room.size_mm
    room_area = max(size.width, 0) * max(size.depth, 0)
    perimeter = max((size.width + size.depth) * 2, 0)

    footprints = build_footprints(state.layout.objects)
    occupied = sum(fp.aabb.area_mm2() for fp in footprints)
    coverage = occupied / room_area if room_area > 0 else 0.0

    wall_available: dict[str, int] = {}
    for wall in WALL_IDS:
        length = max(wall_length(size.width, size.depth, wall) or 0, 0)
        blocked = sum(max(o.width_mm, 0) for o in state.room.openings if o.wall_id == wall)
        wall_available[wall] = max(length - blocked, 0)

    return RoomMetrics(
        room_area_mm2=room_area,
        occupied_area_mm2=occupied,
        coverage_ratio=coverage,
        object_count=len(footprints),
        room_perimeter_mm=perimeter,
        wall_available_mm=wall_available,
    )
