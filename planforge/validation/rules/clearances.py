"""Clearance rules — room fit, wall clearance, restricted zones, passages.

Emission order: per-footprint size and wall checks, then zone overlaps
(zone by zone), then minimum-passage checks over footprint pairs.
"""

from __future__ import annotations

import logging

from planforge.config import ValidationPolicy
from planforge.geometry.aabb import Aabb
from planforge.models.document import KitchenState, RestrictedZone
from planforge.models.violation import Violation
from planforge.validation.footprint import Footprint
from planforge.validation.rules.base import ConstraintRule

logger = logging.getLogger(__name__)


def zone_bounds(zone: RestrictedZone) -> Aabb | None:
    """Bounding box of a restricted zone, or None for an empty polygon.

    Polygons are reduced to their bounding box: a conservative
    approximation, not point-in-polygon containment.
    """
    if zone.polygon_mm is not None:
        return Aabb.from_points(zone.polygon_mm)
    if zone.min_mm is None or zone.max_mm is None:
        return None
    return Aabb.from_min_max(zone.min_mm.x, zone.min_mm.y, zone.max_mm.x, zone.max_mm.y)


class ClearanceRule(ConstraintRule):
    """Objects must fit the room, respect wall clearance, stay out of
    restricted zones and leave a usable passage between each other."""

    @property
    def name(self) -> str:
        return "layout.clearance"

    @property
    def description(self) -> str:
        return "Verify room fit, wall clearance, restricted zones and minimum passage width."

    def check(
        self,
        state: KitchenState,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        violations: list[Violation] = []
        violations.extend(self._check_room_fit(state, footprints, policy))
        violations.extend(self._check_restricted_zones(state, footprints))
        violations.extend(self._check_passages(footprints, policy))
        return violations

    def _check_room_fit(
        self,
        state: KitchenState,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        violations: list[Violation] = []
        room = state.room.size_mm
        clearance = policy.min_wall_clearance_mm

        for fp in footprints:
            if fp.width > room.width or fp.depth > room.depth or fp.height > room.height:
                violations.append(Violation.error(
                    "layout.object_too_large",
                    "layout object exceeds room size",
                    [fp.id],
                ))

            if (
                fp.aabb.min_x < clearance
                or fp.aabb.min_y < clearance
                or room.width - fp.aabb.max_x < clearance
                or room.depth - fp.aabb.max_y < clearance
            ):
                violations.append(Violation.error(
                    "layout.wall_clearance",
                    "layout object too close to wall",
                    [fp.id],
                ))
        return violations

    def _check_restricted_zones(
        self,
        state: KitchenState,
        footprints: list[Footprint],
    ) -> list[Violation]:
        violations: list[Violation] = []
        for zone in state.room.restricted_zones:
            bounds = zone_bounds(zone)
            if bounds is None:
                logger.debug("Skipping restricted zone %s with no points", zone.id)
                continue
            for fp in footprints:
                if fp.aabb.intersects(bounds):
                    violations.append(Violation.error(
                        "layout.restricted_zone",
                        "layout object overlaps restricted zone",
                        [fp.id],
                    ).with_details({"zone_id": zone.id, "reason": zone.reason}))
        return violations

    def _check_passages(
        self,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        violations: list[Violation] = []
        min_passage = policy.min_passage_mm

        for i, a in enumerate(footprints):
            for b in footprints[i + 1:]:
                # Facing across X: must share part of the Y range
                if a.aabb.overlaps_y(b.aabb):
                    gap = a.aabb.gap_x(b.aabb)
                    if 0 < gap < min_passage:
                        violations.append(_passage_violation(a, b, gap, "x"))

                if a.aabb.overlaps_x(b.aabb):
                    gap = a.aabb.gap_y(b.aabb)
                    if 0 < gap < min_passage:
                        violations.append(_passage_violation(a, b, gap, "y"))
        return violations


def _passage_violation(a: Footprint, b: Footprint, gap: int, axis: str) -> Violation:
    return Violation.error(
        "layout.min_passage",
        "minimum passage width violated",
        [a.id, b.id],
    ).with_details({"gap_mm": gap, "axis": axis})
