"""Utility proximity rules — sinks near water, hobs near ventilation.

Distances are measured from a footprint's anchor (its unrotated placement
origin), not its centre.  A utility whose position cannot be resolved is
left out of the checks rather than reported.
"""

from __future__ import annotations

import logging
import math

from planforge.config import ValidationPolicy
from planforge.models.document import KitchenState, Point2Mm, SizeMm, UtilityKind, UtilityPoint
from planforge.models.violation import Violation
from planforge.validation.footprint import Capability, Footprint
from planforge.validation.rules.base import ConstraintRule

logger = logging.getLogger(__name__)

_WATER_KINDS = frozenset({UtilityKind.WATER, UtilityKind.DRAIN})
_VENT_KINDS = frozenset({UtilityKind.VENT})


def utility_position(room: SizeMm, utility: UtilityPoint) -> Point2Mm | None:
    """Explicit position, else the wall-edge point at ``offset_mm``."""
    if utility.position_mm is not None:
        return utility.position_mm
    if utility.wall_id is None or utility.offset_mm is None:
        return None

    offset = utility.offset_mm
    if utility.wall_id == "south":
        return Point2Mm(x=offset, y=0)
    if utility.wall_id == "north":
        return Point2Mm(x=offset, y=room.depth)
    if utility.wall_id == "west":
        return Point2Mm(x=0, y=offset)
    if utility.wall_id == "east":
        return Point2Mm(x=room.width, y=offset)
    return None


def distance_mm(a: Point2Mm, b: Point2Mm) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def _resolve(
    room: SizeMm,
    utilities: list[UtilityPoint],
    kinds: frozenset[UtilityKind],
) -> list[tuple[Point2Mm, int]]:
    points: list[tuple[Point2Mm, int]] = []
    for util in utilities:
        if util.kind not in kinds:
            continue
        pos = utility_position(room, util)
        if pos is None:
            logger.debug("Utility %s has no resolvable position; excluded", util.id)
            continue
        points.append((pos, util.zone_radius_mm))
    return points


def _within_any(anchor: Point2Mm, points: list[tuple[Point2Mm, int]]) -> bool:
    return any(distance_mm(anchor, pos) <= radius for pos, radius in points)


class UtilityProximityRule(ConstraintRule):
    """Sinks must sit inside a water/drain zone; hobs should sit inside a vent zone."""

    @property
    def name(self) -> str:
        return "layout.utility_proximity"

    @property
    def description(self) -> str:
        return "Verify sinks are near water/drain points and cooktops near a vent."

    def check(
        self,
        state: KitchenState,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        violations: list[Violation] = []
        room = state.room.size_mm
        water_points = _resolve(room, state.room.utilities, _WATER_KINDS)
        vent_points = _resolve(room, state.room.utilities, _VENT_KINDS)

        for fp in footprints:
            if fp.has(Capability.SINK) and not _within_any(fp.anchor, water_points):
                violations.append(Violation.error(
                    "layout.sink_near_water",
                    "sink should be placed near water/drain utilities",
                    [fp.id],
                ))

            # Advisory only
            if fp.has(Capability.HOB) and not _within_any(fp.anchor, vent_points):
                violations.append(Violation.warning(
                    "layout.hob_near_vent",
                    "cooktop should be placed near a vent",
                    [fp.id],
                ))
        return violations
