"""Opening rule — door swing clearance."""

from __future__ import annotations

import logging

from planforge.config import ValidationPolicy
from planforge.geometry.aabb import Aabb
from planforge.models.document import KitchenState, Opening, OpeningKind, SizeMm
from planforge.models.violation import Violation
from planforge.validation.footprint import Footprint
from planforge.validation.rules.base import ConstraintRule

logger = logging.getLogger(__name__)


def swing_depth(opening: Opening, policy: ValidationPolicy) -> int:
    if opening.swing is not None:
        return opening.swing.radius_mm
    return policy.default_door_swing_mm


def door_clearance_zone(room: SizeMm, opening: Opening, depth: int) -> Aabb | None:
    """Rectangle in front of a door, projecting *depth* mm into the room.

    Returns None when the opening sits on an unrecognised wall.
    """
    start = opening.offset_mm
    end = opening.offset_mm + opening.width_mm
    if opening.wall_id == "south":
        return Aabb.from_min_max(start, 0, end, depth)
    if opening.wall_id == "north":
        return Aabb.from_min_max(start, room.depth - depth, end, room.depth)
    if opening.wall_id == "west":
        return Aabb.from_min_max(0, start, depth, end)
    if opening.wall_id == "east":
        return Aabb.from_min_max(room.width - depth, start, room.width, end)
    return None


class DoorClearanceRule(ConstraintRule):
    """Door swing zones must be free of layout objects."""

    @property
    def name(self) -> str:
        return "layout.door_clearance"

    @property
    def description(self) -> str:
        return "Verify no layout object blocks the swing zone of a door."

    def check(
        self,
        state: KitchenState,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        violations: list[Violation] = []
        room = state.room.size_mm

        for opening in state.room.openings:
            if opening.kind != OpeningKind.DOOR:
                continue

            zone = door_clearance_zone(room, opening, swing_depth(opening, policy))
            if zone is None:
                logger.debug("Skipping door %s on unknown wall %r", opening.id, opening.wall_id)
                continue

            for fp in footprints:
                if fp.aabb.intersects(zone):
                    violations.append(Violation.error(
                        "layout.door_clearance",
                        "layout object blocks door clearance",
                        [fp.id],
                    ).with_details({"opening_id": opening.id}))
        return violations
