"""Collision rule — pairwise footprint overlap."""

from __future__ import annotations

from planforge.config import ValidationPolicy
from planforge.models.document import KitchenState
from planforge.models.violation import Violation
from planforge.validation.footprint import Footprint
from planforge.validation.rules.base import ConstraintRule


class CollisionRule(ConstraintRule):
    """Two footprints must not overlap; shared edges are allowed."""

    @property
    def name(self) -> str:
        return "layout.collision"

    @property
    def description(self) -> str:
        return "Layout objects must not overlap on the floor plane."

    def check(
        self,
        state: KitchenState,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        violations: list[Violation] = []

        # Every unordered pair, ids in input order
        for i, a in enumerate(footprints):
            for b in footprints[i + 1:]:
                if a.aabb.intersects(b.aabb):
                    violations.append(Violation.error(
                        "layout.collision",
                        "layout objects collide",
                        [a.id, b.id],
                    ))
        return violations
