"""Constraint rules — collisions, clearances, openings, utilities."""

from planforge.validation.rules.base import ConstraintRule
from planforge.validation.rules.clearances import ClearanceRule
from planforge.validation.rules.collisions import CollisionRule
from planforge.validation.rules.openings import DoorClearanceRule
from planforge.validation.rules.utilities import UtilityProximityRule


def default_rules() -> list[ConstraintRule]:
    """Built-in rules in their fixed evaluation order."""
    return [
        CollisionRule(),
        ClearanceRule(),
        DoorClearanceRule(),
        UtilityProximityRule(),
    ]


__all__ = [
    "ConstraintRule",
    "ClearanceRule",
    "CollisionRule",
    "DoorClearanceRule",
    "UtilityProximityRule",
    "default_rules",
]
