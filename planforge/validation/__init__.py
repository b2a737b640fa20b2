"""Layout constraint engine.

Footprint derivation plus the collision, clearance, door-swing and
utility-proximity rules run over those footprints.
"""

from planforge.validation.footprint import Capability, Footprint, build_footprints
from planforge.validation.integrity import check_document
from planforge.validation.report import ValidationReport
from planforge.validation.validator import LayoutValidator, validate_constraints

__all__ = [
    "Capability",
    "Footprint",
    "LayoutValidator",
    "ValidationReport",
    "build_footprints",
    "check_document",
    "validate_constraints",
]
