"""planforge — layout constraint validation for room module placements."""

__version__ = "0.1.0"

from planforge.api.facade import PlanForge
from planforge.config import ValidationPolicy
from planforge.models.document import KitchenState
from planforge.models.violation import Severity, Violation
from planforge.validation.footprint import Footprint, build_footprints
from planforge.validation.report import ValidationReport
from planforge.validation.validator import LayoutValidator, validate_constraints

__all__ = [
    "__version__",
    "Footprint",
    "KitchenState",
    "LayoutValidator",
    "PlanForge",
    "Severity",
    "ValidationPolicy",
    "ValidationReport",
    "Violation",
    "build_footprints",
    "validate_constraints",
]
