"""LayoutValidator — main entry point for the constraint engine.

Usage::

    from planforge.validation import LayoutValidator

    v = LayoutValidator()
    violations = v.validate(state)
"""

from __future__ import annotations

import logging

from planforge.config import ValidationPolicy
from planforge.models.document import KitchenState
from planforge.models.violation import Violation
from planforge.validation.footprint import build_footprints
from planforge.validation.integrity import check_document
from planforge.validation.report import ValidationReport
from planforge.validation.rules import ConstraintRule, default_rules

logger = logging.getLogger(__name__)


class LayoutValidator:
    """Constraint engine with an ordered rule registry.

    Built-in rules run in a fixed order (collisions, clearances, openings,
    utilities); rules registered via :meth:`add_rule` run after them.

    Parameters
    ----------
    policy:
        Clearance and passage constants.  Defaults to :class:`ValidationPolicy`.
    """

    def __init__(self, policy: ValidationPolicy | None = None) -> None:
        self.policy = policy or ValidationPolicy()
        self.rules: list[ConstraintRule] = default_rules()

    def add_rule(self, rule: ConstraintRule) -> None:
        """Register an additional constraint rule."""
        self.rules.append(rule)

    def validate(self, state: KitchenState) -> list[Violation]:
        """Run every rule against *state* and return violations in rule order.

        An empty list means the layout is valid.
        """
        footprints = build_footprints(state.layout.objects)

        violations: list[Violation] = []
        for rule in self.rules:
            try:
                found = rule.check(state, footprints, self.policy)
            except Exception:
                logger.warning("Rule %s failed; skipping", rule.name, exc_info=True)
                continue
            logger.debug("Rule %s: %d violation(s)", rule.name, len(found))
            violations.extend(found)

        return violations

    def report(self, state: KitchenState, *, include_document_checks: bool = True) -> ValidationReport:
        """Validate *state* and wrap the result in a :class:`ValidationReport`."""
        violations: list[Violation] = []
        if include_document_checks:
            violations.extend(check_document(state))
        violations.extend(self.validate(state))
        return ValidationReport(
            project_id=state.project.project_id,
            revision_id=state.project.revision_id,
            violations=violations,
        )


def validate_constraints(
    state: KitchenState,
    policy: ValidationPolicy | None = None,
) -> list[Violation]:
    """Validate *state* with the built-in rules."""
    return LayoutValidator(policy).validate(state)
