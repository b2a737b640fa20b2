"""Abstract ConstraintRule interface."""

from __future__ import annotations

import abc

from planforge.config import ValidationPolicy
from planforge.models.document import KitchenState
from planforge.models.violation import Violation
from planforge.validation.footprint import Footprint


class ConstraintRule(abc.ABC):
    """Base class for all layout constraint rules.

    Rules are stateless: ``check`` is a pure function of its arguments and
    returns its own list of violations, which the validator concatenates
    in rule order.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short rule identifier."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable description."""

    @abc.abstractmethod
    def check(
        self,
        state: KitchenState,
        footprints: list[Footprint],
        policy: ValidationPolicy,
    ) -> list[Violation]:
        """Run this rule against a layout.

        Parameters
        ----------
        state:
            The (normalized) layout document.
        footprints:
            Footprints of ``state.layout.objects``, in the same order.
        policy:
            Clearance and passage constants.

        Returns list of violations (empty if passing).
        """
