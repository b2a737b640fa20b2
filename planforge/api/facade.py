"""PlanForge — the single entry point for layout operations.

Usage::

    from planforge import PlanForge

    pf = PlanForge()
    violations = pf.validate(state)
    result = pf.edit(state, patch)
    pf.room_metrics(state)
    pf.render_model(state)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from planforge.api.metrics import RoomMetrics, compute_room_metrics
from planforge.api.normalize import normalize_state
from planforge.api.patch import PatchResult, apply_patch
from planforge.api.render_model import derive_render_model
from planforge.config import ValidationPolicy, load_config
from planforge.models.document import KitchenState
from planforge.models.patch import ProposedPatch
from planforge.models.render import RenderModel
from planforge.models.violation import Violation
from planforge.validation.footprint import Footprint, build_footprints
from planforge.validation.report import ValidationReport
from planforge.validation.rules.base import ConstraintRule
from planforge.validation.validator import LayoutValidator

logger = logging.getLogger(__name__)


class PlanForge:
    """The public interface for layout validation and editing.

    Parameters
    ----------
    project_root:
        Directory searched for ``.planforge/config.json`` and ``.env``.
    policy:
        Explicit policy; overrides anything loaded from configuration.
    config:
        Pre-loaded settings mapping; skips :func:`load_config` when given.
    """

    def __init__(
        self,
        project_root: str | Path = ".",
        *,
        policy: ValidationPolicy | None = None,
        config: Mapping[str, str] | None = None,
    ) -> None:
        self.config = dict(config) if config is not None else load_config(project_root)
        self.policy = policy or ValidationPolicy.from_config(self.config)
        self.validator = LayoutValidator(self.policy)

        level = self.config.get("PLANFORGE_LOG_LEVEL", "INFO").upper()
        logging.getLogger("planforge").setLevel(level)
        logger.debug("PlanForge ready with policy %s", self.policy.model_dump())

    # -- Validation ----------------------------------------------------------

    def add_rule(self, rule: ConstraintRule) -> None:
        self.validator.add_rule(rule)

    def validate(self, state: KitchenState) -> list[Violation]:
        """Constraint violations for *state*; empty means valid."""
        return self.validator.validate(state)

    def report(self, state: KitchenState) -> ValidationReport:
        return self.validator.report(state)

    def footprints(self, state: KitchenState) -> list[Footprint]:
        return build_footprints(state.layout.objects)

    # -- Editing ---------------------------------------------------------------

    def normalize(self, state: KitchenState) -> KitchenState:
        return normalize_state(state)

    def apply_patch(self, document: dict[str, Any] | KitchenState, patch: ProposedPatch) -> PatchResult:
        if isinstance(document, KitchenState):
            document = document.to_dict()
        return apply_patch(document, patch)

    def edit(self, state: KitchenState, patch: ProposedPatch) -> PatchResult:
        """Apply *patch*, normalize, then validate the result.

        When the patch applies, ``result.state`` is the normalized document
        and ``result.violations`` its constraint violations.
        """
        result = self.apply_patch(state, patch)
        if result.state is None:
            return result
        normalized = normalize_state(result.state)
        return PatchResult(state=normalized, violations=self.validate(normalized))

    # -- Projections -----------------------------------------------------------

    def render_model(self, state: KitchenState, quality: str = "draft") -> RenderModel:
        return derive_render_model(state, quality)

    def room_metrics(self, state: KitchenState) -> RoomMetrics:
        return compute_room_metrics(state)
