"""JSON boundary — string in, string out.

Host processes (CLI, service endpoint, embedding host) call these.  Parse
failures never raise: they come back as a ``json.parse_error`` violation
inside the usual ``{"violations": [...]}`` envelope.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from planforge.api.metrics import compute_room_metrics
from planforge.api.normalize import normalize_state
from planforge.api.patch import apply_patch
from planforge.api.render_model import derive_render_model
from planforge.config import ValidationPolicy
from planforge.models.document import KitchenState
from planforge.models.patch import ProposedPatch
from planforge.models.violation import Violation
from planforge.validation.integrity import check_document
from planforge.validation.validator import LayoutValidator

logger = logging.getLogger(__name__)


def violations_response(violations: list[Violation]) -> str:
    return json.dumps({"violations": [v.to_dict() for v in violations]})


def parse_error(message: str, exc: Exception) -> Violation:
    return Violation.error("json.parse_error", message).with_details({"message": str(exc)})


def parse_state(text: str) -> tuple[KitchenState | None, list[Violation]]:
    """Parse a KitchenState document, or return the parse-error violation."""
    try:
        return KitchenState.model_validate_json(text), []
    except ValidationError as exc:
        logger.debug("Rejected KitchenState document", exc_info=True)
        return None, [parse_error("Invalid KitchenState JSON", exc)]


def validate_layout_json(text: str, policy: ValidationPolicy | None = None) -> str:
    """Integrity checks followed by the constraint rules."""
    state, errors = parse_state(text)
    if state is None:
        return violations_response(errors)
    violations = check_document(state)
    violations.extend(LayoutValidator(policy).validate(state))
    return violations_response(violations)


def normalize_state_json(text: str) -> str:
    state, errors = parse_state(text)
    if state is None:
        return violations_response(errors)
    return json.dumps(normalize_state(state).to_dict())


def apply_patch_json(state_text: str, patch_text: str) -> str:
    """Apply a patch; returns the patched document or a violations envelope."""
    try:
        document: Any = json.loads(state_text)
    except json.JSONDecodeError as exc:
        return violations_response([parse_error("Invalid KitchenState JSON", exc)])

    try:
        patch = ProposedPatch.model_validate_json(patch_text)
    except ValidationError as exc:
        return violations_response([parse_error("Invalid patch JSON", exc)])

    result = apply_patch(document, patch)
    if result.state is None:
        return violations_response(result.violations)
    return json.dumps(result.state.to_dict())


def derive_render_model_json(text: str, quality: str = "draft") -> str:
    state, errors = parse_state(text)
    if state is None:
        return violations_response(errors)
    return json.dumps(derive_render_model(state, quality).to_dict())


def compute_room_metrics_json(text: str) -> str:
    state, _errors = parse_state(text)
    if state is None:
        return json.dumps({"metrics": None})
    return json.dumps({"metrics": compute_room_metrics(state).to_dict()})
