"""Patch application — JSON-pointer ``replace`` edits on a layout document.

Only ``replace`` is supported.  The patched document must still parse as
a :class:`KitchenState`; otherwise no document is returned.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from planforge.models.document import KitchenState
from planforge.models.patch import PatchOp, ProposedPatch
from planforge.models.violation import Violation

logger = logging.getLogger(__name__)


class PatchError(Exception):
    """A JSON pointer could not be resolved against the document."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass
class PatchResult:
    """Patched document, or the violations that prevented patching."""

    state: KitchenState | None = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is not None and not self.violations


def _decode_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _index(token: str, size: int) -> int:
    if not (token.isascii() and token.isdigit()):
        raise PatchError("pointer_index_invalid")
    try:
        idx = int(token)
    except ValueError:
        # Digit run past the int conversion limit
        raise PatchError("pointer_index_out_of_bounds") from None
    if idx >= size:
        raise PatchError("pointer_index_out_of_bounds")
    return idx


def set_pointer(document: Any, pointer: str, value: Any) -> Any:
    """Replace the value at *pointer* and return the (possibly new) root.

    An empty pointer or ``"/"`` replaces the whole document.  Objects
    accept new keys on the final token; arrays only accept existing indices.
    """
    if pointer in ("", "/"):
        return value
    if not pointer.startswith("/"):
        raise PatchError("invalid_json_pointer")

    tokens = [_decode_token(t) for t in pointer[1:].split("/")]
    current = document
    for token in tokens[:-1]:
        if isinstance(current, dict):
            if token not in current:
                raise PatchError("pointer_not_found")
            current = current[token]
        elif isinstance(current, list):
            current = current[_index(token, len(current))]
        else:
            raise PatchError("pointer_target_invalid")

    last = tokens[-1]
    if isinstance(current, dict):
        current[last] = value
    elif isinstance(current, list):
        current[_index(last, len(current))] = value
    else:
        raise PatchError("pointer_target_invalid")
    return document


def apply_patch(document: dict[str, Any], patch: ProposedPatch) -> PatchResult:
    """Apply *patch* to a copy of *document* and re-parse the result."""
    target: Any = copy.deepcopy(document)
    violations: list[Violation] = []

    for op in patch.ops:
        if op.op != PatchOp.REPLACE:
            violations.append(Violation.error(
                "patch.unsupported_op",
                "only replace operations are supported",
            ))
            continue
        if op.value is None:
            violations.append(Violation.error(
                "patch.missing_value",
                "replace operation requires value",
            ))
            continue
        try:
            target = set_pointer(target, op.path, copy.deepcopy(op.value))
        except PatchError as exc:
            logger.debug("Patch path %r rejected: %s", op.path, exc.reason)
            violations.append(Violation.error(
                "patch.invalid_pointer",
                "invalid patch path",
            ).with_details({"reason": exc.reason}))

    if violations:
        return PatchResult(violations=violations)

    try:
        state = KitchenState.model_validate(target)
    except ValidationError as exc:
        return PatchResult(violations=[
            Violation.error(
                "json.parse_error",
                "Patched KitchenState invalid",
            ).with_details({"message": str(exc)}),
        ])
    return PatchResult(state=state)
