"""Public API — facade, collaborators and the JSON boundary."""

from planforge.api.envelope import (
    apply_patch_json,
    compute_room_metrics_json,
    derive_render_model_json,
    normalize_state_json,
    validate_layout_json,
)
from planforge.api.facade import PlanForge
from planforge.api.metrics import RoomMetrics, compute_room_metrics
from planforge.api.normalize import normalize_state
from planforge.api.patch import PatchError, PatchResult, apply_patch
from planforge.api.render_model import derive_render_model

__all__ = [
    "PatchError",
    "PatchResult",
    "PlanForge",
    "RoomMetrics",
    "apply_patch",
    "apply_patch_json",
    "compute_room_metrics",
    "compute_room_metrics_json",
    "derive_render_model",
    "derive_render_model_json",
    "normalize_state",
    "normalize_state_json",
    "validate_layout_json",
]
