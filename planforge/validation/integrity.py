"""Document integrity checks — run at the JSON boundary before the rules.

These catch well-typed but meaningless documents (blank schema version,
non-positive sizes, duplicate ids) and objects placed outside the room.
"""

from __future__ import annotations

from planforge.models.document import KitchenState
from planforge.models.violation import Violation


def check_document(state: KitchenState) -> list[Violation]:
    violations: list[Violation] = []

    if not state.schema_version.strip():
        violations.append(Violation.error(
            "schema.empty_version",
            "schema_version must be set",
        ))

    size = state.room.size_mm
    if size.width <= 0 or size.depth <= 0 or size.height <= 0:
        violations.append(Violation.error(
            "room.invalid_size",
            "room size must be positive",
        ))

    seen: set[str] = set()
    for obj in state.layout.objects:
        if obj.id in seen:
            violations.append(Violation.error(
                "layout.duplicate_id",
                "layout object ids must be unique",
                [obj.id],
            ))
        seen.add(obj.id)

        dims = obj.dims_mm
        if dims.width <= 0 or dims.depth <= 0 or dims.height <= 0:
            violations.append(Violation.error(
                "layout.invalid_dims",
                "layout object dimensions must be positive",
                [obj.id],
            ))

        if not 0 <= obj.transform_mm.rotation_deg <= 359:
            violations.append(Violation.error(
                "layout.invalid_rotation",
                "rotation_deg must be within 0..359",
                [obj.id],
            ))

        # Unrotated extent, as placed
        x = obj.transform_mm.position_mm.x
        y = obj.transform_mm.position_mm.y
        if x < 0 or y < 0 or x + dims.width > size.width or y + dims.depth > size.depth:
            violations.append(Violation.error(
                "layout.out_of_bounds",
                "layout object must fit inside room bounds",
                [obj.id],
            ))

    return violations
