"""Document, violation, patch and render-model schemas."""

from planforge.models.document import (
    CatalogRefs,
    DimsMm,
    KitchenState,
    Layout,
    LayoutObject,
    LayoutObjectKind,
    Opening,
    OpeningKind,
    Point2Mm,
    ProjectMeta,
    RestrictedZone,
    RoomModel,
    SizeMm,
    Swing,
    Transform2DMm,
    UtilityKind,
    UtilityPoint,
)
from planforge.models.patch import JsonPatchOp, PatchOp, PatchSource, ProposedPatch
from planforge.models.render import RenderModel, RenderNode
from planforge.models.violation import Severity, Violation

__all__ = [
    "CatalogRefs",
    "DimsMm",
    "JsonPatchOp",
    "KitchenState",
    "Layout",
    "LayoutObject",
    "LayoutObjectKind",
    "Opening",
    "OpeningKind",
    "PatchOp",
    "PatchSource",
    "Point2Mm",
    "ProjectMeta",
    "ProposedPatch",
    "RenderModel",
    "RenderNode",
    "RestrictedZone",
    "RoomModel",
    "Severity",
    "SizeMm",
    "Swing",
    "Transform2DMm",
    "UtilityKind",
    "UtilityPoint",
    "Violation",
]
