"""Footprint builder — 2D floor rectangles derived from layout objects.

Footprints are recomputed on every call and never cached.  The same
builder feeds the constraint rules and the room-metrics projection, so an
object's occupied geometry is computed identically everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from planforge.geometry.aabb import Aabb
from planforge.models.document import LayoutObject, Point2Mm


class Capability(str, Enum):
    """Placement-relevant object categories recognised from tags."""

    SINK = "sink"
    HOB = "hob"


# Tag vocabulary, keyed by casefolded tag
TAG_CAPABILITIES: dict[str, Capability] = {
    "sink": Capability.SINK,
    "hob": Capability.HOB,
    "cooktop": Capability.HOB,
}


def capabilities_from_tags(tags: Iterable[str] | None) -> frozenset[Capability]:
    """Map free-form tags onto the closed capability vocabulary."""
    if not tags:
        return frozenset()
    found = set()
    for tag in tags:
        cap = TAG_CAPABILITIES.get(tag.casefold())
        if cap is not None:
            found.add(cap)
    return frozenset(found)


@dataclass(frozen=True)
class Footprint:
    """The floor rectangle one layout object occupies."""

    id: str
    aabb: Aabb
    width: int
    depth: int
    height: int
    anchor: Point2Mm
    tags: tuple[str, ...] = ()
    capabilities: frozenset[Capability] = field(default_factory=frozenset)

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities


def footprint_dims(obj: LayoutObject) -> tuple[int, int]:
    """Rotation-adjusted (width, depth).

    Any rotation that is not a multiple of 180 degrees is treated as a
    quarter turn, so 45 degrees yields the same footprint as 90.
    """
    rot = obj.transform_mm.rotation_deg % 360
    if rot % 180 == 0:
        return obj.dims_mm.width, obj.dims_mm.depth
    return obj.dims_mm.depth, obj.dims_mm.width


def build_footprint(obj: LayoutObject) -> Footprint:
    width, depth = footprint_dims(obj)
    pos = obj.transform_mm.position_mm
    return Footprint(
        id=obj.id,
        aabb=Aabb.from_min_max(pos.x, pos.y, pos.x + width, pos.y + depth),
        width=width,
        depth=depth,
        height=obj.dims_mm.height,
        anchor=Point2Mm(x=pos.x, y=pos.y),
        tags=tuple(obj.tags or ()),
        capabilities=capabilities_from_tags(obj.tags),
    )


def build_footprints(objects: Iterable[LayoutObject]) -> list[Footprint]:
    """Footprints in input order; this is the canonical id order for all rules."""
    return [build_footprint(obj) for obj in objects]
