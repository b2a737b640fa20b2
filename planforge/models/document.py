"""KitchenState — the layout document validated by the constraint engine.

Field names follow the JSON wire format (snake_case).  All lengths are
integer millimetres.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class Point2Mm(BaseModel):
    """A point on the room floor plane."""

    x: int
    y: int


class SizeMm(BaseModel):
    """Room extents."""

    width: int
    depth: int
    height: int


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class LayoutObjectKind(str, Enum):
    MODULE = "module"
    APPLIANCE = "appliance"
    DECOR = "decor"


class Transform2DMm(BaseModel):
    position_mm: Point2Mm
    rotation_deg: int = 0
    """Rotation about the vertical axis; only 90 degree classes are modelled."""


class DimsMm(BaseModel):
    width: int
    depth: int
    height: int


class LayoutObject(BaseModel):
    """A placed module, appliance or decor item."""

    id: str
    kind: LayoutObjectKind
    catalog_item_id: str
    transform_mm: Transform2DMm
    dims_mm: DimsMm
    material_slots: dict[str, str] = Field(default_factory=dict)
    tags: list[str] | None = None
    """Free-form tags, matched case-insensitively (e.g. 'sink', 'hob')."""


class Layout(BaseModel):
    objects: list[LayoutObject] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Room
# ---------------------------------------------------------------------------


class OpeningKind(str, Enum):
    DOOR = "door"
    WINDOW = "window"


class Swing(BaseModel):
    direction: str = "in"
    radius_mm: int


class Opening(BaseModel):
    """A door or window cut into one of the four walls."""

    id: str
    kind: OpeningKind
    wall_id: str
    """'north', 'south', 'east' or 'west'; other values are carried but ignored."""

    offset_mm: int
    """Distance along the wall from its origin corner."""

    width_mm: int
    height_mm: int
    sill_height_mm: int | None = None
    swing: Swing | None = None


class UtilityKind(str, Enum):
    WATER = "water"
    DRAIN = "drain"
    POWER = "power"
    VENT = "vent"
    GAS = "gas"


class UtilityPoint(BaseModel):
    """A service connection, placed explicitly or by wall + offset."""

    id: str
    kind: UtilityKind
    zone_radius_mm: int = 0
    position_mm: Point2Mm | None = None
    wall_id: str | None = None
    offset_mm: int | None = None


class RestrictedZone(BaseModel):
    """An area objects must keep out of.

    The zone is either a box (``min_mm`` + ``max_mm``) or a polygon
    (``polygon_mm``).  Containment checks only ever use the bounding box
    of the shape, so concave polygons are treated conservatively.
    """

    id: str
    reason: str = ""
    min_mm: Point2Mm | None = None
    max_mm: Point2Mm | None = None
    polygon_mm: list[Point2Mm] | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> RestrictedZone:
        has_box = self.min_mm is not None or self.max_mm is not None
        has_polygon = self.polygon_mm is not None
        if has_box and has_polygon:
            raise ValueError("restricted zone must be either a box or a polygon, not both")
        if has_box and (self.min_mm is None or self.max_mm is None):
            raise ValueError("box restricted zone requires both min_mm and max_mm")
        if not has_box and not has_polygon:
            raise ValueError("restricted zone requires min_mm/max_mm or polygon_mm")
        return self

    @property
    def shape(self) -> str:
        return "polygon" if self.polygon_mm is not None else "box"


class RoomModel(BaseModel):
    size_mm: SizeMm
    openings: list[Opening] = Field(default_factory=list)
    utilities: list[UtilityPoint] = Field(default_factory=list)
    restricted_zones: list[RestrictedZone] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class ProjectMeta(BaseModel):
    project_id: str
    revision_id: str
    units: str = "mm"
    ruleset_version: str | None = None


class CatalogRefs(BaseModel):
    modules_catalog_version: str
    materials_catalog_version: str


class KitchenState(BaseModel):
    """The complete layout document: room, placed objects, catalog refs."""

    schema_version: str
    project: ProjectMeta
    room: RoomModel
    layout: Layout = Field(default_factory=Layout)
    catalog_refs: CatalogRefs
    extensions: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
