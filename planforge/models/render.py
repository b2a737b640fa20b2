"""RenderModel — scene graph handed to the 3D viewer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Vec3(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Quat(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


class Transform3D(BaseModel):
    position_m: Vec3 = Field(default_factory=Vec3)
    rotation_quat: Quat = Field(default_factory=Quat)
    scale: Vec3 = Field(default_factory=lambda: Vec3(x=1.0, y=1.0, z=1.0))


class GltfAssetRef(BaseModel):
    asset_id: str
    uri: str


class Assets(BaseModel):
    gltf: dict[str, GltfAssetRef] = Field(default_factory=dict)


class RenderNode(BaseModel):
    """One placed object in the scene, keyed back to its layout object."""

    id: str
    source_object_id: str
    gltf_key: str
    transform: Transform3D = Field(default_factory=Transform3D)
    material_overrides: dict[str, str] = Field(default_factory=dict)
    lod: int | None = None
    pickable: bool | None = None


class RenderModel(BaseModel):
    schema_version: str
    assets: Assets = Field(default_factory=Assets)
    nodes: list[RenderNode] = Field(default_factory=list)
    extensions: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
