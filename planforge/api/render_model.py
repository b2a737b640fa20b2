"""Render-model derivation — one scene node per layout object."""

from __future__ import annotations

from planforge.models.document import KitchenState
from planforge.models.render import (
    Assets,
    GltfAssetRef,
    RenderModel,
    RenderNode,
    Transform3D,
    Vec3,
)


def asset_uri(gltf_key: str) -> str:
    return f"assets/models/{gltf_key}.glb"


def derive_render_model(state: KitchenState, quality: str = "draft") -> RenderModel:
    """Project the layout into a viewer scene.

    Floor-plane millimetres map to metres on the X/Z plane (Y is up).
    *quality* does not change the geometry.
    """
    gltf: dict[str, GltfAssetRef] = {}
    nodes: list[RenderNode] = []

    for obj in state.layout.objects:
        key = obj.catalog_item_id
        if key not in gltf:
            gltf[key] = GltfAssetRef(asset_id=f"asset_{key}", uri=asset_uri(key))

        pos = obj.transform_mm.position_mm
        nodes.append(RenderNode(
            id=f"node_{obj.id}",
            source_object_id=obj.id,
            gltf_key=key,
            transform=Transform3D(position_m=Vec3(x=pos.x / 1000.0, y=0.0, z=pos.y / 1000.0)),
            material_overrides=dict(obj.material_slots),
            pickable=True,
        ))

    return RenderModel(
        schema_version=state.schema_version,
        assets=Assets(gltf=gltf),
        nodes=nodes,
    )
