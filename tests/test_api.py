"""Tests for the public API.

Covers the JSON boundary, normalization, patch application, render-model
derivation, room metrics, document integrity checks and the PlanForge
facade.
"""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from planforge.api.envelope import (
    apply_patch_json,
    compute_room_metrics_json,
    derive_render_model_json,
    normalize_state_json,
    validate_layout_json,
)
from planforge.api.facade import PlanForge
from planforge.api.metrics import compute_room_metrics
from planforge.api.normalize import normalize_state
from planforge.api.patch import PatchError, apply_patch, set_pointer
from planforge.api.render_model import derive_render_model
from planforge.config import SCHEMA_VERSION, ValidationPolicy
from planforge.models.document import KitchenState
from planforge.models.patch import ProposedPatch
from planforge.validation.integrity import check_document


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _obj(obj_id: str, x: int, y: int, **overrides: Any) -> dict[str, Any]:
    return {
        "id": obj_id,
        "kind": overrides.get("kind", "module"),
        "catalog_item_id": overrides.get("catalog_item_id", "base_sink_600"),
        "transform_mm": {
            "position_mm": {"x": x, "y": y},
            "rotation_deg": overrides.get("rotation", 0),
        },
        "dims_mm": {
            "width": overrides.get("width", 600),
            "depth": overrides.get("depth", 600),
            "height": overrides.get("height", 720),
        },
        "material_slots": overrides.get("material_slots", {}),
    }


def _document(objects: list[dict[str, Any]] | None = None,
              size: tuple[int, int, int] = (3200, 2600, 2700)) -> dict[str, Any]:
    width, depth, height = size
    return {
        "schema_version": SCHEMA_VERSION,
        "project": {
            "project_id": "proj_demo_001",
            "revision_id": "rev_0001",
            "units": "mm",
            "ruleset_version": "pricing_ruleset_v1",
        },
        "room": {
            "size_mm": {"width": width, "depth": depth, "height": height},
            "openings": [],
            "utilities": [],
            "restricted_zones": [],
        },
        "layout": {"objects": objects if objects is not None else [
            _obj("obj_base_sink_600", 1000, 0, material_slots={
                "front": "mat_front_white",
                "body": "mat_body_white",
                "top": "mat_top_oak",
            }),
        ]},
        "catalog_refs": {
            "modules_catalog_version": "modules_demo_0.1.0",
            "materials_catalog_version": "materials_demo_0.1.0",
        },
    }


def _codes(response: str) -> list[str]:
    return [v["code"] for v in json.loads(response)["violations"]]


# ---------------------------------------------------------------------------
# JSON boundary
# ---------------------------------------------------------------------------


class TestValidateLayoutJson:
    def test_valid_fixture(self) -> None:
        response = validate_layout_json(json.dumps(_document()))
        assert json.loads(response) == {"violations": []}

    def test_out_of_bounds(self) -> None:
        doc = _document([_obj("obj_a", 4000, 0)])
        codes = _codes(validate_layout_json(json.dumps(doc)))
        assert codes == ["layout.out_of_bounds", "layout.wall_clearance"]

    def test_collision(self) -> None:
        doc = _document([_obj("obj_a", 0, 0), _obj("obj_b", 300, 0)])
        assert "layout.collision" in _codes(validate_layout_json(json.dumps(doc)))

    def test_parse_error(self) -> None:
        payload = json.loads(validate_layout_json("{not json"))
        assert len(payload["violations"]) == 1
        violation = payload["violations"][0]
        assert violation["code"] == "json.parse_error"
        assert violation["severity"] == "error"
        assert violation["object_ids"] == []
        assert violation["details"]["message"]

    def test_schema_error(self) -> None:
        doc = _document()
        del doc["room"]
        assert _codes(validate_layout_json(json.dumps(doc))) == ["json.parse_error"]

    def test_details_omitted_when_absent(self) -> None:
        doc = _document([_obj("obj_a", 0, 0), _obj("obj_b", 300, 0)])
        violation = json.loads(validate_layout_json(json.dumps(doc)))["violations"][0]
        assert "details" not in violation

    def test_policy_applied(self) -> None:
        doc = _document([_obj("obj_a", 0, 0), _obj("obj_b", 700, 0)])
        assert "layout.min_passage" in _codes(validate_layout_json(json.dumps(doc)))
        relaxed = ValidationPolicy(min_passage_mm=100)
        assert _codes(validate_layout_json(json.dumps(doc), relaxed)) == []


class TestDocumentChecks:
    def _state(self, doc: dict[str, Any]) -> KitchenState:
        return KitchenState.model_validate(doc)

    def test_clean_document(self) -> None:
        assert check_document(self._state(_document())) == []

    def test_empty_schema_version(self) -> None:
        doc = _document()
        doc["schema_version"] = "  "
        codes = [v.code for v in check_document(self._state(doc))]
        assert codes == ["schema.empty_version"]

    def test_invalid_room_size(self) -> None:
        doc = _document([], size=(0, 2600, 2700))
        codes = [v.code for v in check_document(self._state(doc))]
        assert codes == ["room.invalid_size"]

    def test_duplicate_ids(self) -> None:
        doc = _document([_obj("a", 0, 0), _obj("a", 1000, 0), _obj("a", 2000, 0)])
        violations = check_document(self._state(doc))
        assert [v.code for v in violations] == ["layout.duplicate_id", "layout.duplicate_id"]

    def test_invalid_dims_and_rotation(self) -> None:
        doc = _document([_obj("a", 0, 0, width=0, rotation=360)])
        codes = [v.code for v in check_document(self._state(doc))]
        assert codes == ["layout.invalid_dims", "layout.invalid_rotation"]


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_sorts_room_collections(self) -> None:
        doc = _document()
        doc["room"]["openings"] = [
            {"id": "w2", "kind": "window", "wall_id": "north", "offset_mm": 0, "width_mm": 600, "height_mm": 1200},
            {"id": "d1", "kind": "door", "wall_id": "south", "offset_mm": 0, "width_mm": 900, "height_mm": 2100},
        ]
        doc["room"]["utilities"] = [
            {"id": "water_1", "kind": "water", "position_mm": {"x": 0, "y": 0}},
            {"id": "vent_1", "kind": "vent", "wall_id": "east", "offset_mm": 400},
        ]
        doc["room"]["restricted_zones"] = [
            {"id": "z2", "reason": "b", "polygon_mm": []},
            {"id": "z1", "reason": "a", "min_mm": {"x": 0, "y": 0}, "max_mm": {"x": 1, "y": 1}},
        ]
        state = normalize_state(KitchenState.model_validate(doc))
        assert [o.id for o in state.room.openings] == ["d1", "w2"]
        assert [u.id for u in state.room.utilities] == ["vent_1", "water_1"]
        assert [z.id for z in state.room.restricted_zones] == ["z1", "z2"]

    def test_clamps_opening_offset(self) -> None:
        doc = _document()
        doc["room"]["openings"] = [
            {"id": "d1", "kind": "door", "wall_id": "south", "offset_mm": 3000, "width_mm": 900,
             "height_mm": 2100, "swing": {"direction": "in", "radius_mm": -50}},
            {"id": "d2", "kind": "door", "wall_id": "east", "offset_mm": -100, "width_mm": 900, "height_mm": 2100},
            {"id": "d3", "kind": "door", "wall_id": "roof", "offset_mm": -100, "width_mm": 900, "height_mm": 2100},
        ]
        state = normalize_state(KitchenState.model_validate(doc))
        d1, d2, d3 = state.room.openings
        assert d1.offset_mm == 3200 - 900
        assert d1.swing is not None and d1.swing.radius_mm == 0
        assert d2.offset_mm == 0
        assert d3.offset_mm == -100

    def test_clamps_utilities(self) -> None:
        doc = _document()
        doc["room"]["utilities"] = [
            {"id": "u1", "kind": "water", "zone_radius_mm": -5, "wall_id": "west", "offset_mm": 9000},
        ]
        util = normalize_state(KitchenState.model_validate(doc)).room.utilities[0]
        assert util.zone_radius_mm == 0
        assert util.offset_mm == 2600

    def test_input_not_mutated(self) -> None:
        doc = _document()
        doc["room"]["openings"] = [
            {"id": "d1", "kind": "door", "wall_id": "south", "offset_mm": 5000, "width_mm": 900, "height_mm": 2100},
        ]
        state = KitchenState.model_validate(doc)
        normalize_state(state)
        assert state.room.openings[0].offset_mm == 5000

    def test_json_round(self) -> None:
        doc = _document()
        doc["room"]["utilities"] = [
            {"id": "b", "kind": "vent", "wall_id": "east", "offset_mm": 400},
            {"id": "a", "kind": "power", "wall_id": "east", "offset_mm": 100},
        ]
        out = json.loads(normalize_state_json(json.dumps(doc)))
        assert [u["id"] for u in out["room"]["utilities"]] == ["a", "b"]

    def test_json_parse_error(self) -> None:
        assert _codes(normalize_state_json("[]")) == ["json.parse_error"]


# ---------------------------------------------------------------------------
# Patch application
# ---------------------------------------------------------------------------


def _patch(*ops: dict[str, Any]) -> ProposedPatch:
    return ProposedPatch.model_validate({"ops": list(ops)})


class TestSetPointer:
    def test_escaped_tokens(self) -> None:
        doc = {"a/b": {"c~d": 1}}
        set_pointer(doc, "/a~1b/c~0d", 2)
        assert doc == {"a/b": {"c~d": 2}}

    def test_root_replacement(self) -> None:
        assert set_pointer({"a": 1}, "", {"b": 2}) == {"b": 2}
        assert set_pointer({"a": 1}, "/", {"b": 2}) == {"b": 2}

    @pytest.mark.parametrize(
        ("pointer", "reason"),
        [
            ("layout", "invalid_json_pointer"),
            ("/missing/x", "pointer_not_found"),
            ("/items/x/y", "pointer_index_invalid"),
            ("/items/5/y", "pointer_index_out_of_bounds"),
            ("/items/9", "pointer_index_out_of_bounds"),
            ("/leaf/x", "pointer_target_invalid"),
            ("/items/\u00b2/y", "pointer_index_invalid"),
            ("/items/" + "9" * 5000, "pointer_index_out_of_bounds"),
        ],
    )
    def test_errors(self, pointer: str, reason: str) -> None:
        doc = {"items": [{"y": 1}], "leaf": 3}
        with pytest.raises(PatchError) as exc_info:
            set_pointer(doc, pointer, 0)
        assert exc_info.value.reason == reason


class TestApplyPatch:
    def test_replace_position(self) -> None:
        doc = _document()
        result = apply_patch(doc, _patch(
            {"op": "replace", "path": "/layout/objects/0/transform_mm/position_mm/x", "value": 1200},
        ))
        assert result.ok
        assert result.state is not None
        assert result.state.layout.objects[0].transform_mm.position_mm.x == 1200
        # Source document untouched
        assert doc["layout"]["objects"][0]["transform_mm"]["position_mm"]["x"] == 1000

    def test_unsupported_op(self) -> None:
        result = apply_patch(_document(), _patch({"op": "remove", "path": "/layout/objects/0"}))
        assert result.state is None
        assert [v.code for v in result.violations] == ["patch.unsupported_op"]

    def test_missing_value(self) -> None:
        result = apply_patch(_document(), _patch({"op": "replace", "path": "/schema_version"}))
        assert [v.code for v in result.violations] == ["patch.missing_value"]

    def test_invalid_pointer(self) -> None:
        result = apply_patch(_document(), _patch({"op": "replace", "path": "/layout/objects/7/id", "value": "x"}))
        assert [v.code for v in result.violations] == ["patch.invalid_pointer"]
        assert result.violations[0].details == {"reason": "pointer_index_out_of_bounds"}

    @pytest.mark.parametrize("index", ["\u00b2", "9" * 5000])
    def test_unparseable_index_is_reported(self, index: str) -> None:
        patch = {"ops": [{"op": "replace", "path": f"/layout/objects/{index}", "value": 1}]}
        codes = _codes(apply_patch_json(json.dumps(_document()), json.dumps(patch)))
        assert codes == ["patch.invalid_pointer"]

    def test_all_op_errors_reported(self) -> None:
        result = apply_patch(_document(), _patch(
            {"op": "add", "path": "/x", "value": 1},
            {"op": "replace", "path": "/nope/x", "value": 1},
        ))
        assert [v.code for v in result.violations] == ["patch.unsupported_op", "patch.invalid_pointer"]

    def test_patched_document_must_parse(self) -> None:
        result = apply_patch(_document(), _patch({"op": "replace", "path": "/room/size_mm", "value": "big"}))
        assert result.state is None
        assert [v.code for v in result.violations] == ["json.parse_error"]
        assert result.violations[0].message == "Patched KitchenState invalid"

    def test_json_boundary(self) -> None:
        patch = {"ops": [{"op": "replace", "path": "/layout/objects/0/transform_mm/position_mm/x", "value": 1200}]}
        out = json.loads(apply_patch_json(json.dumps(_document()), json.dumps(patch)))
        assert out["layout"]["objects"][0]["transform_mm"]["position_mm"]["x"] == 1200

    def test_json_boundary_errors(self) -> None:
        assert _codes(apply_patch_json("{", "{}")) == ["json.parse_error"]
        assert _codes(apply_patch_json(json.dumps(_document()), '{"ops": [{"op": "explode"}]}')) == [
            "json.parse_error",
        ]


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------


class TestRenderModel:
    def test_nodes_per_object(self) -> None:
        doc = _document([
            _obj("obj_sink", 1000, 0, material_slots={"front": "white", "body": "white"}),
            _obj("obj_drawers", 1600, 300, catalog_item_id="base_drawers_800"),
            _obj("obj_sink_2", 2200, 0),
        ])
        model = derive_render_model(KitchenState.model_validate(doc))
        assert [n.id for n in model.nodes] == ["node_obj_sink", "node_obj_drawers", "node_obj_sink_2"]
        assert model.nodes[0].material_overrides == {"front": "white", "body": "white"}
        assert model.nodes[1].transform.position_m.x == pytest.approx(1.6)
        assert model.nodes[1].transform.position_m.z == pytest.approx(0.3)
        assert model.nodes[1].transform.position_m.y == 0.0
        assert model.nodes[0].pickable is True

    def test_assets_deduplicated(self) -> None:
        doc = _document([_obj("a", 0, 0), _obj("b", 700, 0)])
        model = derive_render_model(KitchenState.model_validate(doc))
        assert list(model.assets.gltf) == ["base_sink_600"]
        ref = model.assets.gltf["base_sink_600"]
        assert ref.asset_id == "asset_base_sink_600"
        assert ref.uri == "assets/models/base_sink_600.glb"

    def test_json_boundary(self) -> None:
        out = json.loads(derive_render_model_json(json.dumps(_document()), "draft"))
        assert out["schema_version"] == SCHEMA_VERSION
        assert len(out["nodes"]) == 1
        assert "lod" not in out["nodes"][0]
        assert out["nodes"][0]["transform"]["rotation_quat"] == {"x": 0.0, "y": 0.0, "z": 0.0, "w": 1.0}


class TestRoomMetrics:
    def test_coverage(self) -> None:
        doc = _document([_obj("obj_a", 0, 0, width=500, depth=500)], size=(1000, 1000, 2700))
        metrics = compute_room_metrics(KitchenState.model_validate(doc))
        assert metrics.room_area_mm2 == 1_000_000
        assert metrics.occupied_area_mm2 == 250_000
        assert metrics.coverage_ratio == pytest.approx(0.25)
        assert metrics.object_count == 1
        assert metrics.room_perimeter_mm == 4000

    def test_wall_available(self) -> None:
        doc = _document([])
        doc["room"]["openings"] = [
            {"id": "d1", "kind": "door", "wall_id": "south", "offset_mm": 0, "width_mm": 900, "height_mm": 2100},
            {"id": "w1", "kind": "window", "wall_id": "south", "offset_mm": 1500, "width_mm": 1200, "height_mm": 1000},
            {"id": "w2", "kind": "window", "wall_id": "east", "offset_mm": 0, "width_mm": 5000, "height_mm": 1000},
        ]
        metrics = compute_room_metrics(KitchenState.model_validate(doc))
        assert metrics.wall_available_mm == {"north": 3200, "south": 1100, "east": 0, "west": 2600}

    def test_empty_room_area(self) -> None:
        metrics = compute_room_metrics(KitchenState.model_validate(_document([], size=(0, 1000, 2700))))
        assert metrics.coverage_ratio == 0.0

    def test_json_boundary(self) -> None:
        out = json.loads(compute_room_metrics_json(json.dumps(_document())))
        assert out["metrics"]["occupied_area_mm2"] == 360_000
        assert json.loads(compute_room_metrics_json("nope")) == {"metrics": None}


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


@pytest.fixture
def forge() -> PlanForge:
    return PlanForge(config={"PLANFORGE_LOG_LEVEL": "WARNING"})


class TestFacade:
    def test_default_policy_from_config(self, forge: PlanForge) -> None:
        assert forge.policy == ValidationPolicy()

    def test_explicit_policy(self) -> None:
        pf = PlanForge(config={}, policy=ValidationPolicy(min_passage_mm=10))
        assert pf.validator.policy.min_passage_mm == 10

    def test_validate(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document())
        assert forge.validate(state) == []

    def test_edit_reports_new_violations(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document([_obj("a", 0, 0), _obj("b", 1600, 0)]))
        result = forge.edit(state, _patch(
            {"op": "replace", "path": "/layout/objects/1/transform_mm/position_mm/x", "value": 300},
        ))
        assert result.state is not None
        assert [v.code for v in result.violations] == ["layout.collision"]
        assert not result.ok

    def test_edit_rejected_patch(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document())
        result = forge.edit(state, _patch({"op": "move", "path": "/layout", "from": "/room"}))
        assert result.state is None
        assert [v.code for v in result.violations] == ["patch.unsupported_op"]

    def test_edit_normalizes(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document())
        door = {"id": "d1", "kind": "door", "wall_id": "north", "offset_mm": 9999, "width_mm": 900, "height_mm": 2100}
        result = forge.edit(state, _patch({"op": "replace", "path": "/room/openings", "value": [door]}))
        assert result.state is not None
        assert result.state.room.openings[0].offset_mm == 2300
        assert result.ok

    def test_projections_share_footprints(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document([_obj("a", 0, 0, rotation=90, width=500, depth=300)]))
        fps = forge.footprints(state)
        assert (fps[0].width, fps[0].depth) == (300, 500)
        assert forge.room_metrics(state).occupied_area_mm2 == fps[0].aabb.area_mm2()
        assert len(forge.render_model(state).nodes) == 1

    def test_report(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document([_obj("a", 4000, 0)]))
        report = forge.report(state)
        assert report.status == "failed"
        assert report.project_id == "proj_demo_001"

    def test_apply_patch_accepts_model(self, forge: PlanForge) -> None:
        state = KitchenState.model_validate(_document())
        original = copy.deepcopy(state)
        result = forge.apply_patch(state, _patch({"op": "replace", "path": "/schema_version", "value": "0.2.0"}))
        assert result.state is not None and result.state.schema_version == "0.2.0"
        assert state == original
