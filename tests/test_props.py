"""Unit tests for schema property extraction and merging."""

import json

import pytest

from xrdgen.crd.props import decode_validation_schema, get_props, merge_props
from xrdgen.exception import SchemaParseError
from xrdgen.models.xrd import CompositeResourceValidation


def _validation(raw):
    return CompositeResourceValidation(openAPIV3Schema=raw)


SCHEMA = {
    "type": "object",
    "properties": {
        "spec": {
            "type": "object",
            "properties": {"id": {"type": "string"}},
            "required": ["id"],
        },
    },
}


class TestGetProps:

    @pytest.mark.unit
    def test_no_validation_returns_empty(self):
        assert get_props("spec", None) == ({}, [])

    @pytest.mark.unit
    def test_extracts_properties_and_required(self):
        props, required = get_props("spec", _validation(SCHEMA))
        assert props == {"id": {"type": "string"}}
        assert required == ["id"]

    @pytest.mark.unit
    def test_missing_field_returns_empty(self):
        assert get_props("status", _validation(SCHEMA)) == ({}, [])

    @pytest.mark.unit
    def test_field_without_properties_returns_empty(self):
        schema = {"properties": {"status": {"type": "object"}}}
        assert get_props("status", _validation(schema)) == ({}, [])

    @pytest.mark.unit
    def test_accepts_json_text(self):
        props, required = get_props("spec", _validation(json.dumps(SCHEMA)))
        assert props == {"id": {"type": "string"}}
        assert required == ["id"]

    @pytest.mark.unit
    def test_returns_copies(self):
        validation = _validation(SCHEMA)
        props, required = get_props("spec", validation)
        props["id"]["type"] = "integer"
        required.append("other")

        assert get_props("spec", validation) == ({"id": {"type": "string"}}, ["id"])

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            ["a", "list"],
            {"properties": "spec"},
            {"properties": {"spec": {"properties": {"id": "string"}}}},
            {"properties": {"spec": {"required": "id"}}},
            {"properties": {"spec": {"properties": {"id": {"type": 5}}}}},
            {
                "properties": {
                    "spec": {
                        "properties": {
                            "parameters": {
                                "type": "object",
                                "properties": {"size": {"required": "x"}},
                            }
                        }
                    }
                }
            },
            {
                "properties": {
                    "status": {
                        "properties": {"tags": {"type": "array", "items": "string"}}
                    }
                }
            },
            None,
        ],
    )
    def test_malformed_schema_raises(self, raw):
        with pytest.raises(SchemaParseError) as exc_info:
            get_props("spec", _validation(raw), version="v1")

        assert exc_info.value.field == "spec"
        assert exc_info.value.version == "v1"
        assert 'cannot get "spec" properties' in str(exc_info.value)

    @pytest.mark.unit
    def test_decode_accepts_unknown_keywords(self):
        raw = {"properties": {"spec": {"x-kubernetes-preserve-unknown-fields": True}}}
        assert decode_validation_schema(raw) == raw

    @pytest.mark.unit
    def test_nested_schemas_are_copied_verbatim(self):
        prop = {
            "type": "object",
            "x-kubernetes-preserve-unknown-fields": True,
            "additionalProperties": {"type": "string"},
            "properties": {
                "sizes": {
                    "type": "array",
                    "items": {"type": "integer", "minimum": 1},
                },
                "mode": {"type": "string", "enum": ["a", "b"], "default": "a"},
            },
        }
        raw = {"properties": {"spec": {"properties": {"parameters": prop}}}}

        props, _ = get_props("spec", _validation(raw))

        assert props == {"parameters": prop}


class TestMergeProps:

    @pytest.mark.unit
    def test_later_layers_win(self):
        merged = merge_props(
            {"a": {"type": "string"}, "b": {"type": "string"}},
            {"b": {"type": "integer"}},
        )
        assert merged == {"a": {"type": "string"}, "b": {"type": "integer"}}

    @pytest.mark.unit
    def test_does_not_modify_inputs(self):
        base = {"a": 1}
        overlay = {"a": 2}
        merged = merge_props(base, overlay)

        assert merged is not base
        assert base == {"a": 1}

    @pytest.mark.unit
    def test_no_layers(self):
        assert merge_props() == {}
