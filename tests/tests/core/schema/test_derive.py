#!/usr/bin/env python3
import re

import pytest

import docschema as ds
from docschema.core.schema.derive import bson_schema


# --- Primitives --- #

@pytest.mark.parametrize("node,expected", [
    (ds.null(), {"bsonType": "null"}),
    (ds.bool_(), {"bsonType": "bool"}),
    (ds.date(), {"bsonType": "date"}),
    (ds.binary(), {"bsonType": "binData"}),
    (ds.object_id(), {"bsonType": "objectId"}),
    (ds.string(), {"bsonType": "string"}),
    (ds.number(), {"bsonType": "number"}),
    (ds.int_(), {"bsonType": "int"}),
    (ds.long(), {"bsonType": "long"}),
    (ds.decimal(), {"bsonType": "decimal"}),
    (ds.double(), {"bsonType": "double"}),
])
def test_primitive_tags(node, expected):
    assert node.bson_schema() == expected


def test_metadata_is_merged_into_artifact():
    node = ds.bool_().title("Active").description("Whether the account is active")
    assert node.bson_schema() == {
        "bsonType": "bool",
        "title": "Active",
        "description": "Whether the account is active",
    }


def test_ref_derives_object_id_without_delete_policy():
    node = ds.ref("users").delete("cascade").title("Author")
    assert node.bson_schema() == {"bsonType": "objectId", "title": "Author"}


def test_enum_lists_values_and_drops_missing():
    assert ds.enum("admin", "user").bson_schema() == {"enum": ["admin", "user"]}
    assert ds.enum("a", ds.MISSING, None).bson_schema() == {"enum": ["a", None]}


def test_string_constraints():
    node = ds.string().min(1).max(64).pattern("^[a-z]+$")
    assert node.bson_schema() == {
        "bsonType": "string",
        "minLength": 1,
        "maxLength": 64,
        "pattern": "^[a-z]+$",
    }


def test_compiled_pattern_reduced_to_source_text():
    node = ds.string().pattern(re.compile(r"^[a-z]+$"))
    assert node.bson_schema()["pattern"] == "^[a-z]+$"


def test_number_subtype_becomes_tag_and_bounds_pass_through():
    node = ds.number().double().min(0).max(1.5).exclusive_max().multiple_of(0.5)
    assert node.bson_schema() == {
        "bsonType": "double",
        "minimum": 0,
        "maximum": 1.5,
        "exclusiveMaximum": True,
        "multipleOf": 0.5,
    }


# --- Composites --- #

def test_array_wraps_item_derivation():
    node = ds.array(ds.int_()).min(1).max(3).unique()
    assert node.bson_schema() == {
        "bsonType": "array",
        "minItems": 1,
        "maxItems": 3,
        "uniqueItems": True,
        "items": {"bsonType": "int"},
    }


def test_object_required_is_exactly_required_props():
    node = ds.object_({
        "a": ds.string(),
        "b": ds.string().optional(),
        "c": ds.string().default("x"),
        "d": ds.union(ds.string(), ds.null().optional()),
        "e": ds.intersection(ds.string(), ds.null().optional()),
    })
    out = node.bson_schema()
    assert out["required"] == ["a", "c", "e"]
    assert list(out["properties"]) == ["a", "b", "c", "d", "e"]
    assert out["properties"]["b"] == {"bsonType": "string"}


def test_object_without_required_props_omits_required():
    out = ds.object_({"a": ds.string().optional()}).bson_schema()
    assert "required" not in out
    assert out == {"bsonType": "object", "properties": {"a": {"bsonType": "string"}}}


def test_strict_object_disallows_additional_properties():
    out = ds.object_({"a": ds.string()}).strict().bson_schema()
    assert out["additionalProperties"] is False


def test_document_indexes_are_not_emitted():
    doc = ds.document({"email": ds.string()}).index({"key": {"email": 1}, "unique": True}).strict()
    assert doc.bson_schema() == {
        "bsonType": "object",
        "additionalProperties": False,
        "required": ["email"],
        "properties": {"email": {"bsonType": "string"}},
    }


# --- Records --- #

def test_record_with_enum_key_lists_properties():
    out = ds.record(ds.enum("x", "y"), ds.string()).bson_schema()
    assert out == {
        "bsonType": "object",
        "required": ["x", "y"],
        "properties": {"x": {"bsonType": "string"}, "y": {"bsonType": "string"}},
    }


def test_record_with_enum_key_and_optional_value_has_no_required():
    out = ds.record(ds.enum("x", "y"), ds.string().optional()).bson_schema()
    assert "required" not in out
    assert set(out["properties"]) == {"x", "y"}


def test_record_with_string_key_uses_pattern_properties():
    assert ds.record(ds.string(), ds.int_()).bson_schema() == {
        "bsonType": "object",
        "patternProperties": {"^.*$": {"bsonType": "int"}},
    }
    keyed = ds.record(ds.string().pattern(re.compile(r"^[a-z]{2}$")), ds.int_())
    assert keyed.bson_schema()["patternProperties"] == {"^[a-z]{2}$": {"bsonType": "int"}}


def test_record_options():
    out = ds.string().record().strict().min(1).max(5).bson_schema()
    assert out["additionalProperties"] is False
    assert out["minProperties"] == 1
    assert out["maxProperties"] == 5


# --- Wrappers & combinators --- #

def test_optional_and_default_pass_derivation_through():
    inner = ds.string().min(2)
    assert inner.optional().bson_schema() == inner.bson_schema()
    assert inner.default("ab").bson_schema() == inner.bson_schema()


def test_union_any_of_and_exclusive_one_of():
    union = ds.union(ds.date(), ds.number())
    assert union.bson_schema() == {"anyOf": [{"bsonType": "date"}, {"bsonType": "number"}]}
    assert union.exclusive().bson_schema() == {"oneOf": [{"bsonType": "date"}, {"bsonType": "number"}]}


def test_nullable_derivation():
    assert ds.string().nullable().title("Nick").bson_schema() == {
        "title": "Nick",
        "anyOf": [{"bsonType": "string"}, {"bsonType": "null"}],
    }


def test_intersection_all_of():
    out = ds.intersection(ds.object_({"a": ds.string()}), ds.object_({"b": ds.int_()})).bson_schema()
    assert [m["properties"] for m in out["allOf"]] == [
        {"a": {"bsonType": "string"}},
        {"b": {"bsonType": "int"}},
    ]


# --- Properties --- #

def test_derivation_is_deterministic_and_returns_fresh_containers():
    doc = ds.document({
        "tags": ds.array(ds.string()),
        "scores": ds.record(ds.enum("a", "b"), ds.int_()),
    })
    first = doc.bson_schema()
    second = bson_schema(doc)
    assert first == second
    first["properties"]["tags"]["items"]["bsonType"] = "mutated"
    assert doc.bson_schema() == second


def test_full_collection_example():
    users = ds.document({
        "_id": ds.string(),
        "name": ds.string().pattern(re.compile(r"^[a-z]+$")),
        "email": ds.string(),
        "role": ds.enum("admin", "user").default("user"),
        "createdAt": ds.union(ds.date(), ds.number()),
    })
    assert users.bson_schema() == {
        "bsonType": "object",
        "required": ["_id", "name", "email", "role", "createdAt"],
        "properties": {
            "_id": {"bsonType": "string"},
            "name": {"bsonType": "string", "pattern": "^[a-z]+$"},
            "email": {"bsonType": "string"},
            "role": {"enum": ["admin", "user"]},
            "createdAt": {"anyOf": [{"bsonType": "date"}, {"bsonType": "number"}]},
        },
    }
