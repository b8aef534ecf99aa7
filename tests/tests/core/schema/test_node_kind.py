#!/usr/bin/env python3
import pytest

from docschema.core.schema.derive import _DERIVERS
from docschema.core.schema.fill_engine import _FILLERS
from docschema.core.schema.node_kind import DeletePolicy, NodeKind, NumberType


# --- NodeKind --- #

def test_node_kind_values():
    assert len(NodeKind) == 17
    assert NodeKind("objectId") is NodeKind.OBJECT_ID
    assert NodeKind.STRING == "string"


def test_every_kind_has_derive_and_fill_rules():
    assert set(_DERIVERS) == set(NodeKind)
    assert set(_FILLERS) == set(NodeKind)


def test_number_types():
    assert [t.value for t in NumberType] == ["int", "long", "decimal", "double"]


# --- DeletePolicy --- #

@pytest.mark.parametrize("raw", ["cascade", " Cascade ", DeletePolicy.CASCADE])
def test_delete_policy_parse(raw):
    assert DeletePolicy.parse(raw) is DeletePolicy.CASCADE


def test_delete_policy_parse_unknown_lists_choices():
    with pytest.raises(ValueError, match=r"expected one of: bypass, reject, cascade, nullify, unset"):
        DeletePolicy.parse("explode")
