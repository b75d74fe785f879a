"""Tests for the document-model node types.

Verifies:
- NodeType and ScalarKind are StrEnums with lowercase values
- Scalar equality is semantic (kind + value), raw text is display-only
- MappingNode equality ignores key order
- from_python / to_python conversions
- Nodes are immutable
"""

from __future__ import annotations

import datetime
from dataclasses import FrozenInstanceError

import pytest

from yaml_semantic_diff.tree.nodes import (
    MappingNode,
    NodeType,
    NullNode,
    ScalarKind,
    ScalarNode,
    SequenceNode,
    from_python,
    to_python,
)
from yaml_semantic_diff.tree.ordered_mapping import OrderedMapping


class TestEnums:
    def test_node_type_values(self) -> None:
        assert [m.value for m in NodeType] == ["scalar", "sequence", "mapping", "null"]

    def test_scalar_kind_values(self) -> None:
        assert ScalarKind.TIMESTAMP == "timestamp"
        assert len(ScalarKind) == 6


class TestScalarNode:
    def test_equality_ignores_raw(self) -> None:
        assert ScalarNode(31, ScalarKind.INT, raw="0x1F") == ScalarNode(31, ScalarKind.INT, raw="31")

    def test_kind_matters(self) -> None:
        assert ScalarNode("1", ScalarKind.STRING) != ScalarNode(1, ScalarKind.INT)

    def test_str_prefers_raw(self) -> None:
        assert str(ScalarNode(31, ScalarKind.INT, raw="0x1F")) == "0x1F"
        assert str(ScalarNode("x")) == "x"

    def test_node_type(self) -> None:
        assert ScalarNode("x").node_type is NodeType.SCALAR

    def test_frozen(self) -> None:
        node = ScalarNode("x")
        with pytest.raises(FrozenInstanceError):
            node.value = "y"  # type: ignore[misc]


class TestNullNode:
    def test_all_nulls_equal(self) -> None:
        assert NullNode(raw="~") == NullNode(raw="null")

    def test_kind_is_null(self) -> None:
        assert NullNode().kind is ScalarKind.NULL
        assert NullNode().node_type is NodeType.NULL


class TestCollections:
    def test_mapping_equality_ignores_order(self) -> None:
        a = MappingNode(OrderedMapping([("a", ScalarNode("1")), ("b", ScalarNode("2"))]))
        b = MappingNode(OrderedMapping([("b", ScalarNode("2")), ("a", ScalarNode("1"))]))
        assert a == b

    def test_sequence_equality_respects_order(self) -> None:
        a = SequenceNode((ScalarNode("1"), ScalarNode("2")))
        b = SequenceNode((ScalarNode("2"), ScalarNode("1")))
        assert a != b

    def test_mapping_get(self) -> None:
        node = MappingNode(OrderedMapping([("a", ScalarNode("1"))]))
        assert node.get("a") == ScalarNode("1")
        assert node.get("b") is None
        assert len(node) == 1


class TestConversion:
    def test_from_python_kinds(self) -> None:
        node = from_python({"s": "x", "i": 1, "f": 1.5, "b": True, "n": None})
        assert isinstance(node, MappingNode)
        entries = node.entries
        assert entries["s"] == ScalarNode("x", ScalarKind.STRING)
        assert entries["i"] == ScalarNode(1, ScalarKind.INT)
        assert entries["f"] == ScalarNode(1.5, ScalarKind.FLOAT)
        assert entries["b"] == ScalarNode(True, ScalarKind.BOOL)
        assert isinstance(entries["n"], NullNode)

    def test_from_python_date(self) -> None:
        node = from_python(datetime.date(2024, 1, 2))
        assert isinstance(node, ScalarNode)
        assert node.kind is ScalarKind.TIMESTAMP
        assert node.raw == "2024-01-02"

    def test_round_trip(self) -> None:
        data = {"b": [1, {"c": None}], "a": "x"}
        back = to_python(from_python(data))
        assert back == data
        assert list(back) == ["b", "a"]
