"""
Tests for document operations.

TestMerge     — identity, matching, de-duplication, ordering, purity
TestTrim      — nameless node removal
TestValidate  — canonical round trip
"""

from __future__ import annotations

import pytest

from wpp.document import Node
from wpp.errors import NotWPPError, TypeHasMultipleNamesError
from wpp.merge import merge, trim, validate


@pytest.fixture
def doc():
    return [
        Node(type="Person", name="Alice", properties={"age": ["30"], "hobby": ["chess"]}),
        Node(type="Dog", name="Rex", properties={"owner": ["Alice"]}),
    ]


# ---------------------------------------------------------------------------
# TestMerge
# ---------------------------------------------------------------------------

class TestMerge:

    def test_right_identity(self, doc):
        result = merge(doc, [])
        assert result == doc
        assert result is not doc
        assert result[0] is not doc[0]
        assert result[0].properties["age"] is not doc[0].properties["age"]

    def test_left_identity(self, doc):
        result = merge([], doc)
        assert result == doc
        assert result is not doc

    def test_none_operands(self, doc):
        assert merge(None, None) == []
        assert merge(None, doc) == doc
        assert merge(doc, None) == doc

    def test_both_empty(self):
        assert merge([], []) == []

    def test_dedup(self):
        a = [Node(type="T", name="N", properties={"x": ["1"]})]
        b = [Node(type="T", name="N", properties={"x": ["1", "2"]})]
        result = merge(a, b)
        assert len(result) == 1
        assert result[0].properties == {"x": ["1", "2"]}

    def test_dedup_keeps_first_occurrence_order(self):
        a = [Node(type="T", name="N", properties={"x": ["b", "a", "b"]})]
        b = [Node(type="T", name="N", properties={"x": ["c", "a"]})]
        assert merge(a, b)[0].properties["x"] == ["b", "a", "c"]

    def test_new_key_adopted(self, doc):
        b = [Node(type="Person", name="Alice", properties={"city": ["Paris", "Paris"]})]
        result = merge(doc, b)
        assert result[0].properties == {
            "age": ["30"],
            "hobby": ["chess"],
            "city": ["Paris", "Paris"],
        }

    def test_unmatched_appended_in_order(self, doc):
        b = [
            Node(type="Cat", name="Tom"),
            Node(type="Dog", name="Rex", properties={"owner": ["Bob"]}),
            Node(type="Cat", name="Kit"),
        ]
        result = merge(doc, b)
        assert [(n.type, n.name) for n in result] == [
            ("Person", "Alice"), ("Dog", "Rex"), ("Cat", "Tom"), ("Cat", "Kit"),
        ]
        assert result[1].properties["owner"] == ["Alice", "Bob"]

    def test_donor_matches_once(self):
        a = [
            Node(type="T", name="N", properties={"x": ["1"]}),
            Node(type="T", name="N", properties={"x": ["9"]}),
        ]
        b = [Node(type="T", name="N", properties={"x": ["2"]})]
        result = merge(a, b)
        assert [n.properties["x"] for n in result] == [["1", "2"], ["9"]]

    def test_first_matching_donor_used(self):
        a = [Node(type="T", name="N", properties={})]
        b = [
            Node(type="T", name="N", properties={"x": ["1"]}),
            Node(type="T", name="N", properties={"x": ["2"]}),
        ]
        result = merge(a, b)
        assert result[0].properties == {"x": ["1"]}
        assert result[1].properties == {"x": ["2"]}

    def test_nodes_without_identity_not_matched(self):
        a = [Node(type="T", name="", properties={"x": ["1"]})]
        b = [Node(type="T", name="", properties={"x": ["2"]})]
        result = merge(a, b)
        assert len(result) == 2

    def test_inputs_untouched(self, doc):
        a_before = [n.to_dict() for n in doc]
        b = [Node(type="Person", name="Alice", properties={"age": ["31"]})]
        b_before = [n.to_dict() for n in b]
        merge(doc, b)
        assert [n.to_dict() for n in doc] == a_before
        assert [n.to_dict() for n in b] == b_before

    @pytest.mark.parametrize("bad", ["text", {"type": "T"}, 42, [{"type": "T"}], ["abc"]])
    def test_not_wpp_second_operand(self, doc, bad):
        with pytest.raises(NotWPPError):
            merge(doc, bad)

    @pytest.mark.parametrize("bad", ["text", {"type": "T"}, 42, [{"type": "T"}], ["abc"]])
    def test_not_wpp_first_operand(self, doc, bad):
        with pytest.raises(NotWPPError):
            merge(bad, doc)

    def test_not_wpp_is_type_error(self, doc):
        with pytest.raises(TypeError):
            merge(doc, "text")

    def test_not_wpp_mixed_list(self, doc):
        with pytest.raises(NotWPPError):
            merge(doc, [doc[0], {"type": "Dog", "name": "Rex"}])


# ---------------------------------------------------------------------------
# TestTrim
# ---------------------------------------------------------------------------

class TestTrim:

    def test_nameless_node_removed(self):
        doc = [Node(type="A", name=""), Node(type="B", name="b")]
        assert trim(doc) == [Node(type="B", name="b")]

    def test_none_name_removed(self):
        doc = [Node(type="A", name=None), Node(type=None, name="kept")]
        assert trim(doc) == [Node(type=None, name="kept")]

    def test_order_preserved(self):
        doc = [
            Node(type="A", name="1"),
            Node(type="A", name=""),
            Node(type="A", name="2"),
            Node(type="A", name=""),
            Node(type="A", name="3"),
        ]
        assert [n.name for n in trim(doc)] == ["1", "2", "3"]

    def test_returns_copy(self, doc):
        result = trim(doc)
        assert result == doc
        assert result[0] is not doc[0]

    def test_empty(self):
        assert trim([]) == []

    @pytest.mark.parametrize("bad", ["text", None, {"name": "x"}, [{"name": "x"}], ["abc"]])
    def test_not_wpp(self, bad):
        with pytest.raises(NotWPPError):
            trim(bad)


# ---------------------------------------------------------------------------
# TestValidate
# ---------------------------------------------------------------------------

class TestValidate:

    def test_round_trip(self, doc):
        assert validate(doc) == doc

    def test_single_node(self, doc):
        assert validate(doc[0]) == [doc[0]]

    def test_canonicalizes_empty_values(self):
        doc = [Node(type="A", name="x", properties={"a": ["", "1"]})]
        assert validate(doc) == [Node(type="A", name="x", properties={"a": ["1"]})]

    def test_parser_errors_propagate(self):
        with pytest.raises(TypeHasMultipleNamesError):
            validate([Node(type="A", name="x+y")])
