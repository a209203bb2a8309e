"""Tests for the tree-sitter backed host tree."""

from __future__ import annotations

import pytest

from llmcheck.host.tree import NodeKind, SyntaxNode, parse_source
from tests.conftest import FIXTURE_DIR, ident, node

pytest.importorskip("tree_sitter_java")


@pytest.fixture
def sizes_tree() -> SyntaxNode:
    source = (FIXTURE_DIR / "Sizes.java").read_text(encoding="utf-8")
    root = parse_source(source, "java")
    assert root is not None
    return root


class TestParseSource:
    def test_root_is_program(self, sizes_tree: SyntaxNode) -> None:
        assert sizes_tree.type == "program"
        assert sizes_tree.line == 1

    def test_method_name_identifier(self, sizes_tree: SyntaxNode) -> None:
        method = next(
            n for n in sizes_tree.walk() if n.kind == NodeKind.ROUTINE_DEF
        )
        name = method.first_child(NodeKind.IDENT)
        assert name is not None
        assert name.text == "doStuff"
        assert (name.line, name.column) == (10, 16)

    def test_identifiers_carry_text(self, sizes_tree: SyntaxNode) -> None:
        names = {n.text for n in sizes_tree.walk() if n.kind == NodeKind.IDENT}
        assert {"Sizes", "maxSize", "Count", "doStuff", "Value"} <= names

    def test_non_identifiers_have_no_text(self, sizes_tree: SyntaxNode) -> None:
        assert all(
            n.text is None for n in sizes_tree.walk() if n.kind != NodeKind.IDENT
        )

    def test_definition_kinds_mapped(self, sizes_tree: SyntaxNode) -> None:
        kinds = {n.kind for n in sizes_tree.walk()}
        assert {
            NodeKind.TYPE_DEF,
            NodeKind.ROUTINE_DEF,
            NodeKind.VARIABLE_DEF,
            NodeKind.PARAMETER_DEF,
        } <= kinds

    def test_columns_count_characters_not_bytes(self) -> None:
        root = parse_source('class A { String s = "é"; int x; }\n', "java")
        assert root is not None
        x = next(n for n in root.walk() if n.text == "x")
        assert x.column == 30

    def test_deeply_nested_expression(self) -> None:
        source = "class Deep {\n    int x = " + " + ".join(["1"] * 1500) + ";\n}\n"
        root = parse_source(source, "java")
        assert root is not None
        literals = [n for n in root.walk() if n.type == "decimal_integer_literal"]
        assert len(literals) == 1500
        assert all(n.line == 2 for n in literals)

    def test_unknown_language_returns_none(self) -> None:
        assert parse_source("x = 1\n", "cobol") is None


class TestSyntaxNode:
    def test_walk_is_preorder(self) -> None:
        a, b = ident("a", 2), ident("b", 3)
        root = node(NodeKind.OTHER, 1, node(NodeKind.ROUTINE_DEF, 2, a), b)
        assert [n.line for n in root.walk()] == [1, 2, 2, 3]

    def test_first_child_by_kind(self) -> None:
        a = ident("a", 2)
        root = node(NodeKind.ROUTINE_DEF, 2, node(NodeKind.OTHER, 2), a)
        assert root.first_child(NodeKind.IDENT) is a
        assert root.first_child(NodeKind.TYPE_DEF) is None

    def test_equal_fields_are_distinct_nodes(self) -> None:
        assert ident("a", 1) != ident("a", 1)

    def test_walk_deep_chain(self) -> None:
        root = ident("leaf", 1)
        for _ in range(5000):
            root = node(NodeKind.OTHER, 1, root)
        walked = list(root.walk())
        assert len(walked) == 5001
        assert walked[-1].text == "leaf"
