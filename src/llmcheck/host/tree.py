"""Host syntax tree: tree-sitter parse trees reduced to a small node model.

The reconciliation engine only needs a type tag, a 1-based line, a
column and (for identifiers) the text of each node, so the tree-sitter
tree is converted once per file into :class:`SyntaxNode` objects.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum

import tree_sitter

from llmcheck.config import GRAMMAR_MODULES

logger = logging.getLogger(__name__)


class NodeKind(StrEnum):
    IDENT = "ident"
    TYPE_DEF = "type_def"
    ROUTINE_DEF = "routine_def"
    VARIABLE_DEF = "variable_def"
    PARAMETER_DEF = "parameter_def"
    OTHER = "other"


DEFINITION_KINDS = frozenset({
    NodeKind.TYPE_DEF,
    NodeKind.ROUTINE_DEF,
    NodeKind.VARIABLE_DEF,
    NodeKind.PARAMETER_DEF,
})


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """One node of the host tree.

    ``line`` is 1-based, ``column`` is a 0-based character offset.
    Compared by identity: two nodes with equal fields are still
    different places in the tree.
    """

    kind: NodeKind
    type: str
    line: int
    column: int = 0
    text: str | None = None
    children: tuple[SyntaxNode, ...] = field(default_factory=tuple, repr=False)

    def walk(self) -> Iterator[SyntaxNode]:
        """Pre-order traversal, children left to right."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def first_child(self, kind: NodeKind) -> SyntaxNode | None:
        for child in self.children:
            if child.kind == kind:
                return child
        return None


# tree-sitter node type → host kind, per language.
_NODE_KINDS: dict[str, dict[str, NodeKind]] = {
    "java": {
        "identifier": NodeKind.IDENT,
        "type_identifier": NodeKind.IDENT,
        "class_declaration": NodeKind.TYPE_DEF,
        "interface_declaration": NodeKind.TYPE_DEF,
        "enum_declaration": NodeKind.TYPE_DEF,
        "record_declaration": NodeKind.TYPE_DEF,
        "annotation_type_declaration": NodeKind.TYPE_DEF,
        "method_declaration": NodeKind.ROUTINE_DEF,
        "constructor_declaration": NodeKind.ROUTINE_DEF,
        "variable_declarator": NodeKind.VARIABLE_DEF,
        "formal_parameter": NodeKind.PARAMETER_DEF,
        "type_parameter": NodeKind.PARAMETER_DEF,
    },
    "python": {
        "identifier": NodeKind.IDENT,
        "class_definition": NodeKind.TYPE_DEF,
        "function_definition": NodeKind.ROUTINE_DEF,
        "assignment": NodeKind.VARIABLE_DEF,
        "typed_parameter": NodeKind.PARAMETER_DEF,
        "default_parameter": NodeKind.PARAMETER_DEF,
        "typed_default_parameter": NodeKind.PARAMETER_DEF,
    },
    "javascript": {
        "identifier": NodeKind.IDENT,
        "property_identifier": NodeKind.IDENT,
        "shorthand_property_identifier": NodeKind.IDENT,
        "class_declaration": NodeKind.TYPE_DEF,
        "function_declaration": NodeKind.ROUTINE_DEF,
        "method_definition": NodeKind.ROUTINE_DEF,
        "variable_declarator": NodeKind.VARIABLE_DEF,
    },
}


def parse_source(source: str, language: str) -> SyntaxNode | None:
    """Parse source text into a host tree.

    Returns None for languages without an installed grammar, so the
    caller can still run the check with file-level anchoring only.
    """
    parser = _get_parser(language)
    if parser is None:
        return None

    data = source.encode("utf-8")
    tree = parser.parse(data)
    byte_lines = data.split(b"\n")
    kinds = _NODE_KINDS.get(language, {})
    return _convert(tree.root_node, kinds, byte_lines)


def _convert(
    root: tree_sitter.Node,
    kinds: dict[str, NodeKind],
    byte_lines: list[bytes],
) -> SyntaxNode:
    """Convert named tree-sitter nodes bottom-up with an explicit stack.

    Expression chains can nest deeper than the recursion limit.
    """
    # (node, named children once expanded); results collect in post-order
    stack: list[tuple[tree_sitter.Node, list[tree_sitter.Node] | None]] = [
        (root, None)
    ]
    built: list[SyntaxNode] = []
    while stack:
        node, named = stack.pop()
        if named is None:
            named = node.named_children
            stack.append((node, named))
            stack.extend((child, None) for child in reversed(named))
            continue
        split = len(built) - len(named)
        children = tuple(built[split:])
        del built[split:]
        built.append(_syntax_node(node, kinds, byte_lines, children))
    return built[0]


def _syntax_node(
    node: tree_sitter.Node,
    kinds: dict[str, NodeKind],
    byte_lines: list[bytes],
    children: tuple[SyntaxNode, ...],
) -> SyntaxNode:
    kind = kinds.get(node.type, NodeKind.OTHER)
    row, byte_col = node.start_point
    text = None
    if kind == NodeKind.IDENT and node.text is not None:
        text = node.text.decode("utf-8", errors="replace")
    return SyntaxNode(
        kind=kind,
        type=node.type,
        line=row + 1,
        column=_char_column(byte_lines, row, byte_col),
        text=text,
        children=children,
    )


def _char_column(byte_lines: list[bytes], row: int, byte_col: int) -> int:
    """tree-sitter columns are byte offsets; diagnostics use characters."""
    if row >= len(byte_lines):
        return byte_col
    prefix = byte_lines[row][:byte_col]
    return len(prefix.decode("utf-8", errors="replace"))


# ---------------------------------------------------------------------------
# Parser cache
# ---------------------------------------------------------------------------

_parser_cache: dict[str, tree_sitter.Parser] = {}


def _get_parser(language: str) -> tree_sitter.Parser | None:
    """Get or create a cached tree-sitter parser."""
    if language in _parser_cache:
        return _parser_cache[language]

    module_name = GRAMMAR_MODULES.get(language)
    if module_name is None:
        return None

    try:
        mod = importlib.import_module(module_name)
        capsule: object = mod.language()
        lang = tree_sitter.Language(capsule)
        parser = tree_sitter.Parser(lang)
        _parser_cache[language] = parser
        return parser
    except (ImportError, AttributeError):
        logger.warning(
            "event=grammar_unavailable language=%s module=%s",
            language,
            module_name,
        )
        return None
