"""Resolve a finding's position hint to a place in the source.

Resolution degrades in a fixed order and never raises:

1. exact tree node (identifier on the target line, column tab-expanded),
2. tab-aware visual column found by searching the raw line text,
3. target line only,
4. file level.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from llmcheck.constants import DEFAULT_COLUMN_OFFSET, DEFAULT_TAB_WIDTH, LocationKind
from llmcheck.host.tree import DEFINITION_KINDS, NodeKind, SyntaxNode


@dataclass(frozen=True)
class ResolvedLocation:
    kind: LocationKind
    line: int | None = None
    column: int | None = None
    node: SyntaxNode | None = None


class LocationResolver:
    """Anchors findings against one file's tree and source lines."""

    def __init__(
        self,
        source_lines: Sequence[str],
        *,
        tab_width: int = DEFAULT_TAB_WIDTH,
        column_offset: int = DEFAULT_COLUMN_OFFSET,
    ) -> None:
        self._lines = source_lines
        self._tab_width = max(1, tab_width)
        self._column_offset = column_offset

    def resolve(
        self,
        root: SyntaxNode | None,
        target_line: int | None,
        identifier: str | None,
    ) -> ResolvedLocation:
        if target_line is None:
            return ResolvedLocation(kind=LocationKind.FILE_LEVEL, node=root)

        if identifier is not None and root is not None:
            node = find_ident_at_line(root, target_line, identifier)
            if node is not None:
                return ResolvedLocation(
                    kind=LocationKind.EXACT_NODE,
                    line=node.line,
                    column=to_visual_column(
                        self.line_text(node.line), node.column, self._tab_width
                    ),
                    node=node,
                )

        text = self.line_text(target_line)
        raw_col = find_column_raw(text, identifier)
        if raw_col is not None:
            visual = to_visual_column(text, raw_col, self._tab_width)
            return ResolvedLocation(
                kind=LocationKind.VISUAL_COLUMN,
                line=target_line,
                column=max(0, visual + self._column_offset),
            )

        return ResolvedLocation(kind=LocationKind.LINE_ONLY, line=target_line)

    def line_text(self, line: int) -> str:
        """Source text of a 1-based line; empty when out of range."""
        if line < 1 or line > len(self._lines):
            return ""
        return self._lines[line - 1]


def find_ident_at_line(
    root: SyntaxNode, line: int, name: str
) -> SyntaxNode | None:
    """First identifier node on ``line`` whose text is ``name``.

    Definition nodes on the line are also checked through their first
    identifier child, so a declaration matches even when its name
    token is reported on a different node.
    """
    for node in root.walk():
        if node.line != line:
            continue
        if node.kind == NodeKind.IDENT and node.text == name:
            return node
        if node.kind in DEFINITION_KINDS:
            ident = node.first_child(NodeKind.IDENT)
            if ident is not None and ident.text == name:
                return ident
    return None


def find_column_raw(text: str, identifier: str | None) -> int | None:
    """Character offset of ``identifier`` in ``text``.

    Whole-word match first, then a plain substring match.
    """
    if not identifier:
        return None
    m = re.search(rf"\b{re.escape(identifier)}\b", text)
    if m:
        return m.start()
    idx = text.find(identifier)
    return idx if idx >= 0 else None


def to_visual_column(text: str, raw_index: int, tab_width: int) -> int:
    """Expand tabs up to ``raw_index`` and return the resulting column."""
    tab_width = max(1, tab_width)
    col = 0
    for ch in text[:raw_index]:
        col += tab_width - (col % tab_width) if ch == "\t" else 1
    return col
