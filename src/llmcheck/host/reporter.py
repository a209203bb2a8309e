"""Host diagnostic log: templated messages anchored to nodes or lines."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from llmcheck.constants import CHECK_NAME, Severity
from llmcheck.host.tree import SyntaxNode

logger = logging.getLogger(__name__)

# Characters that only render literally inside single quotes
_QUOTABLE = frozenset("{}()")


class TemplateSyntaxError(ValueError):
    """A message template used template syntax incorrectly."""


class Diagnostic(BaseModel):
    """One reported problem. ``line`` is 1-based, ``column`` 0-based."""

    file_path: str
    severity: Severity
    message: str
    line: int | None = None
    column: int | None = None
    source: str = CHECK_NAME

    def format(self) -> str:
        """``[ERROR] path:line:col: message`` with 1-based columns."""
        where = self.file_path
        if self.line is not None:
            where += f":{self.line}"
            if self.column is not None:
                where += f":{self.column + 1}"
        return f"[{self.severity.upper()}] {where}: {self.message}"


def render_template(template: str, *args: object) -> str:
    """Render a host message template.

    Syntax: ``{n}`` inserts argument n; ``''`` is a literal quote;
    ``'('``, ``')'``, ``'{'``, ``'}'`` are literal brackets; ``%%`` is a
    literal percent sign. A bare bracket, percent sign or quote is an
    error. A template that fails to render and is wrapped in single
    quotes is rendered again without that outer pair.
    """
    try:
        return _render(template, args)
    except TemplateSyntaxError:
        if len(template) >= 2 and template[0] == "'" and template[-1] == "'":
            return _render(template[1:-1], args)
        raise


def _render(template: str, args: tuple[object, ...]) -> str:
    out: list[str] = []
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        nxt = template[i + 1] if i + 1 < n else ""
        if ch == "'":
            if nxt == "'":
                out.append("'")
                i += 2
            elif nxt in _QUOTABLE and template[i + 2:i + 3] == "'":
                out.append(nxt)
                i += 3
            else:
                raise TemplateSyntaxError(f"unmatched quote at {i}")
        elif ch == "%":
            if nxt != "%":
                raise TemplateSyntaxError(f"bare '%' at {i}")
            out.append("%")
            i += 2
        elif ch == "{":
            end = template.find("}", i)
            index = template[i + 1:end] if end > i else ""
            if not index.isdigit() or int(index) >= len(args):
                raise TemplateSyntaxError(f"bad placeholder at {i}")
            out.append(str(args[int(index)]))
            i = end + 1
        elif ch in "()}":
            raise TemplateSyntaxError(f"bare {ch!r} at {i}")
        else:
            out.append(ch)
            i += 1
    return "".join(out)


class DiagnosticReporter:
    """Collects diagnostics for one file.

    ``log`` accepts a node, a line, or a line and column; an explicit line
    wins over the node's own position. With none of them the diagnostic
    is attached to the file itself.
    """

    def __init__(self, file_path: str, *, source: str = CHECK_NAME) -> None:
        self.file_path = file_path
        self.source = source
        self.diagnostics: list[Diagnostic] = []

    def log(
        self,
        severity: Severity,
        template: str,
        *args: object,
        node: SyntaxNode | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> Diagnostic:
        if node is not None and line is None:
            line, column = node.line, node.column
        diagnostic = Diagnostic(
            file_path=self.file_path,
            severity=severity,
            message=render_template(template, *args),
            line=line,
            column=column if line is not None else None,
            source=self.source,
        )
        self.diagnostics.append(diagnostic)
        logger.debug(
            "event=diagnostic file=%s line=%s column=%s severity=%s",
            self.file_path,
            diagnostic.line,
            diagnostic.column,
            severity,
        )
        return diagnostic

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)
