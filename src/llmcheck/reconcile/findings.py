"""Split a free-form model reply into discrete findings.

Each non-blank reply line is one candidate finding. Lines look like::

    [ERROR] (42) (2.2.1) (Method name 'doStuff' must be camelCase)

but nothing about that shape is guaranteed, so every field is
extracted best-effort and independently.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from llmcheck.constants import ERROR_PREFIXES, WARNING_PREFIXES, Severity
from llmcheck.reconcile.taxonomy import tag_for_section

# "(42)" or "(line 42)": first one in the line is the target line
_LINE_REF = re.compile(r"\((?:line\s*)?(\d+)\)", re.IGNORECASE)
_SECTION_CODE = re.compile(r"\((\d+(?:\.\d+)+)\)")
_QUOTED_IDENTIFIER = re.compile(r"'([A-Za-z_][A-Za-z0-9_]*)'")
_BARE_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Paren contents that locate a finding rather than describe it
_LOCATOR_ONLY = re.compile(
    r"^(?:(?:line\s*)?\d+|\d+(?:\.\d+)+)$", re.IGNORECASE
)


class Finding(BaseModel):
    """One parsed, not-yet-located observation from a reply line."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    raw_line: str
    target_line: int | None = None
    payload: str | None = None
    rule_tag: str | None = None
    identifier_hint: str | None = None

    @property
    def text(self) -> str:
        """Display text: the payload when there is one, else the line."""
        return self.payload or self.raw_line


def parse_reply(reply: str, *, show_warnings: bool = True) -> list[Finding]:
    """Parse a raw reply into findings, preserving reply order.

    Errors are always kept. Warnings and unlabeled lines are kept only
    when ``show_warnings`` is set; everything else is dropped before
    any field extraction happens.
    """
    findings: list[Finding] = []
    for raw in reply.splitlines():
        line = raw.strip()
        if not line:
            continue
        severity = classify_severity(line)
        if severity != Severity.ERROR and not show_warnings:
            continue
        findings.append(parse_line(line, severity))
    return findings


def parse_line(line: str, severity: Severity) -> Finding:
    """Extract every field of a single (already trimmed) reply line."""
    payload = last_paren_content(line)
    if payload is not None and (
        not payload or _LOCATOR_ONLY.match(payload)
    ):
        payload = None
    return Finding(
        severity=severity,
        raw_line=line,
        target_line=extract_line_number(line),
        payload=payload,
        rule_tag=detect_rule_tag(line),
        identifier_hint=extract_identifier(payload or line),
    )


def classify_severity(line: str) -> Severity:
    lower = line.lower()
    if lower.startswith(ERROR_PREFIXES):
        return Severity.ERROR
    if lower.startswith(WARNING_PREFIXES):
        return Severity.WARNING
    return Severity.INFO


def extract_line_number(line: str) -> int | None:
    """First parenthesised line reference, ``(42)`` or ``(line 42)``."""
    m = _LINE_REF.search(line)
    return int(m.group(1)) if m else None


def last_paren_content(line: str) -> str | None:
    """Trimmed content of the rightmost ``(...)`` pair, or None."""
    end = line.rfind(")")
    if end < 0:
        return None
    start = line.rfind("(", 0, end)
    if start < 0:
        return None
    return line[start + 1:end].strip()


def detect_rule_tag(line: str) -> str | None:
    """Tag of the first section code in the line that the table knows."""
    for m in _SECTION_CODE.finditer(line):
        tag = tag_for_section(m.group(1))
        if tag is not None:
            return tag
    return None


def extract_identifier(text: str) -> str | None:
    """Best-effort identifier named by the finding.

    A single-quoted identifier wins. Otherwise the LAST bare
    identifier-shaped word is taken, which in prose is often just the
    final word of the sentence; callers must treat the result as a hint.
    """
    m = _QUOTED_IDENTIFIER.search(text)
    if m:
        return m.group(1)
    candidate: str | None = None
    for bare in _BARE_IDENTIFIER.finditer(text):
        candidate = bare.group(0)
    return candidate
