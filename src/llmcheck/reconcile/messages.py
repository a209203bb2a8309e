"""Turn a finding into the (template, args) pair the host reporter takes.

The host reporter renders templates, so characters it treats as
template syntax must be escaped whenever the message itself is used
as the template. Only documentation findings are sent that way; all
other findings go through a ``{0}`` template with the message as an
opaque argument.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from llmcheck.reconcile.findings import Finding
from llmcheck.reconcile.taxonomy import DOCUMENTATION_TAGS, marker_for

PLACEHOLDER_TEMPLATE = "{0}"

DOC_COMMENT_TEMPLATE = (
    "The comment starting with '// {comment}' is used to describe the "
    "method's overall purpose, a Javadoc comment starting with '/**' "
    "should be used instead {marker}"
)


@dataclass(frozen=True)
class FormattedMessage:
    template: str
    args: tuple[str, ...] = ()


def extract_comment_text(line: str) -> str | None:
    """Text of the first ``//`` or ``/* */`` comment on a source line."""
    stripped = line.strip()
    idx = stripped.find("//")
    if idx >= 0:
        return stripped[idx + 2:].strip()
    start = stripped.find("/*")
    if start >= 0:
        start += 2
        end = stripped.find("*/", start)
        body = stripped[start:end] if end >= 0 else stripped[start:]
        return body.strip()
    return None


def escape_template(message: str) -> str:
    """Escape host template syntax so ``message`` renders literally."""
    escaped = message.replace("'", "''")
    escaped = escaped.replace("%", "%%")
    escaped = escaped.replace("{", "'{'").replace("}", "'}'")
    escaped = escaped.replace("(", "'('").replace(")", "')'")
    if not (escaped.startswith("'") and escaped.endswith("'")):
        escaped = f"'{escaped}'"
    return escaped


def _plain(finding: Finding, source_line: str) -> FormattedMessage:
    message = f"{finding.text} {marker_for(finding.rule_tag)}"
    return FormattedMessage(template=PLACEHOLDER_TEMPLATE, args=(message,))


def _documentation(finding: Finding, source_line: str) -> FormattedMessage:
    marker = marker_for(finding.rule_tag)
    message = f"{finding.text} {marker}"
    comment = extract_comment_text(source_line)
    if comment:
        message = DOC_COMMENT_TEMPLATE.format(comment=comment, marker=marker)
    return FormattedMessage(template=escape_template(message))


_Transform: TypeAlias = Callable[[Finding, str], FormattedMessage]

_TRANSFORMS: dict[str, _Transform] = {
    tag: _documentation for tag in DOCUMENTATION_TAGS
}


class MessageFormatter:
    """Category → transform table; unknown categories format plainly."""

    def __init__(self, transforms: dict[str, _Transform] | None = None) -> None:
        self._transforms = dict(_TRANSFORMS if transforms is None else transforms)

    def format(self, finding: Finding, source_line: str = "") -> FormattedMessage:
        transform = self._transforms.get(finding.rule_tag or "", _plain)
        return transform(finding, source_line)
