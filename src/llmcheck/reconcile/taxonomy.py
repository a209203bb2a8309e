"""Section code → rule tag table for the nine style guidelines.

The model is asked to cite guideline sections as dotted codes such as
``(2.3.1)``; the tag is what the diagnostic shows in brackets.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from llmcheck.constants import GENERIC_RULE_MARKER

SECTION_TAGS: Mapping[str, str] = MappingProxyType({
    # 1 - Documentation
    "1.1.1": "SummaryJavadoc",
    "1.1.2": "JavadocRequired",
    # 2 - Naming Conventions
    "2.1.1": "ClassName",
    "2.2.1": "MethodName",
    "2.3.1": "ConstantName",
    "2.3.2": "MemberName",
    "2.4.1": "ParameterName",
    "2.5.1": "LocalVariableName",
    "2.6.1": "TypeVariableName",
})

# Tags whose findings are about missing or misplaced doc comments
DOCUMENTATION_TAGS = frozenset({"SummaryJavadoc", "JavadocRequired"})


def tag_for_section(code: str) -> str | None:
    """Return the rule tag for a section code, or None if unknown."""
    return SECTION_TAGS.get(code)


def marker_for(tag: str | None) -> str:
    """Bracketed marker appended to every message."""
    return f"[{tag or GENERIC_RULE_MARKER}]"
