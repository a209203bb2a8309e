"""Response reconciliation: reply text to located, formatted findings."""

from llmcheck.reconcile.findings import Finding, parse_reply
from llmcheck.reconcile.locations import LocationResolver, ResolvedLocation
from llmcheck.reconcile.messages import FormattedMessage, MessageFormatter
from llmcheck.reconcile.taxonomy import SECTION_TAGS

__all__ = [
    "SECTION_TAGS",
    "Finding",
    "FormattedMessage",
    "LocationResolver",
    "MessageFormatter",
    "ResolvedLocation",
    "parse_reply",
]
