"""Shared constants used across modules.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so diagnostics and log lines
can use them unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Severity(StrEnum):
    """Severity of a parsed finding and of the diagnostic it becomes."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class LocationKind(StrEnum):
    """How precisely a finding was anchored in the source.

    Ordered from most to least precise; resolution only ever
    degrades down this list.
    """

    EXACT_NODE = "exact_node"
    VISUAL_COLUMN = "visual_column"
    LINE_ONLY = "line_only"
    FILE_LEVEL = "file_level"


class Provider(StrEnum):
    """Backend provider families, selected from the endpoint URL."""

    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LOCAL = "local"


# ── Reply Markers ────────────────────────────────────────

ERROR_PREFIXES = ("[error]", "[violation]")
WARNING_PREFIXES = ("[warn]", "[warning]")

# Marker used when a finding carries no known section code
GENERIC_RULE_MARKER = "LLMStyle"

# Check name reported as the diagnostic source
CHECK_NAME = "LlmStyleCheck"

# ── Core Defaults ────────────────────────────────────────

DEFAULT_TAB_WIDTH = 4
DEFAULT_COLUMN_OFFSET = 0

# ── Cache ────────────────────────────────────────────────

CACHE_DIR_NAME = ".llm-checks-cache"
CACHE_FILE_SUFFIX = ".json"

# ── Backend Defaults ─────────────────────────────────────

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_TEMPERATURE = 1.0
DEFAULT_LLM_TIMEOUT_SECONDS = 60
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MAX_TOKENS = 2048

# ── Misc ─────────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
ERROR_TRUNCATION_CHARS = 200
