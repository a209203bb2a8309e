"""Environment-based configuration and language tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings

from llmcheck.constants import (
    CACHE_DIR_NAME,
    DEFAULT_COLUMN_OFFSET,
    DEFAULT_ENDPOINT,
    DEFAULT_LLM_TIMEOUT_SECONDS,
    DEFAULT_TAB_WIDTH,
    DEFAULT_TEMPERATURE,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and LLMCHECK_* environment variables."""

    # Check behaviour
    enabled: bool = True
    show_warnings: bool = True
    tab_width: int = DEFAULT_TAB_WIDTH
    column_offset: int = DEFAULT_COLUMN_OFFSET

    # LLM backend (consumed by the adapter, not the check)
    api_key: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    model: str | None = None
    temperature: float | None = DEFAULT_TEMPERATURE
    seed: int | None = None
    max_output_tokens: int | None = None
    thinking_tokens: int | None = None
    llm_timeout_seconds: int = DEFAULT_LLM_TIMEOUT_SECONDS

    # Directories
    cache_dir: Path = Path.home() / CACHE_DIR_NAME
    prompt_template_path: Path | None = None

    # Logging
    log_level: str = "WARNING"

    # File discovery
    skip_directories: list[str] = [
        "node_modules",
        "vendor",
        ".venv",
        "__pycache__",
        "build",
        "dist",
        "target",
        ".git",
        ".svn",
        ".hg",
    ]

    @field_validator("tab_width", mode="before")
    @classmethod
    def _clamp_tab_width(cls, v: Any) -> Any:
        """Tab width below 1 would make column math divide by zero."""
        try:
            width = int(v)
        except (TypeError, ValueError):
            return v
        if width < 1:
            logger.warning(
                "tab_width=%s is below 1, using 1 instead", width
            )
            return 1
        return width

    @field_validator("endpoint")
    @classmethod
    def _strip_endpoint(cls, v: str) -> str:
        return v.strip()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "LLMCHECK_",
        "extra": "ignore",
    }


# File extension → language name mapping
EXTENSION_MAP: dict[str, str] = {
    # Java
    ".java": "java",
    # Python
    ".py": "python",
    ".pyi": "python",
    # JavaScript
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
}

# Grammar module name → import path for tree-sitter grammars
GRAMMAR_MODULES: dict[str, str] = {
    "java": "tree_sitter_java",
    "python": "tree_sitter_python",
    "javascript": "tree_sitter_javascript",
}


def language_for_path(path: Path) -> str | None:
    """Return the language name for a file suffix, or None."""
    return EXTENSION_MAP.get(path.suffix.lower())
