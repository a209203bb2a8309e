"""Shared test fixtures: settings, hand-built host trees, fake backend."""

import os

# Force demo settings for all tests so no real backend is ever called.
# Set unconditionally at import time, before any Settings() is created.
os.environ["LLMCHECK_API_KEY"] = "for-demo-purposes-only"
os.environ["LLMCHECK_ENDPOINT"] = "http://localhost:11434/v1/chat/completions"

from pathlib import Path

import pytest

from llmcheck.adapters.fakes import FakeLLMClient
from llmcheck.check import LlmStyleCheck
from llmcheck.config import Settings
from llmcheck.host.tree import NodeKind, SyntaxNode
from llmcheck.resilience.response_cache import ResponseCache

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "sample_repo"


def ident(text: str, line: int, column: int = 0) -> SyntaxNode:
    """Identifier leaf for hand-built trees."""
    return SyntaxNode(
        kind=NodeKind.IDENT, type="identifier", line=line, column=column, text=text
    )


def node(
    kind: NodeKind, line: int, *children: SyntaxNode, column: int = 0
) -> SyntaxNode:
    """Interior node for hand-built trees."""
    return SyntaxNode(
        kind=kind, type=str(kind), line=line, column=column, children=children
    )


def make_check(
    tmp_path: Path,
    reply: str | None,
    **overrides: object,
) -> tuple[LlmStyleCheck, FakeLLMClient]:
    """LlmStyleCheck over a scripted FakeLLMClient and a tmp cache."""
    client = FakeLLMClient(reply)
    settings = Settings(cache_dir=tmp_path / "cache", **overrides)  # type: ignore[arg-type]
    check = LlmStyleCheck(
        settings,
        client=client,
        cache=ResponseCache(tmp_path / "cache"),
        template="Review this.",
    )
    return check, client


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(cache_dir=tmp_path / "cache")


@pytest.fixture
def cache(tmp_path: Path) -> ResponseCache:
    return ResponseCache(tmp_path / "cache")
