"""Anthropic Messages API client."""

from __future__ import annotations

from typing import Any

from llmcheck.adapters.base import HttpLLMClient, chat_messages
from llmcheck.constants import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    Provider,
)


class ClaudeClient(HttpLLMClient):
    provider = Provider.ANTHROPIC
    default_model = "claude-3"

    def _build_request(
        self, prompt: str
    ) -> tuple[str, dict[str, str], dict[str, str], dict[str, Any]]:
        body: dict[str, Any] = {
            "model": self.model,
            "max_tokens": (
                self.config.max_output_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS
            ),
            "messages": chat_messages(prompt),
        }
        if self.config.temperature is not None:
            body["temperature"] = self.config.temperature
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.config.api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }
        return self.config.endpoint, headers, {}, body

    def _extract_text(self, payload: Any) -> str | None:
        blocks = payload.get("content") if isinstance(payload, dict) else None
        if not blocks:
            return None
        return str(blocks[0].get("text", ""))
