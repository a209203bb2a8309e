"""Google Gemini generateContent client."""

from __future__ import annotations

import re
from typing import Any

from llmcheck.adapters.base import HttpLLMClient
from llmcheck.constants import Provider

_MODEL_SEGMENT = re.compile(r"models/[^:]+")


def endpoint_for_model(endpoint: str, model: str | None) -> str:
    """Point ``.../models/<name>:generateContent`` at the configured model."""
    if model and model not in endpoint:
        return _MODEL_SEGMENT.sub(f"models/{model}", endpoint)
    return endpoint


class GeminiClient(HttpLLMClient):
    provider = Provider.GEMINI

    def _build_request(
        self, prompt: str
    ) -> tuple[str, dict[str, str], dict[str, str], dict[str, Any]]:
        generation: dict[str, Any] = {}
        if self.config.temperature is not None:
            generation["temperature"] = self.config.temperature
        if self.config.seed is not None:
            generation["seed"] = self.config.seed
        if self.config.max_output_tokens is not None:
            generation["maxOutputTokens"] = self.config.max_output_tokens
        if self.config.thinking_tokens is not None:
            generation["thinkingTokens"] = self.config.thinking_tokens

        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation,
        }
        url = endpoint_for_model(self.config.endpoint, self.model)
        headers = {"Content-Type": "application/json"}
        return url, headers, {"key": self.config.api_key}, body

    def _extract_text(self, payload: Any) -> str | None:
        candidates = payload.get("candidates") if isinstance(payload, dict) else None
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return None
        return str(parts[0].get("text", ""))
