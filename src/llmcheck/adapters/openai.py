"""OpenAI-compatible chat completion clients (OpenAI, Mistral, local)."""

from __future__ import annotations

from typing import Any

from llmcheck.adapters.base import (
    HttpLLMClient,
    chat_messages,
    first_choice_content,
)
from llmcheck.constants import Provider

_LOCAL_HOSTS = ("localhost", "127.0.0.1")


def is_local_endpoint(endpoint: str) -> bool:
    lower = endpoint.lower()
    return any(host in lower for host in _LOCAL_HOSTS)


class OpenAIClient(HttpLLMClient):
    """Hosted OpenAI-compatible API with bearer-token auth."""

    provider = Provider.OPENAI
    default_model = "gpt-4"

    def _build_request(
        self, prompt: str
    ) -> tuple[str, dict[str, str], dict[str, str], dict[str, Any]]:
        body: dict[str, Any] = {
            "model": self.model,
            "messages": chat_messages(prompt),
        }
        if self.config.temperature is not None:
            body["temperature"] = self.config.temperature
        if self.config.max_output_tokens is not None:
            body["max_tokens"] = self.config.max_output_tokens

        headers = {"Content-Type": "application/json"}
        if not is_local_endpoint(self.config.endpoint):
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return self.config.endpoint, headers, {}, body

    def _extract_text(self, payload: Any) -> str | None:
        return first_choice_content(payload)


class LocalModelClient(OpenAIClient):
    """Local OpenAI-compatible server (Ollama, vLLM, LM Studio).

    Same wire shape as OpenAI, never sends credentials.
    """

    provider = Provider.LOCAL
    default_model = "llama3"

    def _build_request(
        self, prompt: str
    ) -> tuple[str, dict[str, str], dict[str, str], dict[str, Any]]:
        url, headers, params, body = super()._build_request(prompt)
        headers.pop("Authorization", None)
        return url, headers, params, body
