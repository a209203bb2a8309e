"""Backend client contract and the shared HTTP plumbing."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict

from llmcheck.config import Settings
from llmcheck.constants import (
    DEFAULT_LLM_TIMEOUT_SECONDS,
    ERROR_TRUNCATION_CHARS,
    Provider,
)

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """The check cannot start with the given settings."""


class UnsupportedEndpointError(ConfigurationError):
    """No provider family matches the configured endpoint."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"Unsupported LLM endpoint: {endpoint}")
        self.endpoint = endpoint


@runtime_checkable
class LLMClient(Protocol):
    """Anything that can turn a prompt into a reply (or None)."""

    def generate_response(self, prompt: str) -> str | None: ...


class BackendConfig(BaseModel):
    """Adapter-side settings: credentials, endpoint and sampling."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    api_key: str = ""
    model: str | None = None
    temperature: float | None = None
    seed: int | None = None
    max_output_tokens: int | None = None
    thinking_tokens: int | None = None
    timeout_seconds: float | None = DEFAULT_LLM_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> BackendConfig:
        return cls(
            endpoint=settings.endpoint,
            api_key=settings.api_key,
            model=settings.model,
            temperature=settings.temperature,
            seed=settings.seed,
            max_output_tokens=settings.max_output_tokens,
            thinking_tokens=settings.thinking_tokens,
            timeout_seconds=settings.llm_timeout_seconds,
        )


class HttpLLMClient(ABC):
    """One JSON POST per prompt.

    Subclasses describe the provider's wire shape through
    :meth:`_build_request` and :meth:`_extract_text`. Non-2xx responses
    are logged and yield None; transport errors propagate.
    """

    provider: Provider
    default_model: str | None = None

    def __init__(
        self,
        config: BackendConfig,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.model = config.model or self.default_model
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=config.timeout_seconds)

    def generate_response(self, prompt: str) -> str | None:
        url, headers, params, body = self._build_request(prompt)
        response = self._http.post(
            url, json=body, headers=headers, params=params
        )
        if not response.is_success:
            logger.warning(
                "event=backend_http_error provider=%s status=%d body=%s",
                self.provider,
                response.status_code,
                response.text[:ERROR_TRUNCATION_CHARS],
            )
            return None
        text = self._extract_text(response.json())
        return text.strip() if text is not None else None

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    @abstractmethod
    def _build_request(
        self, prompt: str
    ) -> tuple[str, dict[str, str], dict[str, str], dict[str, Any]]:
        """URL, headers, query params and JSON body for one prompt."""

    @abstractmethod
    def _extract_text(self, payload: Any) -> str | None:
        """Reply text from a decoded response body, or None."""


def chat_messages(prompt: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": prompt}]


def first_choice_content(payload: Any) -> str | None:
    """``choices[0].message.content`` of an OpenAI-style response."""
    choices = payload.get("choices") if isinstance(payload, dict) else None
    if not choices:
        return None
    message = choices[0].get("message") or {}
    content = message.get("content")
    return str(content) if content is not None else ""
