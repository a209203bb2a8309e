"""Pick the provider family for an endpoint and build its client."""

from __future__ import annotations

import httpx

from llmcheck.adapters.anthropic import ClaudeClient
from llmcheck.adapters.base import (
    BackendConfig,
    HttpLLMClient,
    UnsupportedEndpointError,
)
from llmcheck.adapters.gemini import GeminiClient
from llmcheck.adapters.openai import LocalModelClient, OpenAIClient, is_local_endpoint
from llmcheck.constants import Provider

# Endpoint substring → provider, checked in order
_PROVIDER_DOMAINS: tuple[tuple[str, Provider], ...] = (
    ("generativelanguage.googleapis.com", Provider.GEMINI),
    ("api.openai.com", Provider.OPENAI),
    ("mistral.ai", Provider.OPENAI),
    ("anthropic.com", Provider.ANTHROPIC),
)

_CLIENTS: dict[Provider, type[HttpLLMClient]] = {
    Provider.GEMINI: GeminiClient,
    Provider.OPENAI: OpenAIClient,
    Provider.ANTHROPIC: ClaudeClient,
    Provider.LOCAL: LocalModelClient,
}


def select_provider(endpoint: str) -> Provider:
    """Map an endpoint URL to a provider family.

    Known hosted domains win; any other localhost endpoint is assumed
    to speak the OpenAI wire format. Raises
    :class:`UnsupportedEndpointError` for everything else.
    """
    lower = endpoint.lower()
    for domain, provider in _PROVIDER_DOMAINS:
        if domain in lower:
            return provider
    if is_local_endpoint(lower):
        return Provider.LOCAL
    raise UnsupportedEndpointError(endpoint)


def create_client(
    config: BackendConfig,
    *,
    http_client: httpx.Client | None = None,
) -> HttpLLMClient:
    """Build the client for ``config.endpoint``. No network access."""
    provider = select_provider(config.endpoint)
    return _CLIENTS[provider](config, http_client=http_client)
