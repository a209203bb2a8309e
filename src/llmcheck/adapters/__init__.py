"""Backend adapters: one client per provider family behind one contract."""

from llmcheck.adapters.anthropic import ClaudeClient
from llmcheck.adapters.base import (
    BackendConfig,
    ConfigurationError,
    HttpLLMClient,
    LLMClient,
    UnsupportedEndpointError,
)
from llmcheck.adapters.factory import create_client, select_provider
from llmcheck.adapters.gemini import GeminiClient
from llmcheck.adapters.openai import LocalModelClient, OpenAIClient

__all__ = [
    "BackendConfig",
    "ClaudeClient",
    "ConfigurationError",
    "GeminiClient",
    "HttpLLMClient",
    "LLMClient",
    "LocalModelClient",
    "OpenAIClient",
    "UnsupportedEndpointError",
    "create_client",
    "select_provider",
]
