"""In-memory fake backend clients for testing.

No HTTP, no credentials: replies are scripted up front and every
prompt is recorded so tests can assert on call counts.
"""

from __future__ import annotations


class FakeLLMClient:
    """Returns the scripted reply (or raises the scripted error)."""

    def __init__(
        self,
        reply: str | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    def generate_response(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply
