"""On-disk reply cache keyed by the SHA-256 of the prompt.

Makes the backend call idempotent per unique prompt: the same file
content always builds the same prompt, so an unchanged file is never
sent twice. A one-character change (even a shifted line number) is a
new key and a fresh call.

Entries are never expired or invalidated. Get/compute/put is not
single-flight: two processes that miss on the same key both call the
backend and both write the same file. That is safe for a local cache
because the key is derived from the prompt; a shared cache would need
an in-flight guard per key.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from llmcheck.constants import CACHE_DIR_NAME, CACHE_FILE_SUFFIX

logger = logging.getLogger(__name__)


def prompt_hash(prompt: str) -> str:
    """Hex SHA-256 of the UTF-8 prompt bytes."""
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()


def default_cache_dir() -> Path:
    return Path.home() / CACHE_DIR_NAME


class ResponseCache:
    """One ``<key>.json`` file per entry, raw reply text, no envelope."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root if root is not None else default_cache_dir()

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{CACHE_FILE_SUFFIX}"

    def get(self, key: str) -> str | None:
        """Cached reply for ``key``; None on miss or unreadable entry."""
        path = self.path_for(key)
        try:
            if not path.is_file():
                return None
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "event=cache_read_failed key=%s error=%s", key, exc
            )
            return None

    def put(self, key: str, reply: str) -> bool:
        """Persist a reply.

        Returns False (after logging) on I/O failure or when the reply
        cannot be encoded as UTF-8 (a lone surrogate from a JSON escape).
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            self.path_for(key).write_bytes(reply.encode("utf-8"))
        except (OSError, UnicodeEncodeError) as exc:
            logger.warning(
                "event=cache_write_failed key=%s error=%s", key, exc
            )
            return False
        return True
