"""Singleton logging configuration.

setup_logging() configures the root logger once and quiets the
HTTP client loggers, which otherwise log every backend request
at INFO. Idempotent (guarded by a module-level flag).
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = (
    "httpx",
    "httpcore",
)

_setup_done = False


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logger and quiet noisy third-party loggers.

    Second call is a no-op, so the CLI can call it before and after
    settings are loaded without stacking handlers.
    """
    global _setup_done  # noqa: PLW0603
    if _setup_done:
        return
    _setup_done = True

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(logging.WARNING)


def set_level(level: str) -> None:
    """Adjust the root logger level after setup (e.g. for --verbose)."""
    logging.getLogger().setLevel(
        getattr(logging, level.upper(), logging.WARNING)
    )
