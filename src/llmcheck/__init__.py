"""LLM-backed style check with located, host-compatible diagnostics."""

__version__ = "1.0.0"
