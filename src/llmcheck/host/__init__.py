"""Thin host engine: syntax trees, the diagnostic log and file iteration."""
