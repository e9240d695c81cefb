"""Logfmt formatting for the standard logging module, with nested spans."""

__version__ = "0.3.5"
__all__ = ["builder", "formatter", "serializer", "spans"]