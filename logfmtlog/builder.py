"""Fluent configuration of logfmt formatters and logging handlers."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from logfmtlog.formatter import EventsFormatter, FieldsFormatter

__all__ = ["Builder", "builder", "layer"]


class Builder:
    """Collects formatter options and produces formatters or handlers.

    Every ``with_*`` method updates the option and returns the builder,
    so calls can be chained.
    """

    def __init__(self) -> None:
        self.level = True
        self.target = True
        self.span_name = True
        self.span_path = True
        self.location = False
        self.module_path = False
        self.timestamp = True
        self.ansi_color: bool | None = None
        self.fields = FieldsFormatter()

    def __repr__(self) -> str:
        return (
            "Builder("
            f"level={self.level}, target={self.target}, "
            f"span_name={self.span_name}, span_path={self.span_path}, "
            f"location={self.location}, module_path={self.module_path}, "
            f"timestamp={self.timestamp}, ansi_color={self.ansi_color})"
        )

    def with_level(self, enable: bool) -> Builder:
        """Include the ``level`` entry."""
        self.level = enable
        return self

    def with_target(self, enable: bool) -> Builder:
        """Include the ``target`` entry (the logger name)."""
        self.target = enable
        return self

    def with_span_name(self, enable: bool) -> Builder:
        """Include the name of the active span."""
        self.span_name = enable
        return self

    def with_span_path(self, enable: bool) -> Builder:
        """Include the ``>``-joined names of the active span and its ancestors."""
        self.span_path = enable
        return self

    def with_location(self, enable: bool) -> Builder:
        """Include the ``file:line`` where the record was emitted."""
        self.location = enable
        return self

    def with_module_path(self, enable: bool) -> Builder:
        """Include the module the record was emitted from."""
        self.module_path = enable
        return self

    def with_timestamp(self, enable: bool) -> Builder:
        """Include a UTC ``ts`` entry with microsecond precision."""
        self.timestamp = enable
        return self

    def with_ansi_color(self, enable: bool) -> Builder:
        """Colour keys and levels with ANSI escape sequences."""
        self.ansi_color = enable
        return self

    def formatter(self) -> EventsFormatter:
        """Return an events formatter configured with the current options."""
        return EventsFormatter(
            with_level=self.level,
            with_target=self.target,
            with_span_name=self.span_name,
            with_span_path=self.span_path,
            with_location=self.location,
            with_module_path=self.module_path,
            with_timestamp=self.timestamp,
            with_ansi_color=self.ansi_color,
            fields_formatter=self.fields,
        )

    def handler(self, stream: TextIO | None = None) -> logging.StreamHandler:
        """Return a stream handler writing logfmt rows; stdout by default."""
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(self.formatter())
        return handler


def builder() -> Builder:
    """Create a builder with the default options."""
    return Builder()


def layer(stream: TextIO | None = None) -> logging.StreamHandler:
    """Return a handler with the default logfmt configuration."""
    return builder().handler(stream)