"""Logging formatters that render records and span fields as logfmt."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from logfmtlog.serializer import Serializer, SerializerError
from logfmtlog.spans import Span, current_span

__all__ = ["EventsFormatter", "FieldsFormatter"]

_RESET = "\x1b[0m"

_LEVEL_STYLES = {
    "error": "\x1b[1;31m",
    "warn": "\x1b[1;33m",
    "info": "\x1b[1;32m",
    "debug": "\x1b[1;34m",
    "trace": "\x1b[1;35m",
}

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "span"}


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    if levelno >= logging.DEBUG:
        return "debug"
    return "trace"


def _record_field(serializer: Serializer, key: str, value: Any) -> None:
    if isinstance(value, str):
        serializer.serialize_entry(key, value)
    elif isinstance(value, (bool, int, float)):
        serializer.serialize_entry_no_quote(key, value)
    elif isinstance(value, BaseException):
        serializer.serialize_entry(key, str(value))
    else:
        serializer.serialize_entry(key, repr(value))


def _record_fields(serializer: Serializer, fields: Mapping[str, Any]) -> None:
    for key, value in fields.items():
        _record_field(serializer, key, value)


class FieldsFormatter:
    """Renders a mapping of span fields as logfmt."""

    def format_fields(self, fields: Mapping[str, Any]) -> str:
        """Return the fields as logfmt; output stops at the first invalid key."""
        serializer = Serializer(False)
        try:
            _record_fields(serializer, fields)
        except SerializerError:
            pass
        return serializer.getvalue()


def _default_ansi() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


class EventsFormatter(logging.Formatter):
    """A logging formatter producing one logfmt row per record."""

    def __init__(
        self,
        with_level: bool = True,
        with_target: bool = True,
        with_span_name: bool = True,
        with_span_path: bool = True,
        with_location: bool = False,
        with_module_path: bool = False,
        with_timestamp: bool = True,
        with_ansi_color: bool | None = None,
        fields_formatter: FieldsFormatter | None = None,
    ) -> None:
        super().__init__()
        self.with_level = with_level
        self.with_target = with_target
        self.with_span_name = with_span_name
        self.with_span_path = with_span_path
        self.with_location = with_location
        self.with_module_path = with_module_path
        self.with_timestamp = with_timestamp
        self.with_ansi_color = _default_ansi() if with_ansi_color is None else with_ansi_color
        self.fields_formatter = fields_formatter or FieldsFormatter()

    def format(self, record: logging.LogRecord) -> str:
        """Render the record; raises SerializerError if a key is invalid."""
        serializer = Serializer(self.with_ansi_color)

        if self.with_timestamp:
            serializer.serialize_key("ts")
            serializer.write("=")
            stamp = datetime.fromtimestamp(record.created, timezone.utc)
            serializer.write(stamp.strftime("%Y-%m-%dT%H:%M:%S.%fZ"))

        if self.with_level:
            level = _level_name(record.levelno)
            if self.with_ansi_color:
                level = f"{_LEVEL_STYLES[level]}{level}{_RESET}"
            serializer.serialize_entry("level", level)

        if self.with_target:
            serializer.serialize_entry("target", record.name)

        active: Span | None = None
        if self.with_span_name or self.with_span_path:
            explicit = getattr(record, "span", None)
            active = explicit if isinstance(explicit, Span) else current_span()

        if self.with_location and record.pathname and record.lineno:
            serializer.serialize_entry("location", f"{record.pathname}:{record.lineno}")

        if self.with_module_path and record.module:
            serializer.serialize_entry("module_path", record.module)

        if active is not None:
            if self.with_span_name:
                serializer.serialize_entry("span", active.name)
            if self.with_span_path:
                serializer.serialize_key("span_path")
                serializer.write("=")
                path = ">".join(s.name for s in active.scope_from_root())
                serializer.serialize_value(path)

        serializer.serialize_entry("message", record.getMessage())
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        _record_fields(serializer, extras)

        parts = [serializer.getvalue()]
        leaf = current_span()
        if leaf is not None:
            for node in leaf.scope_from_root():
                data = self.fields_formatter.format_fields(node.fields)
                if data:
                    parts.append(data)
        return " ".join(parts)