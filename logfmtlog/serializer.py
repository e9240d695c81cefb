"""Serialization of key/value pairs into logfmt."""

from __future__ import annotations

import io
import math
import unicodedata

__all__ = [
    "InvalidKeyError",
    "Serializer",
    "SerializerError",
    "escape_debug",
    "need_quote",
]

KEY_COLOR_PREFIX = "\x1b[1;38;2;109;139;140m"
COLOR_RESET = "\x1b[0m"

_SIMPLE_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\0": "\\0",
}


class SerializerError(Exception):
    """Raised when a logfmt entry cannot be written."""


class InvalidKeyError(SerializerError):
    """Raised when a key has no characters left after removing unsafe ones."""


def need_quote(ch: str) -> bool:
    """Return True if the character forces a value to be quoted."""
    return ch <= " " or ch in '="'


def _is_printable(ch: str) -> bool:
    category = unicodedata.category(ch)
    if category.startswith("C"):
        return False
    if category in ("Zl", "Zp"):
        return False
    if category == "Zs" and ch != " ":
        return False
    return True


def _escape_char(ch: str, first: bool) -> str:
    simple = _SIMPLE_ESCAPES.get(ch)
    if simple is not None:
        return simple
    if first and unicodedata.category(ch) in ("Mn", "Me"):
        return f"\\u{{{ord(ch):x}}}"
    if _is_printable(ch):
        return ch
    return f"\\u{{{ord(ch):x}}}"


def escape_debug(value: str) -> str:
    """Escape a string the way debug output shows it, without surrounding quotes."""
    return "".join(_escape_char(ch, index == 0) for index, ch in enumerate(value))


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{int(exponent)}"
    return text


def _format_no_quote(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return repr(value)


class Serializer:
    """Accumulates logfmt key/value pairs into a text buffer."""

    def __init__(self, with_ansi_color: bool = False) -> None:
        self.with_ansi_color = with_ansi_color
        self._buffer = io.StringIO()
        self._writing_first_entry = True

    def write(self, text: str) -> None:
        """Write raw text to the buffer."""
        self._buffer.write(text)

    def getvalue(self) -> str:
        """Return everything written so far."""
        return self._buffer.getvalue()

    def serialize_entry(self, key: str, value: str) -> None:
        """Write ``key=value``, quoting and escaping the value if needed."""
        self.serialize_key(key)
        self.write("=")
        if self.with_ansi_color and key == "level":
            self.write(value)
        else:
            self.serialize_value(value)

    def serialize_entry_no_quote(self, key: str, value: object) -> None:
        """Write ``key=value`` with the value in its plain literal form."""
        self.serialize_key(key)
        self.write("=")
        self.write(_format_no_quote(value))

    def serialize_key(self, key: str) -> None:
        """Write a key, dropping characters that would need quoting."""
        if not self._writing_first_entry:
            self.write(" ")
        self._writing_first_entry = False

        cleaned = "".join(ch for ch in key if not need_quote(ch))
        if not cleaned:
            raise InvalidKeyError(f"invalid logfmt key: {key!r}")

        if self.with_ansi_color:
            self.write(f"{KEY_COLOR_PREFIX}{cleaned}{COLOR_RESET}")
        else:
            self.write(cleaned)

    def serialize_value(self, value: str) -> None:
        """Write a value, quoted and escaped when it contains unsafe characters."""
        if any(need_quote(ch) for ch in value):
            self.write(f'"{escape_debug(value)}"')
        else:
            self.write(value)