"""Lightweight nested spans that give log events their context."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from typing import Any

__all__ = ["Span", "current_span", "span"]

_CURRENT: contextvars.ContextVar[Span | None] = contextvars.ContextVar(
    "logfmtlog_current_span", default=None
)


class Span:
    """A named region of execution carrying its own fields.

    Entering a span with ``with`` makes it the current span until the
    block exits.
    """

    def __init__(self, name: str, fields: dict[str, Any] | None = None,
                 parent: Span | None = None) -> None:
        self.name = name
        self.fields: dict[str, Any] = dict(fields or {})
        self.parent = parent
        self._tokens: list[contextvars.Token[Span | None]] = []

    def __repr__(self) -> str:
        return f"Span(name={self.name!r}, fields={self.fields!r})"

    def __enter__(self) -> Span:
        self._tokens.append(_CURRENT.set(self))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _CURRENT.reset(self._tokens.pop())

    def scope_from_root(self) -> Iterator[Span]:
        """Yield this span and its ancestors, outermost first."""
        chain: list[Span] = []
        node: Span | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        yield from reversed(chain)


def span(name: str, **kwargs: Any) -> Span:
    """Create a span whose parent is the span current at the time of the call."""
    return Span(name, kwargs, parent=_CURRENT.get())


def current_span() -> Span | None:
    """Return the innermost entered span, or None outside any span."""
    return _CURRENT.get()