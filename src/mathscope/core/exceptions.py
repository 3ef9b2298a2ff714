"""Custom exception hierarchy for math region expansion."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class MathscopeError(RuntimeError):
    """Base exception for expansion and rendering failures."""


class MathRenderError(MathscopeError):
    """Raised when a backend rejects the markup it was given."""

    def __init__(
        self,
        message: str,
        *,
        markup: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.markup = markup
        self.options = dict(options) if options is not None else None


class BackendUnavailableError(MathscopeError):
    """Raised when a backend executable or library cannot be located."""


class BackendConfigurationError(MathscopeError):
    """Raised when render options cannot be forwarded to a backend."""


class ExpansionDepthError(MathscopeError):
    """Raised when macros keep expanding past the configured depth."""


class EvaluationHalted(Exception):
    """Signal raised by ``Context.halt`` to abort the whole evaluation.

    The expander turns it into a halted ``ExpansionResult``; it never escapes
    ``Expander.evaluate``.
    """

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or "evaluation halted")
        self.reason = reason


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BackendConfigurationError",
    "BackendUnavailableError",
    "EvaluationHalted",
    "ExpansionDepthError",
    "MathRenderError",
    "MathscopeError",
    "exception_hint",
    "exception_messages",
]
