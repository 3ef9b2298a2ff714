"""Math backends turning markup into rendered fragments."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import cache
from typing import Any, Protocol, runtime_checkable

from .katex import KatexBackend
from .mathml import MathMLBackend


@runtime_checkable
class MathBackend(Protocol):
    """Synchronous renderer: markup and options in, markup out.

    Implementations raise ``MathRenderError`` when the markup is rejected.
    """

    name: str

    def render_to_string(self, markup: str, options: Mapping[str, Any]) -> str: ...


_BACKENDS: dict[str, Callable[[], MathBackend]] = {
    "katex": KatexBackend,
    "mathml": MathMLBackend,
}


def available_backends() -> tuple[str, ...]:
    return tuple(sorted(_BACKENDS))


def resolve_backend(name: str) -> MathBackend:
    """Instantiate a backend by name."""
    try:
        factory = _BACKENDS[name]
    except KeyError as exc:
        choices = ", ".join(available_backends())
        raise ValueError(f"Unknown math backend '{name}' (expected one of: {choices})") from exc
    return factory()


@cache
def default_backend() -> MathBackend:
    """Return the shared backend used when the expander names none."""
    return resolve_backend("katex")


__all__ = [
    "KatexBackend",
    "MathBackend",
    "MathMLBackend",
    "available_backends",
    "default_backend",
    "resolve_backend",
]
