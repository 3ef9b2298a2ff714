"""CLI command implementations."""

from __future__ import annotations

from .backends import backends
from .render import render


__all__ = ["backends", "render"]
