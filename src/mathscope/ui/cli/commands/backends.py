"""Implementation of the ``mathscope backends`` command."""

from __future__ import annotations

from rich.table import Table

from mathscope.adapters.backends import available_backends, resolve_backend

from ..state import get_cli_state


_DESCRIPTIONS = {
    "katex": "KaTeX through Node.js (html, mathml or htmlAndMathml output)",
    "mathml": "latex2mathml, in-process (MathML output only)",
}


def backends() -> None:
    """List the math backends that can be selected with --backend."""
    table = Table(title="Math backends")
    table.add_column("Name", style="bold")
    table.add_column("Renderer")
    for name in available_backends():
        backend = resolve_backend(name)
        table.add_row(backend.name, _DESCRIPTIONS.get(name, ""))
    get_cli_state().console.print(table)


__all__ = ["backends"]
