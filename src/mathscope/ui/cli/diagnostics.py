"""Diagnostic emitter used by the ``mathscope`` commands."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.table import Table
from rich.text import Text

from mathscope.core.diagnostics import DiagnosticEmitter, format_event_message, shorten_markup

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter(DiagnosticEmitter):
    """Print warnings and errors on stderr and keep events for the render summary.

    Events are echoed as they happen only at ``-vv`` and above; ``-v`` shows
    the summary table once the evaluation is over.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self._state = state or get_cli_state()
        if debug_enabled is None:
            debug_enabled = self._state.show_tracebacks
        self.debug_enabled = bool(debug_enabled)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._state.record_event(name, payload)
        if self._state.verbosity >= 2:
            message = format_event_message(name, payload)
            if message:
                render_message("info", message)


def render_summary(state: CLIState) -> None:
    """Print the backend calls recorded during the last evaluation."""
    renders = state.consume_events("math_render")
    if state.verbosity < 1:
        return
    table = Table(title="Math renders")
    table.add_column("Mode")
    table.add_column("Backend")
    table.add_column("Markup")
    for entry in renders:
        mode = "display" if entry.get("display_mode") else "inline"
        markup = Text(shorten_markup(str(entry.get("markup", ""))))
        table.add_row(mode, str(entry.get("backend", "")), markup)
    if not renders:
        table.caption = "no math was rendered"
    state.err_console.print(table)


__all__ = ["CliEmitter", "render_summary"]
