from __future__ import annotations

import logging

import pytest

from mathscope.core.diagnostics import LoggingEmitter, NullEmitter, format_event_message
from mathscope.core.exceptions import MathRenderError, MathscopeError, exception_hint
from mathscope.ui.cli.diagnostics import CliEmitter, render_summary
from mathscope.ui.cli.state import set_cli_state


def _raise_nested_render_error() -> None:
    try:
        raise MathRenderError("Undefined control sequence: \\foo", markup="\\foo")
    except MathRenderError as exc:
        raise MathscopeError("render failed") from exc


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.ERROR):
        emitter.error("boom")
    assert any(record.message == "boom" for record in caplog.records)
    assert emitter.debug_enabled is True


def test_logging_emitter_formats_render_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter()
    with caplog.at_level(logging.INFO):
        emitter.event("math_render", {"markup": "x^2", "display_mode": True, "backend": "katex"})
    assert any(record.message == "Rendering display math via katex: x^2" for record in caplog.records)


def test_event_messages_shorten_long_markup() -> None:
    message = format_event_message("math_render", {"markup": "a" * 200})
    assert message is not None
    assert message.startswith("Rendering inline math: ")
    assert message.endswith("...")
    assert format_event_message("unknown", {}) is None


def test_cli_emitter_bridges_state(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)

    emitter.warning("Heads up", exc=None)
    emitter.error("Boom", exc=None)
    emitter.event("math_render", {"markup": "q"})

    captured = capsys.readouterr()
    assert "Heads up" in captured.err
    assert "Boom" in captured.err
    assert "Rendering inline math" not in captured.err
    assert captured.out == ""
    assert state.consume_events("math_render") == [{"markup": "q"}]


def test_cli_emitter_echoes_events_when_very_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=2, debug=False)

    CliEmitter(state=state).event("math_render", {"markup": "q", "backend": "katex"})

    assert "Rendering inline math via katex: q" in capsys.readouterr().err
    state.consume_events("math_render")


def test_render_summary_lists_recorded_renders(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)
    emitter.event("math_render", {"markup": "\\frac[a]{b}", "display_mode": True, "backend": "katex"})

    render_summary(state)

    err = capsys.readouterr().err
    assert "Math renders" in err
    assert "display" in err
    assert "\\frac[a]{b}" in err
    assert state.consume_events("math_render") == []


def test_render_summary_is_silent_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=0, debug=False)
    CliEmitter(state=state).event("math_render", {"markup": "q"})

    render_summary(state)

    assert capsys.readouterr().err == ""
    assert state.consume_events("math_render") == []


def test_exception_hint_reports_root_cause() -> None:
    try:
        _raise_nested_render_error()
    except MathscopeError as error:
        hint = exception_hint(error)
    assert hint == "Undefined control sequence: \\foo"
