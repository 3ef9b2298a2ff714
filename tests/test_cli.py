from __future__ import annotations

import importlib

import pytest
from typer.testing import CliRunner

from mathscope.ui.cli.app import app
from mathscope.macros import NORMAL_TEXT_CLOSE, NORMAL_TEXT_OPEN


render_module = importlib.import_module("mathscope.ui.cli.commands.render")

runner = CliRunner()


@pytest.fixture
def patched_backend(monkeypatch: pytest.MonkeyPatch, make_backend):
    def install(fail_on: str | None = None):
        backend = make_backend(fail_on=fail_on)
        monkeypatch.setattr(render_module, "resolve_backend", lambda _name: backend)
        return backend

    return install


def test_render_prints_backend_output(patched_backend) -> None:
    backend = patched_backend()

    result = runner.invoke(app, ["render", "x^2"])

    assert result.exit_code == 0, result.output
    assert "<rendered>x^2</rendered>" in result.output
    assert backend.calls[0][1]["displayMode"] is False


def test_render_display_with_prefix(patched_backend) -> None:
    backend = patched_backend()

    result = runner.invoke(app, ["render", "z", "--display", "--prefix", "see: "])

    assert result.exit_code == 0, result.output
    markup, options = backend.calls[0]
    assert markup == f"{NORMAL_TEXT_OPEN}see: {NORMAL_TEXT_CLOSE}z"
    assert options["displayMode"] is True


def test_render_reads_config_file_and_output_override(patched_backend, tmp_path) -> None:
    backend = patched_backend()
    config = tmp_path / "math.yml"
    config.write_text("errorColor: '#abcdef'\nleqno: true\n")

    result = runner.invoke(
        app, ["render", "a", "--config", str(config), "--output", "htmlAndMathml"]
    )

    assert result.exit_code == 0, result.output
    options = backend.calls[0][1]
    assert options["errorColor"] == "#abcdef"
    assert options["leqno"] is True
    assert options["output"] == "htmlAndMathml"


def test_render_verbose_prints_render_summary(patched_backend) -> None:
    patched_backend()

    result = runner.invoke(app, ["render", "y^2", "--display", "-v"])

    assert result.exit_code == 0, result.output
    assert "Math renders" in result.output
    assert "recording" in result.output
    assert "<rendered>y^2</rendered>" in result.output


def test_render_is_quiet_without_verbose(patched_backend) -> None:
    patched_backend()

    result = runner.invoke(app, ["render", "y^2"])

    assert result.exit_code == 0, result.output
    assert "Math renders" not in result.output


def test_render_rejects_invalid_config(patched_backend, tmp_path) -> None:
    patched_backend()
    config = tmp_path / "math.yml"
    config.write_text("colour: red\n")

    result = runner.invoke(app, ["render", "a", "--config", str(config)])

    assert result.exit_code == 1
    assert "Invalid math configuration" in result.output


def test_render_failure_exits_with_error(patched_backend) -> None:
    patched_backend(fail_on="\\bad")

    result = runner.invoke(app, ["render", "\\bad"])

    assert result.exit_code == 1
    assert "Rendering halted" in result.output
    assert "<rendered>" not in result.output


def test_unknown_backend_is_a_usage_error() -> None:
    result = runner.invoke(app, ["render", "x", "--backend", "mathjax"])

    assert result.exit_code == 2


def test_render_with_mathml_backend() -> None:
    result = runner.invoke(app, ["render", "x^2", "--backend", "mathml", "--display"])

    assert result.exit_code == 0, result.output
    assert 'display="block"' in result.output


def test_backends_command_lists_backends() -> None:
    result = runner.invoke(app, ["backends"])

    assert result.exit_code == 0, result.output
    assert "katex" in result.output
    assert "mathml" in result.output
