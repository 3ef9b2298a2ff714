from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from mathscope.core.exceptions import MathRenderError


class RecordingBackend:
    """Backend double that records every render call."""

    name = "recording"

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render_to_string(self, markup: str, options: Mapping[str, Any]) -> str:
        self.calls.append((markup, dict(options)))
        if self.fail_on is not None and self.fail_on in markup:
            raise MathRenderError(f"Undefined control sequence: {self.fail_on}", markup=markup)
        return f"<rendered>{markup}</rendered>"


class CollectingEmitter:
    """Emitter double keeping diagnostics in memory."""

    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def emitter() -> CollectingEmitter:
    return CollectingEmitter()


@pytest.fixture
def make_backend():
    def factory(fail_on: str | None = None) -> RecordingBackend:
        return RecordingBackend(fail_on=fail_on)

    return factory
