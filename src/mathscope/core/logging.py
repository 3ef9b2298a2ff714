"""Loggers whose verbosity can be configured per subtree."""

from __future__ import annotations

import logging
from typing import Literal

from .context import ConfigOption, Context
from .expressions import ConfigScope, Expressions


LogLevelName = Literal["debug", "info", "warning", "error"]

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _replace_level(old: str, new: str | None) -> str:
    if new is None:
        return old
    if new not in _LEVELS:
        raise ValueError(f"Unknown log level '{new}'; expected one of {', '.join(_LEVELS)}")
    return new


class ScopedLogger:
    """Named logger filtered by a level that macros can override for a subtree.

    Warnings and errors are routed through the context's diagnostic emitter;
    debug and info messages go to the standard ``logging`` hierarchy.
    """

    def __init__(self, name: str, default_level: LogLevelName = "info") -> None:
        self.name = name
        self.option: ConfigOption[str, str | None] = ConfigOption(
            name, _replace_level("info", default_level), _replace_level
        )
        self._logger = logging.getLogger(f"mathscope.{name}")

    def config_macro(
        self, children: Expressions | None = None, *, level: LogLevelName | None = None
    ) -> ConfigScope:
        """Evaluate ``children`` with this logger set to ``level``."""
        return self.option.scope(level, children)

    def level(self, context: Context) -> str:
        return self.option.get(context)

    def enabled(self, context: Context, level: LogLevelName) -> bool:
        return _LEVELS[level] >= _LEVELS[self.level(context)]

    def debug(self, context: Context, message: object) -> None:
        if self.enabled(context, "debug"):
            self._logger.debug("%s", message)

    def info(self, context: Context, message: object) -> None:
        if self.enabled(context, "info"):
            self._logger.info("%s", message)

    def warning(self, context: Context, message: object) -> None:
        if self.enabled(context, "warning"):
            context.emitter.warning(str(message))

    def error(self, context: Context, message: object, exc: BaseException | None = None) -> None:
        if self.enabled(context, "error"):
            context.emitter.error(str(message), exc)


__all__ = ["LogLevelName", "ScopedLogger"]
