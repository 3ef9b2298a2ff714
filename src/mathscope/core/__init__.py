"""Expansion core: expressions, context, configuration and math-mode state."""

from __future__ import annotations

from .config import (
    DEFAULT_OPTIONS,
    MATH_OPTIONS,
    MathRenderOptions,
    MathRenderOverrides,
    StrictMode,
    load_overrides,
    merge_options,
    to_backend_options,
)
from .context import ConfigOption, Context, Substate
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .engine import Expander, ExpansionResult, evaluate
from .exceptions import (
    BackendConfigurationError,
    BackendUnavailableError,
    EvaluationHalted,
    ExpansionDepthError,
    MathRenderError,
    MathscopeError,
)
from .expressions import ConfigScope, Fragment, Lifecycle, MapText, expressions, fragment
from .state import InMathMode, MathModeState, is_display_mode, is_math_mode


__all__ = [
    "DEFAULT_OPTIONS",
    "MATH_OPTIONS",
    "BackendConfigurationError",
    "BackendUnavailableError",
    "ConfigOption",
    "ConfigScope",
    "Context",
    "DiagnosticEmitter",
    "EvaluationHalted",
    "Expander",
    "ExpansionDepthError",
    "ExpansionResult",
    "Fragment",
    "InMathMode",
    "Lifecycle",
    "LoggingEmitter",
    "MapText",
    "MathModeState",
    "MathRenderError",
    "MathRenderOptions",
    "MathRenderOverrides",
    "MathscopeError",
    "NullEmitter",
    "StrictMode",
    "Substate",
    "evaluate",
    "expressions",
    "fragment",
    "is_display_mode",
    "is_math_mode",
    "load_overrides",
    "merge_options",
    "to_backend_options",
]
