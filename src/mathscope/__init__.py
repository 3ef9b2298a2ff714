"""Scoped math regions for tree-based document expansion."""

from __future__ import annotations

from mathscope.adapters.backends import (
    KatexBackend,
    MathBackend,
    MathMLBackend,
    resolve_backend,
)
from mathscope.core import (
    DEFAULT_OPTIONS,
    MATH_OPTIONS,
    ConfigOption,
    Context,
    Expander,
    ExpansionResult,
    Fragment,
    Lifecycle,
    MapText,
    MathRenderError,
    MathRenderOptions,
    MathRenderOverrides,
    MathscopeError,
    StrictMode,
    Substate,
    evaluate,
    is_display_mode,
    is_math_mode,
    load_overrides,
)
from mathscope.macros import MM, ConfigMath, LoggerMath, M
from mathscope.version import get_version


__version__ = get_version()

__all__ = [
    "DEFAULT_OPTIONS",
    "MATH_OPTIONS",
    "MM",
    "ConfigMath",
    "ConfigOption",
    "Context",
    "Expander",
    "ExpansionResult",
    "Fragment",
    "KatexBackend",
    "Lifecycle",
    "LoggerMath",
    "M",
    "MapText",
    "MathBackend",
    "MathMLBackend",
    "MathRenderError",
    "MathRenderOptions",
    "MathRenderOverrides",
    "MathscopeError",
    "StrictMode",
    "Substate",
    "__version__",
    "evaluate",
    "is_display_mode",
    "is_math_mode",
    "load_overrides",
    "resolve_backend",
]
