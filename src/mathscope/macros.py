"""Math region macros.

``M`` and ``MM`` evaluate their children to math markup and hand it to the
math backend. Regions may nest: only the outermost region renders, over the
concatenated raw markup of the whole group, and its display mode applies to
every inner region.

``prefix`` and ``postfix`` place ordinary text directly against the rendered
math so browsers never break the line between them. They are spliced into the
backend input as ``\\htmlClass{normalText}{\\text{...}}``; stylesheets should
style ``.normalText`` as body text rather than math.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mathscope.adapters.backends import MathBackend, default_backend
from mathscope.core.config import (
    MATH_OPTIONS,
    MathRenderOverrides,
    coerce_overrides,
    to_backend_options,
)
from mathscope.core.context import Context
from mathscope.core.exceptions import exception_hint
from mathscope.core.expressions import (
    ConfigScope,
    Expression,
    Expressions,
    Lifecycle,
    MapText,
    fragment,
)
from mathscope.core.logging import LogLevelName, ScopedLogger
from mathscope.core.state import (
    InMathMode,
    MathModeState,
    enter_region,
    get_math_state,
    set_math_state,
)


logger = ScopedLogger("LoggerMath")

NORMAL_TEXT_OPEN = "\\htmlClass{normalText}{\\text{"
NORMAL_TEXT_CLOSE = "}}"


def LoggerMath(  # noqa: N802
    children: Expressions | None = None, *, level: LogLevelName | None = None
) -> ConfigScope:
    """Set how much the math macros log while evaluating ``children``."""
    return logger.config_macro(children, level=level)


def ConfigMath(  # noqa: N802
    children: Expressions | None = None,
    *,
    options: MathRenderOverrides | Mapping[str, Any] | None = None,
    **fields: Any,
) -> ConfigScope:
    """Override math rendering options for ``children`` only.

    Keyword fields may use either option spelling (``error_color`` or
    ``errorColor``) and take precedence over ``options``.
    """
    update = coerce_overrides(options)
    if fields:
        update = MathRenderOverrides.model_validate(
            {
                **update.model_dump(exclude_none=True),
                **coerce_overrides(fields).model_dump(exclude_none=True),
            }
        )
    return MATH_OPTIONS.scope(update, children)


def normal_text(exps: Expressions) -> list[Expression]:
    """Wrap ``exps`` so the backend renders them as body text."""
    return [NORMAL_TEXT_OPEN, fragment(exps), NORMAL_TEXT_CLOSE]


def _backend(context: Context) -> MathBackend:
    return context.backend if context.backend is not None else default_backend()


def math_region(
    children: Expressions | None = None,
    *,
    display_mode: bool,
    prefix: Expressions | None = None,
    postfix: Expressions | None = None,
) -> Expression:
    """Shared implementation of ``M`` and ``MM``."""
    saved: list[MathModeState] = []

    def pre(context: Context) -> None:
        current = get_math_state(context)
        saved.append(current)
        set_math_state(context, enter_region(current, display_mode))

    def post(context: Context) -> None:
        set_math_state(context, saved.pop())

    def render(evaled: str, context: Context) -> Expression:
        if get_math_state(context).in_math_mode is not InMathMode.FRESH:
            # An enclosing region renders the combined markup.
            return evaled

        backend = _backend(context)
        opts = to_backend_options(MATH_OPTIONS.get(context), display_mode)
        logger.debug(context, f"Rendering math with the {backend.name} backend: {evaled}")
        context.emitter.event(
            "math_render",
            {"markup": evaled, "display_mode": display_mode, "backend": backend.name},
        )
        try:
            return backend.render_to_string(evaled, opts)
        except Exception as exc:
            # Any backend failure halts, whatever it raises.
            logger.error(context, f"Failed to render math with the {backend.name} backend: {exc}", exc)
            logger.error(context, "The input that was given to the backend:")
            logger.error(context, evaled)
            context.halt(f"math rendering failed: {exception_hint(exc)}")

    body = fragment(
        normal_text(prefix) if prefix else None,
        children,
        normal_text(postfix) if postfix else None,
    )
    return Lifecycle(child=MapText(child=body, fun=render), pre=pre, post=post)


def M(  # noqa: N802
    children: Expressions | None = None,
    *,
    prefix: Expressions | None = None,
    postfix: Expressions | None = None,
) -> Expression:
    """Inline math: render ``children`` with ``displayMode`` off."""
    return math_region(children, display_mode=False, prefix=prefix, postfix=postfix)


def MM(  # noqa: N802
    children: Expressions | None = None,
    *,
    prefix: Expressions | None = None,
    postfix: Expressions | None = None,
) -> Expression:
    """Display math: render ``children`` with ``displayMode`` on."""
    return math_region(children, display_mode=True, prefix=prefix, postfix=postfix)


__all__ = [
    "NORMAL_TEXT_CLOSE",
    "NORMAL_TEXT_OPEN",
    "M",
    "MM",
    "ConfigMath",
    "LoggerMath",
    "logger",
    "math_region",
    "normal_text",
]
