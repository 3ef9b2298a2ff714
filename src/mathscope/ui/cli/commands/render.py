"""Implementation of the ``mathscope render`` command."""

from __future__ import annotations

import typer
import yaml

from mathscope.adapters.backends import resolve_backend
from mathscope.core.config import MATH_OPTIONS, MathRenderOverrides, load_overrides
from mathscope.core.engine import Expander
from mathscope.macros import MM, ConfigMath, M

from .._options import (
    BackendOption,
    ConfigFileOption,
    DebugOption,
    DisplayOption,
    ExpressionArgument,
    OutputFormatOption,
    PostfixOption,
    PrefixOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter, render_summary
from ..state import emit_error, set_cli_state


def render(
    expression: ExpressionArgument,
    display: DisplayOption = False,
    prefix: PrefixOption = None,
    postfix: PostfixOption = None,
    config: ConfigFileOption = None,
    backend: BackendOption = "katex",
    output: OutputFormatOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Render a math expression and print the resulting markup."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    emitter = CliEmitter(state=state)

    try:
        math_backend = resolve_backend(backend)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--backend") from exc

    overrides = MathRenderOverrides()
    if config is not None:
        try:
            overrides = load_overrides(config)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            emit_error(f"Invalid math configuration in '{config}'.", exception=exc)
            raise typer.Exit(code=1) from exc

    region = (MM if display else M)(expression, prefix=prefix, postfix=postfix)
    tree = ConfigMath(region, output=output.value) if output is not None else region

    expander = Expander(backend=math_backend, emitter=emitter, config={MATH_OPTIONS: overrides})
    result = expander.evaluate(tree)
    render_summary(state)
    if result.halted:
        emit_error(f"Rendering halted: {result.reason}")
        raise typer.Exit(code=1)

    typer.echo(result.output)


__all__ = ["render"]
