"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


MATH_PANEL = "Math"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"


class OutputFormatChoice(str, Enum):
    """Markup flavours accepted by ``--output``."""

    HTML = "html"
    MATHML = "mathml"
    HTML_AND_MATHML = "htmlAndMathml"


ExpressionArgument = Annotated[
    str,
    typer.Argument(
        metavar="EXPRESSION",
        help="Math markup to render, e.g. 'x^2 + y^2'.",
    ),
]

DisplayOption = Annotated[
    bool,
    typer.Option(
        "--display",
        "-d",
        help="Render in display mode instead of inline.",
        rich_help_panel=MATH_PANEL,
    ),
]

PrefixOption = Annotated[
    str | None,
    typer.Option(
        "--prefix",
        help="Body text kept on the same line directly before the math.",
        rich_help_panel=MATH_PANEL,
    ),
]

PostfixOption = Annotated[
    str | None,
    typer.Option(
        "--postfix",
        help="Body text kept on the same line directly after the math.",
        rich_help_panel=MATH_PANEL,
    ),
]

ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML or JSON file with math rendering options.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=MATH_PANEL,
    ),
]

BackendOption = Annotated[
    str,
    typer.Option(
        "--backend",
        "-b",
        help="Math backend used for rendering (see 'mathscope backends').",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputFormatOption = Annotated[
    OutputFormatChoice | None,
    typer.Option(
        "--output",
        "-o",
        help="Override the markup flavour produced by the backend.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
