"""Render a small document containing nested math regions."""

from __future__ import annotations

import logging

from mathscope import MM, ConfigMath, Expander, LoggerMath, M, MathMLBackend, is_math_mode


def marker(ctx) -> str:
    # Styling helpers can branch on the math context.
    return "\\cdot" if is_math_mode(ctx) else "*"


document = [
    "Inline ",
    M(["a ", marker, " b"], prefix="value ", postfix="."),
    " Text ",
    marker,
    ConfigMath(MM(["\\frac{1}{2}", M("+ x")]), fleqn=True),
    LoggerMath(M("y"), level="debug"),
]


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    result = Expander(backend=MathMLBackend()).evaluate(document)
    if result.halted:
        raise SystemExit(f"Rendering halted: {result.reason}")
    print(result.output)


if __name__ == "__main__":
    main()
