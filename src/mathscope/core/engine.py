"""Depth-first expander driving macro evaluation.

The expander walks an expression tree synchronously, one node at a time, and
concatenates the evaluated text. Macros receive the shared ``Context`` and
return further expressions; ``Lifecycle`` and ``ConfigScope`` nodes bracket
their subtree so that scoped state is restored on every exit path.

A halt requested through ``Context.halt`` unwinds the walk. ``evaluate``
reports it as a halted ``ExpansionResult`` instead of a partial string.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from .context import ConfigOption, Context
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import EvaluationHalted, ExpansionDepthError
from .expressions import ConfigScope, Expression, Fragment, Lifecycle, MapText


if TYPE_CHECKING:  # pragma: no cover - typing only
    from mathscope.adapters.backends import MathBackend


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Outcome of a full evaluation: either text or a halt."""

    output: str | None
    halted: bool = False
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return not self.halted


class Expander:
    """Evaluate expression trees into text."""

    def __init__(
        self,
        *,
        backend: MathBackend | None = None,
        emitter: DiagnosticEmitter | None = None,
        config: Mapping[ConfigOption[Any, Any], Any] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.backend = backend
        self.emitter = emitter if emitter is not None else LoggingEmitter()
        self.config = dict(config or {})
        self.max_depth = max_depth

    def new_context(self) -> Context:
        """Create a fresh context seeded with the document-level configuration."""
        context = Context(emitter=self.emitter, backend=self.backend)
        for option, update in self.config.items():
            option.push(context, update)
        return context

    def evaluate(self, expression: Expression, context: Context | None = None) -> ExpansionResult:
        """Evaluate ``expression`` and report the produced text or the halt."""
        active = context if context is not None else self.new_context()
        try:
            text = self._evaluate(expression, active, 0)
        except EvaluationHalted as halt:
            logger.debug("Evaluation halted: %s", halt.reason)
            active.emitter.event("halt", {"reason": halt.reason})
            return ExpansionResult(output=None, halted=True, reason=halt.reason)
        return ExpansionResult(output=text)

    def _evaluate(self, expression: Expression, context: Context, depth: int) -> str:
        if depth > self.max_depth:
            raise ExpansionDepthError(
                f"Macro expansion exceeded the maximum depth of {self.max_depth}"
            )

        match expression:
            case None:
                return ""
            case str():
                return expression
            case Fragment(exps=exps):
                return "".join(self._evaluate(exp, context, depth) for exp in exps)
            case list() | tuple():
                return "".join(self._evaluate(exp, context, depth) for exp in expression)
            case Lifecycle(child=child, pre=pre, post=post):
                if pre is not None:
                    pre(context)
                try:
                    return self._evaluate(child, context, depth)
                finally:
                    if post is not None:
                        post(context)
            case MapText(child=child, fun=fun):
                evaled = self._evaluate(child, context, depth)
                return self._evaluate(fun(evaled, context), context, depth + 1)
            case ConfigScope(option=option, update=update, child=child):
                option.push(context, update)
                try:
                    return self._evaluate(child, context, depth)
                finally:
                    option.pop(context)
            case _ if callable(expression):
                return self._evaluate(expression(context), context, depth + 1)
            case _:
                raise TypeError(f"Cannot evaluate expression of type {type(expression).__name__}")


def evaluate(expression: Expression, **options: Any) -> ExpansionResult:
    """Evaluate ``expression`` with a one-off ``Expander``."""
    return Expander(**options).evaluate(expression)


__all__ = ["DEFAULT_MAX_DEPTH", "Expander", "ExpansionResult", "evaluate"]
