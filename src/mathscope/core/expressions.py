"""Expression tree understood by the expander.

An expression is one of:

`str`
: literal text, evaluated to itself.

`None`
: evaluates to the empty string.

`Fragment`
: a sequence of expressions whose evaluated text is concatenated.

`Lifecycle`
: runs ``pre`` before and ``post`` after evaluating its child. ``post`` runs on
  every exit path, including a halt unwinding through the subtree.

`MapText`
: evaluates its child to text and hands that text to ``fun``; the expression
  returned by ``fun`` is evaluated in turn.

`ConfigScope`
: makes a configuration override visible to its child only.

macro
: any callable taking the active ``Context`` and returning an expression.

Plain lists and tuples are accepted wherever a fragment is.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import ConfigOption, Context


Expression: TypeAlias = Any
"""Any value accepted by ``Expander.evaluate``."""

Expressions: TypeAlias = Expression | Sequence[Expression]

Hook = Callable[["Context"], None]
TextMapper = Callable[[str, "Context"], Expression]


@dataclass(frozen=True, slots=True)
class Fragment:
    """Concatenation of several expressions."""

    exps: tuple[Expression, ...] = ()


@dataclass(frozen=True, slots=True)
class Lifecycle:
    """Scoped pre/post hooks around a subtree."""

    child: Expression
    pre: Hook | None = None
    post: Hook | None = None


@dataclass(frozen=True, slots=True)
class MapText:
    """Post-process the evaluated text of a subtree."""

    child: Expression
    fun: TextMapper


@dataclass(frozen=True, slots=True)
class ConfigScope:
    """Scoped override of a configuration option."""

    option: ConfigOption[Any, Any]
    update: Any
    child: Expression


def expressions(value: Expressions | None) -> list[Expression]:
    """Normalise optional children into a flat list of expressions."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def fragment(*exps: Expressions | None) -> Fragment:
    """Build a fragment from any mix of expressions and child sequences."""
    collected: list[Expression] = []
    for exp in exps:
        collected.extend(expressions(exp))
    return Fragment(tuple(collected))


__all__ = [
    "ConfigScope",
    "Expression",
    "Expressions",
    "Fragment",
    "Hook",
    "Lifecycle",
    "MapText",
    "TextMapper",
    "expressions",
    "fragment",
]
