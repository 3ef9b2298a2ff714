"""Evaluation context primitives shared by every macro."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import EvaluationHalted
from .expressions import ConfigScope, Expressions, fragment


if TYPE_CHECKING:  # pragma: no cover - typing only
    from mathscope.adapters.backends import MathBackend


ValueT = TypeVar("ValueT")
UpdateT = TypeVar("UpdateT")


@dataclass
class Context:
    """Mutable state threaded through a single evaluation.

    Configuration overrides live on one stack per option and substates in a
    flat mapping. Both are keyed by the owning ``ConfigOption``/``Substate``
    instance, so unrelated modules never collide on names.
    """

    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    backend: MathBackend | None = None
    _config_stacks: dict[ConfigOption[Any, Any], list[Any]] = field(
        default_factory=dict, init=False, repr=False
    )
    _substates: dict[Substate[Any], Any] = field(default_factory=dict, init=False, repr=False)

    def halt(self, reason: str | None = None) -> NoReturn:
        """Abort the whole evaluation; no output is produced."""
        raise EvaluationHalted(reason)

    def config_stack(self, option: ConfigOption[Any, Any]) -> list[Any]:
        """Return the override stack registered for an option."""
        return self._config_stacks.setdefault(option, [])


class ConfigOption(Generic[ValueT, UpdateT]):
    """Named configuration value with scoped, mergeable overrides."""

    def __init__(
        self,
        name: str,
        default: ValueT,
        merge: Callable[[ValueT, UpdateT], ValueT],
    ) -> None:
        self.name = name
        self.default = default
        self.merge = merge

    def __repr__(self) -> str:
        return f"ConfigOption({self.name!r})"

    def get(self, context: Context) -> ValueT:
        """Return the innermost value visible from the current evaluation point."""
        stack = context._config_stacks.get(self)  # noqa: SLF001
        if stack:
            return stack[-1]
        return self.default

    def push(self, context: Context, update: UpdateT) -> ValueT:
        """Merge ``update`` into the current value and make it innermost."""
        merged = self.merge(self.get(context), update)
        context.config_stack(self).append(merged)
        return merged

    def pop(self, context: Context) -> None:
        """Drop the innermost override."""
        stack = context.config_stack(self)
        if stack:
            stack.pop()

    def scope(self, update: UpdateT, children: Expressions | None = None) -> ConfigScope:
        """Return an expression evaluating ``children`` with ``update`` applied."""
        return ConfigScope(option=self, update=update, child=fragment(children))


class Substate(Generic[ValueT]):
    """Small piece of per-evaluation state.

    Callers scope it themselves by saving the value in a ``Lifecycle`` pre hook
    and restoring it in the matching post hook.
    """

    def __init__(self, name: str, default: ValueT) -> None:
        self.name = name
        self.default = default

    def __repr__(self) -> str:
        return f"Substate({self.name!r})"

    def get(self, context: Context) -> ValueT:
        return context._substates.get(self, self.default)  # noqa: SLF001

    def set(self, context: Context, value: ValueT) -> None:
        context._substates[self] = value  # noqa: SLF001


__all__ = ["ConfigOption", "Context", "Substate"]
