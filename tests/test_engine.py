from __future__ import annotations

import pytest

from mathscope.core.context import ConfigOption, Context, Substate
from mathscope.core.engine import Expander, evaluate
from mathscope.core.exceptions import ExpansionDepthError
from mathscope.core.expressions import Fragment, Lifecycle, MapText, expressions, fragment


def _replace(old: str, new: str | None) -> str:
    return old if new is None else new


GREETING = ConfigOption("Greeting", "hello", _replace)
COUNTER = Substate("Counter", 0)


def test_text_and_fragments_concatenate_in_order() -> None:
    tree = Fragment(("a", ["b", ("c", None)], fragment("d", ["e"])))

    result = evaluate(tree)

    assert result.ok
    assert result.output == "abcde"


def test_macros_receive_the_context() -> None:
    seen: list[Context] = []

    def macro(ctx: Context) -> str:
        seen.append(ctx)
        return "m"

    assert evaluate(["<", macro, ">"]).output == "<m>"
    assert len(seen) == 1


def test_lifecycle_hooks_bracket_the_subtree() -> None:
    calls: list[str] = []

    def child(_ctx: Context) -> str:
        calls.append("child")
        return "x"

    tree = Lifecycle(
        child=child,
        pre=lambda _ctx: calls.append("pre"),
        post=lambda _ctx: calls.append("post"),
    )

    assert evaluate(tree).output == "x"
    assert calls == ["pre", "child", "post"]


def test_map_text_sees_evaluated_children() -> None:
    tree = MapText(child=["a", "b"], fun=lambda text, _ctx: [text.upper(), "!"])

    assert evaluate(tree).output == "AB!"


def test_config_scope_is_visible_only_inside_subtree() -> None:
    def read(ctx: Context) -> str:
        return GREETING.get(ctx) + ";"

    tree = [read, GREETING.scope("hi", [read, GREETING.scope("yo", read), read]), read]

    assert evaluate(tree).output == "hello;hi;yo;hi;hello;"


def test_document_level_config_seeds_the_context() -> None:
    expander = Expander(config={GREETING: "bonjour"})

    assert expander.evaluate(lambda ctx: GREETING.get(ctx)).output == "bonjour"


def test_substate_defaults_and_updates() -> None:
    def bump(ctx: Context) -> str:
        COUNTER.set(ctx, COUNTER.get(ctx) + 1)
        return str(COUNTER.get(ctx))

    assert evaluate([bump, bump, bump]).output == "123"


def test_halt_discards_all_output_and_runs_post_hooks() -> None:
    calls: list[str] = []

    def fail(ctx: Context) -> str:
        ctx.halt("broken")

    tree = ["before", Lifecycle(child=fail, post=lambda _ctx: calls.append("post")), "after"]

    result = evaluate(tree)

    assert result.halted
    assert not result.ok
    assert result.output is None
    assert result.reason == "broken"
    assert calls == ["post"]


def test_runaway_macros_raise_depth_error() -> None:
    def forever(_ctx: Context) -> object:
        return forever

    with pytest.raises(ExpansionDepthError):
        Expander(max_depth=20).evaluate(forever)


def test_unknown_expression_types_are_rejected() -> None:
    with pytest.raises(TypeError, match="int"):
        evaluate(42)


def test_expressions_normalises_optional_children() -> None:
    assert expressions(None) == []
    assert expressions("x") == ["x"]
    assert expressions(("a", "b")) == ["a", "b"]
