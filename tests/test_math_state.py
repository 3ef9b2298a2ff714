from __future__ import annotations

from mathscope.core.context import Context
from mathscope.core.engine import Expander
from mathscope.core.state import (
    OUTSIDE_MATH,
    InMathMode,
    MathModeState,
    enter_region,
    get_math_state,
    is_display_mode,
    is_math_mode,
)
from mathscope.macros import MM, M


def _state_recorder(seen: list[tuple[bool, bool, MathModeState]]):
    def record(ctx: Context) -> str:
        seen.append((is_math_mode(ctx), is_display_mode(ctx), get_math_state(ctx)))
        return ""

    return record


def test_enter_region_from_outside_is_fresh() -> None:
    assert enter_region(OUTSIDE_MATH, True) == MathModeState(InMathMode.FRESH, True)
    assert enter_region(OUTSIDE_MATH, False) == MathModeState(InMathMode.FRESH, False)


def test_enter_region_when_nested_is_stale_and_keeps_display_mode() -> None:
    fresh = MathModeState(InMathMode.FRESH, False)
    stale = MathModeState(InMathMode.STALE, True)

    assert enter_region(fresh, True) == MathModeState(InMathMode.STALE, False)
    assert enter_region(stale, False) == MathModeState(InMathMode.STALE, True)


def test_predicates_track_nesting(backend) -> None:
    seen: list[tuple[bool, bool, MathModeState]] = []
    record = _state_recorder(seen)
    tree = [record, MM([record, M(record), record]), record]

    result = Expander(backend=backend).evaluate(tree)

    assert result.ok
    assert [(math, display) for math, display, _ in seen] == [
        (False, False),
        (True, True),
        (True, True),
        (True, True),
        (False, False),
    ]
    assert [state.in_math_mode for *_, state in seen] == [
        InMathMode.NO,
        InMathMode.FRESH,
        InMathMode.STALE,
        InMathMode.FRESH,
        InMathMode.NO,
    ]


def test_sibling_regions_see_the_prior_state(backend) -> None:
    seen: list[tuple[bool, bool, MathModeState]] = []
    record = _state_recorder(seen)

    Expander(backend=backend).evaluate([M(["a", record]), record, MM(["b", record]), record])

    states = [state for *_, state in seen]
    assert states == [
        MathModeState(InMathMode.FRESH, False),
        OUTSIDE_MATH,
        MathModeState(InMathMode.FRESH, True),
        OUTSIDE_MATH,
    ]


def test_state_is_restored_after_halt(backend) -> None:
    backend.fail_on = "bad"
    expander = Expander(backend=backend)
    context = expander.new_context()

    result = expander.evaluate(M("bad"), context)

    assert result.halted
    assert get_math_state(context) == OUTSIDE_MATH
