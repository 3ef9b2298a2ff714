"""Math-mode tracking for nested math regions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .context import Context, Substate


class InMathMode(str, Enum):
    """Position of the current evaluation point relative to math regions."""

    NO = "no"
    """Outside every math region."""

    FRESH = "fresh"
    """Inside the outermost open math region; this region renders."""

    STALE = "stale"
    """Nested inside an already open region; an ancestor renders."""


@dataclass(frozen=True, slots=True)
class MathModeState:
    """Math context visible to the node being evaluated."""

    in_math_mode: InMathMode = InMathMode.NO
    display_mode: bool = False


OUTSIDE_MATH = MathModeState()

_MATH_STATE: Substate[MathModeState] = Substate("MathModeState", OUTSIDE_MATH)


def enter_region(current: MathModeState, display_mode: bool) -> MathModeState:
    """Return the state in effect inside a region opened from ``current``.

    Inner regions keep the display mode chosen by the outermost one.
    """
    if current.in_math_mode is InMathMode.NO:
        return MathModeState(in_math_mode=InMathMode.FRESH, display_mode=display_mode)
    return MathModeState(in_math_mode=InMathMode.STALE, display_mode=current.display_mode)


def get_math_state(context: Context) -> MathModeState:
    return _MATH_STATE.get(context)


def set_math_state(context: Context, state: MathModeState) -> None:
    _MATH_STATE.set(context, state)


def is_math_mode(context: Context) -> bool:
    """Return True while evaluating a descendant of a math macro."""
    return get_math_state(context).in_math_mode is not InMathMode.NO


def is_display_mode(context: Context) -> bool:
    """Return True inside math whose outermost region is in display mode."""
    return get_math_state(context).display_mode


__all__ = [
    "OUTSIDE_MATH",
    "InMathMode",
    "MathModeState",
    "enter_region",
    "get_math_state",
    "is_display_mode",
    "is_math_mode",
    "set_math_state",
]
