"""Math rendering options and their field-wise merge.

MathRenderOptions

`output` (`"html" | "mathml" | "htmlAndMathml"`)
: Markup flavour produced by the backend. Defaults to `"html"`, unlike KaTeX.

`leqno` (`bool`)
: Place equation numbers on the left.

`fleqn` (`bool`)
: Flush display math to the left.

`halt_on_error` (`bool`)
: Abort the whole evaluation when the backend rejects markup. Forwarded to
  the backend as `throwOnError`.

`error_color` (`str`)
: Colour used by the backend for inline error messages.

`macros` (`dict[str, Any]`)
: Backend-level macro definitions. Prefer document macros instead.

`min_rule_thickness` (`float | None`)
: Minimum thickness of fraction lines and rules, in ems.

`color_is_text_color` (`bool`)
: Make `\\color` behave like `\\textcolor`.

`max_size` (`float`)
: Upper bound for user-specified sizes, in ems. Unbounded by default.

`max_expand` (`int`)
: Limit on backend macro expansions.

`strict` (`bool | StrictMode | Callable`)
: Backend strictness about non-LaTeX input. Defaults to `False`, unlike KaTeX.

`trust` (`bool | Callable`)
: Whether commands such as `\\htmlClass` are allowed. Defaults to `True`,
  unlike KaTeX, because prefix/postfix wrapping relies on `\\htmlClass`.

`global_group` (`bool`)
: Place backend macro definitions into the global group.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
import math
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
import yaml

from .context import ConfigOption


OutputFormat = Literal["html", "mathml", "htmlAndMathml"]


class StrictMode(str, Enum):
    """Named strictness levels understood by the backend."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"


StrictSetting = bool | StrictMode | Callable[..., Any]
TrustSetting = bool | Callable[..., Any]


def _coerce_strict(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, StrictMode):
        return StrictMode(value)
    return value


class MathRenderOptions(BaseModel):
    """Effective options handed to the math backend."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    output: OutputFormat = "html"
    leqno: bool = False
    fleqn: bool = False
    halt_on_error: bool = True
    error_color: str = "#cc0000"
    macros: dict[str, Any] = Field(default_factory=dict)
    min_rule_thickness: float | None = None
    color_is_text_color: bool = False
    max_size: float = math.inf
    max_expand: int = 1000
    strict: StrictSetting = False
    trust: TrustSetting = True
    global_group: bool = False

    @field_validator("strict", mode="before")
    @classmethod
    def _parse_strict(cls, value: Any) -> Any:
        return _coerce_strict(value)


class MathRenderOverrides(BaseModel):
    """Partial update of ``MathRenderOptions``; ``None`` leaves a field untouched."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    output: OutputFormat | None = None
    leqno: bool | None = None
    fleqn: bool | None = None
    halt_on_error: bool | None = None
    error_color: str | None = None
    macros: dict[str, Any] | None = None
    min_rule_thickness: float | None = None
    color_is_text_color: bool | None = None
    max_size: float | None = None
    max_expand: int | None = None
    strict: StrictSetting | None = None
    trust: TrustSetting | None = None
    global_group: bool | None = None

    @field_validator("strict", mode="before")
    @classmethod
    def _parse_strict(cls, value: Any) -> Any:
        return _coerce_strict(value)


DEFAULT_OPTIONS = MathRenderOptions()


def coerce_overrides(
    update: MathRenderOverrides | Mapping[str, Any] | None,
) -> MathRenderOverrides:
    """Validate a partial update given either as a model or a mapping."""
    if update is None:
        return MathRenderOverrides()
    if isinstance(update, MathRenderOverrides):
        return update
    return MathRenderOverrides.model_validate(dict(update))


def merge_options(
    old: MathRenderOptions,
    update: MathRenderOverrides | Mapping[str, Any] | None,
) -> MathRenderOptions:
    """Return ``old`` with every field present in ``update`` replaced."""
    overrides = coerce_overrides(update)
    present = {
        name: getattr(overrides, name)
        for name in MathRenderOverrides.model_fields
        if getattr(overrides, name) is not None
    }
    if not present:
        return old
    return old.model_copy(update=present)


def to_backend_options(options: MathRenderOptions, display_mode: bool) -> dict[str, Any]:
    """Map options and a display mode onto the backend's option names."""
    payload: dict[str, Any] = {}
    for name, field_info in MathRenderOptions.model_fields.items():
        if name == "halt_on_error":
            continue
        value = getattr(options, name)
        if isinstance(value, StrictMode):
            value = value.value
        payload[field_info.alias or to_camel(name)] = value
    payload["displayMode"] = display_mode
    payload["throwOnError"] = options.halt_on_error
    return payload


def load_overrides(path: Path | str) -> MathRenderOverrides:
    """Read math options from a YAML or JSON file."""
    source = Path(path)
    payload = yaml.safe_load(source.read_text(encoding="utf-8")) or {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"Math options in '{source}' must be a mapping.")
    return coerce_overrides(payload)


MATH_OPTIONS: ConfigOption[MathRenderOptions, Any] = ConfigOption(
    "ConfigMath", DEFAULT_OPTIONS, merge_options
)


__all__ = [
    "DEFAULT_OPTIONS",
    "MATH_OPTIONS",
    "MathRenderOptions",
    "MathRenderOverrides",
    "OutputFormat",
    "StrictMode",
    "coerce_overrides",
    "load_overrides",
    "merge_options",
    "to_backend_options",
]
