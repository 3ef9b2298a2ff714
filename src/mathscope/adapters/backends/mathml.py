"""In-process MathML backend built on ``latex2mathml``."""

from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Any

from latex2mathml.converter import convert

from mathscope.core.exceptions import MathRenderError


# latex2mathml has no \htmlClass; keep the wrapped group and drop the class.
_HTML_CLASS = re.compile(r"\\htmlClass\{[^{}]*\}")


class MathMLBackend:
    """Produce MathML regardless of the requested ``output`` flavour."""

    name = "mathml"

    def render_to_string(self, markup: str, options: Mapping[str, Any]) -> str:
        display = "block" if options.get("displayMode") else "inline"
        source = _HTML_CLASS.sub("", markup)
        try:
            return convert(source, display=display)
        except Exception as exc:
            raise MathRenderError(
                f"latex2mathml could not convert the input: {exc}",
                markup=markup,
                options=options,
            ) from exc


__all__ = ["MathMLBackend"]
