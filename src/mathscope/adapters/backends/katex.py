"""KaTeX backend executed through Node.js."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache
import json
import math
import os
import shutil
import subprocess
from typing import Any

from mathscope.core.exceptions import (
    BackendConfigurationError,
    BackendUnavailableError,
    MathRenderError,
)


NODE_NAMES: tuple[str, ...] = ("node", "nodejs")
RENDER_FAILURE_EXIT_CODE = 2
DEFAULT_CACHE_SIZE = 256

# Reads {"markup", "options"} from stdin. Exit code 2 flags markup KaTeX rejected;
# anything else non-zero means KaTeX itself could not run.
_RENDER_SCRIPT = """
const katex = require(process.env.MATHSCOPE_KATEX_MODULE || "katex");
let data = "";
process.stdin.setEncoding("utf8");
process.stdin.on("data", (chunk) => { data += chunk; });
process.stdin.on("end", () => {
  const request = JSON.parse(data);
  try {
    process.stdout.write(katex.renderToString(request.markup, request.options));
  } catch (err) {
    process.stderr.write(String(err && err.message ? err.message : err));
    process.exit(2);
  }
});
"""


def _resolve_node(names: Sequence[str]) -> str | None:
    for name in names:
        resolved = shutil.which(name)
        if resolved:
            return resolved
    return None


def build_payload(options: Mapping[str, Any]) -> dict[str, Any]:
    """Return the JSON-safe subset of ``options`` understood by KaTeX."""
    payload: dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, float) and not math.isfinite(value):
            # KaTeX treats a missing limit as unbounded.
            continue
        if callable(value):
            raise BackendConfigurationError(
                f"Option '{key}' is a callable and cannot be forwarded to KaTeX."
            )
        payload[key] = value
    return payload


class KatexBackend:
    """Render markup with ``katex.renderToString`` in a Node.js subprocess."""

    name = "katex"

    def __init__(
        self,
        *,
        node: str | None = None,
        module: str = "katex",
        timeout: float = 30.0,
        cache_size: int | None = DEFAULT_CACHE_SIZE,
    ) -> None:
        self.node = node
        self.module = module
        self.timeout = timeout
        # Keyed by the serialised request; failures are not cached.
        self._render = lru_cache(maxsize=cache_size)(self._run)

    def _command(self) -> list[str]:
        executable = self.node or _resolve_node(NODE_NAMES)
        if executable is None:
            raise BackendUnavailableError(
                "Node.js executable could not be located. Install Node.js and the "
                "'katex' package, or select the 'mathml' backend."
            )
        return [executable, "-e", _RENDER_SCRIPT]

    def cache_info(self):
        """Return hit and miss statistics of the render cache."""
        return self._render.cache_info()

    def render_to_string(self, markup: str, options: Mapping[str, Any]) -> str:
        request = json.dumps(
            {"markup": markup, "options": build_payload(options)},
            sort_keys=True,
            separators=(",", ":"),
        )
        return self._render(request)

    def _run(self, request: str) -> str:
        payload = json.loads(request)
        markup, options = payload["markup"], payload["options"]

        env = dict(os.environ)
        env["MATHSCOPE_KATEX_MODULE"] = self.module
        try:
            completed = subprocess.run(
                self._command(),
                input=request,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                env=env,
                check=False,
            )
        except FileNotFoundError as exc:
            raise BackendUnavailableError(f"Node.js could not be started: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise MathRenderError(
                f"KaTeX did not finish within {self.timeout:g} seconds.",
                markup=markup,
                options=options,
            ) from exc

        detail = completed.stderr.strip()
        if completed.returncode == RENDER_FAILURE_EXIT_CODE:
            raise MathRenderError(detail or "KaTeX rejected the input.", markup=markup, options=options)
        if completed.returncode != 0:
            raise BackendUnavailableError(
                f"KaTeX could not be run (exit code {completed.returncode}): {detail}"
            )
        return completed.stdout


__all__ = ["DEFAULT_CACHE_SIZE", "KatexBackend", "NODE_NAMES", "build_payload"]
