"""Output guards for LLM responses.

Generative APIs frequently wrap JSON in a Markdown code fence even when a
JSON mime type was requested.  The guard removes that wrapper and then parses
strictly: there is no repair of truncated output and no regex salvage.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .base import ParseError

logger = logging.getLogger(__name__)

# ```json / ``` / ```JSON5: tag and line break are both optional
_OPENING_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


# ---------------------------------------------------------------------------
# JSON Output Guard
# ---------------------------------------------------------------------------

class JSONOutputGuard:
    """Normalise raw LLM text and parse it as JSON."""

    @staticmethod
    def strip_fence(raw_text: str) -> str:
        """Return *raw_text* trimmed and without a surrounding code fence.

        The opening fence may carry a language hint; either fence may be
        missing.  Text that is not fenced is returned trimmed.
        """
        text = raw_text.strip()
        if text.startswith("```"):
            text = _OPENING_FENCE.sub("", text, count=1)
            text = _CLOSING_FENCE.sub("", text, count=1)
        elif text.endswith("```"):
            text = _CLOSING_FENCE.sub("", text, count=1)
        return text.strip()

    @staticmethod
    def enforce(raw_text: str, provider: str = "") -> Any:
        """Parse raw LLM text into JSON after stripping any code fence."""
        text = JSONOutputGuard.strip_fence(raw_text or "")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error(
                "Response is not valid JSON (%s). First 200 chars: %r",
                exc, text[:200],
            )
            raise ParseError(
                f"Gemini response is not valid JSON: {exc.msg} at line {exc.lineno} "
                f"column {exc.colno}. First 200 chars: {text[:200]}",
                raw_text=raw_text,
                provider=provider,
            ) from exc
