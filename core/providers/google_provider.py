"""Google Gemini provider (google-genai SDK).

Implements the LLMProvider interface with a single JSON-typed
``generate_content`` call per request.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import Any, Optional

from .base import (
    AuthenticationError,
    ConfigurationError,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    TransportError,
)
from .guards import JSONOutputGuard

logger = logging.getLogger(__name__)

# Substrings the Gemini API uses when it refuses a key.  Matching on the
# message text is the only signal the SDK exposes.
INVALID_KEY_MARKERS = ("api key not valid", "api_key_invalid")


def is_invalid_key_message(message: str) -> bool:
    """Return True if an SDK error message reports an invalid API key."""
    lowered = message.lower()
    return any(marker in lowered for marker in INVALID_KEY_MARKERS)


def _handle_gemini_error(e: Exception, provider: str):
    if is_invalid_key_message(str(e)):
        raise AuthenticationError(
            "Your API Key is not valid. Please check the key and try again.",
            provider=provider,
        ) from e
    raise TransportError(f"Gemini API request failed: {e}", provider=provider) from e


class GoogleProvider(LLMProvider):
    """LLM Provider backed by the Google Gemini API.

    The credential is passed in explicitly; nothing is read from the
    environment here.  ``client`` may be supplied to bypass SDK construction.
    """

    provider_name = "google"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gemini-2.5-flash",
        client: Any = None,
    ):
        self.api_key = (api_key or "").strip()
        self.default_model = default_model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError(
                    "Gemini API Key is not provided. Cannot make API calls.",
                    provider=self.provider_name,
                )
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate_json(
        self,
        prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        cfg = config or LLMConfig(model=self.default_model)
        model = cfg.model
        client = self.client

        from google.genai import types

        prompt_hash = hashlib.sha256(prompt.encode()).hexdigest()[:16]
        logger.info(
            "Gemini request: model=%s temperature=%.2f prompt=%s",
            model, cfg.temperature, prompt_hash,
        )

        t0 = time.time()
        try:
            response = client.models.generate_content(
                model=model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type=cfg.response_mime_type,
                    temperature=cfg.temperature,
                    max_output_tokens=cfg.max_output_tokens,
                ),
            )
        except Exception as e:
            logger.error("Gemini call failed after %dms: %s", int((time.time() - t0) * 1000), e)
            _handle_gemini_error(e, self.provider_name)

        latency_ms = int((time.time() - t0) * 1000)
        raw_text = response.text or ""
        usage = getattr(response, "usage_metadata", None)
        logger.info("Gemini response: %d chars in %dms", len(raw_text), latency_ms)

        parsed = JSONOutputGuard.enforce(raw_text, provider=self.provider_name)

        result_hash = hashlib.sha256(
            json.dumps(parsed, sort_keys=True).encode()
        ).hexdigest()[:16]

        return LLMResponse(
            raw_text=raw_text,
            parsed_json=parsed,
            model=model,
            provider=self.provider_name,
            input_tokens=(getattr(usage, "prompt_token_count", 0) or 0) if usage else 0,
            output_tokens=(getattr(usage, "candidates_token_count", 0) or 0) if usage else 0,
            latency_ms=latency_ms,
            prompt_hash=prompt_hash,
            result_hash=result_hash,
        )
