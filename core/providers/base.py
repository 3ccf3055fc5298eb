"""LLM Provider interface: abstract base for generative backends.

Every provider must implement ``generate_json``.  The fact-sheet generator
calls providers via dependency injection, so tests can hand it a fake
provider and the UI never touches an SDK directly.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LLMConfig:
    """Immutable configuration for a single LLM call."""

    model: str = "gemini-2.5-flash"
    temperature: float = 0.5
    max_output_tokens: int = 8192
    response_mime_type: str = "application/json"


@dataclass
class LLMResponse:
    """Standardised response from any LLM provider."""

    raw_text: str
    parsed_json: Any = None
    model: str = ""
    provider: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    prompt_hash: str = ""
    result_hash: str = ""


class LLMProvider(abc.ABC):
    """Abstract base class for LLM providers.

    Subclasses must implement ``generate_json``: send a prompt, receive the
    parsed JSON payload along with usage metadata.
    """

    provider_name: str = "base"

    @abc.abstractmethod
    def generate_json(
        self,
        prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Send a prompt and return a parsed JSON response.

        Parameters
        ----------
        prompt : str
            The complete instruction, including the required output shape.
        config : LLMConfig, optional
            Override default config for this call.

        Returns
        -------
        LLMResponse
            Contains ``parsed_json`` and usage metadata.

        Raises
        ------
        ConfigurationError
            No credential was supplied.
        AuthenticationError
            The service rejected the credential.
        TransportError
            The call failed for any other reason.
        ParseError
            The response text is not valid JSON.
        """
        ...

    def _default_config(self, config: Optional[LLMConfig]) -> LLMConfig:
        return config or LLMConfig()


class LLMError(Exception):
    """Base exception for LLM provider errors."""

    def __init__(self, message: str, provider: str = "", retryable: bool = False):
        super().__init__(message)
        self.provider = provider
        self.retryable = retryable


class ConfigurationError(LLMError):
    """The credential is missing or blank at call time."""


class TransportError(LLMError):
    """The underlying network call failed or the service refused it."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message, provider=provider, retryable=True)


class AuthenticationError(TransportError):
    """The service reported the credential as invalid."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message, provider=provider)
        self.retryable = False


class ParseError(LLMError):
    """LLM returned text that is not valid JSON."""

    def __init__(self, message: str, raw_text: str = "", provider: str = ""):
        super().__init__(message, provider=provider)
        self.raw_text = raw_text


class ShapeError(LLMError):
    """Parsed JSON does not have the structure the caller requires."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        provider: str = "",
    ):
        super().__init__(message, provider=provider)
        self.errors = errors or []
