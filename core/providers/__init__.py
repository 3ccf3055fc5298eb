"""LLM Provider abstraction layer.

Wraps the Google Gemini API behind a small provider interface, with a
typed error taxonomy, a JSON output guard, and audit logging.
"""

from .base import (
    AuthenticationError,
    ConfigurationError,
    LLMConfig,
    LLMError,
    LLMProvider,
    LLMResponse,
    ParseError,
    ShapeError,
    TransportError,
)
from .google_provider import GoogleProvider
from .guards import JSONOutputGuard
from .audit import AuditLogger, AuditRecord
from .registry import DEFAULT_MODEL, get_model_catalog, get_provider, validate_model

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMConfig",
    "LLMError",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "ParseError",
    "ShapeError",
    "GoogleProvider",
    "JSONOutputGuard",
    "AuditLogger",
    "AuditRecord",
    "DEFAULT_MODEL",
    "get_model_catalog",
    "get_provider",
    "validate_model",
]
