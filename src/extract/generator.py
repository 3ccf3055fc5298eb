"""Fact-sheet generation - one prompt, one Gemini call, strict validation."""
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from core.providers.audit import AuditLogger
from core.providers.base import (
    ConfigurationError,
    LLMConfig,
    LLMError,
    LLMProvider,
    LLMResponse,
    ShapeError,
)
from core.providers.registry import get_provider
from ..config.models import FactSheet
from .prompts import build_fact_sheet_prompt

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, str], LLMProvider]

SHAPE_ERROR_MESSAGE = (
    "Received malformed or incomplete JSON data from API. "
    "Expected specific fields and 10 'tenThings' items."
)


def validate_fact_sheet(data: Any, provider: str = "") -> FactSheet:
    """Validate parsed JSON against the FactSheet shape.

    All-or-nothing: either every field is present and well-typed and
    ``tenThings`` has exactly ten strings, or ShapeError is raised.
    """
    if not isinstance(data, dict):
        logger.error(
            "Malformed JSON data structure received from API: expected an object, got %s",
            type(data).__name__,
        )
        raise ShapeError(
            f"{SHAPE_ERROR_MESSAGE} Top-level value is {type(data).__name__}, not an object.",
            errors=[{"loc": (), "msg": "expected a JSON object", "type": "object_type"}],
            provider=provider,
        )
    try:
        return FactSheet.model_validate(data)
    except ValidationError as exc:
        errors = _summarise_errors(exc)
        logger.error("Malformed JSON data structure received from API: %s", errors)
        detail = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in errors)
        raise ShapeError(f"{SHAPE_ERROR_MESSAGE} {detail}", errors=errors, provider=provider) from exc


def _summarise_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": tuple(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors(include_url=False)
    ]


class FactSheetGenerator:
    """Builds the prompt, calls the provider and validates the answer.

    Stateless apart from the optional audit log: each ``generate`` call
    creates its own provider from the credential it is given.
    """

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        provider_factory: Optional[ProviderFactory] = None,
        audit: Optional[AuditLogger] = None,
    ):
        self.config = config or LLMConfig()
        self.provider_factory = provider_factory or get_provider
        self.audit = audit

    def generate(self, subject_name: str, api_key: str) -> FactSheet:
        """Generate and validate a fact sheet for *subject_name*.

        Raises
        ------
        ConfigurationError
            *api_key* is empty. No network call is made.
        ValueError
            *subject_name* is blank. No network call is made.
        AuthenticationError, TransportError, ParseError, ShapeError
            See :mod:`core.providers.base`.
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("Gemini API Key is not provided. Cannot make API calls.")
        name = (subject_name or "").strip()
        if not name:
            raise ValueError("Please enter a person's name.")

        prompt = build_fact_sheet_prompt(name)
        provider = self.provider_factory(api_key, self.config.model)
        logger.info("Generating fact sheet for %r with %s", name, self.config.model)

        try:
            response = provider.generate_json(prompt, config=self.config)
        except LLMError as exc:
            self._audit_failure(exc, name, provider)
            raise

        try:
            fact_sheet = validate_fact_sheet(response.parsed_json, provider=response.provider)
        except ShapeError as exc:
            self._audit_response(response, name, error=f"ShapeError: {exc}")
            raise

        self._audit_response(response, name)
        return fact_sheet

    def _audit_response(self, response: LLMResponse, subject: str, error: Optional[str] = None) -> None:
        if self.audit is not None:
            self.audit.log(
                response,
                subject=subject,
                temperature=self.config.temperature,
                error=error,
            )

    def _audit_failure(self, exc: Exception, subject: str, provider: LLMProvider) -> None:
        if self.audit is not None:
            self.audit.log_failure(
                exc,
                subject=subject,
                provider=provider.provider_name,
                model=self.config.model,
                temperature=self.config.temperature,
            )


def generate_fact_sheet(
    subject_name: str,
    api_key: str,
    config: Optional[LLMConfig] = None,
) -> FactSheet:
    """Convenience wrapper: one-off generation with default collaborators."""
    return FactSheetGenerator(config=config).generate(subject_name, api_key)
