"""
Persona Fact Sheet Generator - Configuration and Data Models
============================================================

Defines the Pydantic v2 models used across the app:

  Result   : FactSheet
  Settings : AppSettings

Convention
----------
- Python attributes are snake_case; the wire format returned by the model
  is camelCase.  ``populate_by_name=True`` lets either spelling in.
- ``FactSheet`` is validated in strict mode: nothing is coerced, so a number
  where a string belongs is a shape violation, not a silent conversion.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)

from core.providers.base import LLMConfig
from core.providers.registry import DEFAULT_MODEL, get_model_ids, validate_model

TEN_THINGS_COUNT = 10


# ============================================================
# 1.  FactSheet  (the validated generation result)
# ============================================================


class FactSheet(BaseModel):
    """Structured biographical summary of one subject.

    Attributes:
        primary_connections:    People and relationships tied to the subject.
        education:              Degrees, schools, self-study.
        key_memberships_awards: Memberships, fellowships, prizes.
        ten_things:             Exactly ten standalone facts about the subject.
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    primary_connections: List[StrictStr] = Field(..., alias="primaryConnections")
    education: List[StrictStr] = Field(..., alias="education")
    key_memberships_awards: List[StrictStr] = Field(..., alias="keyMembershipsAwards")
    ten_things: List[StrictStr] = Field(
        ...,
        alias="tenThings",
        min_length=TEN_THINGS_COUNT,
        max_length=TEN_THINGS_COUNT,
    )

    def to_wire(self) -> Dict[str, List[str]]:
        """Return the camelCase dict shape the API produced."""
        return self.model_dump(by_alias=True)


# ============================================================
# 2.  AppSettings  (runtime configuration)
# ============================================================

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Runtime settings shared by the Streamlit page and the CLI.

    Read from the environment with :meth:`from_env`::

        FACTSHEET_MODEL              gemini-2.5-flash
        FACTSHEET_TEMPERATURE        0.5
        FACTSHEET_MAX_OUTPUT_TOKENS  8192
        FACTSHEET_LOG_LEVEL          INFO
        GOOGLE_API_KEY / GEMINI_API_KEY
    """

    model: str = Field(default=DEFAULT_MODEL, description="Gemini model id")
    temperature: float = Field(
        default=0.5,
        ge=0.0,
        le=2.0,
        description="Sampling temperature. 0.5 keeps answers moderately deterministic.",
    )
    max_output_tokens: int = Field(default=8192, gt=0)
    api_key: str = Field(default="", repr=False)
    log_level: str = Field(default="INFO")

    # -- validators ----------------------------------------------------------

    @field_validator("model")
    @classmethod
    def _known_model(cls, v: str) -> str:
        if not validate_model(v):
            raise ValueError(
                f"Unknown Gemini model {v!r}; choose one of: {', '.join(get_model_ids())}"
            )
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, v: Any) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level {v!r}")
        return level

    @field_validator("api_key", mode="before")
    @classmethod
    def _strip_key(cls, v: Any) -> str:
        return str(v or "").strip()

    # -- helpers -------------------------------------------------------------

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Build settings from environment variables, ignoring unset ones."""
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        mapping = {
            "FACTSHEET_MODEL": "model",
            "FACTSHEET_TEMPERATURE": "temperature",
            "FACTSHEET_MAX_OUTPUT_TOKENS": "max_output_tokens",
            "FACTSHEET_LOG_LEVEL": "log_level",
        }
        for env_name, field_name in mapping.items():
            if env.get(env_name):
                data[field_name] = env[env_name]
        data["api_key"] = env.get("GOOGLE_API_KEY") or env.get("GEMINI_API_KEY") or ""
        return cls(**data)

    def to_llm_config(self) -> LLMConfig:
        return LLMConfig(
            model=self.model,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)
