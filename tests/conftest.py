"""Shared fixtures for the fact-sheet test suite.

Provides a canonical Gemini payload, fake SDK clients/responses and a fake
provider so no test ever reaches the network.
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from core.providers.base import LLMConfig, LLMProvider, LLMResponse
from core.providers.guards import JSONOutputGuard
from src.config.models import FactSheet


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

ADA_TEN_THINGS = [f"Fact{i}" for i in range(1, 11)]


def make_payload(**overrides):
    """Return the Ada Lovelace payload with selected fields replaced."""
    payload = {
        "primaryConnections": ["Charles Babbage"],
        "education": ["Self-taught mathematics"],
        "keyMembershipsAwards": [],
        "tenThings": list(ADA_TEN_THINGS),
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def ada_payload():
    return make_payload()


@pytest.fixture
def ada_fact_sheet(ada_payload):
    return FactSheet.model_validate(ada_payload)


@pytest.fixture
def rich_fact_sheet():
    """A fully populated fact sheet with realistic text."""
    return FactSheet(
        primary_connections=[
            "Charles Babbage (collaborator on the Analytical Engine)",
            "Mary Somerville (mentor)",
            "Lord Byron (father)",
        ],
        education=["Private tutoring in mathematics and science", "Studied under Augustus De Morgan"],
        key_memberships_awards=["Honoured by Ada Lovelace Day (annual, since 2009)"],
        ten_things=[
            f"Ada Lovelace fact number {i} about the Analytical Engine and early computing."
            for i in range(1, 11)
        ],
    )


# ---------------------------------------------------------------------------
# Fake google-genai SDK
# ---------------------------------------------------------------------------

def make_sdk_response(text, prompt_tokens=120, output_tokens=340):
    """Mimic ``google.genai.types.GenerateContentResponse`` enough for the provider."""
    return SimpleNamespace(
        text=text,
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=output_tokens,
        ),
    )


def make_sdk_client(text=None, error=None):
    """Mock ``genai.Client`` whose ``models.generate_content`` returns *text* or raises *error*."""
    client = MagicMock()
    if error is not None:
        client.models.generate_content.side_effect = error
    else:
        client.models.generate_content.return_value = make_sdk_response(text)
    return client


# ---------------------------------------------------------------------------
# Fake provider
# ---------------------------------------------------------------------------

class FakeProvider(LLMProvider):
    """Provider that returns canned text (run through the real JSON guard) or raises."""

    provider_name = "fake"

    def __init__(self, raw_text="", error=None):
        self.raw_text = raw_text
        self.error = error
        self.calls = []

    def generate_json(self, prompt, *, config=None):
        cfg = config or LLMConfig()
        self.calls.append((prompt, cfg))
        if self.error is not None:
            raise self.error
        parsed = JSONOutputGuard.enforce(self.raw_text, provider=self.provider_name)
        return LLMResponse(
            raw_text=self.raw_text,
            parsed_json=parsed,
            model=cfg.model,
            provider=self.provider_name,
            input_tokens=10,
            output_tokens=20,
            latency_ms=5,
        )


class RecordingFactory:
    """Provider factory that hands out one provider and records its arguments."""

    def __init__(self, provider):
        self.provider = provider
        self.calls = []

    def __call__(self, api_key, model):
        self.calls.append((api_key, model))
        return self.provider


@pytest.fixture
def fake_provider_for():
    """Build (factory, provider) for a payload dict or raw response text."""

    def _build(payload=None, raw_text=None, error=None):
        if raw_text is None and payload is not None:
            raw_text = json.dumps(payload)
        provider = FakeProvider(raw_text=raw_text or "", error=error)
        return RecordingFactory(provider), provider

    return _build
