"""Tests for core.providers.google_provider -- Gemini call, error mapping, JSON guard."""

import json

import pytest

from core.providers.base import (
    AuthenticationError,
    ConfigurationError,
    LLMConfig,
    ParseError,
    TransportError,
)
from core.providers.google_provider import GoogleProvider, is_invalid_key_message
from tests.conftest import make_payload, make_sdk_client


class TestInvalidKeyDetection:
    @pytest.mark.parametrize("message", [
        "400 INVALID_ARGUMENT. API key not valid. Please pass a valid API key.",
        "api key not valid",
        "{'reason': 'API_KEY_INVALID', 'domain': 'googleapis.com'}",
    ])
    def test_detects_invalid_key(self, message):
        assert is_invalid_key_message(message) is True

    @pytest.mark.parametrize("message", [
        "503 UNAVAILABLE. The model is overloaded.",
        "429 RESOURCE_EXHAUSTED",
        "Connection reset by peer",
    ])
    def test_other_messages(self, message):
        assert is_invalid_key_message(message) is False


class TestGoogleProvider:
    def test_missing_key_raises_configuration_error(self):
        provider = GoogleProvider(api_key="")
        with pytest.raises(ConfigurationError):
            provider.generate_json("prompt")

    def test_whitespace_key_raises_configuration_error(self):
        provider = GoogleProvider(api_key="   ")
        with pytest.raises(ConfigurationError):
            _ = provider.client

    def test_returns_parsed_json_and_usage(self):
        payload = make_payload()
        client = make_sdk_client(json.dumps(payload))
        provider = GoogleProvider(api_key="key", client=client)

        response = provider.generate_json("prompt")

        assert response.parsed_json == payload
        assert response.provider == "google"
        assert response.model == "gemini-2.5-flash"
        assert response.input_tokens == 120
        assert response.output_tokens == 340
        assert len(response.prompt_hash) == 16
        assert len(response.result_hash) == 16

    def test_requests_json_at_configured_temperature(self):
        client = make_sdk_client(json.dumps(make_payload()))
        provider = GoogleProvider(api_key="key", client=client)

        provider.generate_json("the prompt", config=LLMConfig(model="gemini-2.5-pro", temperature=0.5))

        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert kwargs["contents"] == "the prompt"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].temperature == 0.5

    def test_default_model_used_without_config(self):
        client = make_sdk_client(json.dumps(make_payload()))
        provider = GoogleProvider(api_key="key", default_model="gemini-2.0-flash", client=client)

        provider.generate_json("prompt")

        assert client.models.generate_content.call_args.kwargs["model"] == "gemini-2.0-flash"

    def test_fenced_response_is_parsed(self):
        payload = make_payload()
        client = make_sdk_client(f"```json\n{json.dumps(payload)}\n```")
        provider = GoogleProvider(api_key="key", client=client)

        assert provider.generate_json("prompt").parsed_json == payload

    def test_invalid_key_maps_to_authentication_error(self):
        client = make_sdk_client(error=RuntimeError("400 API key not valid. Please pass a valid API key."))
        provider = GoogleProvider(api_key="bad-key", client=client)

        with pytest.raises(AuthenticationError) as exc_info:
            provider.generate_json("prompt")

        assert "not valid" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.retryable is False

    def test_other_failure_maps_to_transport_error(self):
        client = make_sdk_client(error=ConnectionError("Connection reset by peer"))
        provider = GoogleProvider(api_key="key", client=client)

        with pytest.raises(TransportError) as exc_info:
            provider.generate_json("prompt")

        assert not isinstance(exc_info.value, AuthenticationError)
        assert str(exc_info.value) == "Gemini API request failed: Connection reset by peer"
        assert exc_info.value.retryable is True

    def test_non_json_text_raises_parse_error(self):
        client = make_sdk_client("I could not find anyone by that name.")
        provider = GoogleProvider(api_key="key", client=client)

        with pytest.raises(ParseError):
            provider.generate_json("prompt")

    def test_none_text_raises_parse_error(self):
        client = make_sdk_client(None)
        provider = GoogleProvider(api_key="key", client=client)

        with pytest.raises(ParseError):
            provider.generate_json("prompt")
