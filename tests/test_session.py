"""Tests for src.app.session -- UI state transitions without a Streamlit server."""

from unittest.mock import MagicMock

import pytest

from core.providers.base import AuthenticationError, ShapeError
from src.app.session import (
    EMPTY_NAME_MESSAGE,
    MISSING_KEY_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    VIEW_CREDENTIAL,
    VIEW_ERROR,
    VIEW_LOADING,
    VIEW_NO_DATA,
    VIEW_RESULT,
    VIEW_WELCOME,
    current_view,
    forget_api_key,
    init_session_state,
    run_search,
    save_api_key,
)


@pytest.fixture
def state():
    s = {}
    init_session_state(s)
    return s


@pytest.fixture
def keyed_state(state):
    save_api_key(state, "my-key")
    return state


class TestInitAndKeys:
    def test_defaults(self, state):
        assert state["api_key"] is None
        assert state["fact_sheet"] is None
        assert state["is_loading"] is False
        assert state["model"] == "gemini-2.5-flash"

    def test_init_keeps_existing_values(self):
        s = {"model": "gemini-2.5-pro", "person_name": "Ada"}
        init_session_state(s)
        assert s["model"] == "gemini-2.5-pro"
        assert s["person_name"] == "Ada"

    def test_blank_key_not_saved(self, state):
        assert save_api_key(state, "   ") is False
        assert state["api_key"] is None

    def test_key_saved_trimmed(self, state):
        assert save_api_key(state, " abc ") is True
        assert state["api_key"] == "abc"

    def test_forget_clears_key_and_result_but_not_model(self, keyed_state, ada_fact_sheet):
        keyed_state["fact_sheet"] = ada_fact_sheet
        keyed_state["model"] = "gemini-2.5-pro"

        forget_api_key(keyed_state)

        assert keyed_state["api_key"] is None
        assert keyed_state["fact_sheet"] is None
        assert keyed_state["model"] == "gemini-2.5-pro"


class TestRunSearch:
    def test_without_key(self, state):
        generate = MagicMock()
        assert run_search(state, "Ada Lovelace", generate) is None
        assert state["error"] == MISSING_KEY_MESSAGE
        generate.assert_not_called()

    def test_blank_name_clears_result(self, keyed_state, ada_fact_sheet):
        keyed_state["fact_sheet"] = ada_fact_sheet
        generate = MagicMock()

        assert run_search(keyed_state, "  ", generate) is None

        assert keyed_state["error"] == EMPTY_NAME_MESSAGE
        assert keyed_state["fact_sheet"] is None
        generate.assert_not_called()

    def test_success(self, keyed_state, ada_fact_sheet):
        generate = MagicMock(return_value=ada_fact_sheet)

        result = run_search(keyed_state, "Ada Lovelace", generate)

        assert result is ada_fact_sheet
        generate.assert_called_once_with("Ada Lovelace", "my-key")
        assert keyed_state["fact_sheet"] is ada_fact_sheet
        assert keyed_state["person_name"] == "Ada Lovelace"
        assert keyed_state["is_loading"] is False
        assert keyed_state["error"] is None

    def test_loading_flag_set_during_call(self, keyed_state, ada_fact_sheet):
        seen = {}

        def generate(name, key):
            seen["loading"] = keyed_state["is_loading"]
            seen["view"] = current_view(keyed_state)
            return ada_fact_sheet

        run_search(keyed_state, "Ada Lovelace", generate)

        assert seen == {"loading": True, "view": VIEW_LOADING}

    def test_llm_error_message(self, keyed_state):
        generate = MagicMock(side_effect=AuthenticationError(
            "Your API Key is not valid. Please check the key and try again."
        ))

        assert run_search(keyed_state, "Ada Lovelace", generate) is None

        assert keyed_state["error"] == (
            "Failed to generate fact sheet: Your API Key is not valid. Please check the key "
            "and try again.. Please check your API key and network connection."
        )
        assert keyed_state["is_loading"] is False

    def test_previous_result_cleared_on_failure(self, keyed_state, ada_fact_sheet):
        keyed_state["fact_sheet"] = ada_fact_sheet
        generate = MagicMock(side_effect=ShapeError("bad shape"))

        run_search(keyed_state, "Grace Hopper", generate)

        assert keyed_state["fact_sheet"] is None
        assert "bad shape" in keyed_state["error"]

    def test_unexpected_error(self, keyed_state):
        generate = MagicMock(side_effect=KeyError("boom"))

        run_search(keyed_state, "Ada Lovelace", generate)

        assert keyed_state["error"] == UNKNOWN_ERROR_MESSAGE
        assert keyed_state["is_loading"] is False


class TestCurrentView:
    def test_credential_first(self, state):
        assert current_view(state) == VIEW_CREDENTIAL

    def test_welcome(self, keyed_state):
        assert current_view(keyed_state) == VIEW_WELCOME

    def test_error(self, keyed_state):
        keyed_state["error"] = "nope"
        assert current_view(keyed_state) == VIEW_ERROR

    def test_result(self, keyed_state, ada_fact_sheet):
        run_search(keyed_state, "Ada", MagicMock(return_value=ada_fact_sheet))
        assert current_view(keyed_state) == VIEW_RESULT

    def test_no_data(self, keyed_state):
        keyed_state["person_name"] = "Ada"
        assert current_view(keyed_state) == VIEW_NO_DATA
