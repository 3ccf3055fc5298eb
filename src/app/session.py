"""Session-state transitions for the Streamlit page.

Every function takes the state mapping explicitly.  In the app that is
``st.session_state``; in tests it is a plain dict, so the search flow can
be exercised without a running Streamlit server.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, MutableMapping, Optional

from core.providers.base import LLMError
from core.providers.registry import DEFAULT_MODEL
from ..config.models import FactSheet

logger = logging.getLogger(__name__)

GenerateFn = Callable[[str, str], FactSheet]

MISSING_KEY_MESSAGE = "API Key is not set. Please provide a valid Gemini API Key."
EMPTY_NAME_MESSAGE = "Please enter a person's name."
UNKNOWN_ERROR_MESSAGE = (
    "An unknown error occurred. Please check your API key and network connection."
)

# View names returned by current_view()
VIEW_CREDENTIAL = "credential"
VIEW_LOADING = "loading"
VIEW_ERROR = "error"
VIEW_RESULT = "result"
VIEW_NO_DATA = "no_data"
VIEW_WELCOME = "welcome"


def _defaults() -> dict:
    return {
        "api_key": None,
        "person_name": "",
        "fact_sheet": None,
        "is_loading": False,
        "error": None,
        "model": DEFAULT_MODEL,
    }


def init_session_state(state: MutableMapping[str, Any]) -> None:
    """Ensure every required session-state key exists."""
    for key, default in _defaults().items():
        if key not in state:
            state[key] = default


def save_api_key(state: MutableMapping[str, Any], key: str) -> bool:
    """Store a non-blank API key for this session. Returns True if stored."""
    key = (key or "").strip()
    if not key:
        return False
    state["api_key"] = key
    state["error"] = None
    return True


def forget_api_key(state: MutableMapping[str, Any]) -> None:
    """Drop the credential along with anything generated with it.

    The model choice is left alone: it is owned by a sidebar widget.
    """
    for key, default in _defaults().items():
        if key != "model":
            state[key] = default


def failure_message(exc: Exception) -> str:
    return (
        f"Failed to generate fact sheet: {exc}. "
        "Please check your API key and network connection."
    )


def run_search(
    state: MutableMapping[str, Any],
    name: str,
    generate: GenerateFn,
) -> Optional[FactSheet]:
    """Run one search and record the outcome in *state*.

    Returns the fact sheet on success, None otherwise.  Errors are stored
    under ``state["error"]`` for display, never raised.
    """
    api_key = state.get("api_key")
    if not api_key:
        state["error"] = MISSING_KEY_MESSAGE
        return None
    if not (name or "").strip():
        state["error"] = EMPTY_NAME_MESSAGE
        state["fact_sheet"] = None
        return None

    state["person_name"] = name.strip()
    state["is_loading"] = True
    state["error"] = None
    state["fact_sheet"] = None

    try:
        fact_sheet = generate(name, api_key)
        state["fact_sheet"] = fact_sheet
        return fact_sheet
    except (LLMError, ValueError) as exc:
        logger.warning("Fact sheet generation failed: %s", exc)
        state["error"] = failure_message(exc)
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error while generating fact sheet")
        state["error"] = UNKNOWN_ERROR_MESSAGE
    finally:
        state["is_loading"] = False
    return None


def current_view(state: MutableMapping[str, Any]) -> str:
    """Which block the page should render for the current state."""
    if not state.get("api_key"):
        return VIEW_CREDENTIAL
    if state.get("is_loading"):
        return VIEW_LOADING
    if state.get("error"):
        return VIEW_ERROR
    if state.get("fact_sheet") is not None:
        return VIEW_RESULT
    if state.get("person_name"):
        return VIEW_NO_DATA
    return VIEW_WELCOME
