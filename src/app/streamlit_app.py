"""
Persona Fact Sheet Generator (Streamlit UI)
===========================================

Enter a person's name and get an AI-generated fact sheet summarising what
Wikipedia, LinkedIn and Google Scholar would typically say about them,
with PDF / DOCX download.

* The Gemini API key lives only in ``st.session_state`` (this browser tab).
* One generation call per search, run under a spinner.  The sidebar is
  drawn last so its counters include the search made in this run.

Run with::

    streamlit run src/app/streamlit_app.py
"""

from __future__ import annotations

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path

# Ensure project root is on sys.path (needed for Streamlit Cloud deployment)
_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

import streamlit as st
from pydantic import ValidationError

# ---------------------------------------------------------------------------
# Project imports
# ---------------------------------------------------------------------------

from core.providers.audit import AuditLogger
from core.providers.registry import get_model_ids, get_model_label
from src.app.session import (
    VIEW_CREDENTIAL,
    VIEW_ERROR,
    VIEW_NO_DATA,
    VIEW_RESULT,
    current_view,
    forget_api_key,
    init_session_state,
    run_search,
    save_api_key,
)
from src.config.models import AppSettings, FactSheet
from src.export import (
    DOCX_MIME,
    PDF_MIME,
    build_sections,
    document_title,
    export_filename,
    write_docx,
    write_pdf,
)
from src.extract.generator import FactSheetGenerator
from src.extract.prompts import build_fact_sheet_prompt

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

APP_TITLE = "Persona Fact Sheet Generator"
APP_SUBTITLE = (
    "Enter a person's name to generate an AI-powered fact sheet, summarizing "
    "information as if sourced from Wikipedia, LinkedIn, and Google Scholar."
)
SEARCH_PLACEHOLDER = "E.g., Marie Curie, Elon Musk"
KEY_NOTICE = (
    "**Important:** Your API key is stored only in this browser session and is "
    "required to interact with the Gemini API. It is not saved on any server. "
    "Close the tab to clear it."
)
DISCLAIMER = (
    "Note: This tool uses AI to generate information based on typical public "
    "profiles. Information may be illustrative."
)


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------

def _load_settings() -> AppSettings:
    """Settings from the environment; defaults (with a warning) if invalid."""
    try:
        return AppSettings.from_env()
    except ValidationError as exc:
        logger.warning("Invalid environment settings, using defaults: %s", exc)
        st.warning(f"Ignoring invalid FACTSHEET_* settings:\n\n{exc}")
        return AppSettings()


def _get_audit() -> AuditLogger:
    if "audit" not in st.session_state:
        st.session_state["audit"] = AuditLogger()
    return st.session_state["audit"]


def _build_generator(settings: AppSettings) -> FactSheetGenerator:
    selected = settings.model_copy(update={"model": st.session_state["model"]})
    return FactSheetGenerator(config=selected.to_llm_config(), audit=_get_audit())


# ===================================================================
# Credential form
# ===================================================================

def _render_api_key_form() -> None:
    st.subheader("Enter Your API Key")
    st.markdown("To use this application, please provide your Google Gemini API key.")

    with st.form("api_key_form"):
        key = st.text_input(
            "Gemini API Key",
            type="password",
            placeholder="Enter your Gemini API Key",
            key="api_key_input",
        )
        submitted = st.form_submit_button("Save Key", type="primary")

    if submitted:
        if save_api_key(st.session_state, key):
            st.rerun()
        else:
            st.warning("Please enter a non-empty API key.")

    st.warning(KEY_NOTICE)


# ===================================================================
# Search form
# ===================================================================

def _render_search_form(settings: AppSettings) -> None:
    with st.form("search_form"):
        col_name, col_btn = st.columns([3, 1], vertical_alignment="bottom")
        with col_name:
            name = st.text_input(
                "Person's name",
                placeholder=SEARCH_PLACEHOLDER,
                key="search_name",
            )
        with col_btn:
            submitted = st.form_submit_button(
                "Generate Fact Sheet",
                type="primary",
                use_container_width=True,
            )

    if submitted:
        generator = _build_generator(settings)
        with st.spinner("Generating..."):
            run_search(st.session_state, name, generator.generate)


# ===================================================================
# Result
# ===================================================================

def _render_downloads(fact_sheet: FactSheet, person_name: str) -> None:
    col_pdf, col_docx = st.columns(2)
    with col_pdf:
        try:
            st.download_button(
                "Download PDF",
                data=write_pdf(fact_sheet, person_name),
                file_name=export_filename(person_name, "pdf"),
                mime=PDF_MIME,
                use_container_width=True,
                key="dl_pdf",
            )
        except Exception:  # noqa: BLE001
            logger.exception("Error generating PDF")
            st.error("Could not generate PDF. See logs for details.")
    with col_docx:
        try:
            st.download_button(
                "Download DOCX",
                data=write_docx(fact_sheet, person_name),
                file_name=export_filename(person_name, "docx"),
                mime=DOCX_MIME,
                use_container_width=True,
                key="dl_docx",
            )
        except Exception:  # noqa: BLE001
            logger.exception("Error generating DOCX")
            st.error("Could not generate DOCX. See logs for details.")


def _render_fact_sheet(fact_sheet: FactSheet, person_name: str) -> None:
    st.header(document_title(person_name))
    _render_downloads(fact_sheet, person_name)

    for section in build_sections(fact_sheet, person_name):
        with st.container(border=True):
            st.subheader(section.title)
            if section.is_empty:
                st.markdown(f"*{section.empty_message}*")
            elif section.numbered:
                st.markdown(
                    "\n".join(f"{i}. {item}" for i, item in enumerate(section.items, start=1))
                )
            else:
                st.markdown("\n".join(f"- {item}" for item in section.items))


# ===================================================================
# Sidebar
# ===================================================================

def _render_sidebar() -> None:
    with st.sidebar:
        st.title("Settings")
        st.selectbox(
            "Gemini model",
            options=get_model_ids(),
            format_func=get_model_label,
            key="model",
        )

        summary = _get_audit().summary()
        st.caption(f"Generations this session: {summary['total_calls']}")
        if summary["errors"]:
            st.caption(f"Failed: {summary['errors']}")

        with st.expander("Prompt sent to Gemini"):
            st.code(
                build_fact_sheet_prompt(st.session_state["person_name"] or "<name>"),
                language="text",
            )

        st.divider()
        if st.session_state["api_key"] and st.button("Forget API key", key="btn_forget_key"):
            forget_api_key(st.session_state)
            st.rerun()


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    st.set_page_config(page_title=APP_TITLE, page_icon=":page_facing_up:", layout="centered")

    settings = _load_settings()
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if "model" not in st.session_state:
        st.session_state["model"] = settings.model
    init_session_state(st.session_state)

    st.title(APP_TITLE)
    st.markdown(APP_SUBTITLE)
    st.divider()

    try:
        if current_view(st.session_state) == VIEW_CREDENTIAL:
            _render_api_key_form()
        else:
            _render_search_form(settings)

            # Re-evaluate: the search above may have changed the state
            view = current_view(st.session_state)
            if view == VIEW_ERROR:
                st.error(f"Error: {st.session_state['error']}")
            elif view == VIEW_RESULT:
                _render_fact_sheet(
                    st.session_state["fact_sheet"],
                    st.session_state["person_name"],
                )
            elif view == VIEW_NO_DATA:
                st.info("No data to display. Try a different name or check for errors.")
            else:
                st.info("Enter a name above to get started.")
    except Exception as exc:  # noqa: BLE001
        st.error(f"An unexpected error occurred:\n\n{exc}")
        with st.expander("Error details"):
            st.code(traceback.format_exc())

    # After the search so the counters include this run's generation
    _render_sidebar()

    st.divider()
    st.caption(
        f"© {datetime.now().year} {APP_TITLE}. Powered by Gemini API."
    )
    st.caption(DISCLAIMER)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
