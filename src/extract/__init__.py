"""LLM-based fact-sheet generation for a named person."""

from .generator import FactSheetGenerator, generate_fact_sheet, validate_fact_sheet
from .prompts import FACT_SHEET_PROMPT_TEMPLATE, build_fact_sheet_prompt

__all__ = [
    "FactSheetGenerator",
    "generate_fact_sheet",
    "validate_fact_sheet",
    "FACT_SHEET_PROMPT_TEMPLATE",
    "build_fact_sheet_prompt",
]
