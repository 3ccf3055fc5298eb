"""Section layout shared by the Streamlit renderer and every exporter.

Keeping titles, ordering and empty-list messages in one place means the
on-screen fact sheet, the PDF and the DOCX always agree.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from ..config.models import FactSheet

_WHITESPACE_RUN = re.compile(r"\s+")
# Characters XML 1.0 does not allow (tab, LF and CR are fine)
_XML_UNSAFE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def clean_text(text: str) -> str:
    """Drop characters that DOCX and HTML output cannot carry."""
    return _XML_UNSAFE.sub("", text)


@dataclass
class Section:
    """One titled block of the fact sheet."""

    title: str
    items: List[str] = field(default_factory=list)
    numbered: bool = False
    empty_message: str = "No information available."

    @property
    def is_empty(self) -> bool:
        return not self.items


def document_title(person_name: str) -> str:
    return f"Fact Sheet: {person_name.strip()}"


def build_sections(fact_sheet: FactSheet, person_name: str) -> List[Section]:
    """Return the four fact-sheet sections in display order."""
    name = person_name.strip()
    return [
        Section(
            title="Primary Connections",
            items=list(fact_sheet.primary_connections),
            empty_message="No primary connections listed.",
        ),
        Section(
            title="Education",
            items=list(fact_sheet.education),
            empty_message="No educational background listed.",
        ),
        Section(
            title="Key Memberships / Awards",
            items=list(fact_sheet.key_memberships_awards),
            empty_message="No key memberships or awards listed.",
        ),
        Section(
            title=f"10 Things You Need to Know About {name}",
            items=list(fact_sheet.ten_things),
            numbered=True,
            empty_message="No specific facts available.",
        ),
    ]


def export_filename(person_name: str, extension: str) -> str:
    """``"Ada  Lovelace", "pdf"`` -> ``"Ada_Lovelace_Fact_Sheet.pdf"``."""
    stem = _WHITESPACE_RUN.sub("_", person_name.strip()) or "Unnamed"
    return f"{stem}_Fact_Sheet.{extension.lstrip('.')}"


def render_markdown(fact_sheet: FactSheet, person_name: str) -> str:
    """Render the fact sheet as Markdown text."""
    lines: List[str] = [f"# {document_title(person_name)}", ""]
    for section in build_sections(fact_sheet, person_name):
        lines.append(f"## {section.title}")
        lines.append("")
        if section.is_empty:
            lines.append(f"_{section.empty_message}_")
        else:
            for idx, item in enumerate(section.items, start=1):
                lines.append(f"{idx}. {item}" if section.numbered else f"- {item}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
