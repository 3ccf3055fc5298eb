"""PDF export of a fact sheet using PyMuPDF.

The sheet is written as a small HTML document and laid out with
``fitz.Story``, which wraps text, breaks pages and picks fallback fonts
for glyphs the default sans-serif face lacks (Polish, Hungarian, CJK,
typographic dashes and quotes).
"""
from __future__ import annotations

import html
import io
import logging
from typing import List

import fitz  # PyMuPDF

from ..config.models import FactSheet
from .sections import Section, build_sections, clean_text, document_title

logger = logging.getLogger(__name__)

FACT_SHEET_CSS = """
body { font-family: sans-serif; font-size: 11pt; color: #1e293b; }
h1 { font-size: 20pt; font-weight: bold; color: #4338ca; margin-bottom: 8pt; }
h2 { font-size: 14pt; font-weight: bold; color: #0284c7; margin-top: 14pt; margin-bottom: 4pt; }
li { margin-bottom: 3pt; }
p.empty { font-style: italic; color: #64748b; }
"""


def _escape(text: str) -> str:
    return html.escape(clean_text(text))


def _section_html(section: Section) -> List[str]:
    parts = [f"<h2>{_escape(section.title)}</h2>"]
    if section.is_empty:
        parts.append(f'<p class="empty">{_escape(section.empty_message)}</p>')
        return parts
    tag = "ol" if section.numbered else "ul"
    parts.append(f"<{tag}>")
    parts.extend(f"<li>{_escape(item)}</li>" for item in section.items)
    parts.append(f"</{tag}>")
    return parts


def build_html(fact_sheet: FactSheet, person_name: str) -> str:
    """HTML body of the fact sheet, every value escaped."""
    parts = [f"<h1>{_escape(document_title(person_name))}</h1>"]
    for section in build_sections(fact_sheet, person_name):
        parts.extend(_section_html(section))
    return "\n".join(parts)


class FactSheetPdfWriter:
    """Renders a FactSheet to PDF bytes."""

    def __init__(self, margin: float = 50.0, paper: str = "a4"):
        self.margin = margin
        self.paper = paper

    def render(self, fact_sheet: FactSheet, person_name: str) -> bytes:
        story = fitz.Story(html=build_html(fact_sheet, person_name), user_css=FACT_SHEET_CSS)
        mediabox = fitz.paper_rect(self.paper)
        where = mediabox + (self.margin, self.margin, -self.margin, -self.margin)

        buf = io.BytesIO()
        writer = fitz.DocumentWriter(buf)
        more = 1
        while more:
            device = writer.begin_page(mediabox)
            more, _filled = story.place(where)
            story.draw(device)
            writer.end_page()
        writer.close()

        with fitz.open(stream=buf.getvalue(), filetype="pdf") as doc:
            doc.set_metadata({
                "title": clean_text(document_title(person_name)),
                "subject": f"AI-generated fact sheet for {clean_text(person_name.strip())}",
                "creator": "Persona Fact Sheet Generator",
            })
            pages = doc.page_count
            data = doc.tobytes()

        logger.info(
            "Rendered PDF fact sheet for %r (%d pages, %d bytes)", person_name, pages, len(data)
        )
        return data


def write_pdf(fact_sheet: FactSheet, person_name: str) -> bytes:
    """Render *fact_sheet* as an A4 PDF and return the file bytes."""
    return FactSheetPdfWriter().render(fact_sheet, person_name)
