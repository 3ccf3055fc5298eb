"""DOCX export of a fact sheet using python-docx."""
from __future__ import annotations

import io
import logging

from docx import Document
from docx.shared import Pt, RGBColor

from ..config.models import FactSheet
from .sections import build_sections, clean_text, document_title

logger = logging.getLogger(__name__)

HEADING_COLOR = RGBColor(0x02, 0x84, 0xC7)  # sky-600
MUTED_COLOR = RGBColor(0x64, 0x74, 0x8B)    # slate-500


def write_docx(fact_sheet: FactSheet, person_name: str) -> bytes:
    """Render *fact_sheet* as a Word document and return the file bytes.

    Uses the built-in ``List Bullet`` / ``List Number`` styles of the default
    python-docx template so the lists stay editable in Word.
    """
    doc = Document()
    title = clean_text(document_title(person_name))
    doc.core_properties.title = title
    doc.core_properties.subject = f"AI-generated fact sheet for {clean_text(person_name.strip())}"

    doc.add_heading(title, level=0)

    for section in build_sections(fact_sheet, person_name):
        heading = doc.add_heading(clean_text(section.title), level=1)
        for run in heading.runs:
            run.font.color.rgb = HEADING_COLOR

        if section.is_empty:
            para = doc.add_paragraph()
            run = para.add_run(section.empty_message)
            run.italic = True
            run.font.color.rgb = MUTED_COLOR
            continue

        style = "List Number" if section.numbered else "List Bullet"
        for item in section.items:
            para = doc.add_paragraph(clean_text(item), style=style)
            para.paragraph_format.space_after = Pt(3)

    footer = doc.add_paragraph()
    note = footer.add_run(
        "Note: This fact sheet was generated by AI based on typical public profiles. "
        "Information may be illustrative."
    )
    note.italic = True
    note.font.size = Pt(8)
    note.font.color.rgb = MUTED_COLOR

    buf = io.BytesIO()
    doc.save(buf)
    data = buf.getvalue()
    logger.info("Rendered DOCX fact sheet for %r (%d bytes)", person_name, len(data))
    return data
