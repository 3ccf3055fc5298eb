"""Fact-sheet export: shared section layout, PDF, DOCX and Markdown.

Public API
----------
.. autofunction:: build_sections
.. autofunction:: export_filename
.. autofunction:: render_markdown
.. autofunction:: write_pdf
.. autofunction:: write_docx
"""
from .sections import Section, build_sections, clean_text, document_title, export_filename, render_markdown
from .pdf_writer import write_pdf
from .docx_writer import write_docx

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

__all__ = [
    "Section",
    "build_sections",
    "clean_text",
    "document_title",
    "export_filename",
    "render_markdown",
    "write_pdf",
    "write_docx",
    "PDF_MIME",
    "DOCX_MIME",
]
