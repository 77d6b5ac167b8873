"""Render resumes to PDF: WeasyPrint first, fpdf2 when it is unavailable."""
from __future__ import annotations

import logging
import re

from resume_builder.models.resume import ResumeDocument, TemplateId
from resume_builder.templates.document import RenderedDocument
from resume_builder.templates.layouts import render
from resume_builder.templates.renderer import render_to_html

logger = logging.getLogger(__name__)

PAGE_SIZES = ("A4", "Letter")

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def pdf_filename(resume: ResumeDocument) -> str:
    """File name for the download: the owner's full name, or ``resume``."""
    name = _UNSAFE_FILENAME_CHARS.sub("", resume.personal_info.full_name).strip()
    return f"{name or 'resume'}.pdf"


def page_css(page_size: str) -> str:
    """Print rules: fixed page size, content scaled to the page width."""
    return (
        f"@page {{ size: {page_size}; margin: 12mm; }}\n"
        ".resume { max-width: none; width: 100%; padding: 0; }\n"
        ".entry { break-inside: avoid; }\n"
    )


def render_pdf(
    resume: ResumeDocument,
    template_id: TemplateId | str | None = None,
    page_size: str = "A4",
) -> bytes:
    """Render the resume preview as paginated PDF bytes."""
    if page_size not in PAGE_SIZES:
        page_size = "A4"
    document = render(resume, template_id)
    html = render_to_html(document, extra_css=page_css(page_size))
    return _html_to_pdf(html, document, page_size)


def _html_to_pdf(html: str, document: RenderedDocument, page_size: str) -> bytes:
    """Convert HTML string to PDF bytes using WeasyPrint, with fpdf2 fallback."""
    try:
        from weasyprint import HTML
        return HTML(string=html).write_pdf()
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        from resume_builder.export.pdf_fallback import document_to_pdf_fpdf2
        return document_to_pdf_fpdf2(document, page_size)
