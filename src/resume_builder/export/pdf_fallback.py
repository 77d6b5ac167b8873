"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from resume_builder.models.resume import TemplateId
from resume_builder.templates.document import RenderedDocument

logger = logging.getLogger(__name__)

# Unicode-capable font search paths (macOS, Linux, Windows)
_UNICODE_FONT_PATHS = [
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def _find_unicode_font() -> str | None:
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


class _Writer:
    def __init__(self, pdf: FPDF, font_name: str):
        self.pdf = pdf
        self.font_name = font_name

    def text(self, text: str, size: float = 10, height: float = 6, align: str = "L") -> None:
        self.pdf.set_font_size(size)
        self.pdf.multi_cell(
            0, height, _safe_text(text, self.pdf), align=align,
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        self.pdf.set_font_size(10)

    def rule(self) -> None:
        y = self.pdf.get_y()
        self.pdf.line(self.pdf.l_margin, y, self.pdf.w - self.pdf.r_margin, y)
        self.pdf.ln(3)


def document_to_pdf_fpdf2(document: RenderedDocument, page_size: str = "A4") -> bytes:
    """Lay out a RenderedDocument as plain text blocks, paging automatically."""
    pdf = FPDF(format=page_size)
    pdf.set_margins(12, 12, 12)
    pdf.set_auto_page_break(auto=True, margin=12)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("UnicodeFont", "", unicode_font)
            font_name = "UnicodeFont"
        except Exception:
            logger.debug("Failed to load font %s", unicode_font)
    pdf.set_font(font_name, size=10)

    out = _Writer(pdf, font_name)
    header = document.header
    align = "C" if document.template == TemplateId.CLASSIC else "L"
    out.text(header.name, size=18, height=10, align=align)
    if header.title:
        out.text(header.title, size=12, height=7, align=align)
    if header.contacts:
        out.text(header.contact_line, size=9, height=5, align=align)
    out.rule()

    for section in document.sections:
        pdf.ln(2)
        out.text(section.heading, size=13, height=8)
        if section.kind == "summary":
            out.text(section.text)
        elif section.kind == "experience":
            for item in section.items:
                out.text(item.position, size=11, height=6)
                out.text(f"{item.company}    {item.date_range}", size=9, height=5)
                for line in item.description_lines:
                    out.text(line)
                pdf.ln(2)
        elif section.kind == "education":
            for item in section.items:
                out.text(item.degree, size=11, height=6)
                meta = f"{item.institution_line}    {item.date_range}".strip()
                out.text(meta, size=9, height=5)
                pdf.ln(2)
        elif section.kind == "skills":
            out.text(section.inline_text)

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    # For built-in fonts (Helvetica etc.), strip non-latin chars
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")
