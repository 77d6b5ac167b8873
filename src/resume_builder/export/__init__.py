"""PDF export module for the resume builder."""
from resume_builder.export.pdf_renderer import (
    PAGE_SIZES,
    pdf_filename,
    render_pdf,
)

__all__ = ["render_pdf", "pdf_filename", "PAGE_SIZES"]
