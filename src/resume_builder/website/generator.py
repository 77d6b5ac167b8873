"""Self-contained HTML website for a published resume.

The page content comes from the Modern section tree so the published site
shows exactly what the builder preview shows; only the styling differs. The
stylesheet is inlined and the page references nothing outside itself, so it
keeps rendering for as long as it is hosted.
"""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_builder.models.resume import ResumeDocument, TemplateId
from resume_builder.templates.layouts import render

SITE_DIR = Path(__file__).parent

CONTACT_ICONS = {
    "email": "✉",
    "phone": "\U0001F4DE",
    "location": "\U0001F4CD",
}

_env = Environment(
    loader=FileSystemLoader(str(SITE_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_STYLE_BLOCK = re.compile(r"<style[^>]*>(.*?)</style>", re.DOTALL | re.IGNORECASE)
_EXTERNAL_TAG = re.compile(r"<(?:script|link|iframe|object|embed|base)\b", re.IGNORECASE)
_EXTERNAL_ATTR = re.compile(
    r"<[a-zA-Z][^>]*\b(?:src|href|action|srcset)\s*=\s*[\"']?\s*(?:[a-zA-Z][a-zA-Z0-9+.-]*:)?//",
    re.IGNORECASE,
)
_EXTERNAL_CSS = re.compile(r"@import|url\(\s*[\"']?\s*(?:https?:)?//", re.IGNORECASE)


def _website_css() -> str:
    return (SITE_DIR / "website.css").read_text(encoding="utf-8")


def generate_website(resume: ResumeDocument) -> str:
    """Render ``resume`` as a complete, standalone HTML document."""
    document = render(resume, TemplateId.MODERN)
    header = document.header
    description = f"{header.title or 'Professional Resume'} - {header.name}"
    template = _env.get_template("website.html")
    return template.render(
        doc=document,
        description=description,
        icons=CONTACT_ICONS,
        css=Markup(_website_css()),
    )


def find_external_references(html: str) -> list[str]:
    """Return markup fragments that would make ``html`` load anything external."""
    found = [m.group(0) for m in _EXTERNAL_TAG.finditer(html)]
    found.extend(m.group(0) for m in _EXTERNAL_ATTR.finditer(html))
    for block in _STYLE_BLOCK.finditer(html):
        found.extend(m.group(0) for m in _EXTERNAL_CSS.finditer(block.group(1)))
    return found
