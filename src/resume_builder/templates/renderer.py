"""Project a RenderedDocument onto a standalone HTML preview page."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_builder.models.resume import ResumeDocument, TemplateId
from resume_builder.templates.document import RenderedDocument
from resume_builder.templates.layouts import LAYOUTS, render

HTML_TEMPLATES_DIR = Path(__file__).parent / "html"
CSS_THEMES_DIR = Path(__file__).parent / "css"

_env = Environment(
    loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def load_stylesheet(name: str) -> str:
    path = CSS_THEMES_DIR / name
    return path.read_text(encoding="utf-8") if path.exists() else ""


def render_to_html(document: RenderedDocument, extra_css: str = "") -> str:
    """Render the tree with its template's HTML layout and inline stylesheet."""
    layout = LAYOUTS[document.template]
    css = load_stylesheet("base.css") + load_stylesheet(layout.stylesheet) + extra_css
    template = _env.get_template(layout.html_template)
    return template.render(doc=document, layout=layout, css=Markup(css))


def render_preview(resume: ResumeDocument, template_id: TemplateId | str | None = None) -> str:
    """Shortcut for ``render_to_html(render(resume, template_id))``."""
    return render_to_html(render(resume, template_id))


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path
