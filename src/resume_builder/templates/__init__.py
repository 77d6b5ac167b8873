"""Resume templates: section tree rendering and HTML preview projection."""

from resume_builder.templates.document import (
    ContactItem,
    EducationItem,
    EducationSection,
    ExperienceItem,
    ExperienceSection,
    HeaderBlock,
    RenderedDocument,
    SkillsSection,
    SummarySection,
)
from resume_builder.templates.layouts import LAYOUTS, Layout, get_layout, list_templates, render
from resume_builder.templates.renderer import render_preview, render_to_html, save_html

__all__ = [
    "LAYOUTS",
    "ContactItem",
    "EducationItem",
    "EducationSection",
    "ExperienceItem",
    "ExperienceSection",
    "HeaderBlock",
    "Layout",
    "RenderedDocument",
    "SkillsSection",
    "SummarySection",
    "get_layout",
    "list_templates",
    "render",
    "render_preview",
    "render_to_html",
    "save_html",
]
