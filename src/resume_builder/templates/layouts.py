"""The three resume templates and the ``render`` entry point.

All templates share the same selection rules: the header is always present,
and a section appears only when it has something to show. What differs per
template is headings, separators, how skills are laid out and which HTML
template and stylesheet present the result.
"""

from __future__ import annotations

from dataclasses import dataclass

from resume_builder.formatting.dates import format_date_range
from resume_builder.models.resume import (
    EducationEntry,
    ExperienceEntry,
    ResumeDocument,
    TemplateId,
    resolve_template_id,
)
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

NAME_PLACEHOLDER = "Your Name"


@dataclass(frozen=True)
class Layout:
    template_id: TemplateId
    display_name: str
    html_template: str
    stylesheet: str
    contact_separator: str
    education_separator: str
    skills_style: str
    skills_separator: str
    summary_heading: str
    experience_heading: str
    education_heading: str
    skills_heading: str


LAYOUTS: dict[TemplateId, Layout] = {
    TemplateId.MODERN: Layout(
        template_id=TemplateId.MODERN,
        display_name="Modern",
        html_template="modern.html",
        stylesheet="modern.css",
        contact_separator=" • ",
        education_separator=" • ",
        skills_style="tags",
        skills_separator=", ",
        summary_heading="Professional Summary",
        experience_heading="Work Experience",
        education_heading="Education",
        skills_heading="Skills",
    ),
    TemplateId.CLASSIC: Layout(
        template_id=TemplateId.CLASSIC,
        display_name="Classic",
        html_template="classic.html",
        stylesheet="classic.css",
        contact_separator=" | ",
        education_separator=", ",
        # one comma-separated line instead of tags
        skills_style="inline",
        skills_separator=", ",
        summary_heading="PROFESSIONAL SUMMARY",
        experience_heading="PROFESSIONAL EXPERIENCE",
        education_heading="EDUCATION",
        skills_heading="SKILLS",
    ),
    TemplateId.MINIMAL: Layout(
        template_id=TemplateId.MINIMAL,
        display_name="Minimal",
        html_template="minimal.html",
        stylesheet="minimal.css",
        contact_separator=" · ",
        education_separator=" · ",
        skills_style="tags",
        skills_separator=" · ",
        summary_heading="About",
        experience_heading="Experience",
        education_heading="Education",
        skills_heading="Skills",
    ),
}


def get_layout(template_id: TemplateId | str | None) -> Layout:
    return LAYOUTS[resolve_template_id(template_id)]


def _header(resume: ResumeDocument, layout: Layout) -> HeaderBlock:
    info = resume.personal_info
    contacts = tuple(
        ContactItem(kind, value.strip())
        for kind, value in (
            ("email", info.email),
            ("phone", info.phone),
            ("location", info.location),
        )
        if value.strip()
    )
    return HeaderBlock(
        name=info.full_name.strip() or NAME_PLACEHOLDER,
        title=info.title.strip() or None,
        contacts=contacts,
        separator=layout.contact_separator,
    )


def _description_lines(text: str) -> tuple[str, ...]:
    if not text.strip():
        return ()
    return tuple(text.replace("\r\n", "\n").replace("\r", "\n").split("\n"))


def _experience_item(entry: ExperienceEntry) -> ExperienceItem:
    return ExperienceItem(
        id=entry.id,
        position=entry.position,
        company=entry.company,
        date_range=format_date_range(entry.start_date, entry.end_date, current=entry.current),
        description_lines=_description_lines(entry.description),
    )


def _education_item(entry: EducationEntry, layout: Layout) -> EducationItem:
    parts = [p for p in (entry.school, entry.field) if p.strip()]
    return EducationItem(
        id=entry.id,
        degree=entry.degree,
        school=entry.school,
        field=entry.field,
        institution_line=layout.education_separator.join(parts),
        date_range=format_date_range(entry.start_date, entry.end_date),
    )


def render(resume: ResumeDocument, template_id: TemplateId | str | None = None) -> RenderedDocument:
    """Build the section tree for ``resume`` in the given template.

    ``template_id`` defaults to the document's own template; unknown ids
    render as Modern. The resume is only read, never modified.
    """
    layout = get_layout(template_id if template_id is not None else resume.template_id)
    info = resume.personal_info

    sections: list = []
    if info.summary.strip():
        sections.append(SummarySection(heading=layout.summary_heading, text=info.summary))
    if resume.experiences:
        sections.append(ExperienceSection(
            heading=layout.experience_heading,
            items=tuple(_experience_item(e) for e in resume.experiences),
        ))
    if resume.education:
        sections.append(EducationSection(
            heading=layout.education_heading,
            items=tuple(_education_item(e, layout) for e in resume.education),
        ))
    if resume.skills:
        sections.append(SkillsSection(
            heading=layout.skills_heading,
            skills=tuple(resume.skills),
            style=layout.skills_style,
            separator=layout.skills_separator,
        ))

    return RenderedDocument(
        template=layout.template_id,
        header=_header(resume, layout),
        sections=tuple(sections),
    )


def list_templates() -> list[Layout]:
    """Available templates in display order."""
    return [LAYOUTS[t] for t in TemplateId]
