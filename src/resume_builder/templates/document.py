"""Template-independent tree produced by ``render``.

Every node is a frozen dataclass so two renders of the same resume compare
equal and can be hashed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from resume_builder.models.resume import TemplateId


@dataclass(frozen=True)
class ContactItem:
    kind: str  # "email" | "phone" | "location"
    value: str


@dataclass(frozen=True)
class HeaderBlock:
    name: str
    title: str | None
    contacts: tuple[ContactItem, ...]
    separator: str

    @property
    def contact_line(self) -> str:
        return self.separator.join(c.value for c in self.contacts)


@dataclass(frozen=True)
class SummarySection:
    heading: str
    text: str

    kind = "summary"


@dataclass(frozen=True)
class ExperienceItem:
    id: str
    position: str
    company: str
    date_range: str
    description_lines: tuple[str, ...]


@dataclass(frozen=True)
class ExperienceSection:
    heading: str
    items: tuple[ExperienceItem, ...]

    kind = "experience"


@dataclass(frozen=True)
class EducationItem:
    id: str
    degree: str
    school: str
    field: str
    institution_line: str
    date_range: str


@dataclass(frozen=True)
class EducationSection:
    heading: str
    items: tuple[EducationItem, ...]

    kind = "education"


@dataclass(frozen=True)
class SkillsSection:
    heading: str
    skills: tuple[str, ...]
    style: str  # "tags" | "inline"
    separator: str

    kind = "skills"

    @property
    def inline_text(self) -> str:
        return self.separator.join(self.skills)


Section = Union[SummarySection, ExperienceSection, EducationSection, SkillsSection]


@dataclass(frozen=True)
class RenderedDocument:
    template: TemplateId
    header: HeaderBlock
    sections: tuple[Section, ...]

    def section(self, kind: str) -> Section | None:
        for section in self.sections:
            if section.kind == kind:
                return section
        return None
