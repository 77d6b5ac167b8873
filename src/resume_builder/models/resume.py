"""Pydantic models for the editable resume document."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class TemplateId(str, Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"


DEFAULT_TEMPLATE = TemplateId.MODERN


def resolve_template_id(value: TemplateId | str | None) -> TemplateId:
    """Map any value to a known template, falling back to Modern."""
    if isinstance(value, TemplateId):
        return value
    if isinstance(value, str):
        try:
            return TemplateId(value.strip().lower())
        except ValueError:
            pass
    logger.debug("Unknown template id %r, using %s", value, DEFAULT_TEMPLATE.value)
    return DEFAULT_TEMPLATE


def new_entry_id() -> str:
    return uuid.uuid4().hex


class _Model(BaseModel):
    # camelCase keys are what the web app stored
    model_config = ConfigDict(populate_by_name=True)


class PersonalInfo(_Model):
    full_name: str = Field(default="", alias="fullName")
    email: str = ""
    phone: str = ""
    location: str = ""
    title: str = ""
    summary: str = ""


class ExperienceEntry(_Model):
    id: str = Field(default_factory=new_entry_id)
    company: str = ""
    position: str = ""
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")
    current: bool = False
    description: str = ""


class EducationEntry(_Model):
    id: str = Field(default_factory=new_entry_id)
    school: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")


def _check_unique_ids(entries: list, kind: str) -> list:
    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            raise ValueError(f"duplicate {kind} id: {entry.id}")
        seen.add(entry.id)
    return entries


class ResumeDocument(_Model):
    """A resume as edited in the builder.

    ``id``, the timestamps and the ``published_*`` fields belong to whatever
    persists the document; rendering never reads them.
    """

    id: str | None = None
    title: str = "Untitled Resume"
    template_id: TemplateId = Field(default=DEFAULT_TEMPLATE, alias="templateId")
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    experiences: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    published_domain: str | None = Field(default=None, alias="publishedDomain")
    published_at: datetime | None = Field(default=None, alias="publishedAt")

    @field_validator("template_id", mode="before")
    @classmethod
    def _resolve_template(cls, value):
        return resolve_template_id(value)

    @field_validator("personal_info", mode="before")
    @classmethod
    def _empty_personal_info(cls, value):
        # rows created by the web app stored ``{}`` or null here
        return value or {}

    @field_validator("experiences")
    @classmethod
    def _unique_experience_ids(cls, value: list[ExperienceEntry]) -> list[ExperienceEntry]:
        return _check_unique_ids(value, "experience")

    @field_validator("education")
    @classmethod
    def _unique_education_ids(cls, value: list[EducationEntry]) -> list[EducationEntry]:
        return _check_unique_ids(value, "education")

    @field_validator("skills")
    @classmethod
    def _unique_skills(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @classmethod
    def empty(cls, **kwargs) -> ResumeDocument:
        """Blank document, as created before the first edit."""
        now = datetime.now()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        return cls(**kwargs)
