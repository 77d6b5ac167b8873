"""Data models for the resume builder."""

from resume_builder.models.publication import (
    DomainCheckResult,
    PublishedSite,
    PublishRequest,
    PublishResult,
    Suggestion,
    SuggestionRequest,
)
from resume_builder.models.resume import (
    DEFAULT_TEMPLATE,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    TemplateId,
    new_entry_id,
    resolve_template_id,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "DomainCheckResult",
    "EducationEntry",
    "ExperienceEntry",
    "PersonalInfo",
    "PublishRequest",
    "PublishResult",
    "PublishedSite",
    "ResumeDocument",
    "Suggestion",
    "SuggestionRequest",
    "TemplateId",
    "new_entry_id",
    "resolve_template_id",
]
