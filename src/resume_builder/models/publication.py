"""Pydantic models for domain checks and published websites."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from resume_builder.models.resume import ResumeDocument, TemplateId


class DomainCheckResult(BaseModel):
    domain: str
    available: bool
    price: float | None = None


class PublishRequest(BaseModel):
    resume_id: str
    domain: str
    resume: ResumeDocument


class PublishResult(BaseModel):
    success: bool
    domain: str
    website_url: str
    published_at: datetime


class PublishedSite(BaseModel):
    domain: str
    resume_id: str
    html_content: str
    template_id: TemplateId
    published_at: datetime


class SuggestionRequest(BaseModel):
    type: Literal["experience", "summary"]
    data: dict[str, str] = {}


class Suggestion(BaseModel):
    content: str
