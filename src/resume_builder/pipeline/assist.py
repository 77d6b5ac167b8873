"""AI text suggestions for experience descriptions and the summary."""

from __future__ import annotations

import logging

from resume_builder.clients.llm_client import LLMClient
from resume_builder.editors.forms import update_experience, update_personal_info
from resume_builder.errors import ExternalServiceError
from resume_builder.models.publication import Suggestion, SuggestionRequest
from resume_builder.models.resume import ExperienceEntry, PersonalInfo, ResumeDocument

logger = logging.getLogger(__name__)

SERVICE = "assist"

EXPERIENCE_SYSTEM_PROMPT = (
    "You are an expert career advisor. Generate professional, achievement-focused "
    "bullet points for a job experience. Focus on quantifiable results and action "
    "verbs. Return 3-5 bullet points."
)

EXPERIENCE_PROMPT = """Generate professional bullet points for this role:
Position: {position}
Company: {company}
Current description: {description}

Generate 3-5 achievement-focused bullet points that:
- Start with strong action verbs
- Include quantifiable results when possible
- Are ATS-friendly
- Highlight key responsibilities and achievements"""

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert career advisor. Generate a compelling professional summary "
    "that highlights key strengths and career objectives."
)

SUMMARY_PROMPT = """Generate a professional summary for:
Name: {full_name}
Title: {title}
Experience highlights: {highlights}

Generate a 2-3 sentence professional summary that is:
- Compelling and professional
- Highlights key strengths
- ATS-friendly
- Forward-looking"""


def build_prompt(request: SuggestionRequest) -> tuple[str, str]:
    """Return ``(system, prompt)`` for a suggestion request."""
    data = request.data
    if request.type == "experience":
        return EXPERIENCE_SYSTEM_PROMPT, EXPERIENCE_PROMPT.format(
            position=data.get("position", ""),
            company=data.get("company", ""),
            description=data.get("description") or "None provided",
        )
    return SUMMARY_SYSTEM_PROMPT, SUMMARY_PROMPT.format(
        full_name=data.get("full_name", ""),
        title=data.get("title", ""),
        highlights=data.get("experience_highlights") or "Various professional experiences",
    )


def experience_highlights(resume: ResumeDocument) -> str:
    parts = []
    for entry in resume.experiences:
        if entry.position and entry.company:
            parts.append(f"{entry.position} at {entry.company}")
        elif entry.position or entry.company:
            parts.append(entry.position or entry.company)
    return "; ".join(parts)


class SuggestionAssistant:
    """Requests suggestions and applies them to a resume.

    A field is only overwritten once a non-empty suggestion has arrived, so any
    failure leaves the user's text as it was.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        model: str = "claude-haiku-4-5-20251001",
        max_tokens: int = 1024,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens

    async def suggest(self, request: SuggestionRequest) -> Suggestion:
        system, prompt = build_prompt(request)
        logger.info("Requesting %s suggestion", request.type)
        try:
            response = await self.llm.generate(
                prompt,
                system=system,
                model=self.model,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            raise ExternalServiceError(
                SERVICE, str(exc) or "Failed to generate AI content"
            ) from exc
        content = response.text.strip()
        if not content:
            raise ExternalServiceError(SERVICE, "The assistant returned no content")
        return Suggestion(content=content)

    async def apply_experience_suggestion(
        self, resume: ResumeDocument, entry_id: str
    ) -> ExperienceEntry:
        """Replace one entry's description with a generated one."""
        entry = next((e for e in resume.experiences if e.id == entry_id), None)
        if entry is None:
            raise KeyError(f"No experience entry with id {entry_id!r}")
        suggestion = await self.suggest(SuggestionRequest(
            type="experience",
            data={
                "position": entry.position,
                "company": entry.company,
                "description": entry.description,
            },
        ))
        return update_experience(resume, entry_id, description=suggestion.content)

    async def apply_summary_suggestion(self, resume: ResumeDocument) -> PersonalInfo:
        """Replace the summary with a generated one."""
        info = resume.personal_info
        suggestion = await self.suggest(SuggestionRequest(
            type="summary",
            data={
                "full_name": info.full_name,
                "title": info.title,
                "experience_highlights": experience_highlights(resume),
            },
        ))
        return update_personal_info(resume, "summary", suggestion.content)
