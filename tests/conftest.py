"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from resume_builder.clients.llm_client import LLMClient, LLMResponse
from resume_builder.clients.registrar_client import RegistrarClient
from resume_builder.models.publication import DomainCheckResult, PublishResult
from resume_builder.models.resume import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    TemplateId,
)
from resume_builder.pipeline.publisher import WebsitePublisher
from resume_builder.storage.site_store import SiteStore


@pytest.fixture
def sample_resume() -> ResumeDocument:
    return ResumeDocument(
        id="resume-1",
        title="Backend Engineer",
        template_id=TemplateId.MODERN,
        personal_info=PersonalInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            location="Berlin",
            title="Senior Engineer",
            summary="Builds reliable backend systems.",
        ),
        experiences=[
            ExperienceEntry(
                id="exp-1",
                company="Acme",
                position="Staff Engineer",
                start_date="2021-03",
                current=True,
                description="Led the platform team\nCut p99 latency by 40%",
            ),
            ExperienceEntry(
                id="exp-2",
                company="Globex",
                position="Engineer",
                start_date="2018-01",
                end_date="2021-02",
                description="Built billing services",
            ),
        ],
        education=[
            EducationEntry(
                id="edu-1",
                school="MIT",
                degree="BSc",
                field="Computer Science",
                start_date="2014-09",
                end_date="2018-06",
            ),
        ],
        skills=["Python", "PostgreSQL", "Kubernetes"],
    )


@pytest.fixture
def empty_resume() -> ResumeDocument:
    return ResumeDocument(id="resume-empty")


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="Generated text", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def mock_registrar() -> RegistrarClient:
    """Registrar that reports every domain as available."""
    client = AsyncMock(spec=RegistrarClient)

    async def _check(domain: str) -> DomainCheckResult:
        return DomainCheckResult(domain=domain, available=True, price=9.99)

    client.check_availability = AsyncMock(side_effect=_check)
    client.register = AsyncMock(return_value={"domain": {"domainName": "x"}})
    return client


@pytest.fixture
def mock_publisher() -> WebsitePublisher:
    publisher = MagicMock(spec=WebsitePublisher)

    async def _publish(request) -> PublishResult:
        return PublishResult(
            success=True,
            domain=request.domain,
            website_url=f"https://{request.domain}",
            published_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        )

    publisher.publish = AsyncMock(side_effect=_publish)
    publisher.unpublish = MagicMock(return_value=True)
    return publisher


@pytest.fixture
def site_store(tmp_path) -> SiteStore:
    return SiteStore(db_path=tmp_path / "sites.db")
