"""Register a domain and store the generated website under it."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from resume_builder.clients.registrar_client import RegistrarClient
from resume_builder.models.publication import PublishedSite, PublishRequest, PublishResult
from resume_builder.storage.site_store import SiteStore
from resume_builder.website.generator import find_external_references, generate_website

logger = logging.getLogger(__name__)


class WebsitePublisher:
    """Server side of publishing: generate, register, persist."""

    def __init__(self, registrar: RegistrarClient, store: SiteStore):
        self.registrar = registrar
        self.store = store

    async def publish(self, request: PublishRequest) -> PublishResult:
        """Publish ``request.resume`` at ``request.domain``.

        The HTML is generated before the domain is bought so a rendering
        problem can never leave a registered domain without a site.
        """
        if not request.resume_id or not request.domain:
            raise ValueError("Missing required parameters")

        html = generate_website(request.resume)
        external = find_external_references(html)
        if external:
            raise RuntimeError(f"Generated website is not self-contained: {external}")

        await self.registrar.register(request.domain)

        published_at = datetime.now(timezone.utc)
        self.store.put(PublishedSite(
            domain=request.domain,
            resume_id=request.resume_id,
            html_content=html,
            template_id=request.resume.template_id,
            published_at=published_at,
        ))
        logger.info("Website published: %s", request.domain)
        return PublishResult(
            success=True,
            domain=request.domain,
            website_url=f"https://{request.domain}",
            published_at=published_at,
        )

    def unpublish(self, domain: str) -> bool:
        """Drop the stored website for ``domain`` (the registration stays)."""
        removed = self.store.delete(domain)
        if removed:
            logger.info("Website removed: %s", domain)
        return removed
