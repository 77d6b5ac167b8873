"""Publish-dialog state machine: choose a domain, check it, publish.

    IDLE -> CHECKING_DOMAIN -> DOMAIN_AVAILABLE | DOMAIN_UNAVAILABLE
    DOMAIN_AVAILABLE -> PUBLISHING -> PUBLISHED | FAILED
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime
from enum import Enum
from typing import Callable

from resume_builder.clients.registrar_client import RegistrarClient
from resume_builder.errors import (
    ExternalServiceError,
    PreconditionError,
    PublishInProgressError,
)
from resume_builder.models.publication import DomainCheckResult, PublishRequest, PublishResult
from resume_builder.models.resume import ResumeDocument
from resume_builder.pipeline.publisher import WebsitePublisher

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".me", ".cv")

_INVALID_LABEL_CHARS = re.compile(r"[^a-z0-9-]")


def normalize_domain_label(raw: str) -> str:
    """Lowercase and drop anything outside ``[a-z0-9-]`` (applied as the user types)."""
    return _INVALID_LABEL_CHARS.sub("", (raw or "").lower())


def full_domain(label: str, extension: str) -> str:
    return f"{label}{extension}" if label else ""


class PublishState(str, Enum):
    IDLE = "idle"
    CHECKING_DOMAIN = "checking_domain"
    DOMAIN_AVAILABLE = "domain_available"
    DOMAIN_UNAVAILABLE = "domain_unavailable"
    PUBLISHING = "publishing"
    PUBLISHED = "published"
    FAILED = "failed"


class PublicationFlow:
    """Drives one resume through domain selection and publishing.

    A check result is only applied if nothing changed while it was in flight:
    editing the domain or dismissing the dialog bumps a generation counter and
    the late result is dropped. Only one publish may run at a time and a second
    request is rejected, never queued.
    """

    def __init__(
        self,
        resume: ResumeDocument,
        registrar: RegistrarClient,
        publisher: WebsitePublisher,
        *,
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
        extension: str | None = None,
        on_published: Callable[[ResumeDocument], None] | None = None,
    ):
        self.resume = resume
        self.registrar = registrar
        self.publisher = publisher
        self.extensions = tuple(extensions)
        self.extension = extension or self.extensions[0]
        if self.extension not in self.extensions:
            raise ValueError(f"Unsupported domain extension: {self.extension}")
        self.on_published = on_published

        self.label = ""
        self.state = PublishState.IDLE
        self.check_result: DomainCheckResult | None = None
        self.result: PublishResult | None = None
        self.error: str | None = None
        self._generation = 0
        self._check_task: asyncio.Future | None = None

    @property
    def domain(self) -> str:
        return full_domain(self.label, self.extension)

    def _set_state(self, state: PublishState) -> None:
        if state != self.state:
            logger.info("Publish state %s -> %s (%s)", self.state.value, state.value, self.domain)
        self.state = state

    def _invalidate(self) -> None:
        if self.state == PublishState.PUBLISHING:
            raise PublishInProgressError("A publish is already in progress")
        self._generation += 1
        if self._check_task is not None and not self._check_task.done():
            self._check_task.cancel()
        self.check_result = None
        self.error = None
        self._set_state(PublishState.IDLE)

    def set_label(self, raw: str) -> str:
        """Update the domain name being edited; any earlier check no longer applies."""
        self._invalidate()
        self.label = normalize_domain_label(raw)
        return self.label

    def set_extension(self, extension: str) -> None:
        if extension not in self.extensions:
            raise ValueError(f"Unsupported domain extension: {extension}")
        self._invalidate()
        self.extension = extension

    def dismiss(self) -> None:
        """Close the dialog: cancel a pending check and forget its result.

        A running publish is left alone; domain registration cannot be undone.
        """
        if self.state == PublishState.PUBLISHING:
            return
        self._invalidate()

    async def check_domain(self) -> DomainCheckResult | None:
        """Check the current domain. Returns None if the result went stale."""
        if self.state == PublishState.PUBLISHING:
            raise PublishInProgressError("A publish is already in progress")
        if not self.label:
            raise PreconditionError("Please enter a domain name")

        self._invalidate()
        generation = self._generation
        domain = self.domain
        self._set_state(PublishState.CHECKING_DOMAIN)

        task = asyncio.ensure_future(self.registrar.check_availability(domain))
        self._check_task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if task.cancelled() and generation != self._generation:
                logger.info("Discarded cancelled domain check for %s", domain)
                return None
            raise
        except Exception as exc:
            if generation == self._generation:
                self.error = str(exc)
                self._set_state(PublishState.IDLE)
            raise

        if generation != self._generation:
            logger.info("Discarded stale domain check for %s", domain)
            return None

        self.check_result = result
        self._set_state(
            PublishState.DOMAIN_AVAILABLE if result.available else PublishState.DOMAIN_UNAVAILABLE
        )
        return result

    async def publish(self) -> PublishResult:
        """Publish at the checked domain and record it on the resume."""
        if self.state == PublishState.PUBLISHING:
            raise PublishInProgressError("A publish is already in progress")
        if (
            self.state != PublishState.DOMAIN_AVAILABLE
            or self.check_result is None
            or self.check_result.domain != self.domain
        ):
            raise PreconditionError("Please check domain availability first")
        if not self.resume.id:
            raise PreconditionError("Save the resume before publishing")

        domain = self.domain
        self.error = None
        self._set_state(PublishState.PUBLISHING)
        try:
            result = await self.publisher.publish(PublishRequest(
                resume_id=self.resume.id,
                domain=domain,
                resume=self.resume.model_copy(deep=True),
            ))
        except asyncio.CancelledError:
            self.error = "Publishing was cancelled"
            self._set_state(PublishState.FAILED)
            raise
        except Exception as exc:
            self.error = str(exc) or "Failed to publish website"
            self._set_state(PublishState.FAILED)
            raise

        try:
            self._record(result)
        except Exception as exc:
            logger.error("Recording publication failed, removing %s", domain, exc_info=True)
            self.error = f"Failed to record publication: {exc}"
            try:
                self.publisher.unpublish(domain)
            except Exception as cleanup_exc:
                logger.error("Could not remove %s after failed publish", domain, exc_info=True)
                self.error += f"; the published site could not be removed: {cleanup_exc}"
            finally:
                self._set_state(PublishState.FAILED)
            raise ExternalServiceError("storage", self.error) from exc

        self.result = result
        self._set_state(PublishState.PUBLISHED)
        return result

    def _record(self, result: PublishResult) -> None:
        previous = (self.resume.published_domain, self.resume.published_at, self.resume.updated_at)
        self.resume.published_domain = result.domain
        self.resume.published_at = result.published_at
        self.resume.updated_at = datetime.now()
        if self.on_published is None:
            return
        try:
            self.on_published(self.resume)
        except Exception:
            (
                self.resume.published_domain,
                self.resume.published_at,
                self.resume.updated_at,
            ) = previous
            raise
