"""Name.com v4 API wrapper for domain availability and registration."""

from __future__ import annotations

import logging
import os

import httpx

from resume_builder.errors import ExternalServiceError
from resume_builder.models.publication import DomainCheckResult

logger = logging.getLogger(__name__)

SERVICE = "registrar"


class RegistrarClient:
    """Async Name.com client.

    Registration is not idempotent, so nothing here retries: every failure is
    raised as ``ExternalServiceError`` carrying the registrar's own message.
    Each call opens its own connection, so one client can be shared across
    event loops.
    """

    def __init__(
        self,
        username: str | None = None,
        api_key: str | None = None,
        *,
        api_url: str = "https://api.dev.name.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.username = username or os.environ.get("NAMECOM_USERNAME")
        self.api_key = api_key or os.environ.get("NAMECOM_API_KEY")
        if not self.username or not self.api_key:
            raise ValueError(
                "Name.com credentials required. Set NAMECOM_USERNAME and "
                "NAMECOM_API_KEY env vars or pass username/api_key."
            )
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def _post(self, path: str, payload: dict) -> dict:
        try:
            async with httpx.AsyncClient(
                base_url=self.api_url,
                auth=(self.username, self.api_key),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Registrar request failed: %s", path, exc_info=True)
            raise ExternalServiceError(SERVICE, str(exc) or type(exc).__name__) from exc
        if response.is_error:
            logger.error("Registrar error %s on %s: %s", response.status_code, path, response.text)
            raise ExternalServiceError(
                SERVICE, f"Name.com API error: {response.status_code} {response.text}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ExternalServiceError(SERVICE, f"Invalid response from Name.com: {exc}") from exc

    async def check_availability(self, domain: str) -> DomainCheckResult:
        """Ask whether ``domain`` can be purchased."""
        if not domain:
            raise ValueError("Domain is required")
        logger.info("Checking domain availability: %s", domain)
        data = await self._post("/v4/domains:checkAvailability", {"domainNames": [domain]})
        results = data.get("results") or []
        first = results[0] if results else {}
        return DomainCheckResult(
            domain=domain,
            available=first.get("purchasable") is True,
            price=first.get("purchasePrice"),
        )

    async def register(self, domain: str) -> dict:
        """Purchase ``domain``. Returns the registrar's response body."""
        if not domain:
            raise ValueError("Domain is required")
        logger.info("Registering domain: %s", domain)
        return await self._post("/v4/domains", {"domain": {"domainName": domain}})
