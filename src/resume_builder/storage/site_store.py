"""SQLite store for published resume websites, keyed by domain."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from resume_builder.errors import ExternalServiceError
from resume_builder.models.publication import PublishedSite
from resume_builder.models.resume import TemplateId

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".resume-builder" / "sites.db"

SERVICE = "storage"


class SiteStore:
    """SQLite-backed store of generated website HTML."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS published_websites (
                    domain TEXT PRIMARY KEY,
                    resume_id TEXT NOT NULL,
                    html_content TEXT NOT NULL,
                    template_id TEXT NOT NULL,
                    published_at TEXT NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    @staticmethod
    def _key(domain: str) -> str:
        return domain.strip().lower()

    def put(self, site: PublishedSite) -> None:
        """Store (or replace) the website for ``site.domain``."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """INSERT OR REPLACE INTO published_websites
                       (domain, resume_id, html_content, template_id, published_at)
                       VALUES (?, ?, ?, ?, ?)""",
                    (
                        self._key(site.domain),
                        site.resume_id,
                        site.html_content,
                        site.template_id.value,
                        site.published_at.isoformat(),
                    ),
                )
        except sqlite3.Error as exc:
            logger.error("Failed to save website %s", site.domain, exc_info=True)
            raise ExternalServiceError(SERVICE, f"Failed to save website: {exc}") from exc

    def get(self, domain: str) -> PublishedSite | None:
        """Return the stored website for ``domain``, or None."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """SELECT domain, resume_id, html_content, template_id, published_at
                       FROM published_websites WHERE domain = ?""",
                    (self._key(domain),),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.error("Failed to load website %s", domain, exc_info=True)
            raise ExternalServiceError(SERVICE, f"Failed to load website: {exc}") from exc

        if row is None:
            return None

        domain_, resume_id, html_content, template_id, published_at = row
        return PublishedSite(
            domain=domain_,
            resume_id=resume_id,
            html_content=html_content,
            template_id=TemplateId(template_id),
            published_at=datetime.fromisoformat(published_at),
        )

    def delete(self, domain: str) -> bool:
        """Delete a stored website. Returns True if a row was removed."""
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM published_websites WHERE domain = ?", (self._key(domain),)
                )
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            logger.error("Failed to delete website %s", domain, exc_info=True)
            raise ExternalServiceError(SERVICE, f"Failed to delete website: {exc}") from exc

    def list_domains(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT domain FROM published_websites ORDER BY domain"
            ).fetchall()
        return [r[0] for r in rows]
