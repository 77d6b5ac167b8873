"""Serve published websites by domain.

Stored pages are sent byte-for-byte as complete documents, never spliced
into another page, and under a sandboxing Content-Security-Policy so nothing
in them can run script or load remote resources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from resume_builder.errors import ResumeBuilderError
from resume_builder.storage.site_store import SiteStore

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'none'; style-src 'unsafe-inline'; img-src data:; sandbox"
)

_env = Environment(
    loader=FileSystemLoader(str(Path(__file__).parent)),
    autoescape=True,
)


@dataclass
class SiteResponse:
    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


def _base_headers(length: int) -> dict[str, str]:
    return {
        "Content-Type": "text/html; charset=utf-8",
        "Content-Length": str(length),
        "Content-Security-Policy": CONTENT_SECURITY_POLICY,
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "no-referrer",
    }


def not_found_page(domain: str) -> str:
    return _env.get_template("not_found.html").render(domain=domain)


def unavailable_page(domain: str) -> str:
    return _env.get_template("unavailable.html").render(domain=domain)


def lookup_site(store: SiteStore, domain: str) -> SiteResponse:
    """Return the stored page for ``domain`` or a "Website Not Found" page.

    A storage failure is answered with a 500 page under the same headers.
    """
    try:
        site = store.get(domain) if domain else None
    except ResumeBuilderError:
        logger.error("Could not load website for %s", domain, exc_info=True)
        body = unavailable_page(domain).encode("utf-8")
        return SiteResponse(500, body, _base_headers(len(body)))
    if site is None:
        body = not_found_page(domain).encode("utf-8")
        return SiteResponse(404, body, _base_headers(len(body)))
    body = site.html_content.encode("utf-8")
    return SiteResponse(200, body, _base_headers(len(body)))


def domain_from_request(host: str | None, path: str) -> str:
    """Pick the domain from ``/<domain>`` or, failing that, the Host header."""
    segment = path.split("?", 1)[0].strip("/").split("/", 1)[0]
    if segment:
        return segment.lower()
    return (host or "").split(":", 1)[0].lower()


def make_handler(store: SiteStore) -> type[BaseHTTPRequestHandler]:
    class PublishedSiteHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            domain = domain_from_request(self.headers.get("Host"), self.path)
            response = lookup_site(store, domain)
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.end_headers()
            self.wfile.write(response.body)

        def log_message(self, format: str, *args) -> None:
            logger.info("%s - %s", self.address_string(), format % args)

    return PublishedSiteHandler


def serve(store: SiteStore, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve published websites until interrupted."""
    server = ThreadingHTTPServer((host, port), make_handler(store))
    logger.info("Serving published websites on http://%s:%d/", host, port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
