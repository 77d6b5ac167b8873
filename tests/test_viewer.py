"""Tests for serving published websites."""

import threading
import urllib.request
from datetime import datetime, timezone
from http.server import ThreadingHTTPServer
from unittest.mock import MagicMock
from urllib.error import HTTPError

import pytest

from resume_builder.errors import ExternalServiceError
from resume_builder.models.publication import PublishedSite
from resume_builder.models.resume import TemplateId
from resume_builder.viewer.server import (
    CONTENT_SECURITY_POLICY,
    domain_from_request,
    lookup_site,
    make_handler,
)

STORED_HTML = "<!DOCTYPE html><html><body><h1>Jane &amp; Co</h1><p>héllo</p></body></html>"


@pytest.fixture
def store_with_site(site_store):
    site_store.put(PublishedSite(
        domain="jane.me",
        resume_id="resume-1",
        html_content=STORED_HTML,
        template_id=TemplateId.MODERN,
        published_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    ))
    return site_store


class TestLookupSite:
    def test_returns_stored_html_verbatim(self, store_with_site):
        response = lookup_site(store_with_site, "jane.me")
        assert response.status == 200
        assert response.body == STORED_HTML.encode("utf-8")
        assert response.headers["Content-Type"] == "text/html; charset=utf-8"
        assert response.headers["Content-Length"] == str(len(response.body))

    def test_sandbox_policy(self, store_with_site):
        headers = lookup_site(store_with_site, "jane.me").headers
        assert headers["Content-Security-Policy"] == CONTENT_SECURITY_POLICY
        assert "sandbox" in CONTENT_SECURITY_POLICY
        assert "script-src" not in CONTENT_SECURITY_POLICY
        assert headers["X-Content-Type-Options"] == "nosniff"

    def test_not_found(self, site_store):
        response = lookup_site(site_store, "nobody.me")
        assert response.status == 404
        assert b"Website Not Found" in response.body
        assert b"nobody.me" in response.body

    def test_not_found_escapes_domain(self, site_store):
        response = lookup_site(site_store, "<script>x</script>")
        assert b"<script>x</script>" not in response.body

    def test_blank_domain(self, site_store):
        response = lookup_site(site_store, "")
        assert response.status == 404
        assert b"this address" in response.body

    def test_storage_failure_is_a_500(self, site_store):
        site_store.get = MagicMock(side_effect=ExternalServiceError("storage", "disk I/O error"))
        response = lookup_site(site_store, "jane.me")
        assert response.status == 500
        assert b"Website Unavailable" in response.body
        assert b"disk I/O error" not in response.body
        assert response.headers["Content-Security-Policy"] == CONTENT_SECURITY_POLICY
        assert response.headers["Content-Length"] == str(len(response.body))


class TestDomainFromRequest:
    @pytest.mark.parametrize(
        "host, path, expected",
        [
            ("localhost:8000", "/jane.me", "jane.me"),
            ("localhost:8000", "/Jane.ME/about?x=1", "jane.me"),
            ("jane.me:8000", "/", "jane.me"),
            ("JANE.me", "", "jane.me"),
            (None, "/", ""),
        ],
    )
    def test_domain(self, host, path, expected):
        assert domain_from_request(host, path) == expected


class TestHandler:
    def test_serves_over_http(self, store_with_site):
        server = ThreadingHTTPServer(("127.0.0.1", 0), make_handler(store_with_site))
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        base = f"http://127.0.0.1:{server.server_address[1]}"
        try:
            with urllib.request.urlopen(f"{base}/jane.me") as resp:
                assert resp.status == 200
                assert resp.read() == STORED_HTML.encode("utf-8")
                assert resp.headers["Content-Security-Policy"] == CONTENT_SECURITY_POLICY

            with pytest.raises(HTTPError) as exc_info:
                urllib.request.urlopen(f"{base}/nobody.me")
            assert exc_info.value.code == 404
        finally:
            server.shutdown()
            server.server_close()

    def test_storage_failure_over_http(self, site_store):
        site_store.get = MagicMock(side_effect=ExternalServiceError("storage", "database is locked"))
        server = ThreadingHTTPServer(("127.0.0.1", 0), make_handler(site_store))
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        try:
            with pytest.raises(HTTPError) as exc_info:
                urllib.request.urlopen(f"http://127.0.0.1:{server.server_address[1]}/jane.me")
            assert exc_info.value.code == 500
            assert exc_info.value.headers["Content-Security-Policy"] == CONTENT_SECURITY_POLICY
        finally:
            server.shutdown()
            server.server_close()
