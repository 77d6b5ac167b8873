"""Hosting of published resume websites."""

from resume_builder.viewer.server import SiteResponse, lookup_site, serve

__all__ = ["SiteResponse", "lookup_site", "serve"]
