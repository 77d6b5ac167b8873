"""Static website generation for published resumes."""

from resume_builder.website.generator import find_external_references, generate_website

__all__ = ["find_external_references", "generate_website"]
