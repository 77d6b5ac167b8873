"""Read and write resume documents as JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from resume_builder.models.resume import ResumeDocument

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_resume(path: str | Path) -> ResumeDocument:
    """Load a resume from ``.json`` / ``.yaml``.

    Both the snake_case layout written by ``save_resume`` and the camelCase
    layout of the web app's export are accepted.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Resume file not found: {p}")
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in _YAML_SUFFIXES:
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    return ResumeDocument.model_validate(data)


def save_resume(doc: ResumeDocument, path: str | Path) -> Path:
    """Write ``doc`` to ``path``; the suffix picks JSON or YAML."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = doc.model_dump(mode="json")
    if p.suffix.lower() in _YAML_SUFFIXES:
        p.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return p
