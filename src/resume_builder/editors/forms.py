"""In-place edits applied by the builder's form tabs.

Entry ids are assigned on insert and never change; removal does not renumber
the remaining entries.
"""

from __future__ import annotations

from datetime import datetime

from resume_builder.models.resume import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
    TemplateId,
    resolve_template_id,
)

PERSONAL_FIELDS = tuple(PersonalInfo.model_fields)


def _touch(doc: ResumeDocument) -> None:
    doc.updated_at = datetime.now()


def _find(entries: list, entry_id: str, kind: str):
    for entry in entries:
        if entry.id == entry_id:
            return entry
    raise KeyError(f"No {kind} entry with id {entry_id!r}")


def _apply(entry, fields: dict, kind: str) -> bool:
    """Set ``fields`` on ``entry``; return whether any value changed."""
    if "id" in fields:
        raise ValueError(f"{kind} id cannot be changed")
    for name in fields:
        if name not in type(entry).model_fields:
            raise ValueError(f"Unknown {kind} field: {name}")
    changed = False
    for name, value in fields.items():
        if getattr(entry, name) != value:
            setattr(entry, name, value)
            changed = True
    return changed


def update_personal_info(doc: ResumeDocument, field: str, value: str) -> PersonalInfo:
    if field not in PERSONAL_FIELDS:
        raise ValueError(f"Unknown personal info field: {field}")
    setattr(doc.personal_info, field, value)
    _touch(doc)
    return doc.personal_info


def set_title(doc: ResumeDocument, title: str) -> None:
    doc.title = title
    _touch(doc)


def set_template(doc: ResumeDocument, template_id: TemplateId | str | None) -> TemplateId:
    doc.template_id = resolve_template_id(template_id)
    _touch(doc)
    return doc.template_id


# --- Experience ---


def add_experience(doc: ResumeDocument, **fields) -> ExperienceEntry:
    """Append a new experience entry with a fresh id."""
    if "id" in fields:
        raise ValueError("experience id is assigned automatically")
    entry = ExperienceEntry(**fields)
    doc.experiences.append(entry)
    _touch(doc)
    return entry


def update_experience(doc: ResumeDocument, entry_id: str, **fields) -> ExperienceEntry:
    entry = _find(doc.experiences, entry_id, "experience")
    if _apply(entry, fields, "experience"):
        _touch(doc)
    return entry


def remove_experience(doc: ResumeDocument, entry_id: str) -> ExperienceEntry:
    entry = _find(doc.experiences, entry_id, "experience")
    doc.experiences = [e for e in doc.experiences if e.id != entry_id]
    _touch(doc)
    return entry


# --- Education ---


def add_education(doc: ResumeDocument, **fields) -> EducationEntry:
    """Append a new education entry with a fresh id."""
    if "id" in fields:
        raise ValueError("education id is assigned automatically")
    entry = EducationEntry(**fields)
    doc.education.append(entry)
    _touch(doc)
    return entry


def update_education(doc: ResumeDocument, entry_id: str, **fields) -> EducationEntry:
    entry = _find(doc.education, entry_id, "education")
    if _apply(entry, fields, "education"):
        _touch(doc)
    return entry


def remove_education(doc: ResumeDocument, entry_id: str) -> EducationEntry:
    entry = _find(doc.education, entry_id, "education")
    doc.education = [e for e in doc.education if e.id != entry_id]
    _touch(doc)
    return entry


# --- Skills ---


def add_skill(doc: ResumeDocument, skill: str) -> bool:
    """Add a skill. Blank and duplicate (case-sensitive) skills are ignored."""
    skill = skill.strip()
    if not skill or skill in doc.skills:
        return False
    doc.skills.append(skill)
    _touch(doc)
    return True


def remove_skill(doc: ResumeDocument, skill: str) -> bool:
    if skill not in doc.skills:
        return False
    doc.skills = [s for s in doc.skills if s != skill]
    _touch(doc)
    return True
