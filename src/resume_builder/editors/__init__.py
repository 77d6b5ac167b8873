"""Form-level edits of a ResumeDocument."""

from resume_builder.editors.forms import (
    PERSONAL_FIELDS,
    add_education,
    add_experience,
    add_skill,
    remove_education,
    remove_experience,
    remove_skill,
    set_template,
    set_title,
    update_education,
    update_experience,
    update_personal_info,
)

__all__ = [
    "PERSONAL_FIELDS",
    "add_education",
    "add_experience",
    "add_skill",
    "remove_education",
    "remove_experience",
    "remove_skill",
    "set_template",
    "set_title",
    "update_education",
    "update_experience",
    "update_personal_info",
]
