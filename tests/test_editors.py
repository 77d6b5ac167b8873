"""Tests for form editors."""

from datetime import datetime

import pytest

from resume_builder import editors
from resume_builder.models.resume import ResumeDocument, TemplateId

STAMP = datetime(2024, 1, 1, 12, 0)


@pytest.fixture
def doc() -> ResumeDocument:
    return ResumeDocument.empty(id="r1")


class TestPersonalInfo:
    def test_update_field(self, doc):
        before = doc.updated_at
        editors.update_personal_info(doc, "full_name", "Jane Doe")
        assert doc.personal_info.full_name == "Jane Doe"
        assert doc.updated_at >= before

    def test_unknown_field(self, doc):
        with pytest.raises(ValueError, match="Unknown personal info field"):
            editors.update_personal_info(doc, "age", "30")

    def test_set_title(self, doc):
        editors.set_title(doc, "My CV")
        assert doc.title == "My CV"

    def test_set_template(self, doc):
        assert editors.set_template(doc, "classic") == TemplateId.CLASSIC
        assert editors.set_template(doc, "unknown") == TemplateId.MODERN


class TestExperience:
    def test_add_two_remove_first(self, doc):
        first = editors.add_experience(doc, company="Acme")
        second = editors.add_experience(doc, company="Globex")
        assert first.id != second.id

        editors.remove_experience(doc, first.id)

        assert [e.id for e in doc.experiences] == [second.id]
        assert doc.experiences[0].company == "Globex"

    def test_update(self, doc):
        entry = editors.add_experience(doc)
        editors.update_experience(doc, entry.id, position="Dev", current=True)
        assert doc.experiences[0].position == "Dev"
        assert doc.experiences[0].current is True

    def test_update_unknown_id(self, doc):
        with pytest.raises(KeyError):
            editors.update_experience(doc, "missing", company="x")

    def test_remove_unknown_id(self, doc):
        with pytest.raises(KeyError):
            editors.remove_experience(doc, "missing")

    def test_id_is_immutable(self, doc):
        entry = editors.add_experience(doc)
        with pytest.raises(ValueError, match="cannot be changed"):
            editors.update_experience(doc, entry.id, id="other")
        with pytest.raises(ValueError, match="assigned automatically"):
            editors.add_experience(doc, id="mine")

    def test_unknown_field(self, doc):
        entry = editors.add_experience(doc)
        with pytest.raises(ValueError, match="Unknown experience field"):
            editors.update_experience(doc, entry.id, salary="lots")

    def test_unchanged_values_keep_updated_at(self, doc):
        entry = editors.add_experience(doc, company="Acme", position="Dev")
        doc.updated_at = STAMP
        editors.update_experience(doc, entry.id, company="Acme", position="Dev", current=False)
        assert doc.updated_at == STAMP

        editors.update_experience(doc, entry.id, company="Acme", position="Lead")
        assert doc.updated_at > STAMP


class TestEducation:
    def test_add_update_remove(self, doc):
        entry = editors.add_education(doc, school="MIT")
        editors.update_education(doc, entry.id, degree="BSc", field="CS")
        assert doc.education[0].degree == "BSc"
        removed = editors.remove_education(doc, entry.id)
        assert removed.school == "MIT"
        assert doc.education == []

    def test_unknown_id(self, doc):
        with pytest.raises(KeyError):
            editors.update_education(doc, "missing", school="x")

    def test_unchanged_values_keep_updated_at(self, doc):
        entry = editors.add_education(doc, school="MIT", degree="BSc")
        doc.updated_at = STAMP
        editors.update_education(doc, entry.id, school="MIT", degree="BSc", field="")
        assert doc.updated_at == STAMP


class TestSkills:
    def test_add_strips(self, doc):
        assert editors.add_skill(doc, "  Python  ") is True
        assert doc.skills == ["Python"]

    def test_blank_ignored(self, doc):
        assert editors.add_skill(doc, "   ") is False
        assert doc.skills == []

    def test_duplicate_ignored(self, doc):
        editors.add_skill(doc, "Python")
        assert editors.add_skill(doc, "Python") is False
        assert doc.skills == ["Python"]

    def test_case_sensitive(self, doc):
        editors.add_skill(doc, "Python")
        assert editors.add_skill(doc, "python") is True
        assert doc.skills == ["Python", "python"]

    def test_remove(self, doc):
        editors.add_skill(doc, "Go")
        editors.add_skill(doc, "Rust")
        assert editors.remove_skill(doc, "Go") is True
        assert editors.remove_skill(doc, "Go") is False
        assert doc.skills == ["Rust"]
