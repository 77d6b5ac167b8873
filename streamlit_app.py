"""Streamlit Web UI for the resume builder.

Left: form tabs (Personal / Experience / Education / Skills).
Right: live preview in the selected template, PDF download and publishing.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY", "NAMECOM_USERNAME", "NAMECOM_API_KEY"):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from resume_builder import editors
from resume_builder.clients.llm_client import LLMClient
from resume_builder.clients.registrar_client import RegistrarClient
from resume_builder.config import load_config
from resume_builder.errors import ResumeBuilderError
from resume_builder.export.pdf_renderer import pdf_filename, render_pdf
from resume_builder.models.resume import ResumeDocument, TemplateId, new_entry_id
from resume_builder.pipeline.assist import SuggestionAssistant
from resume_builder.pipeline.publication import PublicationFlow, PublishState
from resume_builder.pipeline.publisher import WebsitePublisher
from resume_builder.storage.resume_io import load_resume, save_resume
from resume_builder.storage.site_store import SiteStore
from resume_builder.templates.layouts import LAYOUTS
from resume_builder.templates.renderer import render_preview

RESUME_PATH = Path(os.environ.get("RESUME_BUILDER_FILE", "resume.json"))

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Resume Builder",
    page_icon=":page_facing_up:",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_config():
    return load_config()


def _resume() -> ResumeDocument:
    if "resume" not in st.session_state:
        if RESUME_PATH.exists():
            st.session_state.resume = load_resume(RESUME_PATH)
        else:
            st.session_state.resume = ResumeDocument.empty(id=new_entry_id())
    return st.session_state.resume


def _save() -> None:
    save_resume(_resume(), RESUME_PATH)


def _assistant() -> SuggestionAssistant:
    config = _get_config()
    return SuggestionAssistant(
        LLMClient(timeout=config.assist.timeout),
        model=config.assist.model,
        max_tokens=config.assist.max_tokens,
    )


def _flow() -> PublicationFlow:
    if "publish_flow" not in st.session_state:
        config = _get_config()
        registrar = RegistrarClient(
            api_url=config.registrar.api_url, timeout=config.registrar.timeout
        )
        store = SiteStore(config.storage.resolved_db_path)
        st.session_state.publish_flow = PublicationFlow(
            _resume(),
            registrar,
            WebsitePublisher(registrar, store),
            extensions=config.publish.extensions,
            extension=config.publish.default_extension,
            on_published=lambda doc: save_resume(doc, RESUME_PATH),
        )
    return st.session_state.publish_flow


# ---------------------------------------------------------------------------
# Form tabs
# ---------------------------------------------------------------------------


def _personal_tab(doc: ResumeDocument) -> None:
    info = doc.personal_info
    labels = {
        "full_name": "Full name",
        "title": "Professional title",
        "email": "Email",
        "phone": "Phone",
        "location": "Location",
    }
    for field, label in labels.items():
        value = st.text_input(label, value=getattr(info, field), key=f"pi_{field}")
        if value != getattr(info, field):
            editors.update_personal_info(doc, field, value)

    summary = st.text_area("Professional summary", value=info.summary, height=140, key="pi_summary")
    if summary != info.summary:
        editors.update_personal_info(doc, "summary", summary)

    if st.button("Generate summary with AI"):
        with st.spinner("AI is creating professional content for you..."):
            try:
                asyncio.run(_assistant().apply_summary_suggestion(doc))
                st.session_state.pop("pi_summary", None)
                st.rerun()
            except Exception as exc:
                logger.exception("AI suggestion failed")
                st.error(str(exc) or "Failed to generate AI content")


def _experience_tab(doc: ResumeDocument) -> None:
    if st.button("Add experience"):
        editors.add_experience(doc)
        st.rerun()

    for entry in list(doc.experiences):
        with st.container(border=True):
            cols = st.columns(2)
            position = cols[0].text_input("Position", entry.position, key=f"exp_pos_{entry.id}")
            company = cols[1].text_input("Company", entry.company, key=f"exp_co_{entry.id}")
            start = cols[0].text_input("Start (YYYY-MM)", entry.start_date, key=f"exp_start_{entry.id}")
            current = cols[1].checkbox("I currently work here", entry.current, key=f"exp_cur_{entry.id}")
            end = cols[1].text_input(
                "End (YYYY-MM)", entry.end_date, key=f"exp_end_{entry.id}", disabled=current
            )
            description = st.text_area(
                "Description", entry.description, height=120, key=f"exp_desc_{entry.id}"
            )
            editors.update_experience(
                doc,
                entry.id,
                position=position,
                company=company,
                start_date=start,
                end_date=end,
                current=current,
                description=description,
            )

            left, right = st.columns(2)
            if left.button("AI assist", key=f"exp_ai_{entry.id}"):
                with st.spinner("AI is creating professional content for you..."):
                    try:
                        asyncio.run(_assistant().apply_experience_suggestion(doc, entry.id))
                        st.session_state.pop(f"exp_desc_{entry.id}", None)
                        st.rerun()
                    except Exception as exc:
                        logger.exception("AI suggestion failed")
                        st.error(str(exc) or "Failed to generate AI content")
            if right.button("Remove", key=f"exp_rm_{entry.id}"):
                editors.remove_experience(doc, entry.id)
                st.rerun()


def _education_tab(doc: ResumeDocument) -> None:
    if st.button("Add education"):
        editors.add_education(doc)
        st.rerun()

    for entry in list(doc.education):
        with st.container(border=True):
            cols = st.columns(2)
            school = cols[0].text_input("School", entry.school, key=f"edu_school_{entry.id}")
            degree = cols[1].text_input("Degree", entry.degree, key=f"edu_degree_{entry.id}")
            field = st.text_input("Field of study", entry.field, key=f"edu_field_{entry.id}")
            start = cols[0].text_input("Start (YYYY-MM)", entry.start_date, key=f"edu_start_{entry.id}")
            end = cols[1].text_input("End (YYYY-MM)", entry.end_date, key=f"edu_end_{entry.id}")
            editors.update_education(
                doc,
                entry.id,
                school=school,
                degree=degree,
                field=field,
                start_date=start,
                end_date=end,
            )
            if st.button("Remove", key=f"edu_rm_{entry.id}"):
                editors.remove_education(doc, entry.id)
                st.rerun()


def _skills_tab(doc: ResumeDocument) -> None:
    with st.form("add_skill", clear_on_submit=True):
        skill = st.text_input("Add a skill", placeholder="e.g., JavaScript, Project Management, Design")
        if st.form_submit_button("Add") and editors.add_skill(doc, skill):
            st.rerun()

    if not doc.skills:
        st.caption("No skills added yet")
    for skill in list(doc.skills):
        if st.button(f"{skill}  ✕", key=f"skill_rm_{skill}"):
            editors.remove_skill(doc, skill)
            st.rerun()


# ---------------------------------------------------------------------------
# Publishing
# ---------------------------------------------------------------------------


def _publish_panel(doc: ResumeDocument) -> None:
    try:
        flow = _flow()
    except ValueError as exc:
        st.warning(f"Publishing is unavailable: {exc}")
        return
    with st.expander("Publish as a website", expanded=flow.state != PublishState.IDLE):
        cols = st.columns([3, 1])
        raw = cols[0].text_input("Choose your domain", value=flow.label, placeholder="yourname")
        if raw != flow.label:
            flow.set_label(raw)
        ext = cols[1].radio("Extension", flow.extensions, index=flow.extensions.index(flow.extension))
        if ext != flow.extension:
            flow.set_extension(ext)
        if flow.label:
            st.caption(f"Your domain: **{flow.domain}**")

        if st.button("Check availability", disabled=not flow.label):
            with st.spinner("Checking..."):
                try:
                    asyncio.run(flow.check_domain())
                except ResumeBuilderError as exc:
                    st.error(str(exc))

        if flow.state == PublishState.DOMAIN_AVAILABLE:
            st.success(f"✓ {flow.domain} is available!")
            if st.button("Publish website", type="primary"):
                with st.spinner("Publishing..."):
                    try:
                        result = asyncio.run(flow.publish())
                        st.success(f"Your resume is now published at {result.website_url}")
                    except Exception as exc:
                        logger.exception("Publishing failed")
                        st.error(str(exc) or "Failed to publish website")
        elif flow.state == PublishState.DOMAIN_UNAVAILABLE:
            st.error(f"✗ {flow.domain} is taken. Try another name.")
        elif flow.state == PublishState.FAILED and flow.error:
            st.error(flow.error)

        if doc.published_domain:
            st.caption(f"Currently published at https://{doc.published_domain}")


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


doc = _resume()

with st.sidebar:
    st.title("Resume Builder")
    title = st.text_input("Title", value=doc.title)
    if title != doc.title:
        editors.set_title(doc, title)
    names = [t.value for t in TemplateId]
    template = st.selectbox(
        "Template",
        names,
        index=names.index(doc.template_id.value),
        format_func=lambda t: LAYOUTS[TemplateId(t)].display_name,
    )
    if template != doc.template_id.value:
        editors.set_template(doc, template)
    if st.button("Save", type="primary"):
        _save()
        st.toast("Your resume has been saved successfully.")

form_col, preview_col = st.columns(2)

with form_col:
    tab_personal, tab_exp, tab_edu, tab_skills = st.tabs(
        ["Personal", "Experience", "Education", "Skills"]
    )
    with tab_personal:
        _personal_tab(doc)
    with tab_exp:
        _experience_tab(doc)
    with tab_edu:
        _education_tab(doc)
    with tab_skills:
        _skills_tab(doc)

with preview_col:
    st.subheader("Live Preview")
    components.html(render_preview(doc), height=900, scrolling=True)

    try:
        pdf_bytes = render_pdf(doc, page_size=_get_config().export.page_size)
        st.download_button(
            "Download as a PDF",
            data=pdf_bytes,
            file_name=pdf_filename(doc),
            mime="application/pdf",
        )
    except Exception:
        logger.exception("PDF generation failed")
        st.error("Failed to generate PDF. Please try again.")

    _publish_panel(doc)
