"""Streamlit Web UI for job-tailor.

Five-step wizard: upload CV -> job description -> ATS analysis ->
(checkout) tailored assets -> outreach. The view is a switch over
``controller.state.step``; every button calls a controller method.
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets -> os.environ so the LLM client can read them
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from job_tailor.config import load_config
from job_tailor.export.pdf_renderer import PdfRenderer
from job_tailor.export.word_renderer import WordRenderer
from job_tailor.parsers.document_importer import ACCEPTED_EXTENSIONS
from job_tailor.wizard.controller import WizardController
from job_tailor.wizard.editor import find_selection
from job_tailor.wizard.factory import build_controller
from job_tailor.wizard.payment import PaymentDetails
from job_tailor.wizard.state import PROGRESS_STEPS, Step, progress_fraction

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Job Tailor",
    page_icon=":briefcase:",
    layout="centered",
)

config = load_config()


def _get_controller() -> WizardController:
    if "controller" not in st.session_state:
        st.session_state.controller = build_controller(config)
    return st.session_state.controller


class SessionClipboard:
    """Holds copied text for the copy-able code block rendered below it."""

    def copy(self, text: str) -> None:
        st.session_state["clipboard"] = text


def _run(coro) -> bool:
    return asyncio.run(coro)


controller = _get_controller()
state = controller.state

# ---------------------------------------------------------------------------
# Header: brand link + progress indicator + error banner
# ---------------------------------------------------------------------------

if st.button("Job Tailor", type="tertiary", key="brand"):
    controller.go_home()
    st.rerun()

if state.step != Step.LANDING:
    labels = [label for _, label in PROGRESS_STEPS]
    current = next(label for s, label in PROGRESS_STEPS if s == state.step)
    st.progress(progress_fraction(state.step), text=f"{current}  ·  " + " → ".join(labels))

if state.error:
    st.error(state.error)

# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _landing() -> None:
    st.title("Beat the ATS. Land the interview.")
    st.markdown(
        "Upload your master CV, paste a job description and get an instant "
        "ATS compatibility score. Unlock a tailored CV, cover letter and "
        "outreach email in one click."
    )
    if st.button("Get started", type="primary"):
        controller.start()
        st.rerun()


def _upload_cv() -> None:
    st.header("Step 1: Upload Your Master CV")
    st.caption("We use your master file as the base for all tailored variations.")

    uploaded = st.file_uploader(
        "CV file",
        type=list(ACCEPTED_EXTENSIONS),
        help=f"PDF, DOCX, or Text (Max {config.upload.max_mb}MB)",
        disabled=state.busy,
    )
    if uploaded is not None and st.session_state.get("imported_file_id") != uploaded.file_id:
        if uploaded.size > config.upload.max_mb * 1024 * 1024:
            st.warning(f"File is larger than {config.upload.max_mb}MB; import may be slow.")
        with st.spinner("Reading file..."):
            _run(controller.import_resume(uploaded.name, uploaded.getvalue()))
        st.session_state["imported_file_id"] = uploaded.file_id
        st.rerun()

    if state.resume is not None:
        st.success(f"Loaded: {state.resume.file_name}")
        with st.expander("Preview extracted text"):
            st.text(state.resume.content[:3000])

    if st.button("Continue", type="primary", disabled=not state.has_resume or state.busy):
        controller.continue_to_job_details()
        st.rerun()


def _job_details() -> None:
    st.header("The Target Role")
    st.caption("Paste the full job description. The more detail, the better the tailoring.")

    current = state.job_posting.text if state.job_posting else ""
    text = st.text_area(
        "Job description",
        value=current,
        height=300,
        placeholder="Paste job description here...",
    )
    if text != current:
        controller.update_job_text(text)

    col_back, col_next = st.columns(2)
    if col_back.button("Back"):
        controller.back_to_upload()
        st.rerun()
    if col_next.button("Analyze Match", type="primary", disabled=not text.strip() or state.busy):
        with st.spinner("Analyzing ATS compatibility..."):
            _run(controller.analyze())
        st.rerun()


def _editor() -> None:
    st.subheader("Refine your CV")
    if st.session_state.pop("editor_sync", False) or "editor_area" not in st.session_state:
        st.session_state["editor_area"] = state.editor_text
    text = st.text_area("CV", height=400, key="editor_area")
    controller.update_editor_text(text)

    fragment = st.text_input(
        "Text to format",
        help="Paste the exact passage to format; the first match is used.",
    )
    if "last_selection" in st.session_state:
        start, end = st.session_state.pop("last_selection")
        st.caption(f"Formatted characters {start}-{end}.")
    cols = st.columns(3)
    for col, kind, label in zip(cols, ("bold", "italic", "bullet"), ("Bold", "Italic", "Bullet list")):
        if col.button(label, key=f"fmt_{kind}"):
            selection = find_selection(state.editor_text, fragment)
            if selection is None:
                st.warning("Passage not found in the CV text.")
            else:
                new_sel = controller.format_selection(kind, selection)
                st.session_state["editor_sync"] = True
                st.session_state["last_selection"] = (new_sel.start, new_sel.end)
                st.rerun()

    col_cancel, col_save = st.columns(2)
    if col_cancel.button("Cancel"):
        controller.cancel_editor()
        st.rerun()
    if col_save.button("Save & Update Score", type="primary", disabled=state.busy):
        with st.spinner("Re-scoring..."):
            _run(controller.save_editor())
        st.rerun()


@st.dialog("Secure Checkout")
def _payment_dialog() -> None:
    st.caption("Tailored CV, cover letter and outreach email.")
    with st.form("payment"):
        details = PaymentDetails(
            cardholder_name=st.text_input("Cardholder Name", placeholder="John Doe"),
            card_number=st.text_input("Card Number", placeholder="0000 0000 0000 0000"),
            expiry=st.text_input("Expiry", placeholder="MM/YY"),
            cvc=st.text_input("CVC", placeholder="123"),
        )
        submitted = st.form_submit_button(
            f"Pay {config.payment.price_label}",
            type="primary",
            disabled=state.processing_payment,
        )
    if submitted:
        with st.spinner("Verifying..."):
            _run(controller.submit_payment(details))
        st.rerun()
    if st.button("Close"):
        controller.close_payment()
        st.rerun()


def _analysis() -> None:
    analysis = state.analysis
    st.header("ATS Analysis")
    st.metric("ATS compatibility score", f"{analysis.display_score} / 100")
    st.progress(analysis.display_score / 100)

    if state.editing:
        _editor()
    elif st.button("Edit CV"):
        controller.open_editor()
        st.session_state["editor_sync"] = True
        st.rerun()

    col_missing, col_strengths = st.columns(2)
    with col_missing:
        st.subheader("Missing keywords")
        for kw in analysis.missing_keywords:
            st.markdown(f"- {kw}")
    with col_strengths:
        st.subheader("Strengths")
        for s in analysis.strengths:
            st.markdown(f"- {s}")

    st.subheader("Suggestions")
    for i, s in enumerate(analysis.suggestions, 1):
        st.markdown(f"{i}. {s}")

    col_back, col_next = st.columns(2)
    if col_back.button("Modify JD"):
        controller.modify_job_description()
        st.rerun()
    if col_next.button(
        "Generate tailored assets",
        type="primary",
        disabled=state.busy or state.editing,
    ):
        controller.open_payment()
        st.rerun()

    if state.payment_modal_open:
        _payment_dialog()


def _download_buttons(kind: str, text: str) -> None:
    pdf = controller.export_document(kind, PdfRenderer(header_threshold=config.export.header_threshold))
    doc = controller.export_document(kind, WordRenderer())
    col_pdf, col_doc = st.columns(2)
    col_pdf.download_button("PDF", data=pdf.data, file_name=pdf.filename, mime=pdf.mime_type, key=f"{kind}_pdf")
    col_doc.download_button("Word", data=doc.data, file_name=doc.filename, mime=doc.mime_type, key=f"{kind}_doc")


def _tailoring() -> None:
    bundle = state.tailored
    st.header("Tailored Assets")

    tab_cv, tab_letter = st.tabs(["Tailored CV", "Cover Letter"])
    with tab_cv:
        st.markdown(bundle.cv)
        _download_buttons("cv", bundle.cv)
    with tab_letter:
        st.markdown(bundle.cover_letter)
        _download_buttons("cover_letter", bundle.cover_letter)

    col_back, col_next = st.columns(2)
    if col_back.button("Back to Analysis"):
        controller.back_to_analysis()
        st.rerun()
    if col_next.button("Continue to Outreach", type="primary"):
        controller.continue_to_outreach()
        st.rerun()


def _outreach() -> None:
    st.header("Send Outreach")
    st.text(state.tailored.email_body)

    col_copy, col_mail = st.columns(2)
    if col_copy.button("Copy message"):
        controller.copy_outreach_email(SessionClipboard())
    col_mail.link_button("Open in mail app", controller.mailto_url())

    if "clipboard" in st.session_state:
        st.code(st.session_state["clipboard"], language=None)
        st.caption("Use the copy icon above to place the message on your clipboard.")

    if st.button("Edit Assets"):
        controller.back_to_tailoring()
        st.rerun()


if state.step == Step.LANDING:
    _landing()
elif state.step == Step.UPLOAD_CV:
    _upload_cv()
elif state.step == Step.JOB_DETAILS:
    _job_details()
elif state.step == Step.ANALYSIS and state.analysis is not None:
    _analysis()
elif state.step == Step.TAILORING and state.tailored is not None:
    _tailoring()
elif state.step == Step.OUTREACH and state.tailored is not None:
    _outreach()
else:
    logger.warning("Step %s has no data to render; returning home", state.step)
    controller.go_home()
    st.rerun()
