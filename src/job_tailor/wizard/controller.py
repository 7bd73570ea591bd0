"""Wizard controller: owns the application state and every transition."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager

from job_tailor.clients.analysis_client import AnalysisClient
from job_tailor.clients.tailoring_client import TailoringClient
from job_tailor.errors import (
    AnalysisError,
    DocumentImportError,
    PaymentDetailsError,
    TailoringError,
)
from job_tailor.export.base import DocumentRenderer, ExportedFile
from job_tailor.logging.models import UsageLog
from job_tailor.logging.usage_store import UsageStore
from job_tailor.models.analysis import AnalysisResult
from job_tailor.models.job import JobPosting
from job_tailor.models.resume import ResumeDocument
from job_tailor.parsers.document_importer import DocumentImporter
from job_tailor.store.document_store import DocumentStore
from job_tailor.wizard import editor
from job_tailor.wizard.outreach import Clipboard, build_mailto_url
from job_tailor.wizard.payment import PaymentDetails, PaymentGate
from job_tailor.wizard.state import Step, WizardState

logger = logging.getLogger(__name__)

EXPORT_STEMS = {
    "cv": "Tailored_CV",
    "cover_letter": "Cover_Letter",
    "email": "Outreach_Email",
}


class WizardController:
    """Drives the six-step wizard.

    Transition methods return True when the step changed and False when
    the call was a blocked no-op. Async operations (import, analysis,
    payment, tailoring) are mutually exclusive: while one is in flight
    ``state.busy`` is set and every other trigger is ignored.
    """

    def __init__(
        self,
        store: DocumentStore,
        analysis_client: AnalysisClient,
        tailoring_client: TailoringClient,
        *,
        importer: DocumentImporter | None = None,
        payment: PaymentGate | None = None,
        usage_store: UsageStore | None = None,
        session_id: str = "anonymous",
    ):
        self.store = store
        self.analysis_client = analysis_client
        self.tailoring_client = tailoring_client
        self.importer = importer or DocumentImporter()
        self.payment = payment or PaymentGate()
        self.usage_store = usage_store
        self.session_id = session_id
        self.state = WizardState(
            resume=store.load_resume(),
            job_posting=store.load_job_posting(),
        )

    # ------------------------------------------------------------------
    # Setters (the only mutation path for persisted entities)
    # ------------------------------------------------------------------

    def set_resume(self, resume: ResumeDocument | None) -> None:
        self.state.resume = resume
        self.store.save_resume(resume)

    def set_job_posting(self, posting: JobPosting | None) -> None:
        self.state.job_posting = posting
        self.store.save_job_posting(posting)

    def update_job_text(self, text: str) -> None:
        current = self.state.job_posting
        if current is None:
            self.set_job_posting(JobPosting(text=text))
        else:
            self.set_job_posting(current.model_copy(update={"text": text}))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_home(self) -> bool:
        self._leave_analysis()
        return self._go(Step.LANDING)

    def start(self) -> bool:
        if self.state.step != Step.LANDING:
            return False
        return self._go(Step.UPLOAD_CV)

    def continue_to_job_details(self) -> bool:
        if self.state.step != Step.UPLOAD_CV or self.state.busy or not self.state.has_resume:
            return False
        return self._go(Step.JOB_DETAILS)

    def back_to_upload(self) -> bool:
        if self.state.step != Step.JOB_DETAILS:
            return False
        return self._go(Step.UPLOAD_CV)

    def modify_job_description(self) -> bool:
        if self.state.step != Step.ANALYSIS:
            return False
        self._leave_analysis()
        return self._go(Step.JOB_DETAILS)

    def back_to_analysis(self) -> bool:
        if self.state.step != Step.TAILORING or self.state.analysis is None:
            return False
        return self._go(Step.ANALYSIS)

    def continue_to_outreach(self) -> bool:
        if self.state.step != Step.TAILORING or self.state.tailored is None:
            return False
        return self._go(Step.OUTREACH)

    def back_to_tailoring(self) -> bool:
        if self.state.step != Step.OUTREACH:
            return False
        return self._go(Step.TAILORING)

    def _go(self, step: Step) -> bool:
        if self.state.step == step:
            return False
        logger.debug("Step %s -> %s", self.state.step.value, step.value)
        self.state.step = step
        return True

    def _leave_analysis(self) -> None:
        """Drop the editor buffer and checkout dialog scoped to one Analysis visit."""
        self.state.editing = False
        self.state.editor_text = ""
        self.state.payment_modal_open = False

    # ------------------------------------------------------------------
    # Async operations
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _operation(self):
        self.state.busy = True
        self.state.error = None
        try:
            yield
        finally:
            self.state.busy = False

    async def import_resume(self, file_name: str, data: bytes) -> bool:
        """Replace the résumé with the text extracted from an uploaded file."""
        if self.state.busy:
            return False
        async with self._operation():
            try:
                text = await asyncio.to_thread(self.importer.extract, file_name, data)
            except DocumentImportError as e:
                logger.exception("Resume import failed: %s", file_name)
                self.state.error = f"Failed to read file: {e}"
                return False
            self.set_resume(ResumeDocument(content=text, file_name=file_name))
            return True

    async def analyze(self) -> bool:
        """Score the stored résumé and advance to the analysis step."""
        if (
            self.state.busy
            or self.state.step != Step.JOB_DETAILS
            or not self.state.has_resume
            or not self.state.has_job_text
        ):
            return False
        async with self._operation():
            result = await self._run_analysis(self.state.resume.content)
            if result is None:
                return False
            self.state.analysis = result
            self._leave_analysis()
            return self._go(Step.ANALYSIS)

    async def _run_analysis(self, resume_text: str) -> AnalysisResult | None:
        started = time.monotonic()
        try:
            result = await self.analysis_client.analyze(resume_text, self.state.job_posting.text)
        except AnalysisError as e:
            logger.exception("Analysis failed")
            self._record_usage("analysis", self.analysis_client, started, error=str(e))
            self.state.error = f"Failed to analyze documents: {e}"
            return None
        self._record_usage("analysis", self.analysis_client, started, score=result.display_score)
        return result

    def open_payment(self) -> bool:
        if (
            self.state.step != Step.ANALYSIS
            or self.state.busy
            or self.state.editing
        ):
            return False
        self.state.payment_modal_open = True
        return True

    def close_payment(self) -> None:
        if not self.state.processing_payment:
            self.state.payment_modal_open = False

    async def submit_payment(self, details: PaymentDetails) -> bool:
        """Run the simulated charge, then request tailoring exactly once."""
        if (
            self.state.step != Step.ANALYSIS
            or not self.state.payment_modal_open
            or self.state.processing_payment
            or self.state.busy
        ):
            return False
        async with self._operation():
            self.state.processing_payment = True
            try:
                accepted = await self.payment.charge(details)
            except PaymentDetailsError as e:
                self.state.error = str(e)
                return False
            finally:
                self.state.processing_payment = False
            if not accepted:
                return False
            if self.state.step != Step.ANALYSIS:
                logger.info("Left the analysis step during checkout; skipping tailoring")
                return False
            self.state.payment_modal_open = False
            return await self._run_tailoring()

    async def request_tailoring(self) -> bool:
        """Re-run tailoring from the analysis step without a new payment."""
        if self.state.busy or self.state.step != Step.ANALYSIS:
            return False
        async with self._operation():
            return await self._run_tailoring()

    async def _run_tailoring(self) -> bool:
        if not self.state.has_resume or not self.state.has_job_text:
            self.state.error = (
                "Failed to generate tailored documents: a CV and a job description are required."
            )
            return False
        started = time.monotonic()
        try:
            bundle = await self.tailoring_client.tailor(
                self.state.resume.content, self.state.job_posting.text
            )
        except TailoringError as e:
            logger.exception("Tailoring failed")
            self._record_usage("tailoring", self.tailoring_client, started, error=str(e))
            self.state.error = f"Failed to generate tailored documents: {e}"
            return False
        self._record_usage("tailoring", self.tailoring_client, started)
        self.state.tailored = bundle
        return self._go(Step.TAILORING)

    # ------------------------------------------------------------------
    # Inline editor
    # ------------------------------------------------------------------

    def open_editor(self) -> bool:
        if (
            self.state.step != Step.ANALYSIS
            or self.state.editing
            or self.state.payment_modal_open
            or not self.state.has_resume
        ):
            return False
        self.state.editor_text = self.state.resume.content
        self.state.editing = True
        return True

    def update_editor_text(self, text: str) -> None:
        if self.state.editing:
            self.state.editor_text = text

    def format_selection(self, kind: str, selection: editor.Selection) -> editor.Selection | None:
        """Apply bold/italic/bullet to the scratch text; returns the new selection."""
        if not self.state.editing:
            return None
        result = editor.apply_format(kind, self.state.editor_text, selection)
        self.state.editor_text = result.text
        return result.selection

    def cancel_editor(self) -> None:
        self.state.editing = False
        self.state.editor_text = ""

    async def save_editor(self) -> bool:
        """Re-score the edited text; commit résumé and score together on success."""
        if self.state.busy or not self.state.editing or not self.state.has_job_text:
            return False
        text = self.state.editor_text
        if not text.strip():
            return False
        async with self._operation():
            result = await self._run_analysis(text)
            if result is None:
                return False
            self.set_resume(self.state.resume.model_copy(update={"content": text}))
            self.state.analysis = result
            self.state.editing = False
            self.state.editor_text = ""
            return True

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def export_document(self, kind: str, renderer: DocumentRenderer) -> ExportedFile:
        """Render one of the tailored documents ("cv", "cover_letter", "email")."""
        bundle = self.state.tailored
        if bundle is None:
            raise ValueError("No tailored documents to export")
        texts = {
            "cv": bundle.cv,
            "cover_letter": bundle.cover_letter,
            "email": bundle.email_body,
        }
        if kind not in texts:
            raise ValueError(f"Unknown document: {kind}")
        return renderer.render(texts[kind], EXPORT_STEMS[kind])

    def mailto_url(self, subject: str = "Job Application") -> str | None:
        if self.state.tailored is None:
            return None
        return build_mailto_url(self.state.tailored.email_body, subject=subject)

    def copy_outreach_email(self, clipboard: Clipboard) -> bool:
        if self.state.tailored is None:
            return False
        clipboard.copy(self.state.tailored.email_body)
        return True

    # ------------------------------------------------------------------
    # Usage logging
    # ------------------------------------------------------------------

    def _record_usage(
        self,
        mode: str,
        client: AnalysisClient | TailoringClient,
        started: float,
        *,
        score: int | None = None,
        error: str | None = None,
    ) -> None:
        if self.usage_store is None:
            return
        response = getattr(client, "last_response", None)
        log = UsageLog(
            session_id=self.session_id,
            mode=mode,
            model=getattr(client, "model", None),
            score=score,
            elapsed_seconds=round(time.monotonic() - started, 3),
            input_tokens=response.input_tokens if response else 0,
            output_tokens=response.output_tokens if response else 0,
            success=error is None,
            error_message=error,
        )
        try:
            self.usage_store.save_log(log)
        except Exception:
            logger.exception("Failed to save usage log")
