"""Builds a fully wired WizardController from configuration."""

from __future__ import annotations

from job_tailor.clients.analysis_client import AnalysisClient
from job_tailor.clients.llm_client import LLMClient
from job_tailor.clients.tailoring_client import TailoringClient
from job_tailor.config import AppConfig, load_config
from job_tailor.logging.usage_store import UsageStore
from job_tailor.store.document_store import DocumentStore
from job_tailor.store.local_store import LocalStore
from job_tailor.wizard.controller import WizardController
from job_tailor.wizard.payment import PaymentGate


def build_llm(config: AppConfig) -> LLMClient:
    try:
        return LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_attempts)
    except Exception as e:
        raise RuntimeError(f"LLM client initialization failed. Check ANTHROPIC_API_KEY: {e}") from e


def build_controller(
    config: AppConfig | None = None,
    *,
    llm: LLMClient | None = None,
    session_id: str = "anonymous",
) -> WizardController:
    config = config or load_config()
    llm = llm or build_llm(config)
    usage_store = UsageStore(config.usage.resolved_db_path) if config.usage.enabled else None
    return WizardController(
        store=DocumentStore(LocalStore(config.store.resolved_db_path)),
        analysis_client=AnalysisClient(
            llm,
            model=config.llm.analysis_model,
            max_tokens=config.llm.analysis_max_tokens,
        ),
        tailoring_client=TailoringClient(
            llm,
            model=config.llm.tailoring_model,
            max_tokens=config.llm.tailoring_max_tokens,
        ),
        payment=PaymentGate(delay_seconds=config.payment.delay_seconds),
        usage_store=usage_store,
        session_id=session_id,
    )
