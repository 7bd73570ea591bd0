"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from job_tailor.clients.analysis_client import AnalysisClient
from job_tailor.clients.llm_client import LLMClient, LLMResponse
from job_tailor.clients.tailoring_client import TailoringClient
from job_tailor.models.analysis import AnalysisResult
from job_tailor.models.tailoring import TailoredBundle
from job_tailor.store.document_store import DocumentStore
from job_tailor.store.local_store import LocalStore
from job_tailor.wizard.controller import WizardController
from job_tailor.wizard.payment import PaymentDetails, PaymentGate


async def _no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | +1 555 0100

Experience:
- Acme Corp (2021 - present) - Backend Engineer
  - Built Python APIs serving 1M requests/day
  - Cut p95 latency by 40% with Redis caching

Skills:
- Python, FastAPI, PostgreSQL, Redis, Docker
"""


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer

We are looking for an engineer with Go and Kubernetes experience.
- 5+ years building distributed systems
- Experience with PostgreSQL and Kafka
"""


@pytest.fixture
def sample_analysis() -> AnalysisResult:
    return AnalysisResult(
        score=62,
        missing_keywords=["Go"],
        strengths=["engineer"],
        suggestions=["Add Go experience"],
    )


@pytest.fixture
def sample_bundle() -> TailoredBundle:
    return TailoredBundle(
        cv="# Jane Doe\n\n## Experience\n- **Acme Corp**: Python APIs",
        cover_letter="Jane Doe\njane@example.com\n\nDear Hiring Manager,\n\nI am excited to apply.",
        email_body="Hi, I just applied for the Senior Backend Engineer role & would love to chat.",
    )


@pytest.fixture
def payment_details() -> PaymentDetails:
    return PaymentDetails(
        cardholder_name="John Doe",
        card_number="4242 4242 4242 4242",
        expiry="12/30",
        cvc="123",
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def document_store(tmp_path) -> DocumentStore:
    return DocumentStore(LocalStore(tmp_path / "store.db"))


@pytest.fixture
def mock_analysis_client(sample_analysis) -> AnalysisClient:
    client = AsyncMock(spec=AnalysisClient)
    client.analyze = AsyncMock(return_value=sample_analysis)
    return client


@pytest.fixture
def mock_tailoring_client(sample_bundle) -> TailoringClient:
    client = AsyncMock(spec=TailoringClient)
    client.tailor = AsyncMock(return_value=sample_bundle)
    return client


@pytest.fixture
def make_controller(document_store, mock_analysis_client, mock_tailoring_client):
    """Factory for controllers sharing the same store and mocked clients."""

    def _make(**kwargs) -> WizardController:
        kwargs.setdefault("payment", PaymentGate(delay_seconds=2.0, sleep=_no_sleep))
        return WizardController(
            store=document_store,
            analysis_client=mock_analysis_client,
            tailoring_client=mock_tailoring_client,
            **kwargs,
        )

    return _make


@pytest.fixture
def controller(make_controller) -> WizardController:
    return make_controller()
