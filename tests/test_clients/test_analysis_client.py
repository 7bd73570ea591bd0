"""Tests for the ATS analysis client."""

from __future__ import annotations

import json

import pytest

from job_tailor.clients.analysis_client import AnalysisClient
from job_tailor.clients.llm_client import LLMResponse
from job_tailor.errors import AnalysisError

VALID_BODY = json.dumps({
    "score": 62,
    "missingKeywords": ["Go"],
    "strengths": ["engineer"],
    "suggestions": ["Add Go experience"],
})


def _respond(mock_llm_client, text: str) -> None:
    mock_llm_client.generate.return_value = LLMResponse(text=text, input_tokens=120, output_tokens=40)


class TestAnalyze:
    async def test_parses_result(self, mock_llm_client, sample_resume_text, sample_jd_text):
        _respond(mock_llm_client, VALID_BODY)
        client = AnalysisClient(mock_llm_client, model="haiku")

        result = await client.analyze(sample_resume_text, sample_jd_text)

        assert result.display_score == 62
        assert result.missing_keywords == ["Go"]
        assert client.last_response.input_tokens == 120

        kwargs = mock_llm_client.generate.await_args.kwargs
        assert kwargs["model"] == "haiku"
        assert sample_resume_text in kwargs["prompt"]
        assert sample_jd_text in kwargs["prompt"]
        assert "missingKeywords" in kwargs["system"]

    async def test_accepts_fenced_json(self, mock_llm_client):
        _respond(mock_llm_client, f"Here you go:\n```json\n{VALID_BODY}\n```")
        result = await AnalysisClient(mock_llm_client).analyze("cv", "jd")
        assert result.strengths == ["engineer"]

    async def test_empty_body(self, mock_llm_client):
        _respond(mock_llm_client, "   ")
        with pytest.raises(AnalysisError, match="Empty response from AI analysis model"):
            await AnalysisClient(mock_llm_client).analyze("cv", "jd")

    async def test_unparseable_body(self, mock_llm_client):
        _respond(mock_llm_client, "I cannot score this CV.")
        with pytest.raises(AnalysisError, match="Unparseable response"):
            await AnalysisClient(mock_llm_client).analyze("cv", "jd")

    async def test_score_out_of_range(self, mock_llm_client):
        _respond(mock_llm_client, json.dumps({"score": 140, "missingKeywords": [], "strengths": [], "suggestions": []}))
        with pytest.raises(AnalysisError, match="Unparseable response"):
            await AnalysisClient(mock_llm_client).analyze("cv", "jd")

    async def test_missing_field(self, mock_llm_client):
        _respond(mock_llm_client, json.dumps({"score": 50, "strengths": [], "suggestions": []}))
        with pytest.raises(AnalysisError):
            await AnalysisClient(mock_llm_client).analyze("cv", "jd")

    async def test_transport_error_is_wrapped(self, mock_llm_client):
        mock_llm_client.generate.side_effect = TimeoutError("request timed out")
        client = AnalysisClient(mock_llm_client)
        with pytest.raises(AnalysisError, match="request timed out"):
            await client.analyze("cv", "jd")
        assert client.last_response is None
