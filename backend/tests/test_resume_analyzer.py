"""Tests for the ATS analysis service.

All LLM and Langfuse calls are mocked.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unittest.mock import AsyncMock, patch

import pytest

from rezum_api.core.constants import RESUME_TRUNCATE_LENGTH
from rezum_api.core.langfuse_client import ChatPrompt
from rezum_api.models import ResumeAnalysis
from rezum_api.services.file_store import get_file_store
from rezum_api.services.resume_analyzer import analyze_resume, build_prompt, parse_ats_score

LLM_REPLY = """## Overall Structure & Format
Clear and concise.

## ATS Score
**ATS Score**: 78/100 - Good keyword coverage, but metrics are missing.
"""


# ===========================================================================
# parse_ats_score
# ===========================================================================


class TestParseAtsScore:

    @pytest.mark.parametrize("text, expected", [
        ("ATS Score: 85/100", 85),
        ("**ATS Score**: 72/100 - solid", 72),
        ("8. **ats score** - 64 out of 100", 64),
        ("ATS Score: 0/100", 0),
        ("ATS Score: 100/100", 100),
    ])
    def test_parses_score(self, text, expected):
        assert parse_ats_score(text) == expected

    def test_first_match_wins(self):
        assert parse_ats_score("ATS Score: 55\nlater ATS Score: 90") == 55

    def test_no_token_returns_none(self):
        assert parse_ats_score("Great resume, 95 out of 100 overall.") is None

    def test_number_must_be_on_same_line(self):
        assert parse_ats_score("ATS Score:\n80/100") is None

    def test_out_of_range_returns_none(self):
        assert parse_ats_score("ATS Score: 450") is None

    def test_empty_text(self):
        assert parse_ats_score("") is None


# ===========================================================================
# build_prompt
# ===========================================================================


class TestBuildPrompt:

    def test_uses_langfuse_prompt_when_available(self):
        fetched = ChatPrompt("sys", "user", {"temperature": 0.5, "max_tokens": 100}, source="langfuse")
        with patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=fetched):
            prompt = build_prompt("resume")
        assert (prompt.system, prompt.user) == ("sys", "user")
        assert prompt.config == {"temperature": 0.5, "max_tokens": 100}
        assert prompt.source == "langfuse"

    def test_missing_langfuse_config_filled_from_embedded(self):
        fetched = ChatPrompt("sys", "user", {"temperature": 0.9}, source="langfuse")
        with patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=fetched):
            prompt = build_prompt("resume")
        assert prompt.config == {"temperature": 0.9, "max_tokens": 4000}

    def test_fallback_interpolates_resume_text(self):
        with patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=None):
            prompt = build_prompt("Jane Doe, Python Engineer")
        assert prompt.source == "fallback"
        assert "ATS" in prompt.system
        assert "Jane Doe, Python Engineer" in prompt.user
        assert "ATS Score" in prompt.user
        assert "{resume_text}" not in prompt.user
        assert prompt.config == {"temperature": 0.3, "max_tokens": 4000}

    def test_resume_text_is_truncated(self):
        long_text = "x" * (RESUME_TRUNCATE_LENGTH + 500)
        with patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=None):
            user = build_prompt(long_text).user
        assert "x" * RESUME_TRUNCATE_LENGTH in user
        assert "x" * (RESUME_TRUNCATE_LENGTH + 1) not in user


# ===========================================================================
# analyze_resume
# ===========================================================================


def _mock_llm(reply):
    llm = AsyncMock()
    llm.call = AsyncMock(return_value=reply)
    return llm


@pytest.mark.asyncio
class TestAnalyzeResume:

    async def test_returns_analysis_with_score(self, sample_pdf):
        file_id = get_file_store().store("resume.pdf", sample_pdf, "application/pdf")
        llm = _mock_llm(LLM_REPLY)

        with patch("rezum_api.services.resume_analyzer.get_llm_client", return_value=llm), \
             patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=None):
            result = await analyze_resume(file_id)

        assert isinstance(result, ResumeAnalysis)
        assert result.file_id == file_id
        assert result.analysis == LLM_REPLY
        assert result.ats_score == 78
        assert "Python" in result.extracted_text

        prompt = llm.call.call_args.kwargs["prompt"]
        assert "Python" in prompt

    async def test_score_is_none_without_token(self, sample_pdf):
        file_id = get_file_store().store("resume.pdf", sample_pdf)
        with patch("rezum_api.services.resume_analyzer.get_llm_client",
                   return_value=_mock_llm("Looks fine overall.")), \
             patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=None):
            result = await analyze_resume(file_id)

        assert result is not None
        assert result.ats_score is None

    async def test_unknown_file_returns_none_without_llm_call(self):
        llm = _mock_llm(LLM_REPLY)
        with patch("rezum_api.services.resume_analyzer.get_llm_client", return_value=llm):
            assert await analyze_resume("missing") is None
        llm.call.assert_not_called()

    async def test_image_only_pdf_returns_none(self, blank_pdf):
        file_id = get_file_store().store("scan.pdf", blank_pdf)
        llm = _mock_llm(LLM_REPLY)
        with patch("rezum_api.services.resume_analyzer.get_llm_client", return_value=llm):
            assert await analyze_resume(file_id) is None
        llm.call.assert_not_called()

    async def test_llm_failure_returns_none(self, sample_pdf):
        file_id = get_file_store().store("resume.pdf", sample_pdf)
        with patch("rezum_api.services.resume_analyzer.get_llm_client",
                   return_value=_mock_llm(None)), \
             patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt", return_value=None):
            assert await analyze_resume(file_id) is None

    async def test_passes_prompt_config_to_llm(self, sample_pdf):
        file_id = get_file_store().store("resume.pdf", sample_pdf)
        llm = _mock_llm(LLM_REPLY)
        with patch("rezum_api.services.resume_analyzer.get_llm_client", return_value=llm), \
             patch("rezum_api.core.langfuse_client._fetch_langfuse_prompt",
                   return_value=ChatPrompt("sys", "user", {"temperature": 0.7, "max_tokens": 1234}, source="langfuse")):
            await analyze_resume(file_id)

        kwargs = llm.call.call_args.kwargs
        assert kwargs["system_prompt"] == "sys"
        assert kwargs["prompt"] == "user"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1234
