"""ATS-style analysis of a stored resume.

Extracts text from the stored PDF, sends it to the LLM with the
"rezum-ats-analyze" prompt and parses a 0-100 score out of the reply.

Fetches the prompt from Langfuse at runtime. Prompt managed in Langfuse:
edit via Langfuse UI, push via scripts/push_prompts.py.
"""

import re

from rezum_api.core.constants import (
    ANALYZE_PROMPT_NAME,
    ATS_SCORE_MAX,
    ATS_SCORE_MIN,
    RESUME_TRUNCATE_LENGTH,
)
from rezum_api.core.langfuse_client import ChatPrompt, get_prompt_messages, observe
from rezum_api.core.llm import get_llm_client
from rezum_api.core.logger import logger
from rezum_api.models import ResumeAnalysis
from rezum_api.services.pdf_text import extract_text

# "ATS Score" then the first number on the same line: "**ATS Score**: 78/100"
ATS_SCORE_RE = re.compile(r"ATS Score.*?(\d+)", re.IGNORECASE)


def parse_ats_score(text: str) -> int | None:
    """Pull the ATS score out of free-form model text.

    Returns None when there is no score or it falls outside 0-100.
    """
    match = ATS_SCORE_RE.search(text or "")
    if not match:
        return None
    score = int(match.group(1))
    if not ATS_SCORE_MIN <= score <= ATS_SCORE_MAX:
        logger.warning(f"Ignoring out-of-range ATS score: {score}")
        return None
    return score


def build_prompt(resume_text: str) -> ChatPrompt:
    """Analysis prompt with the (truncated) resume text interpolated."""
    return get_prompt_messages(
        ANALYZE_PROMPT_NAME,
        {"resume_text": resume_text[:RESUME_TRUNCATE_LENGTH]},
    )


@observe(name=ANALYZE_PROMPT_NAME)
async def analyze_resume(file_id: str) -> ResumeAnalysis | None:
    """Analyze a stored resume.

    Returns None if the file is unknown, has no extractable text, or every
    LLM provider failed.
    """
    resume_text = await extract_text(file_id)
    if not resume_text or not resume_text.strip():
        logger.warning(f"No resume text available for {file_id}, skipping analysis")
        return None

    prompt = build_prompt(resume_text)

    llm = await get_llm_client()
    content = await llm.call(
        prompt=prompt.user,
        system_prompt=prompt.system,
        temperature=prompt.config.get("temperature", 0.3),
        max_tokens=prompt.config.get("max_tokens", 4000),
    )

    if not content:
        logger.warning(f"Resume analysis returned no result for {file_id}")
        return None

    ats_score = parse_ats_score(content)
    logger.info(f"Resume analyzed: file={file_id}, ats_score={ats_score}, chars={len(content)}")

    return ResumeAnalysis(
        analysis=content,
        file_id=file_id,
        extracted_text=resume_text,
        ats_score=ats_score,
    )
