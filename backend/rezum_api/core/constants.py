"""Centralized constants, no magic numbers in service code."""

# Upload limits
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MB, uploads of this size or larger are rejected

# Truncation
RESUME_TRUNCATE_LENGTH = 15_000  # chars of resume text sent to the LLM

# LLM
DEFAULT_LLM_MODEL = "gpt-4o-mini"
GEMINI_MODEL = "gemini-2.0-flash"
MAX_OPENAI_FAILURES = 5
LLM_RETRY_ATTEMPTS = 2

# ATS score bounds
ATS_SCORE_MIN = 0
ATS_SCORE_MAX = 100

# Rate limiting (analysis endpoint only, each call costs an LLM round trip)
ANALYZE_RATE_LIMIT_PER_MINUTE = 10

# Langfuse prompt names
ANALYZE_PROMPT_NAME = "rezum-ats-analyze"
