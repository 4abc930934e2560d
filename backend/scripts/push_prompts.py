"""Push the rezum analysis prompt to Langfuse as a versioned chat prompt.

Run once to seed Langfuse, then edit the prompt via the Langfuse UI.
Re-run to create a new version (old versions are preserved).

Usage:
    python scripts/push_prompts.py
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from langfuse import Langfuse  # noqa: E402


# ═══════════════════════════════════════════════════════════════════════════════
# PROMPT: ATS RESUME ANALYSIS
# ═══════════════════════════════════════════════════════════════════════════════

ANALYZE_SYSTEM = """You are an experienced technical recruiter and Applicant Tracking System (ATS) specialist. You review resumes and give candid, specific, actionable feedback formatted in Markdown.

## RULES
1. Quote the resume when pointing at a weakness so the candidate can find it
2. Prefer concrete rewrites over general advice
3. Never invent experience the candidate does not list
4. Always finish section 8 with a line of the form "ATS Score: NN/100" on its own"""

# Langfuse chat prompts use {{variable}} placeholders
ANALYZE_USER = """Analyze this resume and provide detailed suggestions for improvement. Focus on:

1. **Overall Structure & Format**: How well-organized is the resume?
2. **Content Quality**: Are the descriptions specific and impactful?
3. **Skills & Keywords**: Are relevant skills and industry keywords included?
4. **Achievements**: Are accomplishments quantified with metrics?
5. **ATS Optimization**: Would this resume pass ATS filters?
6. **Industry Best Practices**: What modern resume trends are missing?
7. **Specific Improvements**: Concrete suggestions for each section
8. **ATS Score**: <score>/100 - Replace <score> with a whole number between 0 and 100 for how well this resume would perform in ATS systems, with brief reasoning.

Resume Content:
{{resume_text}}

Please provide a comprehensive analysis with actionable recommendations."""


# ═══════════════════════════════════════════════════════════════════════════════
# PUSH TO LANGFUSE
# ═══════════════════════════════════════════════════════════════════════════════

def main():
    public_key = os.getenv("LANGFUSE_PUBLIC_KEY")
    secret_key = os.getenv("LANGFUSE_SECRET_KEY")
    host = os.getenv("LANGFUSE_HOST", "https://cloud.langfuse.com")

    if not public_key or not secret_key:
        print("Error: LANGFUSE_PUBLIC_KEY and LANGFUSE_SECRET_KEY must be set")
        sys.exit(1)

    client = Langfuse(
        public_key=public_key,
        secret_key=secret_key,
        host=host,
    )

    client.create_prompt(
        name="rezum-ats-analyze",
        type="chat",
        prompt=[
            {"role": "system", "content": ANALYZE_SYSTEM},
            {"role": "user", "content": ANALYZE_USER},
        ],
        labels=["production"],
        config={
            "model": "gpt-4o-mini",
            "temperature": 0.3,
            "max_tokens": 4000,
        },
    )
    print("Pushed: rezum-ats-analyze")

    client.flush()
    print(f"View at: {host} → Prompts")


if __name__ == "__main__":
    main()
