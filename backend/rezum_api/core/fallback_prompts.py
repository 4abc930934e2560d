"""Embedded fallback prompts, used when Langfuse is unavailable.

Frozen copy of the prompt pushed by scripts/push_prompts.py, so analysis
keeps working without Langfuse.
"""

from rezum_api.core.constants import ANALYZE_PROMPT_NAME

FALLBACK_PROMPTS = {
    # ─── ATS Resume Analysis ──────────────────────────────────────────
    ANALYZE_PROMPT_NAME: {
        "system": (
            "You are an experienced technical recruiter and Applicant Tracking System (ATS) specialist. "
            "You review resumes and give candid, specific, actionable feedback formatted in Markdown."
        ),
        "user": (
            "Analyze this resume and provide detailed suggestions for improvement. Focus on:\n\n"
            "1. **Overall Structure & Format**: How well-organized is the resume?\n"
            "2. **Content Quality**: Are the descriptions specific and impactful?\n"
            "3. **Skills & Keywords**: Are relevant skills and industry keywords included?\n"
            "4. **Achievements**: Are accomplishments quantified with metrics?\n"
            "5. **ATS Optimization**: Would this resume pass ATS filters?\n"
            "6. **Industry Best Practices**: What modern resume trends are missing?\n"
            "7. **Specific Improvements**: Concrete suggestions for each section\n"
            "8. **ATS Score**: <score>/100 - Replace <score> with a whole number between 0 and 100 "
            "for how well this resume would perform in ATS systems, with brief reasoning.\n\n"
            "Resume Content:\n"
            "{resume_text}\n\n"
            "Please provide a comprehensive analysis with actionable recommendations."
        ),
        "config": {
            "temperature": 0.3,
            "max_tokens": 4000,
        },
    },
}
