"""Prompt and text templates for the remote classifier and generator."""

import json

from models.schemas.skill_gap import SkillGapCategory
from models.schemas.suggestion import Suggestion

BASIC_IMPROVEMENT_HEADER = "ADDITIONAL SKILLS RELEVANT TO THIS POSITION:"
BASIC_IMPROVEMENT_NOTE = (
    "Note: This is a basic automated improvement. For better results, manually "
    "incorporate these keywords naturally throughout your resume where relevant."
)


def build_classification_text(resume_text: str, job_description: str, max_chars: int = 4000) -> str:
    """Single input for the zero-shot classifier, trimmed to max_chars."""
    text = f"Resume:\n{resume_text.strip()}\n\nJob description:\n{job_description.strip()}"
    return text[:max_chars]


def missing_skill_names(skill_gaps: list[SkillGapCategory] | None) -> list[str]:
    if not skill_gaps:
        return []
    return [skill.word for gap in skill_gaps for skill in gap.missing]


def build_improvement_prompt(
    resume_text: str,
    job_description: str,
    skill_gaps: list[SkillGapCategory] | None,
    suggestions: list[Suggestion],
) -> str:
    """Ask the generator for a rewritten, ATS-optimized resume."""
    analysis = {
        "missing_keywords": missing_skill_names(skill_gaps),
        "suggestions": [
            {"title": s.title, "severity": s.severity, "action_items": s.action_items}
            for s in suggestions
        ],
        "skill_gaps": [
            {
                "category": g.category,
                "importance": g.importance,
                "matched": [s.word for s in g.matched],
                "missing": [s.word for s in g.missing],
            }
            for g in (skill_gaps or [])
        ],
    }

    return f"""You are an expert resume writer and ATS optimization specialist.

Rewrite the resume below so it scores higher against the job description.

RULES:
- Keep every fact truthful: do not invent employers, dates, degrees or metrics.
- Work the missing keywords in only where the candidate's experience supports them.
- Use standard section headings (Summary, Experience, Education, Skills).
- Start bullet points with action verbs and keep quantified results.

RESUME:
---
{resume_text}
---

JOB DESCRIPTION:
---
{job_description}
---

ANALYSIS:
{json.dumps(analysis, indent=2)}

Respond with ONLY the improved resume as plain text."""


def build_basic_improved_resume(resume_text: str, skill_gaps: list[SkillGapCategory] | None) -> str:
    """Local fallback: the original resume plus a section listing missing skills."""
    return (
        f"{resume_text}\n\n"
        f"{BASIC_IMPROVEMENT_HEADER}\n"
        f"{', '.join(missing_skill_names(skill_gaps))}\n\n"
        f"{BASIC_IMPROVEMENT_NOTE}"
    )
