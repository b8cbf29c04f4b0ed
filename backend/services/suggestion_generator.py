"""Turn factor headroom and skill gaps into ordered, actionable suggestions."""

import logging

from models.schemas.extracted_keyword import ExtractedKeyword
from models.schemas.score_breakdown import ScoreBreakdown
from models.schemas.skill_gap import Importance, SkillGapCategory
from models.schemas.suggestion import Severity, Suggestion, SuggestionCategory
from services.factor_calculators import Factor

logger = logging.getLogger(__name__)

IMPORTANCE_SEVERITY: dict[Importance, Severity] = {
    "critical": "high",
    "recommended": "medium",
    "nice-to-have": "low",
}

# (category, factor driving severity, title, description, action items)
# Action items may reference {keywords} and {top_keywords}.
GENERAL_TEMPLATES: list[tuple[SuggestionCategory, Factor, str, str, list[str]]] = [
    (
        "skills",
        Factor.SKILL_DIVERSITY,
        "Broaden your skills section",
        "Reviewers and ATS filters look for a wide, well-organized set of relevant skills.",
        [
            "Group skills by category (languages, frameworks, tools)",
            "Add the job's technologies you have used: {top_keywords}",
        ],
    ),
    (
        "experience",
        Factor.EXPERIENCE_ALIGNMENT,
        "Make your experience level explicit",
        "State your years of experience and the scope of your work so it can be compared with the role's requirements.",
        [
            "Add a summary line such as 'X years of experience in ...'",
            "List the most relevant roles first",
            "Describe work that used {top_keywords}",
        ],
    ),
    (
        "format",
        Factor.FORMAT_QUALITY,
        "Improve resume structure",
        "ATS parsers rely on standard headings and concise, quantified bullet points.",
        [
            "Use standard headings: Summary, Experience, Education, Skills",
            "Write achievements as bullet points starting with action verbs",
            "Quantify results with numbers, percentages or dollar amounts",
        ],
    ),
    (
        "education",
        Factor.EDUCATION_MATCH,
        "Highlight education and certifications",
        "Make degrees and certifications the job asks for easy to find.",
        [
            "Add an Education section with degree, institution and year",
            "List certifications that match the job description",
        ],
    ),
    (
        "keywords",
        Factor.KEYWORD_COVERAGE,
        "Optimize keywords for ATS",
        "Use the exact terms from the job description so keyword filters recognize your experience.",
        [
            "{keywords}",
            "Work these terms into your experience bullets, not only the skills list",
        ],
    ),
]

TOP_KEYWORDS = 5


def severity_for_score(score: float | None) -> Severity:
    if score is None:
        return "medium"
    if score < 0.5:
        return "high"
    if score < 0.8:
        return "medium"
    return "low"


def _skill_gap_suggestion(gap: SkillGapCategory) -> Suggestion:
    names = [skill.word for skill in gap.missing]
    return Suggestion(
        title=f"Add missing {gap.category} skills",
        description=(
            f"The job description asks for {len(names)} {gap.category} "
            f"skill(s) not found in your resume."
        ),
        severity=IMPORTANCE_SEVERITY[gap.importance],
        category="skills",
        action_items=[f"Add {name} if you have experience with it" for name in names],
    )


def generate(
    breakdown: ScoreBreakdown,
    skill_gaps: list[SkillGapCategory] | None,
    keywords: list[ExtractedKeyword],
) -> list[Suggestion]:
    """Skill-gap suggestions first, then the general templates.

    When skill_gaps is given the general "skills" template is dropped, since
    the per-category suggestions already cover it.
    """
    words = [kw.word for kw in keywords]
    fmt = {
        "keywords": ", ".join(words),
        "top_keywords": ", ".join(words[:TOP_KEYWORDS]) or "the technologies listed in the posting",
    }

    suggestions: list[Suggestion] = []
    if skill_gaps is not None:
        suggestions.extend(_skill_gap_suggestion(gap) for gap in skill_gaps if gap.missing)

    for category, factor, title, description, items in GENERAL_TEMPLATES:
        if skill_gaps is not None and category == "skills":
            continue
        suggestions.append(Suggestion(
            title=title,
            description=description,
            severity=severity_for_score(breakdown.factor_scores.get(factor.value)),
            category=category,
            action_items=[item.format(**fmt) for item in items],
        ))

    logger.debug("Generated %d suggestions", len(suggestions))
    return suggestions
