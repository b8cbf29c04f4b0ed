"""Weighted aggregation of factor scores into current and potential scores."""

import logging

from models.schemas.score_breakdown import FactorImprovement, ScoreBreakdown
from services.factor_calculators import Factor

logger = logging.getLogger(__name__)

# Weights sum to 1.0
FACTOR_WEIGHTS: dict[Factor, float] = {
    Factor.MODEL_CONFIDENCE: 0.15,
    Factor.KEYWORD_COVERAGE: 0.20,
    Factor.EXPERIENCE_ALIGNMENT: 0.20,
    Factor.FORMAT_QUALITY: 0.10,
    Factor.EDUCATION_MATCH: 0.10,
    Factor.INDUSTRY_ALIGNMENT: 0.10,
    Factor.SKILL_DIVERSITY: 0.15,
}

# How far a resume revision can realistically move each factor
MAX_IMPROVEMENT: dict[Factor, float] = {
    Factor.MODEL_CONFIDENCE: 0.10,
    Factor.KEYWORD_COVERAGE: 0.30,
    Factor.EXPERIENCE_ALIGNMENT: 0.20,
    Factor.FORMAT_QUALITY: 0.40,
    Factor.EDUCATION_MATCH: 0.20,
    Factor.INDUSTRY_ALIGNMENT: 0.30,
    Factor.SKILL_DIVERSITY: 0.30,
}

SIGNIFICANT_IMPROVEMENT = 0.1

FACTOR_SUGGESTIONS: dict[Factor, list[str]] = {
    Factor.MODEL_CONFIDENCE: [
        "Tailor your summary to the role described in the job posting",
        "Reorder experience so the most relevant roles come first",
    ],
    Factor.KEYWORD_COVERAGE: [
        "Mirror the exact skill names used in the job description",
        "Add a dedicated skills section listing the required technologies",
    ],
    Factor.EXPERIENCE_ALIGNMENT: [
        "State your total years of experience explicitly (e.g. '6 years of experience')",
        "Highlight responsibilities that match the seniority of the role",
    ],
    Factor.FORMAT_QUALITY: [
        "Use standard section headings (Experience, Education, Skills)",
        "Present achievements as bullet points",
        "Quantify results with percentages, dollar amounts or timeframes",
        "Start each bullet with a strong action verb",
    ],
    Factor.EDUCATION_MATCH: [
        "List degrees and certifications mentioned in the job description",
        "Add relevant coursework or in-progress certifications",
    ],
    Factor.INDUSTRY_ALIGNMENT: [
        "Use the industry terminology from the job description",
        "Mention domain experience that matches the employer's sector",
    ],
    Factor.SKILL_DIVERSITY: [
        "Show breadth across tools, frameworks and methodologies",
        "Group skills by category so reviewers see their range",
    ],
}


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def potential_for(factor: Factor, score: float) -> float:
    return _clamp(score + MAX_IMPROVEMENT.get(factor, 0.0))


def aggregate(factor_scores: dict[Factor, float]) -> ScoreBreakdown:
    """Combine factor scores with the fixed weights.

    Factors absent from factor_scores (the model confidence factor on the
    fallback path) are left out and the remaining weights renormalized.
    """
    present = {f: _clamp(s) for f, s in factor_scores.items() if f in FACTOR_WEIGHTS}
    total_weight = sum(FACTOR_WEIGHTS[f] for f in present)
    if total_weight <= 0:
        return ScoreBreakdown()

    current = 0.0
    potential = 0.0
    improvements: list[FactorImprovement] = []

    for factor, score in present.items():
        weight = FACTOR_WEIGHTS[factor] / total_weight
        factor_potential = potential_for(factor, score)
        current += weight * score
        potential += weight * factor_potential

        if round(factor_potential - score, 6) >= SIGNIFICANT_IMPROVEMENT:
            improvements.append(FactorImprovement(
                category=factor.value,
                current=round(score, 3),
                potential=round(factor_potential, 3),
                suggested_improvements=list(FACTOR_SUGGESTIONS.get(factor, [])),
            ))

    current = _clamp(current)
    potential = max(current, _clamp(potential))

    logger.debug("Aggregated %d factors: current=%.3f potential=%.3f", len(present), current, potential)
    return ScoreBreakdown(
        current_score=round(current, 4),
        potential_score=round(potential, 4),
        improvements=improvements,
        factor_scores={f.value: round(s, 4) for f, s in present.items()},
    )
