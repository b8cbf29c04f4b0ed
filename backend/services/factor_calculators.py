"""Independent 0.0-1.0 scoring factors.

Every calculator reads only raw text and/or extracted keywords. None of them
consumes another calculator's output, so each is testable on its own and the
aggregator can combine them with plain weights.
"""

import logging
import re
from enum import Enum

from models.schemas.extracted_keyword import ExtractedKeyword
from services import section_parser
from services.experience import ExperienceExtractor, RegexExperienceExtractor, score_experience

logger = logging.getLogger(__name__)


class Factor(str, Enum):
    MODEL_CONFIDENCE = "model_confidence"
    KEYWORD_COVERAGE = "keyword_coverage"
    EXPERIENCE_ALIGNMENT = "experience_alignment"
    FORMAT_QUALITY = "format_quality"
    EDUCATION_MATCH = "education_match"
    INDUSTRY_ALIGNMENT = "industry_alignment"
    SKILL_DIVERSITY = "skill_diversity"


# ---------------------------------------------------------------------------
# Keyword coverage
# ---------------------------------------------------------------------------

KEYWORD_SCORE_THRESHOLD = 0.7


def keyword_coverage(job_keywords: list[ExtractedKeyword]) -> float:
    """Fraction of job keywords whose match score clears the threshold.

    Every extracted keyword currently scores 1.0, so this is 1.0 whenever
    the job description has any taxonomy match and 0.0 otherwise.
    """
    if not job_keywords:
        return 0.0
    strong = sum(1 for kw in job_keywords if kw.score > KEYWORD_SCORE_THRESHOLD)
    return strong / len(job_keywords)


# ---------------------------------------------------------------------------
# Model confidence (remote classifier label)
# ---------------------------------------------------------------------------

HIGHLY_RELEVANT = "highly relevant to job"
SOMEWHAT_RELEVANT = "somewhat relevant to job"
NOT_RELEVANT = "not relevant to job"
CANDIDATE_LABELS = [HIGHLY_RELEVANT, SOMEWHAT_RELEVANT, NOT_RELEVANT]

LABEL_SCORES: dict[str, float] = {
    HIGHLY_RELEVANT: 1.0,
    SOMEWHAT_RELEVANT: 0.6,
}
DEFAULT_LABEL_SCORE = 0.2


def label_relevance(top_label: str | None) -> float:
    if not top_label:
        return DEFAULT_LABEL_SCORE
    return LABEL_SCORES.get(top_label.strip().lower(), DEFAULT_LABEL_SCORE)


# ---------------------------------------------------------------------------
# Experience alignment
# ---------------------------------------------------------------------------

_default_experience_extractor = RegexExperienceExtractor()


def experience_alignment(
    resume_text: str,
    job_text: str,
    extractor: ExperienceExtractor = _default_experience_extractor,
) -> float:
    resume_years = extractor.extract_years(resume_text)
    job_years = extractor.extract_years(job_text)
    return score_experience(resume_years, job_years)


# ---------------------------------------------------------------------------
# Skill diversity
# ---------------------------------------------------------------------------

EXPECTED_CATEGORY_COUNT = 5
SKILL_COUNT_CAP = 20
CATEGORY_WEIGHT = 0.4
SKILL_COUNT_WEIGHT = 0.6


def skill_diversity(resume_keywords: list[ExtractedKeyword]) -> float:
    """Breadth of the resume's skills: distinct categories and distinct terms."""
    categories = {kw.category for kw in resume_keywords}
    terms = {kw.word for kw in resume_keywords}
    category_part = min(1.0, len(categories) / EXPECTED_CATEGORY_COUNT)
    skill_part = min(1.0, len(terms) / SKILL_COUNT_CAP)
    return CATEGORY_WEIGHT * category_part + SKILL_COUNT_WEIGHT * skill_part


# ---------------------------------------------------------------------------
# Format quality
# ---------------------------------------------------------------------------

FORMAT_WEIGHTS: dict[str, float] = {
    "section_headers": 0.3,
    "bullets": 0.2,
    "quantified_achievements": 0.3,
    "action_verbs": 0.2,
}


def format_checks(resume_text: str) -> dict[str, bool]:
    return {
        "section_headers": section_parser.has_section_headers(resume_text),
        "bullets": section_parser.has_bullets(resume_text),
        "quantified_achievements": section_parser.has_quantified_achievements(resume_text),
        "action_verbs": section_parser.has_action_verbs(resume_text),
    }


def format_quality(resume_text: str) -> float:
    checks = format_checks(resume_text)
    return round(sum(FORMAT_WEIGHTS[name] for name, ok in checks.items() if ok), 4)


# ---------------------------------------------------------------------------
# Education match
# ---------------------------------------------------------------------------

EDUCATION_TERMS: list[str] = [
    "bachelor", "master", "phd", "doctorate", "mba", "associate degree",
    "degree", "diploma", "certification", "certificate", "certified",
    "license",
]


# Bare "master" also names roles ("Scrum Master"); only the degree forms count
_TERM_PATTERNS: dict[str, str] = {
    "master": r"master(?:['’]?s\b|\s+(?:of|in|degree)\b)",
}


def _term_present(term: str, text: str) -> bool:
    # Allow plural / possessive forms: "bachelor's", "masters", "certifications"
    pattern = _TERM_PATTERNS.get(term, rf"{re.escape(term)}(?:['’]?s)?\b")
    return re.search(rf"\b{pattern}", text, re.IGNORECASE) is not None


def education_match(resume_text: str, job_text: str) -> float:
    required = [t for t in EDUCATION_TERMS if _term_present(t, job_text)]
    if not required:
        return 1.0
    met = sum(1 for t in required if _term_present(t, resume_text))
    return met / len(required)


# ---------------------------------------------------------------------------
# Industry alignment
# ---------------------------------------------------------------------------

INDUSTRY_TERMS: dict[str, list[str]] = {
    "technology": ["software", "saas", "cybersecurity", "platform", "startup"],
    "finance": ["banking", "fintech", "investment", "trading", "insurance", "accounting"],
    "healthcare": ["healthcare", "clinical", "hospital", "patient", "pharmaceutical", "hipaa"],
    "retail": ["retail", "e-commerce", "ecommerce", "merchandising", "supply chain"],
    "education": ["edtech", "curriculum", "teaching", "learning management"],
    "manufacturing": ["manufacturing", "automotive", "logistics", "industrial"],
    "media": ["advertising", "marketing", "media", "publishing", "gaming"],
}
NEUTRAL_INDUSTRY_SCORE = 0.5


def industry_terms_in(text: str) -> set[str]:
    return {
        term
        for terms in INDUSTRY_TERMS.values()
        for term in terms
        if _term_present(term, text)
    }


def industry_alignment(resume_text: str, job_text: str) -> float:
    job_terms = industry_terms_in(job_text)
    if not job_terms:
        return NEUTRAL_INDUSTRY_SCORE
    shared = sum(1 for t in job_terms if _term_present(t, resume_text))
    return shared / len(job_terms)


# ---------------------------------------------------------------------------
# All local factors
# ---------------------------------------------------------------------------

def compute_local_factors(
    resume_text: str,
    job_text: str,
    job_keywords: list[ExtractedKeyword],
    resume_keywords: list[ExtractedKeyword],
    experience_extractor: ExperienceExtractor = _default_experience_extractor,
) -> dict[Factor, float]:
    """Run every factor that needs no remote service."""
    factors = {
        Factor.KEYWORD_COVERAGE: keyword_coverage(job_keywords),
        Factor.EXPERIENCE_ALIGNMENT: experience_alignment(resume_text, job_text, experience_extractor),
        Factor.FORMAT_QUALITY: format_quality(resume_text),
        Factor.EDUCATION_MATCH: education_match(resume_text, job_text),
        Factor.INDUSTRY_ALIGNMENT: industry_alignment(resume_text, job_text),
        Factor.SKILL_DIVERSITY: skill_diversity(resume_keywords),
    }
    logger.debug("Local factors: %s", {f.value: round(v, 3) for f, v in factors.items()})
    return factors
