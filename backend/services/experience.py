"""Years-of-experience extraction and experience alignment scoring.

Extraction sits behind the ExperienceExtractor protocol so the regex
strategy can be replaced without touching the factor or aggregation code.
"""

import re
from typing import Protocol

# Ordered: the first pattern with a match decides, then the first match in text order
EXPERIENCE_PATTERNS: list[re.Pattern] = [
    # "5 years of experience", "5+ years experience", "3 yrs of professional experience"
    re.compile(
        r"(\d+)\+?\s*(?:years?|yrs?)\s+(?:of\s+)?(?:professional\s+|relevant\s+|work\s+|industry\s+)?experience",
        re.IGNORECASE,
    ),
    # "7 years in the field", "4 years in industry"
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s+in\s+(?:the\s+)?(?:field|industry)", re.IGNORECASE),
    # "6 years working", "5 years of professional"
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s+(?:of\s+)?(?:working|professional)", re.IGNORECASE),
    # Bare mention: "8 years", "3 years Python developer"
    re.compile(r"\b(\d+)\+?\s*(?:years?|yrs?)\b", re.IGNORECASE),
]

SENIOR_YEARS = 5
JUNIOR_YEARS = 1
DEFAULT_YEARS = 3

_SENIOR_RE = re.compile(r"\b(?:senior|sr\.?|lead|principal|manager|director)\b", re.IGNORECASE)
_JUNIOR_RE = re.compile(r"\b(?:junior|jr\.?|entry|associate|assistant)\b", re.IGNORECASE)


class ExperienceExtractor(Protocol):
    def extract_years(self, text: str) -> int:
        """Return years of experience stated or implied by text. Never raises."""
        ...


class RegexExperienceExtractor:
    """Ordered regex patterns, then seniority keywords, then a neutral default."""

    def __init__(self, patterns: list[re.Pattern] | None = None) -> None:
        self.patterns = patterns if patterns is not None else EXPERIENCE_PATTERNS

    def extract_years(self, text: str) -> int:
        for pattern in self.patterns:
            match = pattern.search(text)
            if match:
                return int(match.group(1))
        return seniority_years(text)


def seniority_years(text: str) -> int:
    """Infer years from seniority wording when no explicit number is given."""
    if _SENIOR_RE.search(text):
        return SENIOR_YEARS
    if _JUNIOR_RE.search(text):
        return JUNIOR_YEARS
    return DEFAULT_YEARS


def score_experience(resume_years: int, job_years: int) -> float:
    """Bucketed ratio of resume years to required years.

    Boundaries resolve upward: exactly 80% scores 0.8, exactly 60% scores 0.6.
    """
    if job_years <= 0 or resume_years >= job_years:
        return 1.0
    # Integer cross-multiplication keeps the boundaries exact
    if resume_years * 10 >= job_years * 8:
        return 0.8
    if resume_years * 10 >= job_years * 6:
        return 0.6
    return 0.4
