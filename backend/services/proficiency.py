"""Per-skill proficiency and years inference from resume text."""

import re
from typing import Protocol

from models.schemas.skill_gap import ProficiencyLevel

# Highest tier first; the first tier with a match wins
PROFICIENCY_TIERS: list[tuple[ProficiencyLevel, str]] = [
    ("expert", r"expert(?:ise)?|mastery|mastered|extensive|deep|guru|authority"),
    ("advanced", r"advanced|proficient|proficiency|strong|skilled|solid|fluent"),
    ("intermediate", r"intermediate|working\s+knowledge|competent|comfortable|hands-on|experienced"),
    ("beginner", r"basic|beginner|novice|familiar(?:ity)?|exposure|learning|introductory"),
]

DEFAULT_PROFICIENCY: ProficiencyLevel = "beginner"

# Qualifier may sit up to 3 words before or 2 words after the skill
_GAP_BEFORE = r"(?:\W+\w+){0,3}?\W+"
_GAP_AFTER = r"(?:\W+\w+){0,2}?\W+"


def term_pattern(term: str) -> str:
    """Regex for a taxonomy term bounded by non-word characters."""
    return rf"(?<!\w){re.escape(term)}(?!\w)"


class ProficiencyClassifier(Protocol):
    def classify(self, skill: str, resume_text: str) -> ProficiencyLevel:
        """Return the proficiency the resume claims for skill. Never raises."""
        ...


class RegexProficiencyClassifier:
    def __init__(self, tiers: list[tuple[ProficiencyLevel, str]] | None = None) -> None:
        self.tiers = tiers if tiers is not None else PROFICIENCY_TIERS

    def classify(self, skill: str, resume_text: str) -> ProficiencyLevel:
        text = resume_text.lower()
        skill_re = term_pattern(skill.lower())
        for level, qualifiers in self.tiers:
            q = rf"\b(?:{qualifiers})\b"
            pattern = rf"{q}{_GAP_BEFORE}{skill_re}|{skill_re}{_GAP_AFTER}\(?{q}"
            if re.search(pattern, text):
                return level
        return DEFAULT_PROFICIENCY


def infer_skill_years(skill: str, resume_text: str) -> int | None:
    """Years of experience the resume ties to a specific skill, if stated.

    Matches "3 years of experience with Python", "3 years Python" and
    "Python (3 years)".
    """
    text = resume_text.lower()
    skill_re = term_pattern(skill.lower())
    before = re.search(
        rf"(\d+)\+?\s*(?:years?|yrs?)(?:\s+of)?(?:\s+(?:experience|exp))?"
        rf"(?:\s+(?:with|in|using|of))?\s+{skill_re}",
        text,
    )
    if before:
        return int(before.group(1))
    after = re.search(rf"{skill_re}\s*[:(,-]?\s*(\d+)\+?\s*(?:years?|yrs?)\b", text)
    if after:
        return int(after.group(1))
    return None
