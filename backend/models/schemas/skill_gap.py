"""Skill-gap analyzer output: per-category matched/missing job skills."""

from typing import Literal

from pydantic import BaseModel

from models.schemas.extracted_keyword import ExtractedKeyword

ProficiencyLevel = Literal["expert", "advanced", "intermediate", "beginner"]
Importance = Literal["critical", "recommended", "nice-to-have"]


class EnhancedSkill(ExtractedKeyword):
    """A job-description skill annotated with what the resume says about it."""
    proficiency_level: ProficiencyLevel = "beginner"
    years_of_experience: int | None = None
    subcategory: str | None = None
    importance: Importance = "nice-to-have"
    description: str = ""


class SkillGapCategory(BaseModel):
    """Matched and missing job skills for one taxonomy category."""
    model_config = {"frozen": True}

    category: str
    matched: list[EnhancedSkill] = []
    missing: list[EnhancedSkill] = []
    importance: Importance = "nice-to-have"
