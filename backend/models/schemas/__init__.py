"""Pydantic contracts passed between the analysis components."""

from models.schemas.extracted_keyword import ExtractedKeyword
from models.schemas.inference import ClassificationResult, SamplingParams
from models.schemas.resume_structure import ContactInfo, EducationEntry, ExperienceEntry, ResumeStructure
from models.schemas.score_breakdown import FactorImprovement, ScoreBreakdown
from models.schemas.skill_gap import EnhancedSkill, SkillGapCategory
from models.schemas.suggestion import Suggestion

__all__ = [
    "ExtractedKeyword",
    "ClassificationResult",
    "SamplingParams",
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "ResumeStructure",
    "FactorImprovement",
    "ScoreBreakdown",
    "EnhancedSkill",
    "SkillGapCategory",
    "Suggestion",
]
