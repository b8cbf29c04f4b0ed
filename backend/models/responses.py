from enum import Enum

from pydantic import BaseModel, Field

from models.schemas.extracted_keyword import ExtractedKeyword
from models.schemas.resume_structure import ResumeStructure
from models.schemas.score_breakdown import FactorImprovement
from models.schemas.skill_gap import SkillGapCategory
from models.schemas.suggestion import Suggestion


class AnalysisSource(str, Enum):
    """Where the scoring signal came from. Never serialized."""
    REMOTE = "remote"
    FALLBACK = "fallback"


class AnalysisResult(BaseModel):
    score: int = 0  # 0-100
    potential_score: int | None = None  # 0-100
    improvements: list[FactorImprovement] | None = None
    suggestions: list[Suggestion] = []
    keywords: list[ExtractedKeyword] = []
    skill_gaps: list[SkillGapCategory] | None = None
    missing_keywords: list[str] = []
    factor_scores: dict[str, float] = {}
    improved_resume: str | None = None
    resume_structure: ResumeStructure | None = None
    provenance: AnalysisSource = Field(AnalysisSource.FALLBACK, exclude=True)


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    remote_configured: bool = False
    generation_backend: str = ""
