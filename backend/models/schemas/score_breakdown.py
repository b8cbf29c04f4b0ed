"""Aggregator output: weighted current and potential scores."""

from pydantic import BaseModel


class FactorImprovement(BaseModel):
    """Headroom on a single factor (both values on a 0.0-1.0 scale)."""
    category: str
    current: float
    potential: float
    suggested_improvements: list[str] = []


class ScoreBreakdown(BaseModel):
    current_score: float = 0.0  # 0.0-1.0 weighted sum
    potential_score: float = 0.0  # 0.0-1.0, never below current_score
    improvements: list[FactorImprovement] = []
    factor_scores: dict[str, float] = {}
