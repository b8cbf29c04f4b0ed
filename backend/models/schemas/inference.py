"""Contracts for the remote classifier/generator service."""

from pydantic import BaseModel, model_validator


class ClassificationResult(BaseModel):
    """Zero-shot classification result, labels ordered by confidence descending."""
    labels: list[str]
    scores: list[float]

    @model_validator(mode="after")
    def _check_lengths(self) -> "ClassificationResult":
        if len(self.labels) != len(self.scores):
            raise ValueError("labels and scores must have the same length")
        return self

    @property
    def top_label(self) -> str | None:
        return self.labels[0] if self.labels else None


class SamplingParams(BaseModel):
    temperature: float = 0.3
    max_new_tokens: int = 2048
