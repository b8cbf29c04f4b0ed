"""Extractor output: a taxonomy term found in a piece of text."""

from pydantic import BaseModel


class ExtractedKeyword(BaseModel):
    """A single taxonomy match.

    The span indexes the lower-cased source text and points at the first
    occurrence only; it is meant for display, not for slicing overlapping
    matches.
    """
    model_config = {"frozen": True}

    category: str
    word: str
    score: float = 1.0  # 0.0-1.0, binary today: every match scores 1.0
    start: int = -1
    end: int = -1
