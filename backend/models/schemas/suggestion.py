from typing import Literal

from pydantic import BaseModel

Severity = Literal["high", "medium", "low"]
SuggestionCategory = Literal["skills", "experience", "format", "keywords", "education"]


class Suggestion(BaseModel):
    title: str
    description: str
    severity: Severity
    category: SuggestionCategory
    action_items: list[str] = []
