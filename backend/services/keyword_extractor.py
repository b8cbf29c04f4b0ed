"""Keyword/skill extraction against the skill taxonomy.

Two passes over the lower-cased text:
1. Single-token pass: split on non-word runs and test each token for exact
   membership in the taxonomy.
2. Phrase pass: every term the split can never yield (multi-word terms like
   "machine learning", punctuated ones like "node.js" or "ci/cd") is tested
   by substring containment.

Matches are binary, so every keyword scores 1.0.
"""

import logging
import re

from models.schemas.extracted_keyword import ExtractedKeyword
from services.taxonomy import DEFAULT_TAXONOMY, SkillTaxonomy

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"\W+")

MATCH_SCORE = 1.0


class KeywordExtractor:
    """Scans text for taxonomy terms. Stateless apart from the taxonomy."""

    def __init__(self, taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY) -> None:
        self.taxonomy = taxonomy

    def find_terms(self, text: str) -> set[str]:
        """Return the set of taxonomy terms present in text."""
        lowered = text.lower()
        tokens = {t for t in _TOKEN_SPLIT_RE.split(lowered) if t}
        hits = tokens & self.taxonomy.single_token_terms
        hits.update(term for term in self.taxonomy.phrase_terms if term in lowered)
        return hits

    def extract(self, text: str) -> list[ExtractedKeyword]:
        """Extract taxonomy keywords, ordered by first occurrence."""
        if not text:
            return []

        lowered = text.lower()
        keywords: list[ExtractedKeyword] = []
        for term in self.find_terms(text):
            category = self.taxonomy.category_of(term)
            if category is None:
                continue
            start = lowered.find(term)
            keywords.append(ExtractedKeyword(
                category=category,
                word=term,
                score=MATCH_SCORE,
                start=start,
                end=start + len(term) if start >= 0 else -1,
            ))

        keywords.sort(key=lambda kw: (kw.start, kw.word))
        logger.debug("Extracted %d keywords from %d chars", len(keywords), len(text))
        return keywords


_default_extractor = KeywordExtractor()


def extract_keywords(text: str) -> list[ExtractedKeyword]:
    """Extract keywords using the default taxonomy."""
    return _default_extractor.extract(text)


def group_by_category(keywords: list[ExtractedKeyword]) -> dict[str, list[ExtractedKeyword]]:
    """Group keywords by category, preserving order within each group."""
    grouped: dict[str, list[ExtractedKeyword]] = {}
    for kw in keywords:
        grouped.setdefault(kw.category, []).append(kw)
    return grouped
