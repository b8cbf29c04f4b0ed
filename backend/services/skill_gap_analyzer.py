"""Skill-gap analysis: job-description skills vs resume skills, per category.

For every skill the job description mentions:
- category/subcategory come from the taxonomy (first declaration wins),
- proficiency comes from the resume via the ProficiencyClassifier (highest
  tier first, default "beginner"),
- years come from a skill-scoped regex over the resume,
- importance comes from requirement language near the skill in the job text
  ("required" > "preferred" > "nice to have"), and only when there is none
  from how many skills the category is missing.

Category importance is computed once per category with the same two-step
rule, anchored on the category name and all of its job skills.
"""

import logging
import re

from models.schemas.extracted_keyword import ExtractedKeyword
from models.schemas.skill_gap import EnhancedSkill, Importance, SkillGapCategory
from services.keyword_extractor import KeywordExtractor, group_by_category
from services.proficiency import (
    ProficiencyClassifier,
    RegexProficiencyClassifier,
    infer_skill_years,
    term_pattern,
)
from services.taxonomy import DEFAULT_TAXONOMY, SkillTaxonomy

logger = logging.getLogger(__name__)

# Checked in this order; the first tier found near an anchor wins
REQUIREMENT_LANGUAGE: list[tuple[Importance, re.Pattern]] = [
    ("critical", re.compile(r"\b(?:required|must[\s-]+have|essential)\b")),
    ("recommended", re.compile(r"\b(?:preferred|desired)\b")),
    ("nice-to-have", re.compile(r"\b(?:nice[\s-]+to[\s-]+have|plus)\b")),
]

PROXIMITY_CHARS = 40

CRITICAL_MISSING_COUNT = 3
RECOMMENDED_MISSING_COUNT = 1


def importance_from_missing_count(missing_count: int) -> Importance:
    if missing_count > CRITICAL_MISSING_COUNT:
        return "critical"
    if missing_count > RECOMMENDED_MISSING_COUNT:
        return "recommended"
    return "nice-to-have"


# Requirement language does not carry across a clause boundary
CLAUSE_BOUNDARY = re.compile(r"[,;!?\n]|\.(?:\s|$)")


def _windows(anchor: str, text: str, radius: int) -> list[str]:
    windows = []
    for m in re.finditer(term_pattern(anchor), text):
        before = CLAUSE_BOUNDARY.split(text[max(0, m.start() - radius): m.start()])[-1]
        after = CLAUSE_BOUNDARY.split(text[m.end(): m.end() + radius])[0]
        windows.append(before + m.group() + after)
    return windows


def explicit_importance(anchors: list[str], job_text_lower: str, radius: int = PROXIMITY_CHARS) -> Importance | None:
    """Importance stated by requirement language near any anchor, if any."""
    windows = [w for anchor in anchors for w in _windows(anchor, job_text_lower, radius)]
    if not windows:
        return None
    for importance, pattern in REQUIREMENT_LANGUAGE:
        if any(pattern.search(w) for w in windows):
            return importance
    return None


def _category_anchors(category: str) -> list[str]:
    anchors = [category]
    if category.endswith("ies"):
        anchors.append(category[:-3] + "y")
    elif category.endswith("s"):
        anchors.append(category[:-1])
    return anchors


class SkillGapAnalyzer:
    def __init__(
        self,
        taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY,
        extractor: KeywordExtractor | None = None,
        proficiency_classifier: ProficiencyClassifier | None = None,
    ) -> None:
        self.taxonomy = taxonomy
        self.extractor = extractor or KeywordExtractor(taxonomy)
        self.proficiency_classifier = proficiency_classifier or RegexProficiencyClassifier()

    def analyze(
        self,
        resume_text: str,
        job_text: str,
        resume_keywords: list[ExtractedKeyword] | None = None,
        job_keywords: list[ExtractedKeyword] | None = None,
    ) -> list[SkillGapCategory]:
        """Build one SkillGapCategory per category found in the job description."""
        if job_keywords is None:
            job_keywords = self.extractor.extract(job_text)
        if resume_keywords is None:
            resume_keywords = self.extractor.extract(resume_text)
        if not job_keywords:
            return []

        job_lower = job_text.lower()
        resume_by_category = {
            category: {kw.word.lower() for kw in kws}
            for category, kws in group_by_category(resume_keywords).items()
        }

        gaps: list[SkillGapCategory] = []
        job_by_category = group_by_category(job_keywords)
        for category in sorted(job_by_category, key=self.taxonomy.category_order):
            job_skills = job_by_category[category]
            resume_terms = resume_by_category.get(category, set())
            matched_kws = [kw for kw in job_skills if kw.word.lower() in resume_terms]
            missing_kws = [kw for kw in job_skills if kw.word.lower() not in resume_terms]
            heuristic = importance_from_missing_count(len(missing_kws))

            anchors = _category_anchors(category) + [kw.word for kw in job_skills]
            category_importance = explicit_importance(anchors, job_lower) or heuristic

            gaps.append(SkillGapCategory(
                category=category,
                matched=[self._enhance(kw, resume_text, job_lower, heuristic) for kw in matched_kws],
                missing=[self._enhance(kw, resume_text, job_lower, heuristic) for kw in missing_kws],
                importance=category_importance,
            ))

        logger.debug(
            "Skill gaps: %s",
            {g.category: (len(g.matched), len(g.missing), g.importance) for g in gaps},
        )
        return gaps

    def _enhance(
        self,
        keyword: ExtractedKeyword,
        resume_text: str,
        job_lower: str,
        fallback_importance: Importance,
    ) -> EnhancedSkill:
        location = self.taxonomy.locate(keyword.word)
        category, subcategory = location if location else (keyword.category, None)
        importance = explicit_importance([keyword.word], job_lower) or fallback_importance
        proficiency = self.proficiency_classifier.classify(keyword.word, resume_text)
        years = infer_skill_years(keyword.word, resume_text)

        area = f"{subcategory} ({category})" if subcategory else category
        description = f"{keyword.word}: {area} skill, {importance} for this role"

        return EnhancedSkill(
            category=category,
            word=keyword.word,
            score=keyword.score,
            start=keyword.start,
            end=keyword.end,
            proficiency_level=proficiency,
            years_of_experience=years,
            subcategory=subcategory,
            importance=importance,
            description=description,
        )


_default_analyzer = SkillGapAnalyzer()


def analyze_skill_gaps(resume_text: str, job_text: str) -> list[SkillGapCategory]:
    return _default_analyzer.analyze(resume_text, job_text)
