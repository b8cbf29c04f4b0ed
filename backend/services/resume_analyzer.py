"""Orchestrator: remote-first analysis with a deterministic local fallback.

Pipeline:
1. Keyword extraction on both texts (taxonomy match)
2. Remote zero-shot classification (model confidence factor), through the
   resilient client: result or None, never an exception
3. Local factor calculators over raw text + extracted keywords
4. Weighted aggregation into current / potential scores
5. Skill-gap analysis over the same keyword sets
6. Suggestions from factor headroom + skill gaps
7. Improved resume: remote generator on the remote path, local template
   otherwise or when generation fails
8. Local resume structure (contact info, skills, experience, education)
9. Hand the result to the store when a session key is given
"""

import logging

from config import settings
from models.responses import AnalysisResult, AnalysisSource
from services import prompt_builder, section_parser, suggestion_generator
from services.analysis_store import AnalysisStore, get_analysis_store
from services.errors import InputError
from services.experience import ExperienceExtractor, RegexExperienceExtractor
from services.factor_calculators import CANDIDATE_LABELS, Factor, compute_local_factors, label_relevance
from services.inference_client import RemoteInference, get_remote_inference
from services.keyword_extractor import KeywordExtractor
from services.proficiency import ProficiencyClassifier, RegexProficiencyClassifier
from services.score_aggregator import aggregate
from services.skill_gap_analyzer import SkillGapAnalyzer
from services.taxonomy import DEFAULT_TAXONOMY, SkillTaxonomy

logger = logging.getLogger(__name__)


def to_percent(score: float) -> int:
    # Half-up, so 0.625 gives 63 rather than round()'s 62
    return min(100, max(0, int(score * 100 + 0.5)))


class AnalysisOrchestrator:
    def __init__(
        self,
        remote: RemoteInference,
        store: AnalysisStore | None = None,
        taxonomy: SkillTaxonomy = DEFAULT_TAXONOMY,
        experience_extractor: ExperienceExtractor | None = None,
        proficiency_classifier: ProficiencyClassifier | None = None,
        generate_improved_resume: bool = True,
        classifier_max_chars: int = 4000,
    ) -> None:
        self.remote = remote
        self.store = store
        self.extractor = KeywordExtractor(taxonomy)
        self.experience_extractor = experience_extractor or RegexExperienceExtractor()
        self.skill_gap_analyzer = SkillGapAnalyzer(
            taxonomy,
            self.extractor,
            proficiency_classifier or RegexProficiencyClassifier(),
        )
        self.generate_improved_resume = generate_improved_resume
        self.classifier_max_chars = classifier_max_chars

    async def analyze(
        self,
        resume_text: str,
        job_description_text: str,
        session_key: str | None = None,
    ) -> AnalysisResult:
        if not resume_text or not resume_text.strip():
            raise InputError("Resume text is required")
        if not job_description_text or not job_description_text.strip():
            raise InputError("Job description text is required")

        job_keywords = self.extractor.extract(job_description_text)
        resume_keywords = self.extractor.extract(resume_text)

        classification = await self.remote.classify(
            [prompt_builder.build_classification_text(
                resume_text, job_description_text, self.classifier_max_chars,
            )],
            CANDIDATE_LABELS,
        )
        provenance = AnalysisSource.REMOTE if classification is not None else AnalysisSource.FALLBACK

        factors = compute_local_factors(
            resume_text, job_description_text, job_keywords, resume_keywords, self.experience_extractor,
        )
        if classification is not None:
            factors[Factor.MODEL_CONFIDENCE] = label_relevance(classification.top_label)
        else:
            logger.warning("Remote classification unavailable, scoring with local heuristics only")

        breakdown = aggregate(factors)
        skill_gaps = self.skill_gap_analyzer.analyze(
            resume_text,
            job_description_text,
            resume_keywords=resume_keywords,
            job_keywords=job_keywords,
        )
        suggestions = suggestion_generator.generate(breakdown, skill_gaps, job_keywords)
        improved_resume = await self._improved_resume(
            resume_text, job_description_text, skill_gaps, suggestions, provenance,
        )

        result = AnalysisResult(
            score=to_percent(breakdown.current_score),
            potential_score=to_percent(breakdown.potential_score),
            improvements=breakdown.improvements,
            suggestions=suggestions,
            keywords=job_keywords,
            skill_gaps=skill_gaps,
            missing_keywords=prompt_builder.missing_skill_names(skill_gaps),
            factor_scores=breakdown.factor_scores,
            improved_resume=improved_resume,
            resume_structure=section_parser.extract_resume_structure(resume_text),
            provenance=provenance,
        )
        logger.info(
            "Analysis complete via %s: score=%d potential=%s keywords=%d gaps=%d",
            provenance.value, result.score, result.potential_score, len(job_keywords), len(skill_gaps),
        )

        if session_key and self.store is not None:
            self.store.save(session_key, result)
        return result

    async def _improved_resume(self, resume_text, job_description_text, skill_gaps, suggestions, provenance) -> str:
        if provenance is AnalysisSource.REMOTE and self.generate_improved_resume:
            prompt = prompt_builder.build_improvement_prompt(
                resume_text, job_description_text, skill_gaps, suggestions,
            )
            generated = await self.remote.generate(prompt)
            if generated:
                return generated
            logger.warning("Improved resume generation unavailable, using basic template")
        return prompt_builder.build_basic_improved_resume(resume_text, skill_gaps)


_orchestrator: AnalysisOrchestrator | None = None


def get_orchestrator() -> AnalysisOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = AnalysisOrchestrator(
            remote=get_remote_inference(),
            store=get_analysis_store(),
            generate_improved_resume=settings.generate_improved_resume,
            classifier_max_chars=settings.classifier_max_chars,
        )
    return _orchestrator
