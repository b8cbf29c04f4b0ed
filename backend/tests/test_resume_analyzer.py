"""Tests for the analysis orchestrator (remote path and local fallback)."""

import httpx
import pytest

from fakes import FakeClassifier, FakeGenerator, fast_resilient_client, unavailable
from models.responses import AnalysisSource
from services.analysis_store import InMemoryAnalysisStore
from services.errors import InputError
from services.factor_calculators import compute_local_factors
from services.inference_client import HuggingFaceInferenceClient, RemoteInference
from services.keyword_extractor import extract_keywords
from services.prompt_builder import BASIC_IMPROVEMENT_HEADER
from services.resume_analyzer import AnalysisOrchestrator, to_percent
from services.score_aggregator import aggregate


EXAMPLE_JD = "Requires 5 years experience with Python and SQL, React preferred"
EXAMPLE_RESUME = "3 years Python developer"

SAMPLE_RESUME = """
Jane Doe

Experience
Senior Software Engineer, Acme
- Led migration of 12 services to Kubernetes
- Reduced API latency by 35% using Redis caching
- Built data pipelines in Python with Airflow

Education
Bachelor of Science in Computer Science

Skills
Python, Django, PostgreSQL, Docker, Kubernetes, AWS, Git
"""

SAMPLE_JD = """
Senior Python Developer

Requirements:
- 5+ years of experience with Python
- Django or FastAPI is required
- PostgreSQL and Redis
- Docker and Kubernetes; Terraform is a plus

Education: Bachelor's degree in Computer Science
"""


def _orchestrator(remote, store=None, **kwargs):
    return AnalysisOrchestrator(remote=remote, store=store, **kwargs)


class TestRemotePath:
    @pytest.mark.asyncio
    async def test_remote_result(self, remote, fake_classifier, fake_generator):
        result = await _orchestrator(remote).analyze(SAMPLE_RESUME, SAMPLE_JD)
        assert result.provenance is AnalysisSource.REMOTE
        assert result.factor_scores["model_confidence"] == 1.0
        assert 0 <= result.score <= result.potential_score <= 100
        assert result.improved_resume == "IMPROVED RESUME"
        assert len(fake_classifier.calls) == 1
        assert len(fake_generator.prompts) == 1

    @pytest.mark.asyncio
    async def test_classifier_input(self, remote, fake_classifier):
        await _orchestrator(remote, classifier_max_chars=50).analyze(SAMPLE_RESUME, SAMPLE_JD)
        texts, labels = fake_classifier.calls[0]
        assert len(texts) == 1
        assert len(texts[0]) <= 50
        assert labels == ["highly relevant to job", "somewhat relevant to job", "not relevant to job"]

    @pytest.mark.asyncio
    async def test_generation_prompt_mentions_missing_skills(self, remote, fake_generator):
        await _orchestrator(remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        prompt = fake_generator.prompts[0]
        assert "sql" in prompt
        assert "react" in prompt

    @pytest.mark.asyncio
    async def test_generation_failure_uses_basic_template(self):
        generator = FakeGenerator(errors=[unavailable(500)])
        remote = RemoteInference(FakeClassifier(), generator, fast_resilient_client())
        result = await _orchestrator(remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert result.provenance is AnalysisSource.REMOTE
        assert BASIC_IMPROVEMENT_HEADER in result.improved_resume

    @pytest.mark.asyncio
    async def test_generation_can_be_disabled(self, remote, fake_generator):
        result = await _orchestrator(remote, generate_improved_resume=False).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert fake_generator.prompts == []
        assert result.improved_resume.startswith(EXAMPLE_RESUME)

    @pytest.mark.asyncio
    async def test_low_relevance_label_lowers_score(self):
        high = RemoteInference(FakeClassifier("highly relevant to job"), None, fast_resilient_client())
        low = RemoteInference(FakeClassifier("not relevant to job"), None, fast_resilient_client())
        high_result = await _orchestrator(high).analyze(SAMPLE_RESUME, SAMPLE_JD)
        low_result = await _orchestrator(low).analyze(SAMPLE_RESUME, SAMPLE_JD)
        assert low_result.factor_scores["model_confidence"] == 0.2
        assert low_result.score < high_result.score


class TestFallbackPath:
    @pytest.mark.asyncio
    async def test_three_503s_fall_back_to_local_scoring(self):
        classifier = FakeClassifier(errors=[unavailable(503)] * 3)
        generator = FakeGenerator()
        remote = RemoteInference(classifier, generator, fast_resilient_client(max_attempts=3))

        result = await _orchestrator(remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)

        assert len(classifier.calls) == 3
        assert result.provenance is AnalysisSource.FALLBACK
        assert "model_confidence" not in result.factor_scores
        local = aggregate(compute_local_factors(
            EXAMPLE_RESUME, EXAMPLE_JD, extract_keywords(EXAMPLE_JD), extract_keywords(EXAMPLE_RESUME),
        ))
        assert result.score == to_percent(local.current_score)
        assert generator.prompts == []
        assert BASIC_IMPROVEMENT_HEADER in result.improved_resume

    @pytest.mark.asyncio
    async def test_fallback_result_has_full_shape(self, offline_remote):
        result = await _orchestrator(offline_remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert result.provenance is AnalysisSource.FALLBACK
        assert [kw.word for kw in result.keywords] == ["python", "sql", "react"]
        assert result.factor_scores["experience_alignment"] == 0.6
        gaps = {g.category: g for g in result.skill_gaps}
        assert [s.word for s in gaps["programming"].missing] == ["sql"]
        assert gaps["frameworks"].importance == "recommended"
        assert result.suggestions[0].category == "skills"
        assert result.suggestions[-1].action_items[0] == "python, sql, react"
        assert result.improvements

    @pytest.mark.asyncio
    async def test_missing_keywords_and_resume_structure(self, offline_remote):
        result = await _orchestrator(offline_remote).analyze(SAMPLE_RESUME, SAMPLE_JD)
        missing = [s.word for gap in result.skill_gaps for s in gap.missing]
        assert result.missing_keywords == missing
        assert {"fastapi", "terraform"} <= set(result.missing_keywords)
        assert "python" not in result.missing_keywords

        structure = result.resume_structure
        assert structure.contact_info.name == "Jane Doe"
        assert "Kubernetes" in structure.skills
        assert structure.experience[0].position == "Senior Software Engineer"
        assert structure.experience[0].company == "Acme"
        assert structure.education[0].degree == "Bachelor of Science in Computer Science"

    @pytest.mark.asyncio
    async def test_basic_improved_resume_lists_missing_skills(self, offline_remote):
        result = await _orchestrator(offline_remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert result.improved_resume.startswith(EXAMPLE_RESUME)
        assert "sql, react" in result.improved_resume

    @pytest.mark.asyncio
    async def test_job_without_taxonomy_terms(self, offline_remote):
        result = await _orchestrator(offline_remote).analyze(EXAMPLE_RESUME, "Friendly team player wanted")
        assert result.keywords == []
        assert result.skill_gaps == []
        assert result.factor_scores["keyword_coverage"] == 0.0
        assert result.suggestions[-1].action_items[0] == ""

    @pytest.mark.asyncio
    async def test_hard_failure_is_not_retried(self):
        classifier = FakeClassifier(errors=[unavailable(404)])
        remote = RemoteInference(classifier, None, fast_resilient_client())
        result = await _orchestrator(remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert len(classifier.calls) == 1
        assert result.provenance is AnalysisSource.FALLBACK

    @pytest.mark.asyncio
    async def test_undecodable_remote_body_falls_back(self):
        def handler(request):
            return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip at all")

        hf_client = HuggingFaceInferenceClient(
            api_key="hf_test", base_url="https://hf.test/models", transport=httpx.MockTransport(handler),
        )
        remote = RemoteInference(hf_client, None, fast_resilient_client())
        result = await _orchestrator(remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert result.provenance is AnalysisSource.FALLBACK
        assert "model_confidence" not in result.factor_scores

    @pytest.mark.asyncio
    async def test_unexpected_classifier_error_falls_back(self):
        classifier = FakeClassifier(errors=[RuntimeError("sdk blew up")])
        remote = RemoteInference(classifier, None, fast_resilient_client())
        result = await _orchestrator(remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert len(classifier.calls) == 1
        assert result.provenance is AnalysisSource.FALLBACK
        assert result.factor_scores["experience_alignment"] == 0.6


class TestInputAndPersistence:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("resume,job", [("", EXAMPLE_JD), (EXAMPLE_RESUME, "   "), ("", "")])
    async def test_empty_input_raises(self, remote, fake_classifier, resume, job):
        with pytest.raises(InputError):
            await _orchestrator(remote).analyze(resume, job)
        assert fake_classifier.calls == []

    @pytest.mark.asyncio
    async def test_result_saved_under_session_key(self, remote):
        store = InMemoryAnalysisStore()
        result = await _orchestrator(remote, store).analyze(EXAMPLE_RESUME, EXAMPLE_JD, session_key="s1")
        assert store.get("s1") == result

    @pytest.mark.asyncio
    async def test_nothing_saved_without_session_key(self, remote):
        store = InMemoryAnalysisStore()
        await _orchestrator(remote, store).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_provenance_not_serialized(self, offline_remote):
        result = await _orchestrator(offline_remote).analyze(EXAMPLE_RESUME, EXAMPLE_JD)
        assert "provenance" not in result.model_dump()


@pytest.mark.parametrize("score,expected", [
    (0.625, 63),
    (0.125, 13),
    (0.624, 62),
    (0.0, 0),
    (1.0, 100),
    (1.2, 100),
    (-0.1, 0),
])
def test_to_percent_rounds_half_up(score, expected):
    assert to_percent(score) == expected
