import itertools

import pytest

from services.factor_calculators import Factor
from services.score_aggregator import FACTOR_WEIGHTS, MAX_IMPROVEMENT, aggregate, potential_for


def _all(score: float) -> dict[Factor, float]:
    return {f: score for f in Factor}


def test_weights_sum_to_one():
    assert sum(FACTOR_WEIGHTS.values()) == pytest.approx(1.0)
    assert set(FACTOR_WEIGHTS) == set(Factor) == set(MAX_IMPROVEMENT)


def test_uniform_scores():
    breakdown = aggregate(_all(0.5))
    assert breakdown.current_score == pytest.approx(0.5)
    expected_potential = sum(FACTOR_WEIGHTS[f] * min(1.0, 0.5 + MAX_IMPROVEMENT[f]) for f in Factor)
    assert breakdown.potential_score == pytest.approx(expected_potential, abs=1e-4)


def test_perfect_scores_have_no_improvements():
    breakdown = aggregate(_all(1.0))
    assert breakdown.current_score == 1.0
    assert breakdown.potential_score == 1.0
    assert breakdown.improvements == []


def test_potential_clamped_at_one():
    assert potential_for(Factor.FORMAT_QUALITY, 0.9) == 1.0
    assert potential_for(Factor.FORMAT_QUALITY, 0.5) == pytest.approx(0.9)


def test_significance_threshold():
    scores = _all(1.0)
    scores[Factor.MODEL_CONFIDENCE] = 0.5     # +0.10, exactly at threshold
    scores[Factor.FORMAT_QUALITY] = 0.95      # +0.05, below threshold
    scores[Factor.KEYWORD_COVERAGE] = 0.0     # +0.30
    improvements = {i.category: i for i in aggregate(scores).improvements}
    assert set(improvements) == {"model_confidence", "keyword_coverage"}
    assert improvements["keyword_coverage"].potential == pytest.approx(0.3)
    assert improvements["keyword_coverage"].suggested_improvements


def test_missing_factor_renormalizes():
    scores = _all(0.8)
    del scores[Factor.MODEL_CONFIDENCE]
    breakdown = aggregate(scores)
    assert breakdown.current_score == pytest.approx(0.8)
    assert "model_confidence" not in breakdown.factor_scores


def test_out_of_range_scores_are_clamped():
    breakdown = aggregate({Factor.KEYWORD_COVERAGE: 1.7, Factor.FORMAT_QUALITY: -0.3})
    assert 0.0 <= breakdown.current_score <= breakdown.potential_score <= 1.0


def test_empty_input():
    breakdown = aggregate({})
    assert breakdown.current_score == 0.0
    assert breakdown.potential_score == 0.0


def test_potential_never_below_current():
    values = [0.0, 0.2, 0.4, 0.6, 0.95, 1.0]
    for a, b, c in itertools.product(values, repeat=3):
        scores = {
            Factor.KEYWORD_COVERAGE: a,
            Factor.EXPERIENCE_ALIGNMENT: b,
            Factor.SKILL_DIVERSITY: c,
            Factor.FORMAT_QUALITY: a,
            Factor.EDUCATION_MATCH: b,
            Factor.INDUSTRY_ALIGNMENT: c,
        }
        breakdown = aggregate(scores)
        assert breakdown.potential_score >= breakdown.current_score
