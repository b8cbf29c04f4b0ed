import pytest

from services.experience import RegexExperienceExtractor, score_experience, seniority_years

extractor = RegexExperienceExtractor()


@pytest.mark.parametrize("text,years", [
    ("Requires 5 years experience with Python and SQL", 5),
    ("7+ years of professional experience", 7),
    ("At least 4 years in the industry", 4),
    ("6 years working on distributed systems", 6),
    ("3 years Python developer", 3),
    ("Senior Software Engineer, 8 years", 8),
])
def test_extract_years(text, years):
    assert extractor.extract_years(text) == years


def test_explicit_experience_phrase_beats_bare_mention():
    text = "Company founded 20 years ago. You bring 4 years of experience."
    assert extractor.extract_years(text) == 4


@pytest.mark.parametrize("text,years", [
    ("Senior backend engineer", 5),
    ("Engineering Manager", 5),
    ("Junior developer wanted", 1),
    ("Entry level analyst", 1),
    ("Backend developer", 3),
])
def test_seniority_fallback(text, years):
    assert extractor.extract_years(text) == years
    assert seniority_years(text) == years


def test_senior_checked_before_junior():
    assert seniority_years("Senior engineer mentoring junior staff") == 5


@pytest.mark.parametrize("resume,job,expected", [
    (5, 5, 1.0),
    (8, 3, 1.0),
    (4, 5, 0.8),   # exactly 80%
    (3, 5, 0.6),   # exactly 60%
    (2, 5, 0.4),
    (0, 5, 0.4),
    (3, 0, 1.0),
])
def test_score_experience_buckets(resume, job, expected):
    assert score_experience(resume, job) == expected


def test_score_experience_is_monotonic():
    for job in range(1, 12):
        scores = [score_experience(resume, job) for resume in range(0, 15)]
        assert scores == sorted(scores)


def test_custom_patterns():
    import re

    custom = RegexExperienceExtractor([re.compile(r"(\d+) summers")])
    assert custom.extract_years("3 summers of internships") == 3
    assert custom.extract_years("5 years of experience") == 3
