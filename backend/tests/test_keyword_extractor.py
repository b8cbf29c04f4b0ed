from services.keyword_extractor import KeywordExtractor, extract_keywords, group_by_category
from services.taxonomy import SkillTaxonomy

EXAMPLE_JD = "Requires 5 years experience with Python and SQL, React preferred"


def _words(keywords):
    return {kw.word for kw in keywords}


def test_extracts_job_keywords():
    assert _words(extract_keywords(EXAMPLE_JD)) == {"python", "sql", "react"}


def test_extracts_resume_keywords():
    assert _words(extract_keywords("3 years Python developer")) == {"python"}


def test_keyword_fields():
    keywords = extract_keywords(EXAMPLE_JD)
    by_word = {kw.word: kw for kw in keywords}
    python = by_word["python"]
    assert python.category == "programming"
    assert python.score == 1.0
    assert EXAMPLE_JD.lower()[python.start:python.end] == "python"
    assert by_word["react"].category == "frameworks"


def test_ordered_by_first_occurrence():
    words = [kw.word for kw in extract_keywords(EXAMPLE_JD)]
    assert words == ["python", "sql", "react"]


def test_multi_word_and_punctuated_terms():
    text = "Built Node.js services and applied Machine Learning with CI/CD"
    words = _words(extract_keywords(text))
    assert {"node.js", "machine learning", "ci/cd"} <= words


def test_single_tokens_match_whole_words_only():
    # "javascript" must not also produce "java"
    assert _words(extract_keywords("JavaScript developer")) == {"javascript"}


def test_duplicates_collapse_to_first_occurrence():
    keywords = extract_keywords("python, more python, python again")
    assert len(keywords) == 1
    assert keywords[0].start == 0


def test_no_matches():
    assert extract_keywords("We are looking for a friendly person.") == []
    assert extract_keywords("") == []


def test_idempotent():
    text = "Python, Django, PostgreSQL, Docker and Kubernetes on AWS"
    assert extract_keywords(text) == extract_keywords(text)


def test_custom_taxonomy():
    extractor = KeywordExtractor(SkillTaxonomy({"kitchen": {"knives": ["chef knife", "paring"]}}))
    keywords = extractor.extract("Expert with a chef knife and paring work")
    assert [(kw.category, kw.word) for kw in keywords] == [("kitchen", "chef knife"), ("kitchen", "paring")]


def test_group_by_category():
    grouped = group_by_category(extract_keywords(EXAMPLE_JD))
    assert [kw.word for kw in grouped["programming"]] == ["python", "sql"]
    assert [kw.word for kw in grouped["frameworks"]] == ["react"]
