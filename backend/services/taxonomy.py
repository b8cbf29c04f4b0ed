"""Static skill taxonomy: category -> subcategory -> canonical skill terms.

The taxonomy is frozen at import time and handed to the extractor and the
skill-gap analyzer through their constructors, so tests can swap in a
custom one. Terms are lower-cased. When a term is listed under more than one
(category, subcategory) pair, the first one in declaration order wins.
"""

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

# Terms that a \W+ split can produce as a single token
_SINGLE_TOKEN_RE = re.compile(r"^\w+$")

# ---------------------------------------------------------------------------
# Default taxonomy data
# Keep terms disjoint across categories; avoid terms that are also common
# English words ("go", "rest", "r") since single tokens match exactly.
# ---------------------------------------------------------------------------
SKILL_TAXONOMY_DATA: dict[str, dict[str, list[str]]] = {
    "programming": {
        "languages": [
            "python", "java", "javascript", "typescript", "sql", "golang",
            "rust", "ruby", "php", "swift", "kotlin", "scala", "c++", "c#",
            "perl", "matlab", "bash", "powershell", "dart", "elixir",
        ],
        "markup": ["html", "css", "sass", "xml", "json", "yaml"],
    },
    "frameworks": {
        "frontend": [
            "react", "angular", "vue", "svelte", "next.js", "jquery",
            "redux", "tailwind", "bootstrap",
        ],
        "backend": [
            "django", "flask", "fastapi", "spring boot", "spring", "express",
            "node.js", "rails", "laravel", ".net", "graphql", "rest api",
        ],
        "mobile": ["react native", "flutter", "android", "ios", "xamarin"],
    },
    "databases": {
        "relational": ["postgresql", "mysql", "sqlite", "oracle", "sql server", "mariadb"],
        "nosql": ["mongodb", "redis", "cassandra", "dynamodb", "elasticsearch", "neo4j"],
        "warehouse": ["snowflake", "bigquery", "redshift"],
    },
    "cloud": {
        "platforms": ["aws", "azure", "gcp", "google cloud", "heroku"],
        "devops": [
            "docker", "kubernetes", "terraform", "ansible", "jenkins",
            "ci/cd", "github actions", "linux", "nginx",
        ],
        "observability": ["prometheus", "grafana", "datadog", "splunk"],
    },
    "data science": {
        "machine learning": [
            "machine learning", "deep learning", "tensorflow", "pytorch",
            "scikit-learn", "keras", "nlp", "computer vision", "llm",
        ],
        "analytics": [
            "pandas", "numpy", "statistics", "tableau", "power bi",
            "excel", "data visualization", "a/b testing",
        ],
        "big data": ["spark", "hadoop", "kafka", "airflow", "etl"],
    },
    "tools": {
        "version control": ["git", "github", "gitlab", "bitbucket"],
        "collaboration": ["jira", "confluence", "slack", "figma"],
        "testing": ["pytest", "junit", "selenium", "cypress", "jest"],
    },
    "methodologies": {
        "process": ["agile", "scrum", "kanban", "waterfall"],
        "engineering": ["microservices", "tdd", "devops", "serverless", "oop"],
    },
    "soft skills": {
        "interpersonal": [
            "communication", "leadership", "teamwork", "collaboration",
            "mentoring", "negotiation",
        ],
        "cognitive": [
            "problem solving", "critical thinking", "time management",
            "attention to detail", "creativity",
        ],
    },
}


def _freeze(data: Mapping[str, Mapping[str, list[str]]]) -> Mapping[str, Mapping[str, tuple[str, ...]]]:
    frozen: dict[str, Mapping[str, tuple[str, ...]]] = {}
    for category, subcategories in data.items():
        frozen[category.lower()] = MappingProxyType({
            sub.lower(): tuple(dict.fromkeys(t.lower().strip() for t in terms))
            for sub, terms in subcategories.items()
        })
    return MappingProxyType(frozen)


class SkillTaxonomy:
    """Immutable, hierarchical skill vocabulary."""

    def __init__(self, data: Mapping[str, Mapping[str, list[str]]]) -> None:
        self._tree = _freeze(data)
        # term -> (category, subcategory); first declaration wins
        index: dict[str, tuple[str, str]] = {}
        for category, subcategories in self._tree.items():
            for subcategory, terms in subcategories.items():
                for term in terms:
                    index.setdefault(term, (category, subcategory))
        self._index = MappingProxyType(index)
        self._single_token = frozenset(t for t in index if _SINGLE_TOKEN_RE.match(t))
        # Terms the token split can never produce: multi-word or punctuated
        self._phrases = tuple(t for t in index if t not in self._single_token)

    @property
    def tree(self) -> Mapping[str, Mapping[str, tuple[str, ...]]]:
        return self._tree

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._tree)

    @property
    def terms(self) -> frozenset[str]:
        return frozenset(self._index)

    @property
    def single_token_terms(self) -> frozenset[str]:
        return self._single_token

    @property
    def phrase_terms(self) -> tuple[str, ...]:
        return self._phrases

    def __contains__(self, term: str) -> bool:
        return term.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def locate(self, term: str) -> tuple[str, str] | None:
        """Return (category, subcategory) for a term, or None if unknown."""
        return self._index.get(term.lower())

    def category_of(self, term: str) -> str | None:
        location = self.locate(term)
        return location[0] if location else None

    def category_order(self, category: str) -> int:
        """Declaration position of a category, used for stable ordering."""
        try:
            return self.categories.index(category)
        except ValueError:
            return len(self._tree)


DEFAULT_TAXONOMY = SkillTaxonomy(SKILL_TAXONOMY_DATA)
