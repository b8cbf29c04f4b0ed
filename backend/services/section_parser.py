"""Resume structure: section headers, bullets, metrics, action verbs, and a
local extraction of contact details, skills, experience and education.
"""

import re

from models.schemas.resume_structure import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ResumeStructure,
)

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"career\s*(?:history|summary|path)",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications)",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills",
        r"(?:technical|core)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career|professional)?\s*objective",
        r"profile",
    ],
    "projects": [
        r"(?:key|notable|selected|personal)?\s*projects",
    ],
    "certifications": [
        r"certific(?:ations?|ates?)",
        r"licen[sc]es?\s*(?:&|and)?\s*certific(?:ations?|ates?)",
    ],
    "achievements": [
        r"(?:key\s+)?achievements?",
        r"(?:awards?|honors?|accomplishments)",
    ],
}

# Compile all patterns into a single regex per section
_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(
        rf"^\s*(?:{combined})\s*:?\s*$", re.IGNORECASE | re.MULTILINE
    )

# Bullet markers: standard + expanded unicode set
BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●")

# Percentages, dollar amounts and durations
_QUANTIFIED_RE = re.compile(
    r"\d+(?:\.\d+)?\s*%"
    r"|\$\s?\d[\d,]*(?:\.\d+)?\s*[kmb]?"
    r"|\b\d+\+?\s*(?:years?|yrs?|months?|weeks?|days?|hours?|hrs?)\b",
    re.IGNORECASE,
)

# Strong action verbs that open good resume bullets
ACTION_VERBS = frozenset({
    "achieved", "administered", "analyzed", "architected", "automated",
    "built", "collaborated", "conducted", "configured", "consolidated",
    "coordinated", "created", "decreased", "delivered", "deployed",
    "designed", "developed", "directed", "drove", "eliminated",
    "engineered", "enhanced", "established", "evaluated", "executed",
    "expanded", "facilitated", "founded", "generated", "grew",
    "implemented", "improved", "increased", "initiated", "integrated",
    "introduced", "launched", "led", "managed", "mentored", "migrated",
    "modernized", "negotiated", "optimized", "orchestrated", "organized",
    "overhauled", "pioneered", "planned", "produced", "reduced",
    "refactored", "resolved", "restructured", "revamped", "scaled",
    "secured", "simplified", "spearheaded", "standardized", "streamlined",
    "strengthened", "supervised", "trained", "transformed", "upgraded",
})

_WORD_RE = re.compile(r"[a-z]+")

# Contact info patterns
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
PHONE_RE = re.compile(r"\+?[\d\s\-().]{7,15}\d")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)

MAX_NAME_LENGTH = 50
MAX_SKILL_LENGTH = 30
MAX_EXPERIENCE_ENTRIES = 5
MAX_EDUCATION_ENTRIES = 3

# "Engineer | Acme | 2021 - Present", "Engineer, Acme", "Engineer at Acme"
_FIELD_SPLIT_RE = re.compile(r"\s*\|\s*|\s+[-–—]\s+|,\s+|\s+at\s+")
_SKILL_SPLIT_RE = re.compile(r"[,;|•\n]")
_ENTRY_SPLIT_RE = re.compile(r"\n\s*\n")
_NUMBERED_RE = re.compile(r"^\d{1,2}[.)]\s*")
_DEGREE_RE = re.compile(
    r"\b(?:bachelor|master|ph\.?d|doctorate|mba|associate|degree|diploma|certificate"
    r"|b\.?sc?|m\.?sc?|b\.?a|b\.?eng|m\.?eng)\b",
    re.IGNORECASE,
)
_INSTITUTION_RE = re.compile(
    r"\b(?:university|college|institute|school|academy|polytechnic)\b", re.IGNORECASE
)


def parse_sections(text: str) -> dict[str, str]:
    """Split resume text into named sections.

    Returns a dict mapping section name -> section text content.
    Unmatched text at the top goes into 'header'.
    """
    lines = text.split("\n")
    sections: dict[str, str] = {}
    current_section = "header"
    current_lines: list[str] = []

    for line in lines:
        matched_section = None
        stripped = line.strip()

        if stripped:
            for section_name, pattern in _COMPILED.items():
                if pattern.match(stripped):
                    matched_section = section_name
                    break

        if matched_section:
            if current_lines or current_section != "header":
                sections[current_section] = "\n".join(current_lines).strip()
            current_section = matched_section
            current_lines = []
        else:
            current_lines.append(line)

    if current_lines or current_section != "header":
        sections[current_section] = "\n".join(current_lines).strip()

    return sections


def detected_sections(text: str) -> list[str]:
    """Names of the standard sections whose headers appear in text."""
    return sorted(s for s in parse_sections(text) if s != "header")


def has_section_headers(text: str) -> bool:
    return bool(detected_sections(text))


def extract_bullets(text: str) -> list[str]:
    """Extract bullet-point lines from resume text."""
    bullets = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped[0] in BULLET_MARKERS:
            cleaned = stripped.lstrip("".join(BULLET_MARKERS) + " ").strip()
            if cleaned:
                bullets.append(cleaned)
        # Numbered bullets: "1.", "12.", "1)", "12)"
        elif re.match(r"^\d{1,2}[.)]\s", stripped):
            cleaned = re.sub(r"^\d{1,2}[.)]\s*", "", stripped).strip()
            if cleaned:
                bullets.append(cleaned)
    return bullets


def has_bullets(text: str) -> bool:
    return bool(extract_bullets(text))


def has_quantified_achievements(text: str) -> bool:
    return bool(_QUANTIFIED_RE.search(text))


def has_action_verbs(text: str) -> bool:
    return any(w in ACTION_VERBS for w in _WORD_RE.findall(text.lower()))


def _strip_marker(line: str) -> str:
    line = line.strip().lstrip("".join(BULLET_MARKERS) + " ")
    return _NUMBERED_RE.sub("", line).strip()


def _fields(line: str) -> list[str]:
    return [p.strip() for p in _FIELD_SPLIT_RE.split(line) if p.strip()]


def _entries(section_text: str) -> list[list[str]]:
    """Blank-line separated blocks, each as its non-empty stripped lines."""
    blocks = []
    for block in _ENTRY_SPLIT_RE.split(section_text):
        lines = [line.strip() for line in block.split("\n") if line.strip()]
        if lines:
            blocks.append(lines)
    return blocks


def extract_contact_info(text: str) -> ContactInfo:
    """Extract contact information from the top of the resume.

    Only the text above the first section header is searched when there is
    any, so dates further down are not mistaken for phone numbers.
    """
    header = parse_sections(text).get("header") or text

    email_match = EMAIL_RE.search(header)
    phone_match = PHONE_RE.search(header)
    linkedin_match = LINKEDIN_RE.search(header)
    github_match = GITHUB_RE.search(header)

    # Naive: the first short line without contact details or digits
    name = None
    first_line = next((line.strip() for line in header.split("\n") if line.strip()), "")
    if (
        first_line
        and len(first_line) < MAX_NAME_LENGTH
        and not EMAIL_RE.search(first_line)
        and not any(ch.isdigit() for ch in first_line)
    ):
        name = first_line

    return ContactInfo(
        name=name,
        email=email_match.group() if email_match else None,
        phone=phone_match.group().strip() if phone_match else None,
        linkedin=linkedin_match.group() if linkedin_match else None,
        github=github_match.group() if github_match else None,
    )


def extract_skill_list(section_text: str) -> list[str]:
    """Comma, bullet or line separated items of a skills section, deduplicated."""
    skills: list[str] = []
    seen: set[str] = set()
    for item in _SKILL_SPLIT_RE.split(section_text):
        skill = _strip_marker(item)
        if skill and len(skill) < MAX_SKILL_LENGTH and skill.lower() not in seen:
            seen.add(skill.lower())
            skills.append(skill)
    return skills


def _experience_entry(lines: list[str]) -> ExperienceEntry:
    fields = _fields(_strip_marker(lines[0]))
    return ExperienceEntry(
        position=fields[0] if fields else None,
        company=fields[1] if len(fields) > 1 else None,
        description=[d for d in (_strip_marker(line) for line in lines[1:]) if d],
    )


def _education_entry(lines: list[str]) -> EducationEntry:
    fields = [f for line in lines for f in _fields(_strip_marker(line))]
    degree = next((f for f in fields if _DEGREE_RE.search(f)), None)
    institution = next((f for f in fields if _INSTITUTION_RE.search(f)), None)
    if degree is None and institution is None and fields:
        institution = fields[0]
    return EducationEntry(institution=institution, degree=degree)


def extract_resume_structure(text: str) -> ResumeStructure:
    """Best-effort structured view of a resume. Never raises; missing parts stay empty."""
    sections = parse_sections(text)
    experience = [_experience_entry(lines) for lines in _entries(sections.get("experience", ""))]
    education = [_education_entry(lines) for lines in _entries(sections.get("education", ""))]
    return ResumeStructure(
        contact_info=extract_contact_info(text),
        summary=sections.get("summary") or None,
        skills=extract_skill_list(sections.get("skills", "")),
        experience=experience[:MAX_EXPERIENCE_ENTRIES],
        education=education[:MAX_EDUCATION_ENTRIES],
    )
