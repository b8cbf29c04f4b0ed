"""Structured view of a resume, extracted locally from its text."""

from pydantic import BaseModel, Field


class ContactInfo(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class ExperienceEntry(BaseModel):
    position: str | None = None
    company: str | None = None
    description: list[str] = []


class EducationEntry(BaseModel):
    institution: str | None = None
    degree: str | None = None


class ResumeStructure(BaseModel):
    model_config = {"frozen": True}

    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: str | None = None
    skills: list[str] = []
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
