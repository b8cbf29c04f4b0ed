from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    # Empty defaults so missing input surfaces as a 400 from the analyzer, not a 422.
    resume_text: str = Field("", max_length=50000, description="Plain text resume content")
    job_description_text: str = Field("", max_length=20000, description="Job description text")
