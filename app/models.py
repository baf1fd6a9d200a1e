"""
Pydantic models for scorer inputs, API payloads and responses.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class JobRecord(BaseModel):
    """The slice of a job posting the scorer needs."""

    job_id: str
    skills_required: List[str] = Field(default_factory=list)

    @field_validator("skills_required", mode="before")
    @classmethod
    def _missing_skills_are_empty(cls, value):
        return [] if value is None else value


class Recommendation(BaseModel):
    """A job id paired with its user-facing match percentage."""

    job_id: str
    match_percentage: int = Field(ge=0, le=100)


class RecommendedJob(BaseModel):
    """Stored recommendation joined with the job's display fields."""

    job_id: str
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    job_posting_url: Optional[str] = None
    match_percentage: int


class RecommendationRequest(BaseModel):
    """Body of the "compute and store recommendations" call."""

    email: str


class RecommendationResponse(BaseModel):
    """Ranked recommendations for one user."""

    email: str
    message: Optional[str] = None
    recommendations: List[Recommendation] = Field(default_factory=list)


class SavedRecommendationsResponse(BaseModel):
    """Previously stored recommendations for one user."""

    email: str
    jobs: List[RecommendedJob] = Field(default_factory=list)
