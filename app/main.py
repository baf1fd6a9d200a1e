"""
FastAPI application exposing skill-based job recommendation endpoints.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from neo4j import AsyncDriver, AsyncSession

from app.config import get_settings
from app.db import close_driver, get_driver, neo4j_session
from app.errors import NoDataError, NotFoundError
from app.logging_config import setup_logging
from app.models import (
    Recommendation,
    RecommendationRequest,
    RecommendationResponse,
    SavedRecommendationsResponse,
)
from app.recommendation import get_recommendations
from app.store import (
    fetch_job_corpus,
    fetch_saved_recommendations,
    fetch_user_skills,
    save_recommendations,
)

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Close the shared Neo4j driver when the application shuts down."""
    yield
    await close_driver()


app = FastAPI(
    title="Job Recommendation API",
    description="Neo4j-backed job recommendations from user skills.",
    version="0.1.0",
    lifespan=lifespan,
)


async def get_session() -> AsyncSession:
    """Dependency to inject a Neo4j session."""
    async with neo4j_session() as session:
        yield session


def get_neo4j_driver() -> AsyncDriver:
    """Dependency to inject the shared Neo4j driver."""
    return get_driver()


async def compute_recommendations(
    session: AsyncSession,
    driver: AsyncDriver,
    email: str,
) -> List[Recommendation]:
    """Load the user's skills and the job corpus, then rank the jobs."""
    settings = get_settings()
    try:
        user_skills = await fetch_user_skills(session, email)
        jobs = await fetch_job_corpus(driver, settings.job_chunk_size)
        # Scoring is CPU-bound; keep it off the event loop.
        return await run_in_threadpool(
            get_recommendations,
            user_skills,
            jobs,
            max_workers=settings.scoring_workers or None,
        )
    except (NotFoundError, NoDataError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.get("/api/users/{email}/recommendations/jobs", response_model=RecommendationResponse)
async def recommend_jobs(
    email: str,
    limit: int = Query(20, ge=1),
    session: AsyncSession = Depends(get_session),
    driver: AsyncDriver = Depends(get_neo4j_driver),
) -> RecommendationResponse:
    """Live job recommendations for a user, best match first."""
    recs = await compute_recommendations(session, driver, email)
    if not recs:
        raise HTTPException(status_code=404, detail="No job recommendations found")
    return RecommendationResponse(email=email, recommendations=recs[:limit])


@app.post("/api/recommendations", response_model=RecommendationResponse)
async def add_recommendations(
    payload: RecommendationRequest,
    session: AsyncSession = Depends(get_session),
    driver: AsyncDriver = Depends(get_neo4j_driver),
):
    """Compute a user's recommendations and store them on the graph."""
    recs = await compute_recommendations(session, driver, payload.email)
    if not recs:
        return RecommendationResponse(email=payload.email, message="No job recommendations found")

    stored = await save_recommendations(session, payload.email, recs)
    logger.info(
        "Stored %d recommendations for %s", stored, payload.email,
        extra={"email": payload.email, "recommendation_count": stored},
    )
    body = RecommendationResponse(
        email=payload.email,
        message="Job recommendations added successfully",
        recommendations=recs,
    )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=body.model_dump())


@app.get("/api/recommendations", response_model=SavedRecommendationsResponse)
async def saved_recommendations(
    email: str = Query(..., description="Email of the user"),
    session: AsyncSession = Depends(get_session),
) -> SavedRecommendationsResponse:
    """Recommendations previously stored for a user."""
    try:
        jobs = await fetch_saved_recommendations(session, email)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return SavedRecommendationsResponse(email=email, jobs=jobs)


@app.get("/health")
async def health() -> dict:
    """Simple health-check endpoint used by Docker Desktop and external probes."""
    return {"status": "ok"}
