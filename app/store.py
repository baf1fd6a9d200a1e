"""
Neo4j queries feeding the scorer and persisting its output.

Graph model:
  (:User {email, name, skills})
  (:Job {job_id, title, company, location, job_posting_url, skills_required})
  (:User)-[:RECOMMENDED {match_percentage}]->(:Job)
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from neo4j import AsyncDriver, AsyncSession

from app.errors import NoDataError, NoSkillsError, NotFoundError
from app.models import JobRecord, Recommendation, RecommendedJob

logger = logging.getLogger(__name__)


async def fetch_user_skills(session: AsyncSession, email: str) -> List[str]:
    """
    Return the raw skill list stored on the user's profile.

    Raises ``NotFoundError`` if there is no such user and ``NoSkillsError``
    if the user has no skills.
    """
    query = """
    MATCH (u:User {email: $email})
    RETURN u.skills AS skills
    """
    result = await session.run(query, email=email)
    record = await result.single()
    if record is None:
        logger.error("No user found with email %s", email, extra={"email": email})
        raise NotFoundError("User not found")

    skills = record["skills"]
    if not skills:
        logger.error("User %s has no skills", email, extra={"email": email})
        raise NoSkillsError("User has no skills")
    return list(skills)


async def count_jobs(session: AsyncSession) -> int:
    """Number of :Job nodes."""
    result = await session.run("MATCH (j:Job) WHERE j.job_id IS NOT NULL RETURN count(j) AS cnt")
    record = await result.single()
    return int(record["cnt"]) if record is not None else 0


async def _fetch_job_chunk(driver: AsyncDriver, skip: int, limit: int) -> List[JobRecord]:
    query = """
    MATCH (j:Job)
    WHERE j.job_id IS NOT NULL
    RETURN j.job_id AS job_id, j.skills_required AS skills_required
    ORDER BY j.job_id
    SKIP $skip LIMIT $limit
    """
    # A session runs one query at a time, so every chunk gets its own.
    async with driver.session() as session:
        result = await session.run(query, skip=skip, limit=limit)
        records = await result.data()
    return [
        JobRecord(job_id=str(rec["job_id"]), skills_required=rec.get("skills_required"))
        for rec in records
        if rec["job_id"] is not None
    ]


async def fetch_job_corpus(driver: AsyncDriver, chunk_size: int = 50) -> List[JobRecord]:
    """
    Load every job's id and required skills.

    Jobs are read in ``chunk_size`` pages fetched concurrently and flattened
    back in page order. Raises ``NoDataError`` when there are no jobs.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    async with driver.session() as session:
        total = await count_jobs(session)
    if total == 0:
        logger.error("No jobs found in the database")
        raise NoDataError("No jobs available")

    total_chunks = -(-total // chunk_size)
    chunks = await asyncio.gather(
        *(_fetch_job_chunk(driver, i * chunk_size, chunk_size) for i in range(total_chunks))
    )
    jobs = [job for chunk in chunks for job in chunk]
    logger.debug("Loaded %d jobs in %d chunks", len(jobs), total_chunks)
    return jobs


async def save_recommendations(
    session: AsyncSession,
    email: str,
    recommendations: List[Recommendation],
) -> int:
    """
    Replace the user's stored recommendations with ``recommendations``.

    The delete and the insert share one write transaction, so a failed
    insert leaves the previous recommendations in place. Returns the number
    of RECOMMENDED relationships written.
    """
    recs = [rec.model_dump() for rec in recommendations]
    return await session.execute_write(_replace_recommendations, email, recs)


async def _replace_recommendations(tx, email: str, recs: List[dict]) -> int:
    clear_query = """
    MATCH (u:User {email: $email})-[r:RECOMMENDED]->(:Job)
    DELETE r
    """
    insert_query = """
    MATCH (u:User {email: $email})
    UNWIND $recs AS rec
    MATCH (j:Job {job_id: rec.job_id})
    MERGE (u)-[r:RECOMMENDED]->(j)
    SET r.match_percentage = rec.match_percentage
    RETURN count(r) AS cnt
    """
    await tx.run(clear_query, email=email)
    result = await tx.run(insert_query, email=email, recs=recs)
    record = await result.single()
    return int(record["cnt"]) if record is not None else 0


async def fetch_saved_recommendations(session: AsyncSession, email: str) -> List[RecommendedJob]:
    """
    Stored recommendations for a user, best match first.

    Raises ``NotFoundError`` if the user does not exist or has nothing stored.
    """
    user_result = await session.run(
        "MATCH (u:User {email: $email}) RETURN u.email AS email",
        email=email,
    )
    if await user_result.single() is None:
        raise NotFoundError("User not found")

    query = """
    MATCH (u:User {email: $email})-[r:RECOMMENDED]->(j:Job)
    RETURN j.job_id AS job_id,
           j.title AS title,
           j.company AS company,
           j.location AS location,
           j.job_posting_url AS job_posting_url,
           r.match_percentage AS match_percentage
    ORDER BY match_percentage DESC
    """
    result = await session.run(query, email=email)
    records = await result.data()
    if not records:
        raise NotFoundError("No recommendations found for this user")

    return [
        RecommendedJob(
            job_id=str(rec["job_id"]),
            title=rec.get("title"),
            company=rec.get("company"),
            location=rec.get("location"),
            job_posting_url=rec.get("job_posting_url"),
            match_percentage=rec["match_percentage"],
        )
        for rec in records
    ]
