"""
Core recommendation logic: score every job posting against a user's skills.

The user and each job become binary skill vectors over one shared
vocabulary. Raw cosine similarity between them is reshaped into a match
percentage (square-root boost, 2x scale capped at 100%, 30% floor), then
jobs under 50% are dropped and the rest sorted best first.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

import numpy as np

from app.errors import NoDataError, NoSkillsError
from app.models import JobRecord, Recommendation
from app.skills import build_vocabulary, normalize_skills, vectorize

logger = logging.getLogger(__name__)

BOOST_FACTOR = 2.0
# Applied before filtering, so a job with no overlap at all still scores 30.
SCORE_FLOOR = 0.3
MIN_MATCH_PERCENTAGE = 50


def cosine_similarity(vec_a: np.ndarray, vec_b: np.ndarray) -> float:
    """
    Cosine similarity between two 1D numpy arrays.

    Returns 0.0 when either vector has zero norm (an empty skill set).
    """
    if vec_a.size != vec_b.size:
        raise ValueError("Vectors must be of the same size")

    denom = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if denom == 0:
        return 0.0
    return float(np.dot(vec_a, vec_b) / denom)


def match_percentage(cosine: float) -> int:
    """Turn a raw cosine similarity into the 30..100 match percentage."""
    boosted = math.sqrt(max(cosine, 0.0))
    scaled = min(boosted * BOOST_FACTOR, 1.0)
    final = max(scaled, SCORE_FLOOR)
    # Round half up; round() would round half to even.
    return int(math.floor(final * 100 + 0.5))


def score_job(user_vec: np.ndarray, job_vec: np.ndarray) -> int:
    """Match percentage of one job vector against the user vector."""
    return match_percentage(cosine_similarity(user_vec, job_vec))


def rank_recommendations(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    """
    Drop recommendations under the minimum match and sort the rest by
    match percentage, highest first. Ties keep their input order.
    """
    kept = [rec for rec in recommendations if rec.match_percentage >= MIN_MATCH_PERCENTAGE]
    kept.sort(key=lambda rec: rec.match_percentage, reverse=True)
    return kept


def get_recommendations(
    user_skills: Optional[List[str]],
    jobs: List[JobRecord],
    max_workers: Optional[int] = None,
) -> List[Recommendation]:
    """
    Rank ``jobs`` for a user with the given raw skills.

    Raises ``NoSkillsError`` when there are no user skills and ``NoDataError``
    when the job list is empty. Each job is scored independently against the
    same vocabulary and user vector; with ``max_workers`` set the scoring
    runs on a thread pool.
    """
    if not user_skills:
        raise NoSkillsError("User has no skills")
    if not jobs:
        raise NoDataError("No jobs available")

    user_tokens = normalize_skills(user_skills)
    job_tokens = [normalize_skills(job.skills_required) for job in jobs]

    vocabulary = build_vocabulary(user_tokens, job_tokens)
    user_vec = vectorize(user_tokens, vocabulary)
    job_vecs = [vectorize(tokens, vocabulary) for tokens in job_tokens]

    if max_workers:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            scores = list(pool.map(lambda job_vec: score_job(user_vec, job_vec), job_vecs))
    else:
        scores = [score_job(user_vec, job_vec) for job_vec in job_vecs]

    ranked = rank_recommendations(
        Recommendation(job_id=job.job_id, match_percentage=score)
        for job, score in zip(jobs, scores)
    )
    logger.info(
        "%d job recommendations out of %d jobs (vocabulary size %d)",
        len(ranked), len(jobs), len(vocabulary),
        extra={"job_count": len(jobs), "recommendation_count": len(ranked)},
    )
    return ranked
