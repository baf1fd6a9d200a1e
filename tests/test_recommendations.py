"""
End-to-end tests for ranking a job corpus against a user's skills.
"""

import math
import string

import numpy as np
import pytest

from app.errors import NoDataError, NoSkillsError, NotFoundError
from app.models import JobRecord
from app.recommendation import cosine_similarity, get_recommendations, score_job
from app.skills import build_vocabulary, normalize_skills, vectorize


def _names(prefix, count):
    """Distinct digit-free skill names (digits would be stripped as versions)."""
    letters = string.ascii_lowercase
    return [f"{prefix}{letters[i // 26]}{letters[i % 26]}" for i in range(count)]


def test_full_overlap_scores_100():
    user_tokens = normalize_skills(["JavaScript", "React"])
    job_tokens = normalize_skills(["javascript", "react", "node"])
    vocab = build_vocabulary(user_tokens, [job_tokens])
    assert vocab == ["javascript", "react", "nodejs"]
    user_vec = vectorize(user_tokens, vocab)
    job_vec = vectorize(job_tokens, vocab)
    assert user_vec.tolist() == [1.0, 1.0, 0.0]
    assert job_vec.tolist() == [1.0, 1.0, 1.0]
    assert np.isclose(cosine_similarity(user_vec, job_vec), 2 / (math.sqrt(2) * math.sqrt(3)))

    jobs = [JobRecord(job_id="job-1", skills_required=["javascript", "react", "node"])]
    recs = get_recommendations(["JavaScript", "React"], jobs)
    assert len(recs) == 1
    assert recs[0].job_id == "job-1"
    assert recs[0].match_percentage == 100


def test_disjoint_skills_floor_then_filtered_out():
    user_tokens = normalize_skills(["Python"])
    job_tokens = normalize_skills(["java"])
    vocab = build_vocabulary(user_tokens, [job_tokens])
    assert score_job(vectorize(user_tokens, vocab), vectorize(job_tokens, vocab)) == 30

    jobs = [JobRecord(job_id="job-2", skills_required=["java"])]
    assert get_recommendations(["Python"], jobs) == []


@pytest.mark.parametrize("skills", [[], None])
def test_no_user_skills_raises(skills):
    jobs = [JobRecord(job_id="job-1", skills_required=["python"])]
    with pytest.raises(NoSkillsError):
        get_recommendations(skills, jobs)


def test_no_skills_is_a_not_found_error():
    with pytest.raises(NotFoundError):
        get_recommendations([], [JobRecord(job_id="job-1")])


def test_empty_corpus_raises():
    with pytest.raises(NoDataError):
        get_recommendations(["Python"], [])


def test_job_without_skills_is_scored_not_failed():
    jobs = [
        JobRecord(job_id="empty", skills_required=None),
        JobRecord(job_id="match", skills_required=["Python 3.11"]),
    ]
    recs = get_recommendations(["python"], jobs)
    assert [r.job_id for r in recs] == ["match"]


def test_output_is_filtered_and_sorted():
    user = [f"skill{c}" for c in "abcdefgh"]
    jobs = [
        JobRecord(job_id="low", skills_required=["skilla"] + _names("other", 60)),
        JobRecord(job_id="none", skills_required=["cobol"]),
        JobRecord(job_id="full", skills_required=list(user)),
        JobRecord(job_id="mid", skills_required=["skilla"] + _names("extra", 9)),
    ]
    recs = get_recommendations(user, jobs)
    assert [r.job_id for r in recs] == ["full", "mid"]
    assert all(r.match_percentage >= 50 for r in recs)
    assert all(a.match_percentage >= b.match_percentage for a, b in zip(recs, recs[1:]))


def test_superset_job_scores_at_least_as_high():
    user = ["sa", "sb", "sc", "sd", "se", "sf", "sg", "sh"]
    base = ["sa", "xa", "xb", "xc", "xd", "xe", "xf", "xg", "xh", "xi"]
    jobs = [
        JobRecord(job_id="base", skills_required=base),
        JobRecord(job_id="superset", skills_required=base + ["sb"]),
    ]
    scores = {r.job_id: r.match_percentage for r in get_recommendations(user, jobs)}
    assert scores["base"] == 67
    assert scores["superset"] == 92


def test_thread_pool_matches_inline_scoring():
    user = ["Python", "SQL", "Docker"]
    jobs = [
        JobRecord(
            job_id=str(i),
            skills_required=["python", "sql"][: i % 3] + _names("tool", i % 5 + 1),
        )
        for i in range(40)
    ]
    assert get_recommendations(user, jobs, max_workers=4) == get_recommendations(user, jobs)


def test_inputs_are_not_mutated():
    user = ["JS", "React"]
    jobs = [JobRecord(job_id="job-1", skills_required=["Node.js", "React"])]
    get_recommendations(user, jobs)
    assert user == ["JS", "React"]
    assert jobs[0].skills_required == ["Node.js", "React"]
