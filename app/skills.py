"""
Skill normalization and binary skill vectors.

Free-text skills coming from user profiles and scraped job postings are
canonicalized first ("Node.js", "node" and "NODE 18" all become ``nodejs``),
then projected onto a shared vocabulary so that a user and every job in one
scoring run can be compared position by position.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

import numpy as np

# Version numbers such as "3", "3.9" or "2.0.1" and the whitespace around them.
_VERSION_RE = re.compile(r"\s*\d+(\.\d+)*\s*")

SKILL_SYNONYMS = {
    "javascript": "javascript",
    "js": "javascript",
    "node": "nodejs",
    "node.js": "nodejs",
    "python3": "python",
    "web development": "web development",
    "frontend": "frontend development",
    "front-end": "frontend development",
    "backend": "backend development",
    "back-end": "backend development",
}


def normalize_skill(raw: str) -> str:
    """
    Canonicalize a single skill string.

    Lower-cases and trims, strips version numbers, then collapses known
    synonyms. Any string is accepted; an empty string normalizes to "".
    """
    token = raw.lower().strip()
    token = _VERSION_RE.sub("", token)
    return SKILL_SYNONYMS.get(token, token)


def normalize_skills(raw_skills: Optional[Iterable[str]]) -> List[str]:
    """Normalize a list of skills, dropping duplicates but keeping order."""
    if not raw_skills:
        return []
    return list(dict.fromkeys(normalize_skill(skill) for skill in raw_skills))


def build_vocabulary(
    user_tokens: Iterable[str],
    job_token_lists: Iterable[Iterable[str]],
) -> List[str]:
    """
    Union of the user's tokens and every job's tokens.

    User tokens come first, then each job's tokens in corpus order. The
    returned order is what every vector of the run is indexed by.
    """
    vocabulary = dict.fromkeys(user_tokens)
    for tokens in job_token_lists:
        vocabulary.update(dict.fromkeys(tokens))
    return list(vocabulary)


def vectorize(tokens: Iterable[str], vocabulary: List[str]) -> np.ndarray:
    """Binary presence vector of ``tokens`` over ``vocabulary``."""
    present = set(tokens)
    return np.array([1.0 if skill in present else 0.0 for skill in vocabulary], dtype=float)
