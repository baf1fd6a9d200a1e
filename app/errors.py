"""
Errors raised while building job recommendations.

All of them are terminal for the current request; the API turns them into
404 responses.
"""


class RecommendationError(Exception):
    """Base class for recommendation failures."""


class NotFoundError(RecommendationError):
    """The user (or their stored data) does not exist."""


class NoSkillsError(NotFoundError):
    """The user exists but has no skills to match against."""


class NoDataError(RecommendationError):
    """There are no job postings to rank."""
