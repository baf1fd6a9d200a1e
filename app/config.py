"""
Configuration utilities for the job recommendation service.
"""

from functools import lru_cache
import os
from pydantic import BaseModel


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    neo4j_uri: str = os.getenv("NEO4J_URI", "bolt://localhost:7687")
    neo4j_user: str = os.getenv("NEO4J_USER", "neo4j")
    neo4j_password: str = os.getenv("NEO4J_PASSWORD", "password")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Jobs are pulled from Neo4j in fixed-size chunks fetched concurrently.
    job_chunk_size: int = int(os.getenv("JOB_CHUNK_SIZE", "50"))
    # 0 scores every job inline; >0 uses a thread pool of that size.
    scoring_workers: int = int(os.getenv("SCORING_WORKERS", "0"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
