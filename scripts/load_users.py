"""
ETL script to load user profiles (email, name, skills) into Neo4j.

It expects a JSON file holding a list of objects such as::

    {"email": "ada@example.com", "name": "Ada", "skills": ["Python 3", "JS"]}

Skills are stored raw; normalization happens at recommendation time.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List

from neo4j import GraphDatabase

from app.config import get_settings


PROJECT_ROOT = Path(__file__).resolve().parents[1]


def load_profiles(path: Path) -> List[dict]:
    """Read profiles, lower-casing emails and dropping rows without one."""
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    profiles = []
    for item in raw:
        email = (item.get("email") or "").strip().lower()
        if not email:
            continue
        profiles.append(
            {
                "email": email,
                "name": item.get("name") or item.get("username"),
                "skills": [str(s) for s in item.get("skills") or []],
            },
        )
    return profiles


def run(path: Path = PROJECT_ROOT / "users.json") -> None:
    """Main ETL entrypoint."""
    settings = get_settings()
    print(f"[USERS ETL] Connecting to Neo4j at: {settings.neo4j_uri}")

    driver = GraphDatabase.driver(
        settings.neo4j_uri,
        auth=(settings.neo4j_user, settings.neo4j_password),
    )
    with driver.session() as test_session:
        test_session.run("RETURN 1").single()
    print("[USERS ETL] ✓ Connection successful")

    profiles = load_profiles(path)
    print(f"[USERS ETL] Loaded {len(profiles)} profiles from {path}")

    with driver.session() as session:
        session.run("CREATE CONSTRAINT IF NOT EXISTS FOR (u:User) REQUIRE u.email IS UNIQUE")
        session.run(
            """
            UNWIND $profiles AS p
            MERGE (u:User {email: p.email})
            SET u.name = p.name,
                u.skills = p.skills
            """,
            profiles=profiles,
        )

    with driver.session() as verify_session:
        record = verify_session.run(
            "MATCH (u:User) WHERE size(coalesce(u.skills, [])) > 0 RETURN count(u) AS cnt"
        ).single()
        print(f"[USERS ETL] Verification: {record['cnt']} users with skills")

    driver.close()
    print("[USERS ETL] ✓ ETL completed successfully")


if __name__ == "__main__":
    run(Path(sys.argv[1]) if len(sys.argv) > 1 else PROJECT_ROOT / "users.json")
