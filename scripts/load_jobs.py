"""
ETL script to load scraped job postings into Neo4j.

Data source: a JSON / JSON Lines file of postings (the scraper's export),
read with ``datasets.load_dataset("json", ...)``. Each row needs a job id
and a list of required skills; title, company, location and url are kept
for display.

For each job, we MERGE a :Job node keyed by ``job_id`` and set
``skills_required``, which the recommendation endpoint scores against
user skills.
"""

from __future__ import annotations

import sys
from typing import List

from datasets import load_dataset
from neo4j import GraphDatabase

from app.config import get_settings


DEFAULT_DATA_FILE = "jobs.jsonl"


def parse_skills(value) -> List[str]:
    """Accept a list of skills or a comma separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(part) for part in value if part]


def run(data_file: str = DEFAULT_DATA_FILE, limit: int | None = None) -> None:
    """Main job ingestion logic."""
    settings = get_settings()
    print(f"[JOBS ETL] Connecting to Neo4j at: {settings.neo4j_uri}")

    try:
        driver = GraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_user, settings.neo4j_password),
        )
        with driver.session() as test_session:
            test_session.run("RETURN 1").single()
        print("[JOBS ETL] ✓ Connection successful")
    except Exception as e:
        print(f"[JOBS ETL] ✗ Connection failed: {e}")
        raise

    print(f"[JOBS ETL] Loading job postings from {data_file}...")
    ds = load_dataset("json", data_files=data_file, split="train")
    print(f"[JOBS ETL] Dataset loaded: {len(ds)} jobs")
    if limit is not None:
        ds = ds.select(range(min(limit, len(ds))))

    rows: List[dict] = []
    skipped = 0
    for row in ds:
        job_id = row.get("job_id") or row.get("_id") or row.get("id") or row.get("url")
        if job_id is None:
            skipped += 1
            continue
        rows.append(
            {
                "job_id": str(job_id),
                "title": row.get("title") or row.get("job_title") or "Unknown title",
                "company": row.get("company") or row.get("company_name"),
                "location": row.get("location") or row.get("job_location"),
                "url": row.get("job_posting_url") or row.get("url"),
                "skills_required": parse_skills(row.get("skills_required")),
            },
        )
    if skipped:
        print(f"[JOBS ETL] Skipped {skipped} rows without an id")

    with driver.session() as session:
        print("[JOBS ETL] Creating Job constraint...")
        session.run("CREATE CONSTRAINT IF NOT EXISTS FOR (j:Job) REQUIRE j.job_id IS UNIQUE")
        print("[JOBS ETL] ✓ Constraint created")

        print("[JOBS ETL] Writing jobs to Neo4j...")
        batch_size = 500
        for start in range(0, len(rows), batch_size):
            session.run(
                """
                UNWIND $rows AS row
                MERGE (j:Job {job_id: row.job_id})
                SET j.title = row.title,
                    j.company = row.company,
                    j.location = row.location,
                    j.job_posting_url = row.url,
                    j.skills_required = row.skills_required
                """,
                rows=rows[start:start + batch_size],
            )
            print(f"[JOBS ETL] Written {min(start + batch_size, len(rows))} jobs...")

        print(f"[JOBS ETL] ✓ Written {len(rows)} Job nodes")

    with driver.session() as verify_session:
        job_count_result = verify_session.run("MATCH (j:Job) RETURN count(j) AS cnt").single()
        job_skills_result = verify_session.run(
            "MATCH (j:Job) WHERE size(coalesce(j.skills_required, [])) > 0 RETURN count(j) AS cnt"
        ).single()
        print(
            f"[JOBS ETL] Verification: {job_count_result['cnt']} jobs, "
            f"{job_skills_result['cnt']} with required skills"
        )

    driver.close()
    print("[JOBS ETL] ✓ ETL completed successfully")


if __name__ == "__main__":
    run(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_DATA_FILE)
