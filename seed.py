"""Seed script — populates the database with sample listings for local testing."""

import asyncio

from jobportal.config import Settings
from jobportal.database.engine import build_engine, build_session_factory, init_db
from jobportal.models.listing import Internship, Job

SAMPLE_JOBS = [
    Job(
        title="Backend Engineer",
        company="Acme Corp",
        location="Bengaluru",
        experience="2+ years",
        category="Engineering",
        perks=["Health insurance", "Flexible hours"],
        ctc="12 LPA",
        start_date="Immediately",
    ),
    Job(
        title="Data Analyst",
        company="Globex Inc",
        location="Remote",
        experience="1+ years",
        category="Analytics",
        perks=["Remote work"],
        ctc="8 LPA",
        start_date="Next month",
    ),
]

SAMPLE_INTERNSHIPS = [
    Internship(
        title="Frontend Intern",
        company="Acme Corp",
        location="Remote",
        duration="3 months",
        category="Engineering",
        perks=["Certificate", "Letter of recommendation"],
        stipend="15000/month",
        start_date="Immediately",
    ),
]


async def seed() -> None:
    """Insert sample listings into the configured database."""
    settings = Settings()
    engine = build_engine(settings.database_url)
    await init_db(engine)
    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        session.add_all(SAMPLE_JOBS + SAMPLE_INTERNSHIPS)
        await session.commit()
    await engine.dispose()
    print(f"✅ Seeded {len(SAMPLE_JOBS)} jobs and {len(SAMPLE_INTERNSHIPS)} internships.")


if __name__ == "__main__":
    asyncio.run(seed())
