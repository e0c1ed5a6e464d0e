"""
Seed script - populates the listing store with sample data for development.

Usage:
    python -m scripts.seed

The sample set exercises every directory rule: a company whose only listing
is filled (hidden), a draft listing (hidden), names starting with digits and
non-Latin characters (the "0-9" bucket), and names with reserved URL
characters.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os
from datetime import datetime, timedelta, timezone

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from company_directory.core.database import async_session_maker, init_db
from company_directory.models.job_listing import STATUS_DRAFT, STATUS_PUBLISH
from company_directory.repositories.listing_repository import ListingRepository


# ─── Sample Listings ───────────────────────────────────────────
# (company_name, title, location, status, filled)

SAMPLE_LISTINGS = [
    ("Alpha Inc", "Backend Engineer", "Remote", STATUS_PUBLISH, False),
    ("Alpha Inc", "Support Lead", "Nairobi", STATUS_PUBLISH, True),
    ("acme labs", "Data Analyst", "Berlin", STATUS_PUBLISH, False),
    ("Acme & Co", "Product Designer", "London", STATUS_PUBLISH, False),
    ("A/B Corp", "Growth Marketer", "Remote", STATUS_PUBLISH, False),
    ("Zeta Corp", "Site Reliability Engineer", "Remote", STATUS_PUBLISH, False),
    ("Zeta Corp", "Frontend Engineer", "Lisbon", STATUS_PUBLISH, False),
    ("7 Eleven", "Store Systems Engineer", "Dallas", STATUS_PUBLISH, False),
    ("3M", "Materials Scientist", "Saint Paul", STATUS_PUBLISH, False),
    ("北京公司", "Mobile Engineer", "Beijing", STATUS_PUBLISH, False),
    ("Ghost LLC", "Recruiter", "Remote", STATUS_PUBLISH, True),
    ("Draft Works", "Copywriter", "Remote", STATUS_DRAFT, False),
]


async def seed():
    print("Seeding listing store...")

    await init_db()
    print("  Tables created")

    repo = ListingRepository()

    async with async_session_maker() as db:
        if await repo.count(db):
            print("  Listings already exist, skipping...")
            return

        now = datetime.now(timezone.utc)
        for i, (company_name, title, location, status, filled) in enumerate(SAMPLE_LISTINGS):
            await repo.create(
                db,
                company_name=company_name,
                title=title,
                location=location,
                status=status,
                filled=filled,
                apply_url=f"https://jobs.example.com/apply/{i}",
                posted_at=now - timedelta(days=i),  # Stagger posting dates
            )

        await db.commit()
        print(f"  Created {len(SAMPLE_LISTINGS)} listings")
        print()
        print("Seed complete!")


if __name__ == "__main__":
    asyncio.run(seed())
