"""
Listing repository - the store adapter the company directory reads from.
"""
from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy import select, func, and_, text
from sqlalchemy.ext.asyncio import AsyncSession

from company_directory.models.job_listing import (
    JobListing,
    JOB_LISTING_POST_TYPE,
    STATUS_PUBLISH,
)
from company_directory.repositories.base import BaseRepository


@dataclass(frozen=True)
class ListingPredicate:
    """A fully specified listing filter for a single company."""

    company_name: str
    post_type: str = JOB_LISTING_POST_TYPE
    status: str = STATUS_PUBLISH
    exclude_filled: bool = True


class ListingRepository(BaseRepository[JobListing]):
    def __init__(self, timeout: float = None):
        super().__init__(JobListing, timeout=timeout)

    @staticmethod
    def _where(predicate: ListingPredicate):
        filters = [
            JobListing.post_type == predicate.post_type,
            JobListing.status == predicate.status,
            JobListing.company_name == predicate.company_name,
        ]
        if predicate.exclude_filled:
            filters.append(JobListing.filled.is_not(True))
        return and_(*filters)

    async def distinct_company_names(
        self,
        db: AsyncSession,
        post_type: str = JOB_LISTING_POST_TYPE,
        status: str = STATUS_PUBLISH,
    ) -> List[str]:
        """
        Distinct, non-empty company names on listings of the given type/status.

        Sorted case-insensitively, ties broken by the raw name.
        """
        query = (
            select(JobListing.company_name)
            .where(
                JobListing.post_type == post_type,
                JobListing.status == status,
                JobListing.company_name.is_not(None),
                JobListing.company_name != "",
            )
            .group_by(JobListing.company_name)
            .order_by(func.lower(JobListing.company_name), JobListing.company_name)
        )
        result = await self._execute(db, query, "distinct_company_names")
        return list(result.scalars().all())

    async def count_listings(
        self,
        db: AsyncSession,
        predicate: ListingPredicate,
    ) -> int:
        """Count listings matching a predicate."""
        result = await self._execute(
            db,
            select(func.count()).select_from(JobListing).where(self._where(predicate)),
            "count_listings",
        )
        return result.scalar() or 0

    async def find_listings(
        self,
        db: AsyncSession,
        predicate: ListingPredicate,
        *,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[JobListing], int]:
        """
        Find listings matching a predicate, newest first.

        Returns:
            Tuple of (listings page, total count)
        """
        total = await self.count_listings(db, predicate)
        if total == 0:
            return [], 0

        query = (
            select(JobListing)
            .where(self._where(predicate))
            .order_by(
                func.coalesce(JobListing.posted_at, JobListing.created_at).desc(),
                JobListing.title,
            )
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self._execute(db, query, "find_listings")
        return list(result.scalars().all()), total

    async def ping(self, db: AsyncSession) -> None:
        """Round-trip the store; raises StoreUnavailableException on failure."""
        await self._execute(db, text("SELECT 1"), "ping")
