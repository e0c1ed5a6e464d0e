"""
Company aggregator - derives the directory's company list from listings.

A company is listed only while it has at least one published, unfilled
listing. Counts are live on every call; nothing is memoized here.
"""
from dataclasses import dataclass
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from company_directory.core.logging import get_logger
from company_directory.models.job_listing import JOB_LISTING_POST_TYPE, STATUS_PUBLISH
from company_directory.repositories.listing_repository import (
    ListingPredicate,
    ListingRepository,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompanyEntry:
    """A company as shown in the directory."""

    name: str
    open_listing_count: int

    @property
    def label(self) -> str:
        return f"{self.name} ({self.open_listing_count})"


class CompanyAggregator:
    """Builds the deduplicated, count-annotated list of hiring companies."""

    def __init__(self, listing_repo: ListingRepository):
        self.listing_repo = listing_repo

    async def aggregate(self, db: AsyncSession) -> List[CompanyEntry]:
        """
        Get every company with open listings, in directory order.

        Issues one distinct-name query plus one count query per name.
        StoreUnavailableException propagates; no partial list is returned.
        """
        names = await self.listing_repo.distinct_company_names(
            db,
            post_type=JOB_LISTING_POST_TYPE,
            status=STATUS_PUBLISH,
        )

        companies: List[CompanyEntry] = []
        for name in names:
            if not name:
                logger.warning("company_skipped_empty_name")
                continue

            open_count = await self.listing_repo.count_listings(
                db,
                ListingPredicate(company_name=name, exclude_filled=True),
            )
            if open_count:
                companies.append(CompanyEntry(name=name, open_listing_count=open_count))

        logger.debug(
            "companies_aggregated",
            distinct_names=len(names),
            hiring=len(companies),
        )
        return companies
