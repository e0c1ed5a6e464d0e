"""
Listing filter resolver - turns a company identifier into that company's jobs.

Resolution runs as a small state machine:

    IDLE -> IDENTIFIER_PRESENT -> RESOLVED | NOT_FOUND

IDLE means the request carries no identifier (or is not the primary content
query) and the caller renders whatever it would have rendered anyway.
NOT_FOUND is terminal for the request: the caller shows the not-found page.
"""
import enum
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from company_directory.core.exceptions import MalformedIdentifierException
from company_directory.core.logging import get_logger
from company_directory.models.job_listing import (
    JobListing,
    JOB_LISTING_POST_TYPE,
    STATUS_PUBLISH,
)
from company_directory.repositories.listing_repository import (
    ListingPredicate,
    ListingRepository,
)
from company_directory.services.url_codec import CompanyUrlCodec

logger = get_logger(__name__)


class ResolutionState(str, enum.Enum):
    IDLE = "idle"
    IDENTIFIER_PRESENT = "identifier_present"
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"


@dataclass
class Resolution:
    """Outcome of resolving one request's company identifier."""

    state: ResolutionState
    raw_identifier: Optional[str] = None
    company_name: Optional[str] = None
    predicate: Optional[ListingPredicate] = None
    listings: List[JobListing] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total > 0 else 0


def build_listing_predicate(company_name: str, hide_filled: bool) -> ListingPredicate:
    """
    Listing filter for one company's page.

    Filled positions are excluded only when the site hides them.
    """
    return ListingPredicate(
        company_name=company_name,
        post_type=JOB_LISTING_POST_TYPE,
        status=STATUS_PUBLISH,
        exclude_filled=hide_filled,
    )


class ListingFilterResolver:
    """Resolves raw identifiers against the listing store."""

    def __init__(
        self,
        codec: CompanyUrlCodec,
        listing_repo: ListingRepository,
        hide_filled: bool = False,
    ):
        self.codec = codec
        self.listing_repo = listing_repo
        self.hide_filled = hide_filled

    async def resolve(
        self,
        db: AsyncSession,
        raw_identifier: Optional[str],
        *,
        is_main_query: bool = True,
        page: int = 1,
        limit: int = 20,
    ) -> Resolution:
        """
        Resolve a raw (still percent-encoded) identifier.

        A malformed identifier resolves to NOT_FOUND without touching the
        store. StoreUnavailableException propagates to the caller.
        """
        if not raw_identifier or not is_main_query:
            return Resolution(state=ResolutionState.IDLE, page=page, limit=limit)

        resolution = Resolution(
            state=ResolutionState.IDENTIFIER_PRESENT,
            raw_identifier=raw_identifier,
            page=page,
            limit=limit,
        )

        try:
            company_name = self.codec.decode(raw_identifier)
        except MalformedIdentifierException as e:
            logger.info("company_identifier_malformed", raw=raw_identifier, reason=e.reason)
            resolution.state = ResolutionState.NOT_FOUND
            return resolution

        resolution.company_name = company_name
        resolution.predicate = build_listing_predicate(company_name, self.hide_filled)

        listings, total = await self.listing_repo.find_listings(
            db,
            resolution.predicate,
            page=page,
            limit=limit,
        )
        resolution.listings = listings
        resolution.total = total

        if total > 0:
            resolution.state = ResolutionState.RESOLVED
            logger.info("company_resolved", company=company_name, total=total)
        else:
            resolution.state = ResolutionState.NOT_FOUND
            logger.info("company_not_found", company=company_name)

        return resolution
