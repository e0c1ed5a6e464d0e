"""
Company service - builds the JSON views of the directory.

The HTML pages and the JSON API share the same aggregation and resolution;
this service only shapes the results into response schemas.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from company_directory.core.exceptions import CompanyNotFoundException
from company_directory.schemas.base import PaginatedResponse
from company_directory.schemas.company import (
    BucketResponse,
    CompanyResponse,
    DirectoryResponse,
)
from company_directory.schemas.listing import CompanyListingsResponse, JobListingResponse
from company_directory.services.directory import CompanyDirectory
from company_directory.services.directory_renderer import archive_title
from company_directory.services.listing_filter import ResolutionState


class CompanyService:
    """Handles the company directory and per-company listings."""

    def __init__(self, directory: CompanyDirectory):
        self.directory = directory

    async def list_directory(
        self,
        db: AsyncSession,
        *,
        include_empty: bool = False,
    ) -> DirectoryResponse:
        """
        Get the grouped directory with profile links.

        Empty buckets are dropped unless include_empty is set; `letters`
        always carries the full navigation sequence.
        """
        buckets = await self.directory.grouped_companies(db)
        codec = self.directory.codec

        bucket_responses = [
            BucketResponse(
                letter=letter,
                companies=[
                    CompanyResponse(
                        name=company.name,
                        open_listings=company.open_listing_count,
                        profile_url=codec.profile_href(company.name),
                    )
                    for company in companies
                ],
            )
            for letter, companies in buckets.items()
            if companies or include_empty
        ]

        return DirectoryResponse(
            letters=list(buckets),
            buckets=bucket_responses,
            total_companies=sum(len(companies) for companies in buckets.values()),
        )

    async def get_company_listings(
        self,
        db: AsyncSession,
        raw_identifier: Optional[str],
        *,
        page: int = 1,
        limit: int = 20,
    ) -> CompanyListingsResponse:
        """
        Get one company's listings from its raw identifier.

        Raises:
            CompanyNotFoundException: If the identifier is missing, malformed,
                or matches no listings.
        """
        resolution = await self.directory.resolver.resolve(
            db,
            raw_identifier,
            page=page,
            limit=limit,
        )
        if resolution.state != ResolutionState.RESOLVED:
            raise CompanyNotFoundException()

        return CompanyListingsResponse(
            company=resolution.company_name,
            title=archive_title(resolution.company_name),
            listings=PaginatedResponse[JobListingResponse].from_page(
                [JobListingResponse.model_validate(listing) for listing in resolution.listings],
                total=resolution.total,
                page=page,
                limit=limit,
            ),
        )
