"""
Company directory - the service graph, built once at startup.

Routes receive the graph through the `get_directory` dependency, so tests
and alternate deployments can swap in their own configuration.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from company_directory.core.config import Settings
from company_directory.repositories.listing_repository import ListingRepository
from company_directory.services.alphabetical_grouper import AlphabeticalGrouper, BucketKeyFn
from company_directory.services.company_aggregator import CompanyAggregator, CompanyEntry
from company_directory.services.directory_renderer import DirectoryRenderer
from company_directory.services.listing_filter import ListingFilterResolver
from company_directory.services.url_codec import CompanyUrlCodec, UrlTemplateFn


@dataclass
class CompanyDirectory:
    """Everything a request handler needs to serve directory pages."""

    settings: Settings
    listing_repo: ListingRepository
    aggregator: CompanyAggregator
    grouper: AlphabeticalGrouper
    codec: CompanyUrlCodec
    resolver: ListingFilterResolver
    renderer: DirectoryRenderer

    async def grouped_companies(self, db: AsyncSession) -> Dict[str, List[CompanyEntry]]:
        """Aggregate and bucket the hiring companies for one request."""
        companies = await self.aggregator.aggregate(db)
        return self.grouper.group(companies)


def build_directory(
    settings: Settings,
    *,
    bucket_key_fn: Optional[BucketKeyFn] = None,
    url_template: Optional[UrlTemplateFn] = None,
) -> CompanyDirectory:
    """Wire the directory services from settings."""
    listing_repo = ListingRepository(timeout=settings.store_query_timeout_seconds)
    codec = CompanyUrlCodec(
        base_url=settings.site_url,
        slug=settings.company_slug,
        permalinks_enabled=settings.permalinks_enabled,
        trailing_slash=settings.trailing_slash,
        url_template=url_template,
    )

    return CompanyDirectory(
        settings=settings,
        listing_repo=listing_repo,
        aggregator=CompanyAggregator(listing_repo),
        grouper=AlphabeticalGrouper(bucket_key_fn),
        codec=codec,
        resolver=ListingFilterResolver(
            codec,
            listing_repo,
            hide_filled=settings.hide_filled_positions,
        ),
        renderer=DirectoryRenderer(
            codec,
            site_name=settings.site_name,
            title_separator=settings.title_separator,
            site_description=settings.site_description,
            directory_path=settings.directory_path,
        ),
    )
