"""
Service layer - business logic and orchestration.

Services contain the directory's business logic and coordinate repository
calls.

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from company_directory.services.alphabetical_grouper import (
    AlphabeticalGrouper,
    BUCKET_LABELS,
    CATCH_ALL_BUCKET,
    bucket_key,
)
from company_directory.services.company_aggregator import CompanyAggregator, CompanyEntry
from company_directory.services.company_service import CompanyService
from company_directory.services.directory import CompanyDirectory, build_directory
from company_directory.services.directory_renderer import (
    DirectoryRenderer,
    archive_title,
    document_title,
)
from company_directory.services.listing_filter import (
    ListingFilterResolver,
    Resolution,
    ResolutionState,
    build_listing_predicate,
)
from company_directory.services.url_codec import (
    CompanyUrlCodec,
    build_profile_href,
    build_profile_url,
    decode,
    encode,
)

__all__ = [
    "AlphabeticalGrouper",
    "BUCKET_LABELS",
    "CATCH_ALL_BUCKET",
    "bucket_key",
    "CompanyAggregator",
    "CompanyEntry",
    "CompanyService",
    "CompanyDirectory",
    "build_directory",
    "DirectoryRenderer",
    "archive_title",
    "document_title",
    "ListingFilterResolver",
    "Resolution",
    "ResolutionState",
    "build_listing_predicate",
    "CompanyUrlCodec",
    "build_profile_href",
    "build_profile_url",
    "decode",
    "encode",
]
