"""
Pydantic schemas for API validation and serialization.
"""
from company_directory.schemas.base import (
    BaseSchema,
    PaginatedResponse,
    ErrorResponse,
)
from company_directory.schemas.company import (
    CompanyResponse,
    BucketResponse,
    DirectoryResponse,
)
from company_directory.schemas.listing import (
    JobListingResponse,
    CompanyListingsResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "PaginatedResponse",
    "ErrorResponse",
    # Company
    "CompanyResponse",
    "BucketResponse",
    "DirectoryResponse",
    # Listing
    "JobListingResponse",
    "CompanyListingsResponse",
]
