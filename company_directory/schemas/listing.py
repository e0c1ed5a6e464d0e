"""
Job listing schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from company_directory.schemas.base import BaseSchema, PaginatedResponse


class JobListingResponse(BaseSchema):
    """Job listing as shown on a company page."""

    id: UUID
    title: str
    company_name: str
    location: Optional[str] = None
    apply_url: Optional[str] = None
    filled: bool
    posted_at: Optional[datetime] = None
    created_at: datetime


class CompanyListingsResponse(BaseSchema):
    """A company's page: title plus a page of its listings."""

    company: str
    title: str
    listings: PaginatedResponse[JobListingResponse]
