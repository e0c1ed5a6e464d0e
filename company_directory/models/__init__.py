"""
Database models for the company directory.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from company_directory.models.base import BaseModel
from company_directory.models.job_listing import (
    JobListing,
    JOB_LISTING_POST_TYPE,
    LISTING_STATUSES,
    STATUS_DRAFT,
    STATUS_EXPIRED,
    STATUS_PENDING,
    STATUS_PUBLISH,
)

__all__ = [
    "BaseModel",
    "JobListing",
    "JOB_LISTING_POST_TYPE",
    "LISTING_STATUSES",
    "STATUS_DRAFT",
    "STATUS_EXPIRED",
    "STATUS_PENDING",
    "STATUS_PUBLISH",
]
