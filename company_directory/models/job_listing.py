"""
Job listing model - the records the company directory is derived from.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, Text, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from company_directory.models.base import BaseModel


JOB_LISTING_POST_TYPE = "job_listing"

STATUS_PUBLISH = "publish"
STATUS_DRAFT = "draft"
STATUS_PENDING = "pending"
STATUS_EXPIRED = "expired"

LISTING_STATUSES = (STATUS_PUBLISH, STATUS_DRAFT, STATUS_PENDING, STATUS_EXPIRED)


class JobListing(BaseModel):
    """
    Job listing entity.

    Listings carry the company as a plain name rather than a foreign key:
    a "company" exists only as long as some listing names it.
    """

    __tablename__ = "job_listings"

    __table_args__ = (
        Index("ix_job_listings_type_status_company", "post_type", "status", "company_name"),
    )

    # Classification
    post_type: Mapped[str] = mapped_column(
        String(40),
        nullable=False,
        default=JOB_LISTING_POST_TYPE,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=STATUS_PUBLISH,
    )  # 'publish', 'draft', 'pending', 'expired'

    # Company attributes
    company_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    filled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Presentation
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    apply_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    posted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<JobListing {self.title} at {self.company_name}>"
