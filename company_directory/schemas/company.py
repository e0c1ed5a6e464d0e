"""
Company directory schemas.
"""
from typing import List

from company_directory.schemas.base import BaseSchema


class CompanyResponse(BaseSchema):
    """A hiring company with its profile link."""

    name: str
    open_listings: int
    profile_url: str


class BucketResponse(BaseSchema):
    """One letter group of the directory."""

    letter: str
    companies: List[CompanyResponse]


class DirectoryResponse(BaseSchema):
    """The grouped company directory."""

    letters: List[str]
    buckets: List[BucketResponse]
    total_companies: int
