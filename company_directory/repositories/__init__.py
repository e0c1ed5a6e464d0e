"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from company_directory.repositories.base import BaseRepository
from company_directory.repositories.listing_repository import (
    ListingPredicate,
    ListingRepository,
)

__all__ = [
    "BaseRepository",
    "ListingPredicate",
    "ListingRepository",
]
