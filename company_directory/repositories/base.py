"""
Base repository with generic operations.

All entity-specific repositories inherit from this. Every statement goes
through `_execute`, which bounds it with the store timeout and turns driver
failures into StoreUnavailableException.
"""
import asyncio
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from company_directory.core.config import settings
from company_directory.core.exceptions import StoreUnavailableException
from company_directory.core.logging import get_logger
from company_directory.models.base import BaseModel

logger = get_logger(__name__)

# Generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing standard read operations.

    Usage:
        class ListingRepository(BaseRepository[JobListing]):
            def __init__(self):
                super().__init__(JobListing)
    """

    def __init__(self, model: Type[ModelType], timeout: Optional[float] = None):
        self.model = model
        self.timeout = timeout if timeout is not None else settings.store_query_timeout_seconds

    async def _execute(self, db: AsyncSession, statement: Any, operation: str):
        """Run a statement with the store timeout applied."""
        try:
            return await asyncio.wait_for(db.execute(statement), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("store_query_timeout", operation=operation, timeout=self.timeout)
            raise StoreUnavailableException(operation) from e
        except SQLAlchemyError as e:
            logger.error(
                "store_query_failed",
                operation=operation,
                exc_type=type(e).__name__,
                exc_message=str(e),
            )
            raise StoreUnavailableException(operation) from e

    async def count(
        self,
        db: AsyncSession,
    ) -> int:
        """Get total count of records."""
        result = await self._execute(
            db,
            select(func.count()).select_from(self.model),
            "count",
        )
        return result.scalar() or 0

    async def create(
        self,
        db: AsyncSession,
        **kwargs: Any,
    ) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        db.add(instance)
        await db.flush()
        await db.refresh(instance)
        return instance
