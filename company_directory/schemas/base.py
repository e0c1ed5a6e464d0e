"""
Shared response models.
"""
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict

ItemT = TypeVar("ItemT")


class BaseSchema(BaseModel):
    """Reads ORM rows and dataclasses by attribute."""

    model_config = ConfigDict(from_attributes=True)


class PaginatedResponse(BaseSchema, Generic[ItemT]):
    """One page of a longer result."""

    items: List[ItemT]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_page(
        cls,
        items: Sequence[Any],
        total: int,
        page: int,
        limit: int,
    ) -> "PaginatedResponse[ItemT]":
        return cls(
            items=list(items),
            total=total,
            page=page,
            limit=limit,
            pages=(total + limit - 1) // limit if total else 0,
        )


class ErrorResponse(BaseSchema):
    """Body of every JSON error; `error` is the machine-readable code."""

    error: str
    message: str
    details: Optional[Any] = None
