"""
Company routes.

Thin controllers - CompanyService handles aggregation, resolution and
response construction.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from company_directory.api.deps import get_directory, raw_path_identifier
from company_directory.core.config import settings
from company_directory.core.database import get_db
from company_directory.core.rate_limit import limiter, RATE_DEFAULT
from company_directory.schemas.base import ErrorResponse
from company_directory.schemas.company import DirectoryResponse
from company_directory.schemas.listing import CompanyListingsResponse
from company_directory.services.company_service import CompanyService
from company_directory.services.directory import CompanyDirectory

router = APIRouter(
    prefix="/companies",
    tags=["companies"],
    responses={503: {"model": ErrorResponse, "description": "Listing store unavailable"}},
)

# Mounted under settings.api_prefix by main; both are fixed at import time.
COMPANY_PATH_PREFIX = f"{settings.api_prefix}{router.prefix}/"


@router.get("", response_model=DirectoryResponse)
@limiter.limit(RATE_DEFAULT)
async def list_companies(
    request: Request,
    include_empty: bool = Query(False, description="Include letters with no companies"),
    directory: CompanyDirectory = Depends(get_directory),
    db: AsyncSession = Depends(get_db),
):
    """List hiring companies grouped by first letter."""
    return await CompanyService(directory).list_directory(db, include_empty=include_empty)


@router.get(
    "/{identifier:path}",
    response_model=CompanyListingsResponse,
    responses={404: {"model": ErrorResponse, "description": "Company not found"}},
)
@limiter.limit(RATE_DEFAULT)
async def get_company_listings(
    request: Request,
    identifier: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    directory: CompanyDirectory = Depends(get_directory),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a company's listings.

    The identifier is the percent-encoded company name, as produced by the
    profile links.
    """
    raw_identifier = raw_path_identifier(request, COMPANY_PATH_PREFIX)
    return await CompanyService(directory).get_company_listings(
        db,
        raw_identifier,
        page=page,
        limit=limit,
    )
