"""
Public HTML pages: the company overview and individual company pages.

Company pages answer on two URL shapes, matching the two permalink regimes:
    /company/Acme%20Inc/
    /index.php?company=Acme%20Inc

Route paths are registered at import time from the process settings, so the
company slug and directory path are fixed for the life of the process. The
directory served at `app.state.directory` is built from the same settings;
a directory built with another `company_slug` would link to pages these
routes do not serve.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from company_directory.api.deps import get_directory, raw_path_identifier, raw_query_identifier
from company_directory.core.config import settings
from company_directory.core.database import get_db
from company_directory.core.rate_limit import limiter, RATE_DEFAULT
from company_directory.services.directory import CompanyDirectory
from company_directory.services.listing_filter import Resolution, ResolutionState

router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)

# Path prefix of pretty company permalinks; also where the raw identifier starts.
COMPANY_PATH_PREFIX = f"/{settings.company_slug}/"


def _company_response(
    directory: CompanyDirectory,
    resolution: Resolution,
    is_front_page: bool = False,
) -> HTMLResponse:
    """Single-company page, or the not-found page. Either way the request ends here."""
    renderer = directory.renderer

    if resolution.state == ResolutionState.RESOLVED:
        return HTMLResponse(
            renderer.render_single_company(
                resolution.company_name,
                resolution.listings,
                page=resolution.page,
                pages=resolution.pages,
                is_front_page=is_front_page,
            )
        )

    return HTMLResponse(
        renderer.render_not_found(resolution.company_name, is_front_page),
        status_code=404,
    )


async def _directory_response(
    directory: CompanyDirectory,
    db: AsyncSession,
    show_letters: Optional[bool],
) -> HTMLResponse:
    if show_letters is None:
        show_letters = directory.settings.show_letters

    buckets = await directory.grouped_companies(db)
    return HTMLResponse(directory.renderer.render_directory(buckets, show_letters))


@router.get(settings.directory_path)
@limiter.limit(RATE_DEFAULT)
async def company_directory_page(
    request: Request,
    show_letters: Optional[bool] = Query(None, description="Show the A-Z navigation"),
    directory: CompanyDirectory = Depends(get_directory),
    db: AsyncSession = Depends(get_db),
):
    """All hiring companies, grouped by first letter."""
    return await _directory_response(directory, db, show_letters)


@router.get("/index.php")
@limiter.limit(RATE_DEFAULT)
async def index_page(
    request: Request,
    page: int = Query(1, ge=1),
    show_letters: Optional[bool] = Query(None),
    directory: CompanyDirectory = Depends(get_directory),
    db: AsyncSession = Depends(get_db),
):
    """
    Query-string permalinks.

    Without the company parameter this is the front page, which shows the
    directory.
    """
    raw_identifier = raw_query_identifier(request, directory.settings.company_slug)
    resolution = await directory.resolver.resolve(
        db,
        raw_identifier,
        page=page,
        limit=directory.settings.listings_per_page,
    )

    if resolution.state == ResolutionState.IDLE:
        return await _directory_response(directory, db, show_letters)
    return _company_response(directory, resolution, is_front_page=True)


@router.get(COMPANY_PATH_PREFIX + "{identifier:path}")
@limiter.limit(RATE_DEFAULT)
async def company_page(
    request: Request,
    identifier: str,
    page: int = Query(1, ge=1),
    directory: CompanyDirectory = Depends(get_directory),
    db: AsyncSession = Depends(get_db),
):
    """Pretty permalinks: /company/{identifier}/"""
    raw_identifier = raw_path_identifier(request, COMPANY_PATH_PREFIX)
    resolution = await directory.resolver.resolve(
        db,
        raw_identifier,
        page=page,
        limit=directory.settings.listings_per_page,
    )

    if resolution.state == ResolutionState.IDLE:
        return HTMLResponse(directory.renderer.render_not_found(), status_code=404)
    return _company_response(directory, resolution)
