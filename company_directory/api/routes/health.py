"""
Liveness probe. Always answers 200; a listing store that does not respond
is reported as "degraded".
"""
import time
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from company_directory.api.deps import get_directory
from company_directory.core.config import settings
from company_directory.core.database import get_db
from company_directory.core.exceptions import StoreUnavailableException
from company_directory.core.rate_limit import limiter, RATE_HEALTH
from company_directory.schemas.base import BaseSchema
from company_directory.services.directory import CompanyDirectory

router = APIRouter(tags=["health"])


class HealthResponse(BaseSchema):
    status: str
    version: str
    timestamp: datetime
    checks: Dict[str, str]
    store_latency_ms: Optional[float] = None


@router.get("/health", response_model=HealthResponse)
@limiter.limit(RATE_HEALTH)
async def health_check(
    request: Request,
    directory: CompanyDirectory = Depends(get_directory),
    db: AsyncSession = Depends(get_db),
):
    latency_ms = None
    started = time.perf_counter()
    try:
        await directory.listing_repo.ping(db)
    except StoreUnavailableException:
        store = "unhealthy"
    else:
        store = "healthy"
        latency_ms = round((time.perf_counter() - started) * 1000, 1)

    return HealthResponse(
        status="healthy" if store == "healthy" else "degraded",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc),
        checks={"listing_store": store},
        store_latency_ms=latency_ms,
    )
