"""
API Routes package.
"""
from fastapi import APIRouter

from company_directory.api.routes.health import router as health_router
from company_directory.api.routes.companies import router as companies_router
from company_directory.api.routes.pages import router as pages_router

# JSON API router, mounted under settings.api_prefix
api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(companies_router)

__all__ = [
    "api_router",
    "health_router",
    "companies_router",
    "pages_router",
]
