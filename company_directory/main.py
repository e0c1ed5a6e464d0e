"""
Company Directory - FastAPI application.

Serves the public company pages (HTML) and the same data as JSON under
the API prefix. Errors are answered in the format of the route that
raised them.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from company_directory.api.routes import api_router, pages_router
from company_directory.core.config import settings
from company_directory.core.database import close_db, init_db
from company_directory.core.exceptions import APIException
from company_directory.core.logging import RequestIDMiddleware, get_logger, setup_logging
from company_directory.core.rate_limit import limiter
from company_directory.services.directory import build_directory

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "directory_starting",
        environment=settings.environment,
        site_url=settings.site_url,
        company_slug=settings.company_slug,
    )
    await init_db()

    yield

    await close_db()
    logger.info("directory_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Company directory and company profile pages for a job board",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.state.directory = build_directory(settings)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


def _error_response(request: Request, status_code: int, code: str, message: str, details=None):
    """JSON error body under the API prefix, an HTML page everywhere else."""
    if request.url.path.startswith(settings.api_prefix):
        return JSONResponse(
            status_code=status_code,
            content={"error": code, "message": message, "details": details},
        )

    renderer = request.app.state.directory.renderer
    body = renderer.render_not_found() if status_code == 404 else renderer.render_failure()
    return HTMLResponse(body, status_code=status_code)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    if exc.status_code >= 500:
        logger.error("request_failed", code=exc.code, path=request.url.path)
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log the failure in full; the client only sees a generic error."""
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    message = str(exc) if settings.debug else "An unexpected error occurred"
    return _error_response(request, 500, "internal_error", message)


app.include_router(api_router, prefix=settings.api_prefix)
app.include_router(pages_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "directory": settings.directory_path,
        "api": settings.api_prefix,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("company_directory.main:app", host="127.0.0.1", port=8000, reload=settings.debug)
