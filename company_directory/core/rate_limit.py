"""
Rate limiting configuration using slowapi.

The directory pages are public, so limits are keyed by client IP. Point
RATE_LIMIT_STORAGE_URI at Redis to share limits across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from company_directory.core.config import settings


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)

# Pre-defined rate limit strings for use in route decorators:
#   @limiter.limit(RATE_DEFAULT)
RATE_DEFAULT = "60/minute"       # directory pages and JSON API
RATE_HEALTH = "120/minute"       # monitoring probes
