"""
API package.
"""
from company_directory.api.routes import api_router, pages_router
from company_directory.api.deps import (
    get_directory,
    raw_path_identifier,
    raw_query_identifier,
)

__all__ = [
    "api_router",
    "pages_router",
    "get_directory",
    "raw_path_identifier",
    "raw_query_identifier",
]
