"""Core module exports."""
from company_directory.core.config import settings, get_settings, Settings
from company_directory.core.database import (
    Base,
    get_db,
    init_db,
    close_db,
    engine,
    async_session_maker,
)
from company_directory.core.exceptions import (
    APIException,
    NotFoundException,
    ServiceUnavailableException,
    CompanyNotFoundException,
    StoreUnavailableException,
    DirectoryError,
    MalformedIdentifierException,
    EmptyCompanyNameException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    "Settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Exceptions
    "APIException",
    "NotFoundException",
    "ServiceUnavailableException",
    "CompanyNotFoundException",
    "StoreUnavailableException",
    "DirectoryError",
    "MalformedIdentifierException",
    "EmptyCompanyNameException",
]
