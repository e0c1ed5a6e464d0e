"""
Custom exceptions for the application.

API-facing errors inherit from APIException for consistent error handling.
DirectoryError subclasses never reach the client: the services convert them
into a not-found result or skip the offending value.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ServiceUnavailableException(APIException):
    """503 Service Unavailable"""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        code: str = "SERVICE_UNAVAILABLE",
    ):
        super().__init__(503, code, message)


class CompanyNotFoundException(NotFoundException):
    """Company has no listings matching the current filters"""

    def __init__(self):
        super().__init__(message="Company not found", code="COMPANY_NOT_FOUND")


class StoreUnavailableException(ServiceUnavailableException):
    """The listing store could not execute a query"""

    def __init__(self, operation: str = "query"):
        self.operation = operation
        super().__init__(
            message="Job listings are temporarily unavailable",
            code="STORE_UNAVAILABLE",
        )


# Internal directory errors
class DirectoryError(Exception):
    """Base for errors handled inside the directory services."""


class MalformedIdentifierException(DirectoryError):
    """A company identifier could not be percent-decoded"""

    def __init__(self, raw: str, reason: str = "invalid percent-encoding"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed company identifier {raw!r}: {reason}")


class EmptyCompanyNameException(DirectoryError):
    """An empty company name reached a bucket or URL computation"""

    def __init__(self):
        super().__init__("Company name is empty")
