"""
API dependencies for dependency injection.

Company identifiers are read from the raw request so they are percent-decoded
exactly once, by the URL codec. Starlette's path and query params are already
decoded (and the query parser turns "+" into a space), which would break names
containing "%" or "+".
"""
from typing import Optional
from urllib.parse import quote, unquote

from starlette.requests import Request

from company_directory.services.directory import CompanyDirectory


def get_directory(request: Request) -> CompanyDirectory:
    """The service graph built at startup."""
    return request.app.state.directory


def raw_path_identifier(request: Request, marker: str) -> Optional[str]:
    """
    Still-encoded path tail following `marker` (e.g. "/company/").

    A trailing slash is not part of the identifier: a name ending in "/"
    arrives as "%2F".
    """
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        identifier = request.path_params.get("identifier", "")
        return quote(identifier, safe="/").rstrip("/") or None

    path = raw_path.split(b"?", 1)[0].decode("utf-8", errors="replace")
    index = path.find(marker)
    if index < 0:
        return None
    return path[index + len(marker):].rstrip("/") or None


def raw_query_identifier(request: Request, name: str) -> Optional[str]:
    """Still-encoded value of query parameter `name`, if present and non-empty."""
    query_string = request.scope.get("query_string", b"").decode("utf-8", errors="replace")
    for pair in query_string.split("&"):
        key, _, value = pair.partition("=")
        if unquote(key) == name:
            return value or None
    return None
