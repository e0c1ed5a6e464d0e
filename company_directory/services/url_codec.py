"""
URL codec - company identifiers and profile URLs.

Names are percent-encoded as a single path segment: everything outside the
unreserved set (A-Z a-z 0-9 - _ . ~) is escaped and a space becomes %20.
This is path encoding, not form encoding, so decode never turns "+" into a
space.
"""
import html
import re
from typing import Callable, Optional
from urllib.parse import quote, unquote_to_bytes

from company_directory.core.exceptions import (
    EmptyCompanyNameException,
    MalformedIdentifierException,
)

# "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

UrlTemplateFn = Callable[[str, str, str], str]


def encode(name: str) -> str:
    """
    Percent-encode a company name for use in a URL.

    Raises:
        EmptyCompanyNameException: If name is empty.
    """
    if not name:
        raise EmptyCompanyNameException()
    return quote(name, safe="", encoding="utf-8", errors="strict")


def decode(raw: str) -> str:
    """
    Percent-decode an identifier back to the company name.

    Raises:
        MalformedIdentifierException: On a stray "%", bytes that are not
            UTF-8, or an empty result.
    """
    if not raw:
        raise MalformedIdentifierException(raw, "empty identifier")
    if _BAD_ESCAPE.search(raw):
        raise MalformedIdentifierException(raw)

    try:
        name = unquote_to_bytes(raw).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedIdentifierException(raw, "not valid UTF-8") from e

    if not name:
        raise MalformedIdentifierException(raw, "empty identifier")
    return name


def build_profile_href(
    name: str,
    permalinks_enabled: bool,
    base_url: str,
    slug: str,
    trailing_slash: bool = True,
) -> str:
    """
    Company profile URL, unescaped.

    Without pretty permalinks the name travels in the query string:
        https://site.test/index.php?company=Alpha%20Inc
    With them it is a path segment:
        https://site.test/company/Alpha%20Inc/
    """
    base_url = base_url.rstrip("/")
    encoded = encode(name)

    if not permalinks_enabled:
        return f"{base_url}/index.php?{slug}={encoded}"

    url = f"{base_url}/{slug}/{encoded}"
    if trailing_slash:
        url += "/"
    return url


def build_profile_url(
    name: str,
    permalinks_enabled: bool,
    base_url: str,
    slug: str,
    trailing_slash: bool = True,
) -> str:
    """Company profile URL, escaped for use in an HTML attribute."""
    href = build_profile_href(name, permalinks_enabled, base_url, slug, trailing_slash)
    return html.escape(href, quote=True)


class CompanyUrlCodec:
    """URL codec bound to the site's permalink configuration."""

    def __init__(
        self,
        base_url: str,
        slug: str = "company",
        permalinks_enabled: bool = True,
        trailing_slash: bool = True,
        url_template: Optional[UrlTemplateFn] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.slug = slug
        self.permalinks_enabled = permalinks_enabled
        self.trailing_slash = trailing_slash
        self.url_template = url_template

    def encode(self, name: str) -> str:
        return encode(name)

    def decode(self, raw: str) -> str:
        return decode(raw)

    def profile_href(self, name: str) -> str:
        """Profile URL under the configured permalink regime, for JSON and headers."""
        if self.permalinks_enabled and self.url_template is not None:
            return self.url_template(self.base_url, self.slug, encode(name))

        return build_profile_href(
            name,
            self.permalinks_enabled,
            self.base_url,
            self.slug,
            trailing_slash=self.trailing_slash,
        )

    def profile_url(self, name: str) -> str:
        """`profile_href`, escaped for an HTML attribute."""
        return html.escape(self.profile_href(name), quote=True)
