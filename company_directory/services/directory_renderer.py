"""
Directory renderer - HTML for the company overview and company pages.

Every piece of user data is escaped before it is written into markup.
"""
import html
from typing import Dict, List, Optional, Sequence

from company_directory.models.job_listing import JobListing
from company_directory.services.company_aggregator import CompanyEntry
from company_directory.services.url_codec import CompanyUrlCodec


def archive_title(company_name: str) -> str:
    return f"Jobs at {company_name}"


def document_title(
    company_name: str,
    site_name: str,
    separator: str = "-",
    site_description: str = "",
    is_front_page: bool = False,
) -> str:
    """
    Browser title for a company page, e.g. "Jobs at Acme - Job Board".

    On the front page the site description is appended to the site name.
    """
    site_title = site_name
    if site_description and is_front_page:
        site_title = f"{site_title} {separator} {site_description}"
    return f"{archive_title(company_name)} {separator} {site_title}"


class DirectoryRenderer:
    """Renders directory pages to HTML strings."""

    def __init__(
        self,
        codec: CompanyUrlCodec,
        site_name: str,
        title_separator: str = "-",
        site_description: str = "",
        directory_path: str = "/companies",
    ):
        self.codec = codec
        self.site_name = site_name
        self.title_separator = title_separator
        self.site_description = site_description
        self.directory_path = directory_path

    def page(self, title: str, body: str) -> str:
        """Wrap a body fragment in a full document."""
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{html.escape(title)}</title>\n"
            "</head>\n"
            f"<body>\n{body}\n</body>\n"
            "</html>\n"
        )

    def company_title(self, company_name: str, is_front_page: bool = False) -> str:
        return document_title(
            company_name,
            self.site_name,
            self.title_separator,
            self.site_description,
            is_front_page=is_front_page,
        )

    def render_directory(
        self,
        buckets: Dict[str, List[CompanyEntry]],
        show_letters: bool = True,
    ) -> str:
        """
        Company overview grouped by letter.

        The letter navigation always lists every bucket label; empty buckets
        are left out of the overview itself.
        """
        parts: List[str] = []

        if show_letters:
            parts.append('<div class="company-letters">')
            for letter in buckets:
                anchor = html.escape(letter, quote=True)
                parts.append(f'<a href="#{anchor}">{html.escape(letter)}</a>')
            parts.append("</div>")

        parts.append('<ul class="companies-overview">')
        for letter, companies in buckets.items():
            if not companies:
                continue

            anchor = html.escape(letter, quote=True)
            parts.append(
                f'<li class="company-group"><div id="{anchor}" class="company-letter">'
                f"{html.escape(letter)}</div>"
            )
            parts.append("<ul>")
            for company in companies:
                parts.append(
                    f'<li class="company-name"><a href="{self.codec.profile_url(company.name)}">'
                    f"{html.escape(company.label)}</a></li>"
                )
            parts.append("</ul>")
            parts.append("</li>")
        parts.append("</ul>")

        title = f"Companies {self.title_separator} {self.site_name}"
        return self.page(title, "\n".join(parts))

    def render_single_company(
        self,
        company_name: str,
        listings: Sequence[JobListing],
        page: int = 1,
        pages: int = 1,
        is_front_page: bool = False,
    ) -> str:
        """
        A company's open listings.

        `is_front_page` is set for the query-string form, which is served by
        the site's front page and so carries the site description in its title.
        """
        parts = [f'<h1 class="archive-title">{html.escape(archive_title(company_name))}</h1>']

        parts.append('<ul class="job_listings">')
        for listing in listings:
            classes = "job_listing job_position_filled" if listing.filled else "job_listing"
            title = html.escape(listing.title)
            if listing.apply_url:
                title = f'<a href="{html.escape(listing.apply_url, quote=True)}">{title}</a>'
            location = (
                f' <span class="location">{html.escape(listing.location)}</span>'
                if listing.location
                else ""
            )
            parts.append(f'<li class="{classes}">{title}{location}</li>')
        parts.append("</ul>")

        pagination = self._pagination(page, pages)
        if pagination:
            parts.append(pagination)

        parts.append(
            f'<p><a href="{html.escape(self.directory_path, quote=True)}">All companies</a></p>'
        )
        return self.page(self.company_title(company_name, is_front_page), "\n".join(parts))

    def _pagination(self, page: int, pages: int) -> Optional[str]:
        if pages <= 1:
            return None

        links = []
        if page > 1:
            links.append(f'<a class="prev" href="?page={page - 1}">Previous</a>')
        links.append(f'<span class="current">Page {page} of {pages}</span>')
        if page < pages:
            links.append(f'<a class="next" href="?page={page + 1}">Next</a>')
        return '<nav class="pagination">' + " ".join(links) + "</nav>"

    def render_not_found(
        self,
        company_name: Optional[str] = None,
        is_front_page: bool = False,
    ) -> str:
        """
        Not-found page. A company request whose identifier decoded keeps the
        company title; otherwise the title is generic.
        """
        body = (
            '<h1 class="page-title">Nothing found</h1>\n'
            "<p>No open positions were found for this company.</p>\n"
            f'<p><a href="{html.escape(self.directory_path, quote=True)}">Browse all companies</a></p>'
        )
        if company_name:
            title = self.company_title(company_name, is_front_page)
        else:
            title = f"Page not found {self.title_separator} {self.site_name}"
        return self.page(title, body)

    def render_failure(self) -> str:
        body = (
            '<h1 class="page-title">Something went wrong</h1>\n'
            "<p>Job listings are temporarily unavailable. Please try again later.</p>"
        )
        return self.page(f"Unavailable {self.title_separator} {self.site_name}", body)
