"""HTML pages and the JSON API, end to end over ASGI."""
import html
import re
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from company_directory.api.deps import get_directory
from company_directory.core.config import Settings
from company_directory.core.database import get_db
from company_directory.main import app
from company_directory.services.directory import build_directory

from tests.factories import make_listing


@pytest.fixture
async def broken_store_client(directory):
    """Client whose every store query fails."""

    async def override_get_db():
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_directory] = lambda: directory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestDirectoryPage:
    async def test_lists_companies_grouped_by_letter(self, client, scenario_listings):
        response = await client.get("/companies")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert '<a href="https://site.test/company/Alpha%20Inc/">Alpha Inc (1)</a>' in html
        assert '<a href="https://site.test/company/Zeta%20Corp/">Zeta Corp (2)</a>' in html
        assert '<a href="https://site.test/company/7%20Eleven/">7 Eleven (1)</a>' in html
        assert html.index('id="A"') < html.index('id="Z"') < html.index('id="0-9"')

    async def test_letter_navigation_can_be_hidden(self, client, scenario_listings):
        shown = await client.get("/companies")
        hidden = await client.get("/companies", params={"show_letters": "false"})

        assert "company-letters" in shown.text
        assert "company-letters" not in hidden.text

    async def test_filled_only_company_not_listed(self, client, add_listings):
        await add_listings(make_listing("Ghost LLC", filled=True), make_listing("Acme"))

        response = await client.get("/companies")

        assert "Ghost LLC" not in response.text
        assert "Acme (1)" in response.text

    async def test_empty_store(self, client):
        response = await client.get("/companies")

        assert response.status_code == 200
        assert "company-name" not in response.text


class TestCompanyPage:
    async def test_pretty_permalink(self, client, scenario_listings):
        response = await client.get("/company/Alpha%20Inc/")

        assert response.status_code == 200
        assert "<title>Jobs at Alpha Inc - Job Board</title>" in response.text
        assert "Backend Engineer" in response.text
        assert "Support Lead" in response.text

    async def test_without_trailing_slash(self, client, scenario_listings):
        response = await client.get("/company/Alpha%20Inc")
        assert response.status_code == 200

    async def test_name_with_slash(self, client, add_listings):
        await add_listings(make_listing("A/B Corp", title="Analyst"))

        response = await client.get("/company/A%2FB%20Corp/")

        assert response.status_code == 200
        assert "Jobs at A/B Corp" in response.text
        assert "Analyst" in response.text

    async def test_name_with_ampersand(self, client, add_listings):
        await add_listings(make_listing("Acme & Co", title="Analyst"))

        response = await client.get("/company/Acme%20%26%20Co/")

        assert response.status_code == 200
        assert "Jobs at Acme &amp; Co" in response.text

    async def test_non_ascii_name(self, client, add_listings):
        await add_listings(make_listing("北京公司", title="Engineer"))

        response = await client.get("/company/%E5%8C%97%E4%BA%AC%E5%85%AC%E5%8F%B8/")

        assert response.status_code == 200
        assert "Jobs at 北京公司" in response.text

    async def test_unknown_company_is_404(self, client, scenario_listings):
        response = await client.get("/company/Ghost%20LLC/")

        assert response.status_code == 404
        assert "Nothing found" in response.text

    async def test_unknown_company_keeps_company_title(self, client, scenario_listings):
        response = await client.get("/company/Ghost%20LLC/")

        assert response.status_code == 404
        assert "<title>Jobs at Ghost LLC - Job Board</title>" in response.text

    async def test_malformed_identifier_is_404(self, client, scenario_listings):
        response = await client.get("/company/Acme%2/")

        assert response.status_code == 404
        assert "Nothing found" in response.text

    async def test_query_string_permalink(self, client, scenario_listings):
        response = await client.get("/index.php?company=Alpha%20Inc")

        assert response.status_code == 200
        assert "Jobs at Alpha Inc" in response.text

    async def test_query_string_plus_is_not_a_space(self, client, add_listings):
        await add_listings(make_listing("C++ Shop"))

        found = await client.get("/index.php?company=C%2B%2B%20Shop")
        assert found.status_code == 200
        assert "Jobs at C++ Shop" in found.text

    async def test_query_string_form_titles_with_site_description(
        self, client, scenario_listings, directory_settings
    ):
        directory_settings.site_description = "Find work"
        app.dependency_overrides[get_directory] = lambda: build_directory(directory_settings)

        front = await client.get("/index.php?company=Alpha%20Inc")
        pretty = await client.get("/company/Alpha%20Inc/")

        assert "<title>Jobs at Alpha Inc - Job Board - Find work</title>" in front.text
        assert "<title>Jobs at Alpha Inc - Job Board</title>" in pretty.text

    async def test_directory_links_lead_to_company_pages(self, client, add_listings):
        await add_listings(
            make_listing("Acme & Co"),
            make_listing("A/B Corp"),
            make_listing("C++ Shop"),
            make_listing("北京公司"),
        )
        listing = await client.get("/companies")

        paths = [
            html.unescape(path)
            for path in re.findall(r'href="https://site\.test(/company/[^"]+)"', listing.text)
        ]

        assert len(paths) == 4
        for path in paths:
            response = await client.get(path)
            assert response.status_code == 200, path

    async def test_index_without_company_shows_directory(self, client, scenario_listings):
        response = await client.get("/index.php")

        assert response.status_code == 200
        assert "companies-overview" in response.text

    async def test_pagination(self, client, add_listings, directory):
        directory.settings.listings_per_page = 2
        await add_listings(*[make_listing("Acme", title=f"Role {i}") for i in range(3)])

        response = await client.get("/company/Acme/", params={"page": 2})

        assert response.status_code == 200
        assert "Page 2 of 2" in response.text


class TestCompaniesApi:
    async def test_directory(self, client, scenario_listings):
        response = await client.get("/api/v1/companies")

        assert response.status_code == 200
        data = response.json()
        assert data["total_companies"] == 3
        assert len(data["letters"]) == 27
        assert [bucket["letter"] for bucket in data["buckets"]] == ["A", "Z", "0-9"]
        alpha = data["buckets"][0]["companies"][0]
        assert alpha == {
            "name": "Alpha Inc",
            "open_listings": 1,
            "profile_url": "https://site.test/company/Alpha%20Inc/",
        }

    async def test_profile_urls_are_not_html_escaped(
        self, client, scenario_listings, directory_settings
    ):
        app.dependency_overrides[get_directory] = lambda: build_directory(
            directory_settings,
            url_template=lambda base, slug, encoded: f"{base}/{slug}?name={encoded}&ref=dir",
        )

        response = await client.get("/api/v1/companies")

        alpha = response.json()["buckets"][0]["companies"][0]
        assert alpha["profile_url"] == "https://site.test/company?name=Alpha%20Inc&ref=dir"

    async def test_directory_include_empty(self, client, scenario_listings):
        response = await client.get("/api/v1/companies", params={"include_empty": "true"})

        assert len(response.json()["buckets"]) == 27

    async def test_company_listings(self, client, scenario_listings):
        response = await client.get("/api/v1/companies/Zeta%20Corp")

        assert response.status_code == 200
        data = response.json()
        assert data["company"] == "Zeta Corp"
        assert data["title"] == "Jobs at Zeta Corp"
        assert data["listings"]["total"] == 2
        assert {item["title"] for item in data["listings"]["items"]} == {
            "SRE",
            "Frontend Engineer",
        }

    async def test_company_listings_name_with_slash(self, client, add_listings):
        await add_listings(make_listing("A/B Corp"))

        response = await client.get("/api/v1/companies/A%2FB%20Corp")

        assert response.status_code == 200
        assert response.json()["company"] == "A/B Corp"

    async def test_unknown_company(self, client, scenario_listings):
        response = await client.get("/api/v1/companies/Ghost%20LLC")

        assert response.status_code == 404
        assert response.json()["error"] == "COMPANY_NOT_FOUND"


class TestStoreUnavailable:
    async def test_directory_page(self, broken_store_client):
        response = await broken_store_client.get("/companies")

        assert response.status_code == 503
        assert "temporarily unavailable" in response.text
        assert "db down" not in response.text

    async def test_company_page(self, broken_store_client):
        response = await broken_store_client.get("/company/Acme/")

        assert response.status_code == 503
        assert "Nothing found" not in response.text

    async def test_api(self, broken_store_client):
        response = await broken_store_client.get("/api/v1/companies")

        assert response.status_code == 503
        assert response.json()["error"] == "STORE_UNAVAILABLE"
        assert "db down" not in response.text


class TestHealth:
    async def test_healthy(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["listing_store"] == "healthy"
        assert data["store_latency_ms"] is not None

    async def test_degraded(self, broken_store_client):
        response = await broken_store_client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"]["listing_store"] == "unhealthy"
        assert data["store_latency_ms"] is None
