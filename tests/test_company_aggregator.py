"""Company aggregation against the listing store."""
import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from company_directory.core.exceptions import StoreUnavailableException
from company_directory.models.job_listing import STATUS_DRAFT, STATUS_EXPIRED
from company_directory.repositories.listing_repository import ListingRepository
from company_directory.services.alphabetical_grouper import AlphabeticalGrouper
from company_directory.services.company_aggregator import CompanyAggregator, CompanyEntry

from tests.factories import make_listing


class TestAggregate:
    async def test_counts_only_open_listings(self, db, repo, add_listings):
        await add_listings(
            make_listing("Acme"),
            make_listing("Acme"),
            make_listing("Acme"),
            make_listing("Acme", filled=True),
        )

        companies = await CompanyAggregator(repo).aggregate(db)

        assert companies == [CompanyEntry("Acme", 3)]

    async def test_company_with_only_filled_listings_is_absent(self, db, repo, add_listings):
        await add_listings(
            make_listing("Ghost LLC", filled=True),
            make_listing("Ghost LLC", filled=True),
            make_listing("Acme"),
        )

        companies = await CompanyAggregator(repo).aggregate(db)

        assert [c.name for c in companies] == ["Acme"]

    async def test_unpublished_and_foreign_post_types_are_ignored(self, db, repo, add_listings):
        await add_listings(
            make_listing("Drafty", status=STATUS_DRAFT),
            make_listing("Expired Co", status=STATUS_EXPIRED),
            make_listing("Page Co", post_type="page"),
            make_listing("Acme", status=STATUS_DRAFT),
            make_listing("Acme"),
        )

        companies = await CompanyAggregator(repo).aggregate(db)

        assert companies == [CompanyEntry("Acme", 1)]

    async def test_empty_and_missing_names_are_skipped(self, db, repo, add_listings):
        await add_listings(
            make_listing(""),
            make_listing(None),
            make_listing("Acme"),
        )

        companies = await CompanyAggregator(repo).aggregate(db)

        assert [c.name for c in companies] == ["Acme"]

    async def test_sorted_case_insensitively(self, db, repo, add_listings):
        await add_listings(
            make_listing("beta"),
            make_listing("Zeta"),
            make_listing("alpha"),
            make_listing("Alpha"),
            make_listing("7 Eleven"),
        )

        companies = await CompanyAggregator(repo).aggregate(db)

        assert [c.name for c in companies] == ["7 Eleven", "Alpha", "alpha", "beta", "Zeta"]

    async def test_names_are_kept_raw(self, db, repo, add_listings):
        await add_listings(make_listing("Acme & Co"), make_listing("北京公司"))

        companies = await CompanyAggregator(repo).aggregate(db)

        assert {c.name for c in companies} == {"Acme & Co", "北京公司"}

    async def test_is_idempotent(self, db, repo, scenario_listings):
        aggregator = CompanyAggregator(repo)

        first = await aggregator.aggregate(db)
        second = await aggregator.aggregate(db)

        assert first == second

    async def test_counts_are_live(self, db, repo, add_listings):
        aggregator = CompanyAggregator(repo)
        await add_listings(make_listing("Acme"))
        assert await aggregator.aggregate(db) == [CompanyEntry("Acme", 1)]

        await add_listings(make_listing("Acme"))
        assert await aggregator.aggregate(db) == [CompanyEntry("Acme", 2)]

    async def test_scenario(self, db, repo, scenario_listings):
        companies = await CompanyAggregator(repo).aggregate(db)

        assert companies == [
            CompanyEntry("7 Eleven", 1),
            CompanyEntry("Alpha Inc", 1),
            CompanyEntry("Zeta Corp", 2),
        ]

        buckets = AlphabeticalGrouper().group(companies)
        assert buckets["A"] == [CompanyEntry("Alpha Inc", 1)]
        assert buckets["Z"] == [CompanyEntry("Zeta Corp", 2)]
        assert buckets["0-9"] == [CompanyEntry("7 Eleven", 1)]

    def test_label_includes_count(self):
        assert CompanyEntry("Acme", 3).label == "Acme (3)"


class TestStoreFailures:
    async def test_query_error_surfaces_as_store_unavailable(self, repo):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        with pytest.raises(StoreUnavailableException) as exc_info:
            await CompanyAggregator(repo).aggregate(db)

        assert exc_info.value.status_code == 503
        assert exc_info.value.operation == "distinct_company_names"

    async def test_failure_mid_aggregation_returns_nothing(self, db, add_listings):
        await add_listings(make_listing("Acme"), make_listing("Beta"))
        repo = ListingRepository(timeout=5.0)
        repo.count_listings = AsyncMock(
            side_effect=[1, StoreUnavailableException("count_listings")]
        )

        with pytest.raises(StoreUnavailableException):
            await CompanyAggregator(repo).aggregate(db)

    async def test_slow_query_times_out(self):
        async def slow_execute(statement):
            await asyncio.sleep(1)

        db = AsyncMock()
        db.execute.side_effect = slow_execute

        with pytest.raises(StoreUnavailableException):
            await CompanyAggregator(ListingRepository(timeout=0.01)).aggregate(db)
