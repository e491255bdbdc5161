from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.application.services.rental_analytics import RentalAnalytics
from app.domain.constants import COLLECTION_RENTALS, COLLECTION_STATIONS
from app.domain.errors import InvalidTrendPeriodError, StoreUnavailableError
from app.domain.services.trend import TrendPeriod
from app.infrastructure.in_memory.document_store import InMemoryDocumentStore


class FailingDocumentStore(InMemoryDocumentStore):
    """Store in-memory que falla al leer ciertas colecciones."""

    def __init__(self, failing: set[str], collections=None):
        super().__init__(collections)
        self.failing = failing

    async def list_all(self, collection):
        if collection in self.failing:
            raise StoreUnavailableError(collection, "simulated outage")
        return await super().list_all(collection)


def _dt(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_total_revenue_without_range(analytics):
    assert await analytics.revenue() == Decimal("435.50")


@pytest.mark.asyncio
async def test_revenue_filters_by_start_date(analytics, fake_clock):
    assert await analytics.revenue(_dt(2024, 3, 1), fake_clock.now()) == Decimal("200")
    assert await analytics.revenue(start=_dt(2024, 2, 1)) == Decimal("360")
    assert await analytics.revenue(end=_dt(2024, 1, 31)) == Decimal("75.50")


@pytest.mark.asyncio
async def test_revenue_accepts_naive_bounds_as_utc(analytics):
    assert await analytics.revenue(datetime(2024, 3, 1), datetime(2024, 3, 15, 12)) == Decimal("200")
    assert await analytics.revenue(end=datetime(2024, 1, 31)) == Decimal("75.50")


@pytest.mark.asyncio
async def test_trend_after_naive_set_time(analytics, fake_clock):
    fake_clock.set_time(datetime(2024, 2, 20, 9, 0))

    trend = await analytics.rentals_trend(TrendPeriod.MONTHLY, 2)

    assert [(b.period_label, b.rental_count) for b in trend] == [("Jan 2024", 1), ("Feb 2024", 1)]


@pytest.mark.asyncio
async def test_monthly_trend_over_snapshot(analytics):
    trend = await analytics.rentals_trend(TrendPeriod.MONTHLY, 3)

    assert [(b.period_label, b.rental_count, b.revenue) for b in trend] == [
        ("Jan 2024", 1, Decimal("75.50")),
        ("Feb 2024", 1, Decimal("160")),
        ("Mar 2024", 2, Decimal("200")),
    ]


@pytest.mark.asyncio
async def test_trend_rejects_unknown_period(analytics):
    with pytest.raises(InvalidTrendPeriodError):
        await analytics.rentals_trend("hourly", 3)


@pytest.mark.asyncio
async def test_top_cars_joins_reference_data(analytics):
    result = await analytics.top_cars(5)

    assert [item.car_id for item in result] == ["car-1", "car-2", "car-3"]
    best = result[0]
    assert (best.name, best.category_name, best.station_name) == ("Corolla", "Economy", "Downtown")
    assert (best.rental_count, best.revenue, best.utilization_rate) == (2, Decimal("200"), 40)
    assert result[2].revenue == Decimal("75.50")


@pytest.mark.asyncio
async def test_station_and_category_performance(analytics):
    stations = await analytics.station_performance()
    categories = await analytics.category_performance()

    assert [(s.name, s.rentals, s.revenue) for s in stations] == [
        ("Downtown", 2, Decimal("200")),
        ("Airport", 2, Decimal("235.50")),
        ("Harbor", 0, Decimal("0")),
    ]
    assert [(c.name, c.rentals, c.revenue) for c in categories] == [
        ("Economy", 3, Decimal("275.50")),
        ("SUV", 1, Decimal("160")),
    ]


@pytest.mark.asyncio
async def test_station_performance_with_no_rentals(fake_clock):
    store = InMemoryDocumentStore(
        {COLLECTION_STATIONS: [{"id": "s-2", "name": "Airport"}, {"id": "s-1", "name": "Downtown"}]}
    )
    analytics = RentalAnalytics(store=store, clock=fake_clock)

    result = await analytics.station_performance()

    assert [(s.station_id, s.rentals, s.revenue) for s in result] == [
        ("s-2", 0, Decimal("0")),
        ("s-1", 0, Decimal("0")),
    ]


@pytest.mark.asyncio
async def test_recent_rentals_newest_first_and_undated_last(seeded_store, analytics):
    seeded_store.add(COLLECTION_RENTALS, {"id": "rental-undated", "carId": "car-2"})

    recent = await analytics.recent_rentals(10)

    assert [rental.id for rental in recent] == [
        "rental-4",
        "rental-1",
        "rental-2",
        "rental-3",
        "rental-undated",
    ]
    assert [rental.id for rental in await analytics.recent_rentals(2)] == ["rental-4", "rental-1"]


@pytest.mark.asyncio
async def test_counters_are_resolved_by_the_store(analytics):
    assert await analytics.total_cars() == 3
    assert await analytics.active_rentals() == 2
    assert await analytics.customers() == 2


@pytest.mark.asyncio
async def test_same_snapshot_gives_identical_results(analytics):
    first = (
        await analytics.top_cars(5),
        await analytics.station_performance(),
        await analytics.category_performance(),
        await analytics.rentals_trend(TrendPeriod.WEEKLY, 4),
    )
    second = (
        await analytics.top_cars(5),
        await analytics.station_performance(),
        await analytics.category_performance(),
        await analytics.rentals_trend(TrendPeriod.WEEKLY, 4),
    )

    assert first == second


@pytest.mark.asyncio
async def test_store_failure_aborts_aggregation(fake_clock, sample_docs):
    store = FailingDocumentStore({COLLECTION_RENTALS}, sample_docs)
    analytics = RentalAnalytics(store=store, clock=fake_clock)

    with pytest.raises(StoreUnavailableError) as exc_info:
        await analytics.top_cars(5)

    assert exc_info.value.collection == COLLECTION_RENTALS
    assert exc_info.value.code == "STORE_UNAVAILABLE"
