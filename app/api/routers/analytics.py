from datetime import datetime

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_analytics, get_use_cases
from app.api.schemas.analytics import (
    AnalyticsReportResponse,
    CarPerformanceResponse,
    CategoryPerformanceResponse,
    DashboardSummaryResponse,
    RangeToken,
    RentalSummary,
    RevenueResponse,
    StationPerformanceResponse,
    TrendResponse,
    car_responses,
    category_responses,
    rental_responses,
    station_responses,
)
from app.application.services.rental_analytics import RentalAnalytics
from app.config import Settings, get_settings
from app.domain.constants import DEFAULT_RECENT_RENTALS, DEFAULT_TOP_CARS
from app.domain.errors import InvalidDateRangeError
from app.domain.services.trend import TrendPeriod
from app.domain.timestamps import normalize_to_date

router = APIRouter(prefix="/analytics")


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_dashboard_summary(
    range_token: RangeToken = Query(default=RangeToken.SEVEN_DAYS, alias="range"),
    use_cases=Depends(get_use_cases),
    settings: Settings = Depends(get_settings),
) -> DashboardSummaryResponse:
    summary = await use_cases["dashboard_summary"].execute(range_token.value)
    return DashboardSummaryResponse.from_dto(summary, currency_code=settings.currency_code)


@router.get("/report", response_model=AnalyticsReportResponse)
async def get_report(
    range_token: RangeToken = Query(default=RangeToken.THIRTY_DAYS, alias="range"),
    use_cases=Depends(get_use_cases),
    settings: Settings = Depends(get_settings),
) -> AnalyticsReportResponse:
    report = await use_cases["report"].execute(range_token.value)
    return AnalyticsReportResponse.from_dto(report, currency_code=settings.currency_code)


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(
    start: datetime | None = Query(default=None),
    end: datetime | None = Query(default=None),
    analytics: RentalAnalytics = Depends(get_analytics),
    settings: Settings = Depends(get_settings),
) -> RevenueResponse:
    start = normalize_to_date(start)
    end = normalize_to_date(end)
    if start is not None and end is not None and start > end:
        raise InvalidDateRangeError(f"start ({start.isoformat()}) must be <= end ({end.isoformat()})")
    total = await analytics.revenue(start, end)
    return RevenueResponse(start=start, end=end, revenue=total, currency_code=settings.currency_code)


@router.get("/trend", response_model=TrendResponse)
async def get_trend(
    period: TrendPeriod = Query(default=TrendPeriod.MONTHLY),
    count: int = Query(default=6, ge=1, le=60),
    analytics: RentalAnalytics = Depends(get_analytics),
) -> TrendResponse:
    buckets = await analytics.rentals_trend(period, count)
    return TrendResponse.from_buckets(period, count, buckets)


@router.get("/top-cars", response_model=list[CarPerformanceResponse])
async def get_top_cars(
    limit: int = Query(default=DEFAULT_TOP_CARS, ge=1, le=100),
    analytics: RentalAnalytics = Depends(get_analytics),
) -> list[CarPerformanceResponse]:
    return car_responses(await analytics.top_cars(limit))


@router.get("/stations", response_model=list[StationPerformanceResponse])
async def get_station_performance(
    analytics: RentalAnalytics = Depends(get_analytics),
) -> list[StationPerformanceResponse]:
    return station_responses(await analytics.station_performance())


@router.get("/categories", response_model=list[CategoryPerformanceResponse])
async def get_category_performance(
    analytics: RentalAnalytics = Depends(get_analytics),
) -> list[CategoryPerformanceResponse]:
    return category_responses(await analytics.category_performance())


@router.get("/recent-rentals", response_model=list[RentalSummary])
async def get_recent_rentals(
    limit: int = Query(default=DEFAULT_RECENT_RENTALS, ge=1, le=100),
    analytics: RentalAnalytics = Depends(get_analytics),
) -> list[RentalSummary]:
    return rental_responses(await analytics.recent_rentals(limit))
