from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

from app.application.dtos.analytics_dto import AnalyticsReportDTO, DashboardSummaryDTO
from app.domain.constants import RANGE_3_MONTHS, RANGE_7_DAYS, RANGE_30_DAYS, RANGE_MONTH, RANGE_YEAR
from app.domain.entities.rental import Rental
from app.domain.services.ranking import CarPerformance, CategoryPerformance, StationPerformance
from app.domain.services.trend import TrendBucket, TrendPeriod


class RangeToken(str, Enum):
    SEVEN_DAYS = RANGE_7_DAYS
    THIRTY_DAYS = RANGE_30_DAYS
    MONTH = RANGE_MONTH
    THREE_MONTHS = RANGE_3_MONTHS
    YEAR = RANGE_YEAR


class TrendBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period_label: str
    rental_count: int
    revenue: Decimal


class CarPerformanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    car_id: str
    name: str
    model: str
    license_plate: str | None = None
    status: str | None = None
    daily_rate: Decimal | None = None
    category_name: str
    station_name: str
    rental_count: int
    revenue: Decimal
    utilization_rate: int


class StationPerformanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    station_id: str
    name: str
    rentals: int
    revenue: Decimal


class CategoryPerformanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: str
    name: str
    rentals: int
    revenue: Decimal


class RentalSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    car_id: str | None = None
    customer_id: str | None = None
    pickup_station_id: str | None = None
    return_station_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    total_amount: Decimal
    status: str | None = None
    created_at: datetime | None = None


class RevenueResponse(BaseModel):
    start: datetime | None = None
    end: datetime | None = None
    revenue: Decimal
    currency_code: str


class TrendResponse(BaseModel):
    period: TrendPeriod
    count: int
    buckets: list[TrendBucketResponse]

    @classmethod
    def from_buckets(cls, period: TrendPeriod, count: int, buckets: list[TrendBucket]) -> "TrendResponse":
        return cls(
            period=period,
            count=count,
            buckets=[TrendBucketResponse.model_validate(bucket) for bucket in buckets],
        )


class DashboardSummaryResponse(BaseModel):
    range: str
    range_start: datetime
    range_end: datetime
    total_cars: int
    active_rentals: int
    total_customers: int
    revenue: Decimal
    previous_revenue: Decimal
    revenue_change_percent: Decimal
    is_revenue_increasing: bool
    currency_code: str
    trend_period: TrendPeriod
    trend: list[TrendBucketResponse]
    recent_rentals: list[RentalSummary]

    @classmethod
    def from_dto(cls, dto: DashboardSummaryDTO, currency_code: str) -> "DashboardSummaryResponse":
        return cls(
            range=dto.range_token,
            range_start=dto.range_start,
            range_end=dto.range_end,
            total_cars=dto.total_cars,
            active_rentals=dto.active_rentals,
            total_customers=dto.total_customers,
            revenue=dto.revenue,
            previous_revenue=dto.previous_revenue,
            revenue_change_percent=dto.revenue_change_percent,
            is_revenue_increasing=dto.is_revenue_increasing,
            currency_code=currency_code,
            trend_period=dto.trend_period,
            trend=[TrendBucketResponse.model_validate(bucket) for bucket in dto.trend],
            recent_rentals=[RentalSummary.model_validate(rental) for rental in dto.recent_rentals],
        )


class AnalyticsReportResponse(BaseModel):
    range: str
    currency_code: str
    trend_period: TrendPeriod
    station_performance: list[StationPerformanceResponse]
    category_performance: list[CategoryPerformanceResponse]
    top_cars: list[CarPerformanceResponse]
    trend: list[TrendBucketResponse]

    @classmethod
    def from_dto(cls, dto: AnalyticsReportDTO, currency_code: str) -> "AnalyticsReportResponse":
        return cls(
            range=dto.range_token,
            currency_code=currency_code,
            trend_period=dto.trend_period,
            station_performance=[
                StationPerformanceResponse.model_validate(item) for item in dto.station_performance
            ],
            category_performance=[
                CategoryPerformanceResponse.model_validate(item) for item in dto.category_performance
            ],
            top_cars=[CarPerformanceResponse.model_validate(item) for item in dto.top_cars],
            trend=[TrendBucketResponse.model_validate(bucket) for bucket in dto.trend],
        )


def station_responses(items: list[StationPerformance]) -> list[StationPerformanceResponse]:
    return [StationPerformanceResponse.model_validate(item) for item in items]


def category_responses(items: list[CategoryPerformance]) -> list[CategoryPerformanceResponse]:
    return [CategoryPerformanceResponse.model_validate(item) for item in items]


def car_responses(items: list[CarPerformance]) -> list[CarPerformanceResponse]:
    return [CarPerformanceResponse.model_validate(item) for item in items]


def rental_responses(items: list[Rental]) -> list[RentalSummary]:
    return [RentalSummary.model_validate(item) for item in items]
