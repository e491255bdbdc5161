"""Servicios puros del dominio: ingreso, rangos, tendencia y rankings."""

from app.domain.services.period_range import (
    resolve_period_range,
    trend_spec_for_dashboard,
    trend_spec_for_report,
)
from app.domain.services.ranking import (
    CarPerformance,
    CategoryPerformance,
    StationPerformance,
    category_performance,
    station_performance,
    top_cars,
)
from app.domain.services.revenue import rental_days, revenue_of
from app.domain.services.trend import TrendBucket, TrendPeriod, build_trend

__all__ = [
    "revenue_of",
    "rental_days",
    "resolve_period_range",
    "trend_spec_for_dashboard",
    "trend_spec_for_report",
    "TrendPeriod",
    "TrendBucket",
    "build_trend",
    "CarPerformance",
    "StationPerformance",
    "CategoryPerformance",
    "top_cars",
    "station_performance",
    "category_performance",
]
