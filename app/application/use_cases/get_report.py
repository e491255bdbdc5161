from app.application.dtos.analytics_dto import AnalyticsReportDTO
from app.application.parallel import gather_fail_fast
from app.application.services.rental_analytics import RentalAnalytics
from app.domain.constants import REPORT_TOP_CARS
from app.domain.services.period_range import trend_spec_for_report


class GetReportUseCase:
    """Vista de reportes: rankings y tendencia cargados en paralelo."""

    def __init__(self, analytics: RentalAnalytics) -> None:
        self._analytics = analytics

    async def execute(self, range_token: str) -> AnalyticsReportDTO:
        trend_period, trend_count = trend_spec_for_report(range_token)
        stations, categories, top_cars, trend = await gather_fail_fast(
            self._analytics.station_performance(),
            self._analytics.category_performance(),
            self._analytics.top_cars(REPORT_TOP_CARS),
            self._analytics.rentals_trend(trend_period, trend_count),
        )
        return AnalyticsReportDTO(
            range_token=range_token,
            trend_period=trend_period,
            station_performance=stations,
            category_performance=categories,
            top_cars=top_cars,
            trend=trend,
        )
