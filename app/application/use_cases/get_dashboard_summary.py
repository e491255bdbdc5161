import logging
from decimal import ROUND_HALF_UP, Decimal

from app.application.dtos.analytics_dto import DashboardSummaryDTO
from app.application.interfaces.clock import Clock
from app.application.parallel import gather_fail_fast
from app.application.services.rental_analytics import RentalAnalytics
from app.domain.constants import DEFAULT_RECENT_RENTALS
from app.domain.services.period_range import resolve_period_range, trend_spec_for_dashboard

ONE_DECIMAL = Decimal("0.1")


def revenue_change_percent(current: Decimal, previous: Decimal) -> Decimal:
    """Variación porcentual contra el periodo previo, a un decimal; 0.0 sin base."""
    if previous <= 0:
        return Decimal("0.0")
    change = (current - previous) / previous * 100
    return change.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


class GetDashboardSummaryUseCase:
    def __init__(self, analytics: RentalAnalytics, clock: Clock) -> None:
        self._analytics = analytics
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, range_token: str) -> DashboardSummaryDTO:
        window = resolve_period_range(range_token, self._clock.now())

        total_cars, active_rentals, total_customers, current_revenue = await gather_fail_fast(
            self._analytics.total_cars(),
            self._analytics.active_rentals(),
            self._analytics.customers(),
            self._analytics.revenue_in(window),
        )
        previous_revenue = await self._analytics.revenue_in(window.previous())

        trend_period, trend_count = trend_spec_for_dashboard(range_token)
        trend = await self._analytics.rentals_trend(trend_period, trend_count)
        recent = await self._analytics.recent_rentals(DEFAULT_RECENT_RENTALS)

        summary = DashboardSummaryDTO(
            range_token=range_token,
            range_start=window.start,
            range_end=window.end,
            total_cars=total_cars,
            active_rentals=active_rentals,
            total_customers=total_customers,
            revenue=current_revenue,
            previous_revenue=previous_revenue,
            revenue_change_percent=revenue_change_percent(current_revenue, previous_revenue),
            trend_period=trend_period,
            trend=trend,
            recent_rentals=recent,
        )
        self._logger.info(
            "Dashboard summary computed",
            extra={
                "range": range_token,
                "revenue": str(current_revenue),
                "previous_revenue": str(previous_revenue),
            },
        )
        return summary
