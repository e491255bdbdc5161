from decimal import Decimal

import pytest

from app.application.use_cases.get_report import GetReportUseCase
from app.domain.services.trend import TrendPeriod


@pytest.mark.asyncio
async def test_report_for_three_months(analytics):
    report = await GetReportUseCase(analytics=analytics).execute("3months")

    assert report.range_token == "3months"
    assert report.trend_period is TrendPeriod.MONTHLY
    assert [b.period_label for b in report.trend] == ["Jan 2024", "Feb 2024", "Mar 2024"]
    assert [s.name for s in report.station_performance] == ["Downtown", "Airport", "Harbor"]
    assert [c.name for c in report.category_performance] == ["Economy", "SUV"]
    assert [car.car_id for car in report.top_cars] == ["car-1", "car-2", "car-3"]


@pytest.mark.asyncio
async def test_report_for_thirty_days_uses_monthly_trend(analytics):
    report = await GetReportUseCase(analytics=analytics).execute("30days")

    assert report.trend_period is TrendPeriod.MONTHLY
    assert len(report.trend) == 6
    assert report.trend[-1].revenue == Decimal("200")


@pytest.mark.asyncio
async def test_report_for_seven_days_uses_weekly_trend(analytics):
    report = await GetReportUseCase(analytics=analytics).execute("7days")

    assert report.trend_period is TrendPeriod.WEEKLY
    assert report.trend[-1].period_label == "Week 6"
