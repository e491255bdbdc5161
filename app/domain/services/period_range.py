"""Resolución de rangos del selector del dashboard."""

import calendar
import logging
from datetime import datetime, timedelta

from app.domain.constants import (
    RANGE_3_MONTHS,
    RANGE_7_DAYS,
    RANGE_30_DAYS,
    RANGE_MONTH,
    RANGE_YEAR,
)
from app.domain.services.trend import TrendPeriod
from app.domain.value_objects.date_range import DateRange

logger = logging.getLogger(__name__)

_TREND_COUNT_BY_RANGE = {
    RANGE_3_MONTHS: 3,
    RANGE_YEAR: 12,
}
DEFAULT_TREND_COUNT = 6


def _start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def shift_months(value: datetime, months: int) -> datetime:
    """Mueve una fecha N meses, ajustando el día al largo del mes destino."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def resolve_period_range(token: str, now: datetime) -> DateRange:
    """
    Convierte un token del selector en una ventana que termina en ``now``.

    Tokens: 7days, 30days, month (desde el día 1 del mes actual), 3months
    (mismo instante tres meses atrás) y year (desde el 1 de enero). Un token
    desconocido se trata como 7days.
    """
    if token == RANGE_7_DAYS:
        start = now - timedelta(days=7)
    elif token == RANGE_30_DAYS:
        start = now - timedelta(days=30)
    elif token == RANGE_MONTH:
        start = _start_of_day(now.replace(day=1))
    elif token == RANGE_3_MONTHS:
        start = shift_months(now, -3)
    elif token == RANGE_YEAR:
        start = _start_of_day(now.replace(month=1, day=1))
    else:
        logger.warning("Unknown range token, falling back to 7days", extra={"token": token})
        start = now - timedelta(days=7)
    return DateRange(start=start, end=now)


def trend_spec_for_dashboard(token: str) -> tuple[TrendPeriod, int]:
    """Periodo y cantidad de buckets de la gráfica del dashboard."""
    weekly = token in (RANGE_7_DAYS, RANGE_30_DAYS)
    period = TrendPeriod.WEEKLY if weekly else TrendPeriod.MONTHLY
    return period, _TREND_COUNT_BY_RANGE.get(token, DEFAULT_TREND_COUNT)


def trend_spec_for_report(token: str) -> tuple[TrendPeriod, int]:
    """Periodo y cantidad de buckets de la vista de reportes (semanal solo en 7days)."""
    period = TrendPeriod.WEEKLY if token == RANGE_7_DAYS else TrendPeriod.MONTHLY
    return period, _TREND_COUNT_BY_RANGE.get(token, DEFAULT_TREND_COUNT)
