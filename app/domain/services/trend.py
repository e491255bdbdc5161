"""
Buckets de tendencia (semanales o mensuales) para las gráficas de rentas.

Los buckets se generan del más reciente al más antiguo y se devuelven en
orden cronológico. Cada bucket cuenta las rentas cuya fecha de inicio cae
dentro de la ventana (extremos incluidos) y suma su ingreso efectivo.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Mapping

from app.domain.constants import MONTH_ABBREVIATIONS
from app.domain.entities.car import Car
from app.domain.entities.rental import Rental
from app.domain.errors import InvalidTrendPeriodError
from app.domain.services.revenue import ZERO, revenue_of
from app.domain.timestamps import normalize_to_date
from app.domain.value_objects.date_range import DateRange

logger = logging.getLogger(__name__)


class TrendPeriod(str, Enum):
    """Granularidad de la tendencia."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class TrendBucket:
    period_label: str
    rental_count: int
    revenue: Decimal


def parse_trend_period(value: "TrendPeriod | str") -> TrendPeriod:
    try:
        return TrendPeriod(value)
    except ValueError:
        raise InvalidTrendPeriodError(str(value)) from None


def _end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def _start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def monthly_windows(now: datetime, count: int) -> list[tuple[str, DateRange]]:
    """Últimos ``count`` meses calendario terminando en el mes actual, más reciente primero."""
    windows = []
    for i in range(count):
        month_index = now.month - 1 - i
        year = now.year + month_index // 12
        month = month_index % 12 + 1
        last_day = calendar.monthrange(year, month)[1]
        start = datetime(year, month, 1, tzinfo=now.tzinfo)
        end = datetime.combine(start.date().replace(day=last_day), time.max, tzinfo=now.tzinfo)
        label = f"{MONTH_ABBREVIATIONS[month - 1]} {year}"
        windows.append((label, DateRange(start=start, end=end)))
    return windows


def weekly_windows(now: datetime, count: int) -> list[tuple[str, DateRange]]:
    """
    Últimas ``count`` ventanas de siete días calendario, más reciente primero.

    La ventana ``i`` termina el día de ``now - 7*i`` y empieza seis días antes,
    así las ventanas son contiguas y no se solapan.
    """
    windows = []
    for i in range(count):
        end = _end_of_day(now - timedelta(days=7 * i))
        start = _start_of_day(end - timedelta(days=6))
        windows.append((f"Week {count - i}", DateRange(start=start, end=end)))
    return windows


def build_trend(
    rentals: Iterable[Rental],
    cars_by_id: Mapping[str, Car],
    period: "TrendPeriod | str",
    count: int,
    now: datetime,
) -> list[TrendBucket]:
    """
    Calcula la serie de tendencia en orden cronológico.

    Si todos los buckets quedan en cero (sin rentas ni ingreso) se sustituye
    por una serie de ceros con las mismas etiquetas. Esto no distingue "sin
    datos" de "datos legítimamente en cero"; se conserva por compatibilidad.
    """
    period = parse_trend_period(period)
    now = normalize_to_date(now)
    if period is TrendPeriod.MONTHLY:
        windows = monthly_windows(now, count)
    else:
        windows = weekly_windows(now, count)

    dated = [rental for rental in rentals if rental.start_date is not None]
    buckets = []
    for label, window in windows:
        matched = [rental for rental in dated if window.contains(rental.start_date)]
        revenue = sum(
            (revenue_of(rental, cars_by_id.get(rental.car_id)) for rental in matched),
            ZERO,
        )
        buckets.append(TrendBucket(period_label=label, rental_count=len(matched), revenue=revenue))

    if all(bucket.rental_count == 0 and bucket.revenue == 0 for bucket in buckets):
        logger.info(
            "No rental data found, returning zero series",
            extra={"period": period.value, "count": count},
        )
        return zero_series(windows)

    buckets.reverse()
    return buckets


def zero_series(windows: list[tuple[str, DateRange]]) -> list[TrendBucket]:
    """Serie de ceros en orden cronológico con las etiquetas de ``windows``."""
    return [
        TrendBucket(period_label=label, rental_count=0, revenue=ZERO)
        for label, _ in reversed(windows)
    ]
