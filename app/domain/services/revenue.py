"""Cálculo del ingreso efectivo de una renta."""

from datetime import datetime, timedelta
from decimal import Decimal

from app.domain.entities.car import Car
from app.domain.entities.rental import Rental

ONE_DAY = timedelta(days=1)
ZERO = Decimal("0")


def rental_days(start: datetime, end: datetime) -> int:
    """
    Días de renta con conteo inclusivo: ceil((end - start) / 1 día) + 1.

    Ejemplo: 2024-01-01 -> 2024-01-03 = 3 días. El resultado puede ser cero o
    negativo cuando end es anterior a start; quien llama decide el fallback.
    """
    whole_days, remainder = divmod(end - start, ONE_DAY)
    if remainder:
        whole_days += 1
    return whole_days + 1


def revenue_of(rental: Rental, car: Car | None) -> Decimal:
    """
    Ingreso efectivo de una renta.

    Prefiere tarifa diaria × días inclusivos cuando el vehículo existe, tiene
    tarifa positiva y ambas fechas son válidas; en cualquier otro caso usa el
    ``total_amount`` almacenado (o cero). Nunca lanza excepciones.
    """
    fallback = rental.total_amount or ZERO
    if car is None or not car.has_daily_rate or not rental.has_dates:
        return fallback

    days = rental_days(rental.start_date, rental.end_date)
    if days > 0:
        return car.daily_rate * days
    return fallback
