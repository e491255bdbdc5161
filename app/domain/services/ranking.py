"""Rankings de vehículos, sucursales y categorías por rentas e ingreso."""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from app.domain.constants import (
    UNKNOWN_NAME,
    UTILIZATION_CAP,
    UTILIZATION_POINTS_PER_RENTAL,
)
from app.domain.entities.car import Car
from app.domain.entities.category import Category
from app.domain.entities.rental import Rental
from app.domain.entities.station import Station
from app.domain.services.revenue import ZERO, revenue_of


@dataclass(frozen=True)
class CarPerformance:
    car_id: str
    name: str
    model: str
    license_plate: str | None
    status: str | None
    daily_rate: Decimal | None
    category_name: str
    station_name: str
    rental_count: int
    revenue: Decimal
    utilization_rate: int


@dataclass(frozen=True)
class StationPerformance:
    station_id: str
    name: str
    rentals: int
    revenue: Decimal


@dataclass(frozen=True)
class CategoryPerformance:
    category_id: str
    name: str
    rentals: int
    revenue: Decimal


def utilization_rate(rental_count: int) -> int:
    """
    Porcentaje de utilización ilustrativo: 20 puntos por renta, tope 100.

    No es una medición real de ocupación; solo sirve para la vista de ranking.
    """
    return min(rental_count * UTILIZATION_POINTS_PER_RENTAL, UTILIZATION_CAP)


def _name_of(entity: Station | Category | None) -> str:
    if entity is None or not entity.name:
        return UNKNOWN_NAME
    return entity.name


def top_cars(
    rentals: Iterable[Rental],
    cars_by_id: Mapping[str, Car],
    categories_by_id: Mapping[str, Category],
    stations_by_id: Mapping[str, Station],
    limit: int,
) -> list[CarPerformance]:
    """
    Vehículos con más rentas, desempate por id ascendente.

    Las rentas sin ``car_id`` se ignoran. Un vehículo referenciado que ya no
    existe aparece con nombre y modelo "Unknown".
    """
    counts: dict[str, int] = defaultdict(int)
    revenue: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for rental in rentals:
        if not rental.car_id:
            continue
        counts[rental.car_id] += 1
        revenue[rental.car_id] += revenue_of(rental, cars_by_id.get(rental.car_id))

    ranked = sorted(counts, key=lambda car_id: (-counts[car_id], car_id))[: max(limit, 0)]

    result = []
    for car_id in ranked:
        car = cars_by_id.get(car_id)
        category = categories_by_id.get(car.category_id) if car and car.category_id else None
        station = stations_by_id.get(car.station_id) if car and car.station_id else None
        result.append(
            CarPerformance(
                car_id=car_id,
                name=(car.name if car else None) or UNKNOWN_NAME,
                model=(car.model if car else None) or UNKNOWN_NAME,
                license_plate=car.license_plate if car else None,
                status=car.status if car else None,
                daily_rate=car.daily_rate if car else None,
                category_name=_name_of(category),
                station_name=_name_of(station),
                rental_count=counts[car_id],
                revenue=revenue[car_id],
                utilization_rate=utilization_rate(counts[car_id]),
            )
        )
    return result


def station_performance(
    rentals: Iterable[Rental],
    cars_by_id: Mapping[str, Car],
    stations: Sequence[Station],
) -> list[StationPerformance]:
    """
    Rentas e ingreso por sucursal de entrega, todas las sucursales incluidas.

    Orden por número de rentas descendente; los empates conservan el orden
    del store. Rentas con sucursal desconocida no se cuentan.
    """
    counts = {station.id: 0 for station in stations}
    revenue = {station.id: ZERO for station in stations}
    for rental in rentals:
        station_id = rental.pickup_station_id
        if station_id not in counts:
            continue
        counts[station_id] += 1
        revenue[station_id] += revenue_of(rental, cars_by_id.get(rental.car_id))

    result = [
        StationPerformance(
            station_id=station.id,
            name=_name_of(station),
            rentals=counts[station.id],
            revenue=revenue[station.id],
        )
        for station in stations
    ]
    # sorted() es estable: los empates quedan en orden del store
    return sorted(result, key=lambda item: -item.rentals)


def category_performance(
    rentals: Iterable[Rental],
    cars_by_id: Mapping[str, Car],
    categories: Sequence[Category],
) -> list[CategoryPerformance]:
    """
    Rentas e ingreso por categoría del vehículo rentado, ordenado por ingreso.

    Empates conservan el orden del store.
    """
    counts = {category.id: 0 for category in categories}
    revenue = {category.id: ZERO for category in categories}
    for rental in rentals:
        car = cars_by_id.get(rental.car_id) if rental.car_id else None
        if car is None or car.category_id not in counts:
            continue
        counts[car.category_id] += 1
        revenue[car.category_id] += revenue_of(rental, car)

    result = [
        CategoryPerformance(
            category_id=category.id,
            name=_name_of(category),
            rentals=counts[category.id],
            revenue=revenue[category.id],
        )
        for category in categories
    ]
    return sorted(result, key=lambda item: -item.revenue)
