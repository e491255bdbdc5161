"""
Mapeo de documentos crudos del store a entidades del dominio.

Este es el punto de ingesta: las fechas pasan por ``normalize_to_date`` y los
montos por ``parse_amount``. Nada aquí lanza excepciones por datos mal
formados; los valores inválidos se degradan a None (o cero para totales).
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, TypeVar

from app.domain.entities.car import Car, CarStatus
from app.domain.entities.category import Category
from app.domain.entities.rental import Rental
from app.domain.entities.station import Station
from app.domain.services.revenue import ZERO
from app.domain.timestamps import normalize_to_date

T = TypeVar("T", Car, Rental, Station, Category)


def parse_amount(value: Any) -> Decimal | None:
    """Convierte un monto (número o cadena) a Decimal; None si no es numérico."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def _ref(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def car_from_document(doc: Mapping[str, Any]) -> Car:
    return Car(
        id=str(doc["id"]),
        name=_text(doc.get("name")),
        model=_text(doc.get("model")),
        license_plate=_text(doc.get("licensePlate")),
        daily_rate=parse_amount(doc.get("dailyRate")),
        category_id=_ref(doc.get("categoryId")),
        station_id=_ref(doc.get("stationId")),
        status=_text(doc.get("status")) or CarStatus.AVAILABLE.value,
    )


def rental_from_document(doc: Mapping[str, Any]) -> Rental:
    return Rental(
        id=str(doc["id"]),
        car_id=_ref(doc.get("carId")),
        customer_id=_ref(doc.get("customerId")),
        pickup_station_id=_ref(doc.get("pickupStationId")),
        return_station_id=_ref(doc.get("returnStationId")),
        start_date=normalize_to_date(doc.get("startDate")),
        end_date=normalize_to_date(doc.get("endDate")),
        total_amount=parse_amount(doc.get("totalAmount")) or ZERO,
        status=_text(doc.get("status")),
        created_at=normalize_to_date(doc.get("createdAt")),
    )


def station_from_document(doc: Mapping[str, Any]) -> Station:
    return Station(id=str(doc["id"]), name=_text(doc.get("name")), city=_text(doc.get("city")))


def category_from_document(doc: Mapping[str, Any]) -> Category:
    return Category(id=str(doc["id"]), name=_text(doc.get("name")))


def index_by_id(entities: Iterable[T]) -> dict[str, T]:
    """Mapa id -> entidad; ante ids duplicados gana el último."""
    return {entity.id: entity for entity in entities}
