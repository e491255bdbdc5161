"""Entidad Car - vehículo de la flota."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class CarStatus(str, Enum):
    """Estados posibles de un vehículo."""

    AVAILABLE = "Available"
    RENTED = "Rented"
    MAINTENANCE = "Maintenance"
    UNAVAILABLE = "Unavailable"


@dataclass
class Car:
    """
    Vehículo de la flota.

    La tarifa diaria es opcional: los documentos del store pueden traerla
    vacía o con un valor no numérico, en cuyo caso el ingreso de sus rentas
    cae al monto almacenado.
    """

    id: str
    name: str | None = None
    model: str | None = None
    license_plate: str | None = None
    daily_rate: Decimal | None = None
    category_id: str | None = None
    station_id: str | None = None
    status: str = CarStatus.AVAILABLE.value

    @property
    def has_daily_rate(self) -> bool:
        """Verifica si el vehículo tiene una tarifa diaria positiva."""
        return self.daily_rate is not None and self.daily_rate > 0
