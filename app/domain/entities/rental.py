"""Entidad Rental - renta de un vehículo."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class RentalStatus(str, Enum):
    """Estados conocidos de una renta. El store puede contener otros."""

    PENDING = "Pending"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


@dataclass
class Rental:
    """
    Renta de un vehículo entre dos fechas (rango inclusivo).

    Las fechas ya vienen normalizadas a UTC; None significa que el documento
    no traía la fecha o que no se pudo interpretar.
    """

    id: str
    car_id: str | None = None
    customer_id: str | None = None
    pickup_station_id: str | None = None
    return_station_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    total_amount: Decimal = Decimal("0")
    status: str | None = None
    created_at: datetime | None = None

    @property
    def has_dates(self) -> bool:
        """Verifica si la renta tiene ambas fechas válidas."""
        return self.start_date is not None and self.end_date is not None
