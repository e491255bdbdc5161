"""
Capa de Dominio - Analítica de rentas.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, servicios de cálculo y excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Car, Rental, Station, Category)
- value_objects/: Objetos de valor inmutables (DateRange)
- services/: Cálculos puros (ingreso, rangos, tendencia, rankings)
- timestamps.py: Normalización de fechas del store
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from app.domain.entities import Car, CarStatus, Category, Rental, RentalStatus, Station
from app.domain.errors import (
    DomainError,
    InvalidDateRangeError,
    InvalidTrendPeriodError,
    StoreUnavailableError,
)
from app.domain.timestamps import normalize_to_date
from app.domain.value_objects import DateRange

__all__ = [
    # Entities
    "Car",
    "CarStatus",
    "Rental",
    "RentalStatus",
    "Station",
    "Category",
    # Value Objects
    "DateRange",
    # Timestamps
    "normalize_to_date",
    # Errors
    "DomainError",
    "StoreUnavailableError",
    "InvalidTrendPeriodError",
    "InvalidDateRangeError",
]
