"""Entidades del dominio de analítica de rentas."""

from app.domain.entities.car import Car, CarStatus
from app.domain.entities.category import Category
from app.domain.entities.rental import Rental, RentalStatus
from app.domain.entities.station import Station

__all__ = [
    # Car
    "Car",
    "CarStatus",
    # Rental
    "Rental",
    "RentalStatus",
    # Referencias
    "Station",
    "Category",
]
