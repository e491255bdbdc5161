"""Servicios de aplicación."""

from app.application.services.rental_analytics import RentalAnalytics

__all__ = ["RentalAnalytics"]
