"""Interfaces (Puertos) de la capa de aplicación."""

from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.document_store import DocumentStore

__all__ = [
    # Store
    "DocumentStore",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
