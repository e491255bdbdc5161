"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj fijo (FakeClock) para cálculos deterministas
- Document store in-memory con un snapshot de ejemplo
- Agregador RentalAnalytics listo para usar
- Reset del circuit breaker entre tests

Snapshot de ejemplo ("ahora" = 2024-03-15 12:00 UTC):

    cars:       car-1 (tarifa 50, Economy, Downtown)
                car-2 (tarifa 80, SUV, Airport)
                car-3 (sin tarifa, Economy, Airport)
    rentals:    rental-1 car-1  2024-03-10 -> 03-12  = 150    Active
                rental-2 car-2  2024-02-05 -> 02-06  = 160    Completed
                rental-3 car-3  2024-01-20 -> 01-22  = 75.50  Completed (total almacenado)
                rental-4 car-1  2024-03-14 -> 03-14  = 50     Active
"""

from datetime import datetime, timezone

import pytest

from app.application.interfaces.clock import FakeClock
from app.application.services.rental_analytics import RentalAnalytics
from app.domain.constants import (
    COLLECTION_CARS,
    COLLECTION_CATEGORIES,
    COLLECTION_RENTALS,
    COLLECTION_STATIONS,
    COLLECTION_USERS,
)
from app.infrastructure.in_memory.document_store import InMemoryDocumentStore

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# DATOS DE PRUEBA
# ============================================================================

def sample_collections() -> dict[str, list[dict]]:
    """
    Documentos crudos tal como llegan del store (camelCase, fechas mixtas).

    Se construye en cada llamada para que ningún test comparta estado mutable.
    """
    return {
        COLLECTION_STATIONS: [
            {"id": "station-1", "name": "Downtown", "city": "Springfield"},
            {"id": "station-2", "name": "Airport", "city": "Springfield"},
            {"id": "station-3", "name": "Harbor", "city": "Shelbyville"},
        ],
        COLLECTION_CATEGORIES: [
            {"id": "cat-1", "name": "Economy"},
            {"id": "cat-2", "name": "SUV"},
        ],
        COLLECTION_CARS: [
            {
                "id": "car-1",
                "name": "Corolla",
                "model": "Toyota",
                "licensePlate": "ABC-123",
                "dailyRate": 50,
                "categoryId": "cat-1",
                "stationId": "station-1",
                "status": "Rented",
            },
            {
                "id": "car-2",
                "name": "RAV4",
                "model": "Toyota",
                "licensePlate": "XYZ-789",
                "dailyRate": "80.00",
                "categoryId": "cat-2",
                "stationId": "station-2",
                "status": "Available",
            },
            {
                "id": "car-3",
                "name": "Versa",
                "model": "Nissan",
                "licensePlate": "JKL-456",
                "dailyRate": None,
                "categoryId": "cat-1",
                "stationId": "station-2",
                "status": "Maintenance",
            },
        ],
        COLLECTION_RENTALS: [
            {
                "id": "rental-1",
                "carId": "car-1",
                "customerId": "user-1",
                "pickupStationId": "station-1",
                "returnStationId": "station-1",
                "startDate": "2024-03-10T00:00:00Z",
                "endDate": "2024-03-12T00:00:00Z",
                "totalAmount": 999,
                "status": "Active",
                "createdAt": "2024-03-09T10:00:00Z",
            },
            {
                "id": "rental-2",
                "carId": "car-2",
                "customerId": "user-2",
                "pickupStationId": "station-2",
                "returnStationId": "station-1",
                "startDate": datetime(2024, 2, 5, tzinfo=timezone.utc),
                "endDate": datetime(2024, 2, 6, tzinfo=timezone.utc),
                "totalAmount": 100,
                "status": "Completed",
                "createdAt": datetime(2024, 2, 1, tzinfo=timezone.utc),
            },
            {
                "id": "rental-3",
                "carId": "car-3",
                "customerId": "user-1",
                "pickupStationId": "station-2",
                "returnStationId": "station-2",
                # epoch millis: 2024-01-20 / 2024-01-22 UTC
                "startDate": 1705708800000,
                "endDate": 1705881600000,
                "totalAmount": "75.50",
                "status": "Completed",
                "createdAt": "2024-01-15T08:30:00Z",
            },
            {
                "id": "rental-4",
                "carId": "car-1",
                "customerId": "user-2",
                "pickupStationId": "station-1",
                "returnStationId": "station-2",
                "startDate": "2024-03-14",
                "endDate": "2024-03-14",
                "totalAmount": 0,
                "status": "Active",
                "createdAt": "2024-03-13T18:00:00Z",
            },
        ],
        COLLECTION_USERS: [
            {"id": "user-1", "name": "Ana", "role": "customer"},
            {"id": "user-2", "name": "Luis", "role": "customer"},
            {"id": "user-3", "name": "Admin", "role": "admin"},
        ],
    }


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def sample_docs() -> dict[str, list[dict]]:
    return sample_collections()


@pytest.fixture
def seeded_store(sample_docs) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(sample_docs)


@pytest.fixture
def empty_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def analytics(seeded_store, fake_clock) -> RentalAnalytics:
    return RentalAnalytics(store=seeded_store, clock=fake_clock)


# ============================================================================
# MARKERS DE PYTEST
# ============================================================================

def pytest_configure(config):
    """
    Configurar markers personalizados de pytest.
    """
    config.addinivalue_line(
        "markers",
        "integration: Tests que levantan la app o una base de datos SQLite"
    )
    config.addinivalue_line(
        "markers",
        "circuit_breaker: Tests del circuit breaker del document store"
    )


# ============================================================================
# HOOKS DE PYTEST
# ============================================================================

@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset circuit breakers antes de cada test.
    Evita que tests fallen por breakers abiertos de tests anteriores.
    """
    from app.infrastructure.circuit_breaker import store_breaker

    store_breaker.close()
    yield
    store_breaker.close()
