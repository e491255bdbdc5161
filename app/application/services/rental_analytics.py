"""
Agregador de analítica de rentas.

Cada operación lee del store las colecciones completas que necesita (en
paralelo, fail-fast), las une en memoria y delega el cálculo a los servicios
puros del dominio. No hay caché: cada llamada trabaja sobre un snapshot nuevo.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from app.application.interfaces.clock import Clock
from app.application.interfaces.document_store import DocumentStore
from app.application.parallel import fetch_collections
from app.application.snapshot import (
    car_from_document,
    category_from_document,
    index_by_id,
    rental_from_document,
    station_from_document,
)
from app.domain.constants import (
    COLLECTION_CARS,
    COLLECTION_CATEGORIES,
    COLLECTION_RENTALS,
    COLLECTION_STATIONS,
    COLLECTION_USERS,
    DEFAULT_RECENT_RENTALS,
    DEFAULT_TOP_CARS,
    RENTAL_STATUS_ACTIVE,
    USER_ROLE_CUSTOMER,
)
from app.domain.entities.car import Car
from app.domain.entities.rental import Rental
from app.domain.errors import StoreUnavailableError
from app.domain.services import ranking, revenue, trend
from app.domain.services.ranking import CarPerformance, CategoryPerformance, StationPerformance
from app.domain.services.trend import TrendBucket, TrendPeriod
from app.domain.timestamps import normalize_to_date
from app.domain.value_objects.date_range import DateRange

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class RentalAnalytics:
    def __init__(self, store: DocumentStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    async def _fetch(self, *collections: str) -> list[list[dict[str, Any]]]:
        try:
            return await fetch_collections(self._store, *collections)
        except StoreUnavailableError as exc:
            logger.error(
                "Aggregation aborted: collection fetch failed",
                extra={"collections": list(collections), "failed": exc.collection},
            )
            raise

    @staticmethod
    def revenue_of(rental: Rental, car: Car | None) -> Decimal:
        """Ingreso efectivo de una renta (tarifa × días inclusivos, o el total almacenado)."""
        return revenue.revenue_of(rental, car)

    async def revenue(self, start: datetime | None = None, end: datetime | None = None) -> Decimal:
        """
        Ingreso total de las rentas cuya fecha de inicio cae en [start, end].

        Sin rango (ambos None) suma todas las rentas. Un solo extremo acota
        solo ese lado. Los extremos naive se interpretan como UTC.
        """
        start, end = normalize_to_date(start), normalize_to_date(end)
        rental_docs, car_docs = await self._fetch(COLLECTION_RENTALS, COLLECTION_CARS)
        cars_by_id = index_by_id(car_from_document(doc) for doc in car_docs)

        total = revenue.ZERO
        for rental in map(rental_from_document, rental_docs):
            if start is not None or end is not None:
                if rental.start_date is None:
                    continue
                if start is not None and rental.start_date < start:
                    continue
                if end is not None and rental.start_date > end:
                    continue
            total += revenue.revenue_of(rental, cars_by_id.get(rental.car_id))
        return total

    async def revenue_in(self, window: DateRange) -> Decimal:
        return await self.revenue(window.start, window.end)

    async def rentals_trend(self, period: TrendPeriod | str, count: int) -> list[TrendBucket]:
        rental_docs, car_docs = await self._fetch(COLLECTION_RENTALS, COLLECTION_CARS)
        return trend.build_trend(
            rentals=[rental_from_document(doc) for doc in rental_docs],
            cars_by_id=index_by_id(car_from_document(doc) for doc in car_docs),
            period=period,
            count=count,
            now=self._clock.now(),
        )

    async def top_cars(self, limit: int = DEFAULT_TOP_CARS) -> list[CarPerformance]:
        rental_docs, car_docs, category_docs, station_docs = await self._fetch(
            COLLECTION_RENTALS, COLLECTION_CARS, COLLECTION_CATEGORIES, COLLECTION_STATIONS
        )
        return ranking.top_cars(
            rentals=[rental_from_document(doc) for doc in rental_docs],
            cars_by_id=index_by_id(car_from_document(doc) for doc in car_docs),
            categories_by_id=index_by_id(category_from_document(doc) for doc in category_docs),
            stations_by_id=index_by_id(station_from_document(doc) for doc in station_docs),
            limit=limit,
        )

    async def station_performance(self) -> list[StationPerformance]:
        station_docs, car_docs, rental_docs = await self._fetch(
            COLLECTION_STATIONS, COLLECTION_CARS, COLLECTION_RENTALS
        )
        return ranking.station_performance(
            rentals=[rental_from_document(doc) for doc in rental_docs],
            cars_by_id=index_by_id(car_from_document(doc) for doc in car_docs),
            stations=[station_from_document(doc) for doc in station_docs],
        )

    async def category_performance(self) -> list[CategoryPerformance]:
        category_docs, car_docs, rental_docs = await self._fetch(
            COLLECTION_CATEGORIES, COLLECTION_CARS, COLLECTION_RENTALS
        )
        return ranking.category_performance(
            rentals=[rental_from_document(doc) for doc in rental_docs],
            cars_by_id=index_by_id(car_from_document(doc) for doc in car_docs),
            categories=[category_from_document(doc) for doc in category_docs],
        )

    async def recent_rentals(self, limit: int = DEFAULT_RECENT_RENTALS) -> list[Rental]:
        """Rentas más recientes por ``createdAt``; sin fecha de creación van al final."""
        (rental_docs,) = await self._fetch(COLLECTION_RENTALS)
        rentals = [rental_from_document(doc) for doc in rental_docs]
        rentals.sort(
            key=lambda rental: (rental.created_at is not None, rental.created_at or _OLDEST),
            reverse=True,
        )
        return rentals[: max(limit, 0)]

    # === Contadores (se resuelven en el store) ===

    async def total_cars(self) -> int:
        return await self._store.count(COLLECTION_CARS)

    async def active_rentals(self) -> int:
        return await self._store.count(COLLECTION_RENTALS, {"status": RENTAL_STATUS_ACTIVE})

    async def customers(self) -> int:
        return await self._store.count(COLLECTION_USERS, {"role": USER_ROLE_CUSTOMER})
