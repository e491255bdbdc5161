import asyncio
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from app.api.deps import get_engine, get_session_maker  # noqa: E402
from app.domain.constants import (  # noqa: E402
    COLLECTION_CARS,
    COLLECTION_CATEGORIES,
    COLLECTION_RENTALS,
    COLLECTION_STATIONS,
    COLLECTION_USERS,
)
from app.infrastructure.db.repositories.document_store_sql import DocumentStoreSQL  # noqa: E402
from app.infrastructure.db.tables import metadata  # noqa: E402

STATIONS = [
    {"id": "station-cun", "name": "Cancun Airport", "city": "Cancun"},
    {"id": "station-mex", "name": "Mexico City Downtown", "city": "Mexico City"},
    {"id": "station-gdl", "name": "Guadalajara Centro", "city": "Guadalajara"},
]
CATEGORIES = [
    {"id": "cat-economy", "name": "Economy"},
    {"id": "cat-suv", "name": "SUV"},
    {"id": "cat-luxury", "name": "Luxury"},
]
CARS = [
    {"id": "car-1", "name": "Aveo", "model": "Chevrolet", "licensePlate": "CUN-001", "dailyRate": 35,
     "categoryId": "cat-economy", "stationId": "station-cun", "status": "Available"},
    {"id": "car-2", "name": "Versa", "model": "Nissan", "licensePlate": "MEX-002", "dailyRate": 40,
     "categoryId": "cat-economy", "stationId": "station-mex", "status": "Rented"},
    {"id": "car-3", "name": "CR-V", "model": "Honda", "licensePlate": "GDL-003", "dailyRate": 85,
     "categoryId": "cat-suv", "stationId": "station-gdl", "status": "Available"},
    {"id": "car-4", "name": "Serie 3", "model": "BMW", "licensePlate": "CUN-004", "dailyRate": 160,
     "categoryId": "cat-luxury", "stationId": "station-cun", "status": "Maintenance"},
]
USERS = [
    {"id": f"user-{n}", "name": f"Customer {n}", "role": "customer"} for n in range(1, 9)
] + [{"id": "user-admin", "name": "Admin", "role": "admin"}]


def build_rentals(count: int = 60) -> list[dict]:
    now = datetime.now(timezone.utc)
    rng = random.Random(42)
    rentals = []
    for n in range(count):
        car = rng.choice(CARS)
        start = now - timedelta(days=rng.randint(0, 365), hours=rng.randint(0, 23))
        end = start + timedelta(days=rng.randint(0, 7))
        rentals.append(
            {
                "id": f"rental-{n + 1}",
                "carId": car["id"],
                "customerId": rng.choice(USERS[:-1])["id"],
                "pickupStationId": car["stationId"],
                "returnStationId": rng.choice(STATIONS)["id"],
                "startDate": start,
                "endDate": end,
                "totalAmount": car["dailyRate"] * ((end - start).days + 1),
                "status": "Active" if end > now else "Completed",
                "createdAt": start - timedelta(days=rng.randint(1, 14)),
            }
        )
    return rentals


async def seed():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created documents table.")

    store = DocumentStoreSQL(get_session_maker())
    for collection, docs in (
        (COLLECTION_STATIONS, STATIONS),
        (COLLECTION_CATEGORIES, CATEGORIES),
        (COLLECTION_CARS, CARS),
        (COLLECTION_USERS, USERS),
        (COLLECTION_RENTALS, build_rentals()),
    ):
        ids = await store.insert_many(collection, docs)
        print(f"Seeded {len(ids)} {collection}.")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
