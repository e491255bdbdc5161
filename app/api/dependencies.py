from functools import lru_cache

from fastapi import Depends

from app.api.deps import get_session_maker
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.document_store import DocumentStore
from app.application.services.rental_analytics import RentalAnalytics
from app.application.use_cases.get_dashboard_summary import GetDashboardSummaryUseCase
from app.application.use_cases.get_report import GetReportUseCase
from app.config import Settings, get_settings
from app.infrastructure.db.repositories.document_store_sql import DocumentStoreSQL
from app.infrastructure.firestore.document_store import FirestoreRestDocumentStore
from app.infrastructure.in_memory.document_store import InMemoryDocumentStore


@lru_cache(maxsize=1)
def _in_memory_bundle():
    return {
        "store": InMemoryDocumentStore(),
        "clock": SystemClock(),
    }


@lru_cache(maxsize=4)
def _firestore_store(
    project_id: str,
    database: str,
    api_key: str | None,
    base_url: str,
    timeout_seconds: float,
    page_size: int,
) -> FirestoreRestDocumentStore:
    return FirestoreRestDocumentStore(
        project_id=project_id,
        database=database,
        api_key=api_key,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        page_size=page_size,
    )


def get_document_store(settings: Settings = Depends(get_settings)) -> DocumentStore:
    if settings.store_backend == "sql":
        return DocumentStoreSQL(get_session_maker())

    if settings.store_backend == "firestore":
        if not settings.firestore_project_id:
            raise RuntimeError("FIRESTORE_PROJECT_ID is required for firestore mode")
        return _firestore_store(
            settings.firestore_project_id,
            settings.firestore_database,
            settings.firestore_api_key,
            settings.firestore_base_url,
            settings.firestore_timeout_seconds,
            settings.firestore_page_size,
        )

    return _in_memory_bundle()["store"]


def get_clock() -> Clock:
    return _in_memory_bundle()["clock"]


def get_analytics(
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
) -> RentalAnalytics:
    return RentalAnalytics(store=store, clock=clock)


def get_use_cases(
    analytics: RentalAnalytics = Depends(get_analytics),
    clock: Clock = Depends(get_clock),
):
    return {
        "dashboard_summary": GetDashboardSummaryUseCase(analytics=analytics, clock=clock),
        "report": GetReportUseCase(analytics=analytics),
    }
