"""
Capa de Aplicación - Analítica de rentas.

Esta capa contiene el agregador, los casos de uso, DTOs e interfaces (puertos).
Orquesta las lecturas del store y delega los cálculos al dominio.

Estructura:
- services/: Agregador RentalAnalytics
- use_cases/: Casos de uso del dashboard y reportes
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
- parallel.py: Fan-out fail-fast
- snapshot.py: Mapeo documento -> entidad
"""

from app.application.dtos import AnalyticsReportDTO, DashboardSummaryDTO
from app.application.interfaces import Clock, DocumentStore, FakeClock, SystemClock
from app.application.parallel import fetch_collections, gather_fail_fast
from app.application.services import RentalAnalytics

__all__ = [
    # DTOs
    "DashboardSummaryDTO",
    "AnalyticsReportDTO",
    # Services
    "RentalAnalytics",
    "gather_fail_fast",
    "fetch_collections",
    # Interfaces
    "DocumentStore",
    "Clock",
    "SystemClock",
    "FakeClock",
]
