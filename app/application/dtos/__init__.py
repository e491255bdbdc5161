"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from app.application.dtos.analytics_dto import AnalyticsReportDTO, DashboardSummaryDTO

__all__ = [
    "DashboardSummaryDTO",
    "AnalyticsReportDTO",
]
