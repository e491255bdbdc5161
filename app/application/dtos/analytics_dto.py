"""DTOs de la analítica de rentas."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.domain.entities.rental import Rental
from app.domain.services.ranking import CarPerformance, CategoryPerformance, StationPerformance
from app.domain.services.trend import TrendBucket, TrendPeriod


@dataclass
class DashboardSummaryDTO:
    """Tarjetas, gráfica y actividad reciente del dashboard para un rango."""

    range_token: str
    range_start: datetime
    range_end: datetime

    # Contadores
    total_cars: int = 0
    active_rentals: int = 0
    total_customers: int = 0

    # Ingreso del rango vs. el rango previo de igual duración
    revenue: Decimal = Decimal("0")
    previous_revenue: Decimal = Decimal("0")
    revenue_change_percent: Decimal = Decimal("0.0")

    # Gráfica y actividad
    trend_period: TrendPeriod = TrendPeriod.WEEKLY
    trend: list[TrendBucket] = field(default_factory=list)
    recent_rentals: list[Rental] = field(default_factory=list)

    @property
    def is_revenue_increasing(self) -> bool:
        return self.revenue_change_percent >= 0


@dataclass
class AnalyticsReportDTO:
    """Bundle de la vista de reportes."""

    range_token: str
    trend_period: TrendPeriod
    station_performance: list[StationPerformance] = field(default_factory=list)
    category_performance: list[CategoryPerformance] = field(default_factory=list)
    top_cars: list[CarPerformance] = field(default_factory=list)
    trend: list[TrendBucket] = field(default_factory=list)
