"""Value Object DateRange - ventana de tiempo cerrada [start, end]."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from app.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class DateRange:
    """
    Value Object inmutable que representa una ventana de tiempo inclusiva.

    Usado por el selector de rangos del dashboard, los buckets de tendencia y
    el filtro de ingresos por periodo.

    Attributes:
        start: Inicio de la ventana (incluido).
        end: Fin de la ventana (incluido).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidDateRangeError(
                f"start debe ser anterior o igual a end: {self.start} > {self.end}"
            )

    @property
    def duration(self) -> timedelta:
        """Retorna la duración de la ventana."""
        return self.end - self.start

    def contains(self, dt: datetime) -> bool:
        """Verifica si una fecha está dentro de la ventana (extremos incluidos)."""
        return self.start <= dt <= self.end

    def previous(self) -> "DateRange":
        """
        Retorna la ventana inmediatamente anterior con la misma duración.

        Se usa para comparar el ingreso del periodo actual contra el previo.
        """
        return DateRange(start=self.start - self.duration, end=self.end - self.duration)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
