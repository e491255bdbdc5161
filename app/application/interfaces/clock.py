"""Interface Clock - Puerto para abstracción de tiempo."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Clock(ABC):
    """
    Puerto para abstracción del tiempo del sistema.

    Los rangos del dashboard y los buckets de tendencia dependen de "ahora";
    inyectar el reloj permite pruebas deterministas.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Retorna la fecha/hora actual.

        Returns:
            datetime con la hora actual (timezone-aware UTC).
        """
        raise NotImplementedError

    def today(self) -> datetime:
        """Retorna la fecha actual a las 00:00:00."""
        return self.now().replace(hour=0, minute=0, second=0, microsecond=0)


class SystemClock(Clock):
    """Implementación real que usa el reloj del sistema."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """
    Implementación fake para testing.

    Permite fijar el tiempo para pruebas deterministas. Un datetime naive se
    interpreta como UTC.
    """

    def __init__(self, fixed_time: datetime | None = None):
        """
        Inicializa el clock con un tiempo fijo opcional.

        Args:
            fixed_time: Tiempo fijo a retornar. Si es None, usa el tiempo real inicial.
        """
        self._fixed_time = _as_utc(fixed_time or datetime.now(timezone.utc))

    def now(self) -> datetime:
        """Retorna el tiempo fijo configurado."""
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        """Cambia el tiempo fijo."""
        self._fixed_time = _as_utc(new_time)

    def advance(self, days: int = 0, hours: int = 0) -> None:
        """Avanza el tiempo fijo."""
        self._fixed_time = self._fixed_time + timedelta(days=days, hours=hours)
