"""Excepciones de dominio para la analítica de rentas."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores del document store ===


class StoreUnavailableError(DomainError):
    """Falló la lectura de una colección; la agregación completa se aborta."""

    def __init__(self, collection: str, reason: str | None = None):
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"No se pudo leer la colección '{collection}'{detail}",
            code="STORE_UNAVAILABLE",
        )
        self.collection = collection
        self.reason = reason


# === Errores de validación ===


class InvalidTrendPeriodError(DomainError):
    """Periodo de tendencia no soportado (solo weekly|monthly)."""

    def __init__(self, period: str):
        super().__init__(
            message=f"Periodo de tendencia inválido: '{period}', esperado 'weekly' o 'monthly'",
            code="INVALID_TREND_PERIOD",
        )
        self.period = period


class InvalidDateRangeError(DomainError):
    """Rango de fechas inválido."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_DATE_RANGE")
