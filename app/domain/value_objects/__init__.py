"""Value Objects del dominio de analítica."""

from app.domain.value_objects.date_range import DateRange

__all__ = [
    "DateRange",
]
