"""
Normalización de fechas provenientes del document store.

Los documentos pueden traer fechas como datetime nativos, cadenas ISO-8601,
epoch en milisegundos o timestamps propios del store (objetos con un método
``to_datetime()`` / ``to_date()``). Todo pasa por ``normalize_to_date`` antes
de hacer aritmética, y lo que no se puede interpretar se convierte en None.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

_CONVERSION_METHODS = ("to_datetime", "to_date")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_iso(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        logger.debug("Unparseable date string", extra={"value": value})
        return None


def _from_epoch_millis(value: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.debug("Epoch value out of range", extra={"value": value})
        return None


def normalize_to_date(value: Any) -> datetime | None:
    """
    Convierte cualquier representación de fecha soportada a datetime UTC.

    Args:
        value: datetime, date, str ISO-8601, int/float (epoch ms) o un
            timestamp del store con ``to_datetime()`` / ``to_date()``.

    Returns:
        datetime timezone-aware en UTC, o None si el valor no es interpretable.
        Nunca lanza excepciones.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return _from_epoch_millis(value)
    if isinstance(value, str):
        return _parse_iso(value)

    for method_name in _CONVERSION_METHODS:
        method = getattr(value, method_name, None)
        if not callable(method):
            continue
        try:
            converted = method()
        except Exception as exc:
            logger.debug(
                "Store timestamp conversion failed",
                extra={"type": type(value).__name__, "error": str(exc)},
            )
            return None
        # Solo se acepta un datetime/date para no recursar sobre objetos arbitrarios
        if isinstance(converted, (datetime, date)):
            return normalize_to_date(converted)
        return None

    return None
