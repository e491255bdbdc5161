"""
Decoding and encoding of Firestore REST typed values.

The REST API wraps every field in a single-key object naming its type
(``{"stringValue": "x"}``, ``{"integerValue": "3"}``...). Timestamps are
kept as ``StoreTimestamp`` objects so they reach the domain the same way
native store timestamps do, through ``to_datetime()``.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

_RFC3339 = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})$"
)


@dataclass(frozen=True)
class StoreTimestamp:
    """A ``timestampValue`` as returned by Firestore (RFC 3339, up to nanoseconds)."""

    value: str

    def to_datetime(self) -> datetime:
        """
        Convert to an aware UTC datetime, truncating below microseconds.

        Raises:
            ValueError: if the value is not RFC 3339.
        """
        match = _RFC3339.match(self.value.strip())
        if not match:
            raise ValueError(f"Invalid timestamp value: {self.value!r}")
        fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
        offset = match.group("offset")
        offset = "+00:00" if offset == "Z" else offset
        parsed = datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")
        return parsed.astimezone(timezone.utc)


def decode_value(value: dict[str, Any]) -> Any:
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return StoreTimestamp(value["timestampValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "bytesValue" in value:
        return value["bytesValue"]
    if "referenceValue" in value:
        # projects/p/databases/d/documents/cars/abc -> abc
        return value["referenceValue"].rsplit("/", 1)[-1]
    if "geoPointValue" in value:
        point = value["geoPointValue"]
        return {"latitude": point.get("latitude"), "longitude": point.get("longitude")}
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    return None


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {name: decode_value(raw) for name, raw in fields.items()}


def decode_document(document: dict[str, Any]) -> dict[str, Any]:
    """Flatten a REST document into ``{"id": ..., **fields}``."""
    doc_id = document["name"].rsplit("/", 1)[-1]
    return {**decode_fields(document.get("fields", {})), "id": doc_id}


def encode_value(value: Any) -> dict[str, Any]:
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")}
    return {"stringValue": str(value)}
