"""Entidad Station - sucursal de entrega y devolución."""

from dataclasses import dataclass


@dataclass
class Station:
    id: str
    name: str | None = None
    city: str | None = None
