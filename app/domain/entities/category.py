"""Entidad Category - categoría de vehículo."""

from dataclasses import dataclass


@dataclass
class Category:
    id: str
    name: str | None = None
