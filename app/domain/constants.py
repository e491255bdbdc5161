"""Constantes del dominio de analítica de rentas."""

# Colecciones del document store
COLLECTION_CARS = "cars"
COLLECTION_RENTALS = "rentals"
COLLECTION_STATIONS = "stations"
COLLECTION_CATEGORIES = "categories"
COLLECTION_USERS = "users"

# Filtros de contadores del dashboard
RENTAL_STATUS_ACTIVE = "Active"
USER_ROLE_CUSTOMER = "customer"

# Rangos del selector del dashboard
RANGE_7_DAYS = "7days"
RANGE_30_DAYS = "30days"
RANGE_MONTH = "month"
RANGE_3_MONTHS = "3months"
RANGE_YEAR = "year"
DEFAULT_RANGE = RANGE_7_DAYS
RANGE_TOKENS = (RANGE_7_DAYS, RANGE_30_DAYS, RANGE_MONTH, RANGE_3_MONTHS, RANGE_YEAR)

# Nombre usado cuando una referencia no se resuelve
UNKNOWN_NAME = "Unknown"

# Heurística de utilización: cada renta suma 20 puntos, tope 100
UTILIZATION_POINTS_PER_RENTAL = 20
UTILIZATION_CAP = 100

DEFAULT_TOP_CARS = 5
REPORT_TOP_CARS = 10
DEFAULT_RECENT_RENTALS = 5

# Abreviaturas fijas (independientes del locale) para etiquetas de tendencia
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
