"""
Application-wide constants for the Óptica console.

Defines domain enumerations, display catalogs, and business thresholds
used across routers, services, and the table/status/progress helpers.
"""

from typing import Final

# ---------------------------------------------------------------------------
# User roles
# ---------------------------------------------------------------------------

ROLES: Final[list[str]] = [
    "admin",
    "reception",
    "warehouse",
]

ROLE_LABELS: Final[dict[str, str]] = {
    "admin": "Administrador",
    "reception": "Recepción",
    "warehouse": "Almacén",
}

ROLE_COLORS: Final[dict[str, str]] = {
    "admin": "red",
    "reception": "blue",
    "warehouse": "green",
}

# ---------------------------------------------------------------------------
# Contract lifecycle (catalog order == progression order)
# ---------------------------------------------------------------------------

CONTRACT_STATUSES: Final[list[str]] = [
    "Encargado",
    "Recepcionado como encargo",
    "Entregado a Producción",
    "Revisión por Calidad",
    "Entregado a Producción Retrabajo",
    "Recepcionado como Producto",
    "Recepcionado Punto de Entrega",
    "Entregado al Cliente",
    "En Garantía",
    "Finalizado",
]

CONTRACT_STATUS_COLORS: Final[dict[str, str]] = {
    "Encargado": "blue",
    "Recepcionado como encargo": "indigo",
    "Entregado a Producción": "purple",
    "Revisión por Calidad": "orange",
    "Entregado a Producción Retrabajo": "red",
    "Recepcionado como Producto": "teal",
    "Recepcionado Punto de Entrega": "cyan",
    "Entregado al Cliente": "green",
    "En Garantía": "yellow",
    "Finalizado": "gray",
}

DEFAULT_STATUS_COLOR: Final[str] = "gray"

# Contracts the workshop can open a task for
PRODUCTION_STATUSES: Final[list[str]] = [
    "Entregado a Producción",
    "Revisión por Calidad",
    "Entregado a Producción Retrabajo",
]

# Contracts no longer counted as pending on the dashboard
CLOSED_STATUSES: Final[frozenset[str]] = frozenset({"Entregado al Cliente", "Finalizado"})

WARRANTY_STATUS: Final[str] = "En Garantía"

# ---------------------------------------------------------------------------
# Contract product options
# ---------------------------------------------------------------------------

SHAPES: Final[list[str]] = ["redondo", "cuadrado", "aviador", "cat-eye", "deportivo"]
MODES: Final[list[str]] = ["monofocal", "bifocal", "progresivo"]
CRYSTAL_MATERIALS: Final[list[str]] = ["organico", "mineral", "policarbonato", "trivex"]
LENS_COLORS: Final[list[str]] = [
    "transparente",
    "fotocromático",
    "polarizado",
    "espejo",
    "degradado",
]
PAYMENT_TYPES: Final[list[str]] = ["efectivo", "transferencia", "mixto"]

# ---------------------------------------------------------------------------
# Crystal coatings
# ---------------------------------------------------------------------------

COATING_LABELS: Final[dict[str, str]] = {
    "sin_tratamiento": "Sin Tratamiento",
    "antireflejo": "Antireflejo",
    "endurecido": "Endurecido",
    "hidrofobico": "Hidrofóbico",
    "oleofobico": "Oleofóbico",
    "blue_light": "Filtro Luz Azul",
}

# ---------------------------------------------------------------------------
# Stock thresholds (inclusive upper bound of the "low" band)
# ---------------------------------------------------------------------------

FRAME_LOW_STOCK: Final[int] = 5
CRYSTAL_LOW_STOCK: Final[int] = 10

# ---------------------------------------------------------------------------
# Task progress bands (lower bound inclusive, checked top-down)
# ---------------------------------------------------------------------------

PROGRESS_BANDS: Final[list[tuple[float, str]]] = [
    (100.0, "green"),
    (75.0, "blue"),
    (50.0, "yellow"),
    (25.0, "orange"),
]
PROGRESS_BAND_FLOOR: Final[str] = "red"

# ---------------------------------------------------------------------------
# Table defaults
# ---------------------------------------------------------------------------

EMPTY_MESSAGE: Final[str] = "No hay datos disponibles"
SEARCH_PLACEHOLDER: Final[str] = "Buscar..."
