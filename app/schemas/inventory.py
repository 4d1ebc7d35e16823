"""
Pydantic v2 schemas for the Frames and Crystals inventory pages.

Both item types share the stock label logic (``Sin Stock`` / ``Stock
Bajo`` / ``En Stock``); only the low-stock threshold differs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.utils.constants import COATING_LABELS, CRYSTAL_LOW_STOCK, FRAME_LOW_STOCK

StockFilter = Literal["all", "available", "low", "out"]


def stock_status(stock: int, low_threshold: int) -> tuple[str, str]:
    """Return ``(label, color)`` for a stock level."""
    if stock == 0:
        return "Sin Stock", "red"
    if stock <= low_threshold:
        return "Stock Bajo", "yellow"
    return "En Stock", "green"


class StockAdjust(BaseModel):
    """Payload for ``POST /{id}/stock``: relative change, result floored at 0."""

    delta: int = Field(..., description="Unidades a sumar (positivo) o restar (negativo)")


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------


class FrameCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Nombre")
    brand: str = Field(..., min_length=1, max_length=100, description="Marca")
    model: str = Field(..., min_length=1, max_length=100, description="Modelo")
    color: str | None = Field(default=None, max_length=50)
    material: str | None = Field(default=None, max_length=50)
    size: str | None = Field(default=None, max_length=30)
    stock: int = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    is_active: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Aviador clásico",
                "brand": "Ray-Ban",
                "model": "RB3025",
                "color": "Dorado",
                "material": "Metal",
                "size": "58-14-135",
                "stock": 12,
                "price": 3500,
            }
        }
    )


class FrameUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    brand: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = Field(default=None, max_length=50)
    material: str | None = Field(default=None, max_length=50)
    size: str | None = Field(default=None, max_length=30)
    stock: int | None = Field(default=None, ge=0)
    price: float | None = Field(default=None, ge=0)
    is_active: bool | None = None


class FrameResponse(BaseModel):
    id: int
    name: str
    brand: str
    model: str
    color: str | None = None
    material: str | None = None
    size: str | None = None
    stock: int
    price: float
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stock_label(self) -> str:
        return stock_status(self.stock, FRAME_LOW_STOCK)[0]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stock_color(self) -> str:
        return stock_status(self.stock, FRAME_LOW_STOCK)[1]


# ---------------------------------------------------------------------------
# Crystals
# ---------------------------------------------------------------------------


class CrystalCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=50, description="Tipo de cristal")
    material: Literal["organico", "mineral", "policarbonato", "trivex"]
    index: float = Field(..., gt=0, description="Índice de refracción")
    coating: str | None = Field(default=None, max_length=50, description="Tratamiento")
    diameter: int | None = Field(default=None, gt=0, description="Diámetro (mm)")
    stock: int = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    is_active: bool = True


class CrystalUpdate(BaseModel):
    type: str | None = Field(default=None, min_length=1, max_length=50)
    material: Literal["organico", "mineral", "policarbonato", "trivex"] | None = None
    index: float | None = Field(default=None, gt=0)
    coating: str | None = Field(default=None, max_length=50)
    diameter: int | None = Field(default=None, gt=0)
    stock: int | None = Field(default=None, ge=0)
    price: float | None = Field(default=None, ge=0)
    is_active: bool | None = None


class CrystalResponse(BaseModel):
    id: int
    type: str
    material: str
    index: float
    coating: str | None = None
    diameter: int | None = None
    stock: int
    price: float
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def coating_label(self) -> str | None:
        if self.coating is None:
            return None
        return COATING_LABELS.get(self.coating, self.coating)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stock_label(self) -> str:
        return stock_status(self.stock, CRYSTAL_LOW_STOCK)[0]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stock_color(self) -> str:
        return stock_status(self.stock, CRYSTAL_LOW_STOCK)[1]
