"""
Pydantic v2 schemas for the Contracts page.

``ContractDraft`` is the page-scoped form state: numeric inputs arrive as
raw strings exactly as typed, are checked to be numeric (the same
constraint a ``type="number"`` input enforces), and are only converted
by ``to_payload`` when the draft is persisted.  Empty strings become
``None``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.schemas.client import ClientSummary
from app.utils.contract_status import next_status, status_color

Shape = Literal["redondo", "cuadrado", "aviador", "cat-eye", "deportivo"]
Mode = Literal["monofocal", "bifocal", "progresivo"]
CrystalMaterial = Literal["organico", "mineral", "policarbonato", "trivex"]
LensColor = Literal["transparente", "fotocromático", "polarizado", "espejo", "degradado"]
PaymentType = Literal["efectivo", "transferencia", "mixto"]

# Optional numeric inputs (blank -> None)
_OPTIONAL_NUMBERS: tuple[str, ...] = (
    "sphere_od",
    "sphere_oi",
    "cylinder_od",
    "cylinder_oi",
    "axis_od",
    "axis_oi",
    "prysm_od",
    "prysm_oi",
    "base_od",
    "base_oi",
    "add",
    "paid_cash",
    "paid_transfer",
    "end_payment_cup",
    "end_payment_transfer",
)

# Optional free-text inputs (blank -> None)
_OPTIONAL_TEXT: tuple[str, ...] = (
    "frame",
    "dp",
    "beneficiary_name",
    "beneficiary_phone",
    "beneficiary_ci",
)


def parse_optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


class ContractDraft(BaseModel):
    """Contract form as submitted by ``POST`` / ``PUT /api/contracts``."""

    client: str = Field(..., description="ID del cliente (texto del selector)")
    frame: str = Field(default="", max_length=200, description="Armadura")

    sphere_od: str = ""
    sphere_oi: str = ""
    cylinder_od: str = ""
    cylinder_oi: str = ""
    axis_od: str = ""
    axis_oi: str = ""
    prysm_od: str = ""
    prysm_oi: str = ""
    base_od: str = ""
    base_oi: str = ""
    add: str = ""
    dp: str = Field(default="", max_length=20)

    shape: Shape = "redondo"
    mode: Mode = "monofocal"
    crystal: CrystalMaterial = "organico"
    color: LensColor = "transparente"

    total: str = Field(..., description="Precio total")
    paid_cash: str = ""
    paid_transfer: str = ""
    paid_type: PaymentType = "efectivo"

    status: str = Field(default="Encargado", max_length=50)
    confirmed: bool = False
    supervised: bool = False

    beneficiary_name: str = ""
    beneficiary_phone: str = ""
    beneficiary_ci: str = ""
    presented: Literal["si", "no"] = "no"

    warranty_end_date: date | None = None
    end_payment_cup: str = ""
    end_payment_transfer: str = ""
    end_payment_method: PaymentType | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "client": "1",
                "frame": "Ray-Ban RB2140",
                "sphere_od": "-1.25",
                "sphere_oi": "-1.00",
                "shape": "aviador",
                "mode": "monofocal",
                "crystal": "policarbonato",
                "color": "transparente",
                "total": "4500",
                "paid_cash": "2000",
                "paid_type": "efectivo",
                "status": "Encargado",
            }
        }
    )

    @field_validator("client")
    @classmethod
    def _client_is_id(cls, value: str) -> str:
        if not value.strip().isdigit():
            raise ValueError("Seleccione un cliente")
        return value

    @field_validator("total")
    @classmethod
    def _total_is_number(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("El total es obligatorio")
        float(value)
        return value

    @field_validator(*_OPTIONAL_NUMBERS)
    @classmethod
    def _optional_is_number(cls, value: str) -> str:
        parse_optional_float(value)
        return value

    def to_payload(self) -> dict[str, Any]:
        """Convert the draft into column values for the gateway."""
        payload: dict[str, Any] = {
            "client_id": int(self.client),
            "shape": self.shape,
            "mode": self.mode,
            "crystal": self.crystal,
            "color": self.color,
            "total": float(self.total),
            "paid_type": self.paid_type,
            "status": self.status,
            "confirmed": self.confirmed,
            "supervised": self.supervised,
            "presented": self.presented,
            "warranty_end_date": self.warranty_end_date,
            "end_payment_method": self.end_payment_method,
        }
        for name in _OPTIONAL_NUMBERS:
            payload[name] = parse_optional_float(getattr(self, name))
        for name in _OPTIONAL_TEXT:
            payload[name] = getattr(self, name).strip() or None
        return payload


class ContractResponse(BaseModel):
    """Contract row with display helpers for status."""

    id: int
    client_id: int
    frame: str | None = None
    sphere_od: float | None = None
    sphere_oi: float | None = None
    cylinder_od: float | None = None
    cylinder_oi: float | None = None
    axis_od: float | None = None
    axis_oi: float | None = None
    prysm_od: float | None = None
    prysm_oi: float | None = None
    base_od: float | None = None
    base_oi: float | None = None
    add: float | None = None
    dp: str | None = None
    shape: str
    mode: str
    crystal: str
    color: str
    total: float
    paid_cash: float | None = None
    paid_transfer: float | None = None
    paid_type: str | None = None
    status: str
    confirmed: bool
    supervised: bool
    beneficiary_name: str | None = None
    beneficiary_phone: str | None = None
    beneficiary_ci: str | None = None
    presented: str | None = None
    warranty_end_date: date | None = None
    end_payment_cup: float | None = None
    end_payment_transfer: float | None = None
    end_payment_method: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_color(self) -> str:
        return status_color(self.status)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def next_status(self) -> str | None:
        return next_status(self.status)


class ContractWithClient(ContractResponse):
    """Contract row joined with its client."""

    client: ClientSummary | None = None


class StatusCatalogItem(BaseModel):
    """One entry of the contract-status catalog."""

    position: int
    status: str
    color: str
    next_status: str | None = None


class ContractFormOptions(BaseModel):
    """Choices offered by the contract form selectors."""

    shapes: list[str]
    modes: list[str]
    crystals: list[str]
    colors: list[str]
    payment_types: list[str]
