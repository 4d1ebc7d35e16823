"""Pydantic v2 schemas for the dashboard summary."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.contract import ContractWithClient


class DashboardStats(BaseModel):
    total_clients: int = Field(..., description="Total de clientes")
    total_contracts: int = Field(..., description="Total de contratos")
    pending_contracts: int = Field(
        ..., description="Contratos no entregados ni finalizados"
    )
    in_warranty: int = Field(..., description="Contratos en garantía")


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_contracts: list[ContractWithClient]
