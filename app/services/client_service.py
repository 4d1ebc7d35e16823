"""
Clients page business logic.

The client list is the plainest instantiation of the table flow: every
client (active or not) newest first, searched across name, CI and email.
Clients are soft-deleted (``is_active = False``) so historical contracts
keep their owner.
"""

from __future__ import annotations

import logging
from typing import Any

from app.models.client import Client
from app.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from app.schemas.common import TableParams, TableResponse
from app.services.gateway import DataGateway
from app.services.table_service import TableSpec, render_table
from app.utils.table_engine import ColumnDef, equals_value, text_search

logger = logging.getLogger(__name__)

COLLECTION = "clients"

CLIENTS_TABLE: TableSpec[Client] = TableSpec(
    collection=COLLECTION,
    title="Clientes",
    columns=[
        ColumnDef("first_name", "Nombre"),
        ColumnDef("last_name", "Apellidos"),
        ColumnDef("ci", "CI"),
        ColumnDef("phone", "Teléfono", sortable=False),
        ColumnDef("email", "Correo"),
        ColumnDef("address", "Dirección", sortable=False),
        ColumnDef(
            "is_active",
            "Estado",
            accessor=lambda c: "Activo" if c.is_active else "Inactivo",
            filter_fn=equals_value,
        ),
        ColumnDef("created_at", "Fecha de registro", filterable=False),
    ],
    fetch=lambda gateway: gateway.select(COLLECTION),
    global_filter_fn=text_search(
        lambda c: c.first_name,
        lambda c: c.last_name,
        lambda c: c.ci,
        lambda c: c.email,
    ),
    empty_message="No se encontraron clientes",
    search_placeholder="Buscar por nombre, CI o correo...",
)


def client_filters(active: bool | None = None) -> dict[str, Any]:
    if active is None:
        return {}
    return {"is_active": "Activo" if active else "Inactivo"}


def list_clients(
    gateway: DataGateway,
    params: TableParams,
    active: bool | None = None,
) -> TableResponse:
    """Return the rendered clients table.

    Args:
        gateway: Gateway bound to the caller.
        params: Search, sort and pagination state.
        active: ``True`` / ``False`` to show only active / inactive clients.
    """
    return render_table(
        CLIENTS_TABLE, gateway, params, ClientResponse.model_validate, client_filters(active)
    )


def get_client(gateway: DataGateway, client_id: int) -> Client:
    return gateway.get(COLLECTION, client_id)


def create_client(gateway: DataGateway, data: ClientCreate) -> Client:
    client = gateway.insert(COLLECTION, data.model_dump())
    logger.info("Client created id=%s ci=%s", client.id, client.ci)
    return client


def update_client(gateway: DataGateway, client_id: int, data: ClientUpdate) -> Client:
    """Apply only the fields present in the request body."""
    return gateway.update(COLLECTION, client_id, data.model_dump(exclude_unset=True))


def delete_client(gateway: DataGateway, client_id: int) -> None:
    gateway.delete(COLLECTION, client_id)


def toggle_active(gateway: DataGateway, client_id: int) -> Client:
    client = gateway.get(COLLECTION, client_id)
    return gateway.update(COLLECTION, client_id, {"is_active": not client.is_active})
