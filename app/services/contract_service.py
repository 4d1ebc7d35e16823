"""
Contracts page business logic.

Contracts are listed joined with their client and searched by the
client's name and CI.  The "advance" action moves a contract exactly one
step forward in the status catalog; everything else about the status is
a plain field write.
"""

from __future__ import annotations

import logging

from app.models.contract import Contract
from app.schemas.client import ClientOption
from app.schemas.common import TableParams, TableResponse
from app.schemas.contract import (
    ContractDraft,
    ContractFormOptions,
    ContractWithClient,
    StatusCatalogItem,
)
from app.services.gateway import DataGateway
from app.services.table_service import TableSpec, render_table
from app.utils.constants import (
    CONTRACT_STATUSES,
    CRYSTAL_MATERIALS,
    LENS_COLORS,
    MODES,
    PAYMENT_TYPES,
    SHAPES,
)
from app.utils.contract_status import next_status, status_color
from app.utils.table_engine import ColumnDef, equals_value, text_search

logger = logging.getLogger(__name__)

COLLECTION = "contracts"


def _client_name(contract: Contract) -> str | None:
    if contract.client is None:
        return None
    return f"{contract.client.first_name} {contract.client.last_name}"


def _client_ci(contract: Contract) -> str | None:
    return contract.client.ci if contract.client is not None else None


CONTRACTS_TABLE: TableSpec[Contract] = TableSpec(
    collection=COLLECTION,
    title="Contratos",
    columns=[
        ColumnDef("id", "N°"),
        ColumnDef("client", "Cliente", accessor=_client_name),
        ColumnDef("client_ci", "CI", accessor=_client_ci),
        ColumnDef("frame", "Armadura"),
        ColumnDef("mode", "Tipo", filter_fn=equals_value),
        ColumnDef("status", "Estado", filter_fn=equals_value),
        ColumnDef("total", "Total", accessor=lambda c: float(c.total), filterable=False),
        ColumnDef("paid_type", "Pago", filter_fn=equals_value),
        ColumnDef("created_at", "Fecha", filterable=False),
    ],
    fetch=lambda gateway: gateway.select(COLLECTION, joins=("client",)),
    global_filter_fn=text_search(
        lambda c: c.client.first_name if c.client else None,
        lambda c: c.client.last_name if c.client else None,
        _client_ci,
    ),
    empty_message="No se encontraron contratos",
    search_placeholder="Buscar por cliente o CI...",
)


def list_contracts(
    gateway: DataGateway,
    params: TableParams,
    status: str | None = None,
) -> TableResponse:
    """Return the rendered contracts table, optionally narrowed to one status."""
    return render_table(
        CONTRACTS_TABLE,
        gateway,
        params,
        ContractWithClient.model_validate,
        {"status": status},
    )


def get_contract(gateway: DataGateway, contract_id: int) -> Contract:
    return gateway.get(COLLECTION, contract_id, joins=("client",))


def create_contract(gateway: DataGateway, draft: ContractDraft) -> Contract:
    """Persist a contract form.

    The referenced client must exist; the gateway raises ``RecordNotFound``
    otherwise.
    """
    payload = draft.to_payload()
    gateway.get("clients", payload["client_id"])
    contract = gateway.insert(COLLECTION, payload)
    logger.info(
        "Contract created id=%s client_id=%s status='%s'",
        contract.id, contract.client_id, contract.status,
    )
    return get_contract(gateway, contract.id)


def update_contract(gateway: DataGateway, contract_id: int, draft: ContractDraft) -> Contract:
    payload = draft.to_payload()
    gateway.get("clients", payload["client_id"])
    gateway.update(COLLECTION, contract_id, payload)
    return get_contract(gateway, contract_id)


def delete_contract(gateway: DataGateway, contract_id: int) -> None:
    gateway.delete(COLLECTION, contract_id)


def advance_status(gateway: DataGateway, contract_id: int) -> Contract:
    """Move a contract to the next status in the catalog.

    No write is issued when the contract is already ``Finalizado`` or its
    status is not part of the catalog; the row is returned unchanged.

    Args:
        gateway: Gateway bound to the caller.
        contract_id: Contract primary key.

    Returns:
        The contract after the (possible) update, with its client loaded.
    """
    contract = get_contract(gateway, contract_id)
    current = contract.status
    target = next_status(current)
    if target is None:
        logger.info(
            "advance_status: contract id=%s has no successor for '%s'",
            contract_id, current,
        )
        return contract

    gateway.update(COLLECTION, contract_id, {"status": target})
    logger.info("Contract id=%s advanced '%s' -> '%s'", contract_id, current, target)
    return get_contract(gateway, contract_id)


def status_catalog() -> list[StatusCatalogItem]:
    return [
        StatusCatalogItem(
            position=position,
            status=status,
            color=status_color(status),
            next_status=next_status(status),
        )
        for position, status in enumerate(CONTRACT_STATUSES)
    ]


def active_clients(gateway: DataGateway) -> list[ClientOption]:
    """Client selector for the contract form: active clients by first name."""
    clients = gateway.select(
        "clients",
        eq={"is_active": True},
        order_by="first_name",
        ascending=True,
    )
    return [ClientOption.model_validate(c) for c in clients]


def form_options() -> ContractFormOptions:
    return ContractFormOptions(
        shapes=list(SHAPES),
        modes=list(MODES),
        crystals=list(CRYSTAL_MATERIALS),
        colors=list(LENS_COLORS),
        payment_types=list(PAYMENT_TYPES),
    )
