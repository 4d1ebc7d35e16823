"""
Contracts router.

Mounts under ``/api/contracts`` (prefix set in ``main.py``).

Every role can read and edit contracts.  The form is posted as a
``ContractDraft`` (numeric inputs as raw strings) and converted server
side.

Endpoints
---------
GET    /                      — Contract table joined with the client.
GET    /statuses              — Status catalog with colours and successors.
GET    /client-options        — Active clients for the form selector.
GET    /form-options          — Shape, mode, crystal, colour and payment choices.
GET    /{contract_id}         — One contract with its client.
POST   /                      — Create from a draft.
PUT    /{contract_id}         — Replace from a draft.
DELETE /{contract_id}         — Hard delete (its tasks go with it).
POST   /{contract_id}/advance — Move to the next status.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.schemas.client import ClientOption
from app.schemas.common import MessageResponse, TableParams, TableResponse
from app.schemas.contract import (
    ContractDraft,
    ContractFormOptions,
    ContractWithClient,
    StatusCatalogItem,
)
from app.services import contract_service
from app.services.auth_service import get_gateway
from app.services.gateway import DataGateway
from app.services.table_service import table_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contratos"])

ContractId = Annotated[int, Path(description="ID del contrato.", ge=1)]


@router.get(
    "/",
    response_model=TableResponse[ContractWithClient],
    summary="Tabla de contratos",
    description=(
        "Contratos con su cliente, más recientes primero. ``search`` busca por "
        "nombre, apellidos o CI del cliente; ``status`` filtra por estado exacto."
    ),
    responses={
        200: {"description": "Página solicitada de la tabla."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_contracts(
    params: Annotated[TableParams, Depends(table_params)],
    gateway: Annotated[DataGateway, Depends(get_gateway)],
    status_filter: Annotated[
        str | None,
        Query(alias="status", description="Estado exacto del contrato.", max_length=50),
    ] = None,
) -> TableResponse:
    return contract_service.list_contracts(gateway, params, status_filter)


@router.get(
    "/statuses",
    response_model=list[StatusCatalogItem],
    summary="Catálogo de estados",
    description="Los 10 estados en orden, con su color y el estado siguiente.",
)
def list_statuses(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> list[StatusCatalogItem]:
    return contract_service.status_catalog()


@router.get(
    "/client-options",
    response_model=list[ClientOption],
    summary="Clientes activos para el formulario",
    description="Clientes activos ordenados por nombre ascendente.",
)
def list_client_options(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> list[ClientOption]:
    return contract_service.active_clients(gateway)


@router.get(
    "/form-options",
    response_model=ContractFormOptions,
    summary="Opciones del formulario de contrato",
)
def get_form_options(
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ContractFormOptions:
    return contract_service.form_options()


@router.get(
    "/{contract_id}",
    response_model=ContractWithClient,
    summary="Detalle de contrato",
    responses={404: {"description": "Contrato no encontrado."}},
)
def get_contract(
    contract_id: ContractId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ContractWithClient:
    return ContractWithClient.model_validate(
        contract_service.get_contract(gateway, contract_id)
    )


@router.post(
    "/",
    response_model=ContractWithClient,
    status_code=status.HTTP_201_CREATED,
    summary="Crear contrato",
    responses={
        201: {"description": "Contrato creado."},
        404: {"description": "Cliente no encontrado."},
        422: {"description": "Formulario inválido (cliente, total o valores numéricos)."},
    },
)
def create_contract(
    body: ContractDraft,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ContractWithClient:
    return ContractWithClient.model_validate(contract_service.create_contract(gateway, body))


@router.put(
    "/{contract_id}",
    response_model=ContractWithClient,
    summary="Actualizar contrato",
    responses={404: {"description": "Contrato o cliente no encontrado."}},
)
def update_contract(
    contract_id: ContractId,
    body: ContractDraft,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ContractWithClient:
    return ContractWithClient.model_validate(
        contract_service.update_contract(gateway, contract_id, body)
    )


@router.delete(
    "/{contract_id}",
    response_model=MessageResponse,
    summary="Eliminar contrato",
    responses={404: {"description": "Contrato no encontrado."}},
)
def delete_contract(
    contract_id: ContractId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> MessageResponse:
    contract_service.delete_contract(gateway, contract_id)
    return MessageResponse(message=f"Contrato {contract_id} eliminado")


@router.post(
    "/{contract_id}/advance",
    response_model=ContractWithClient,
    summary="Avanzar estado",
    description=(
        "Mueve el contrato al estado inmediato siguiente del catálogo. Si ya está "
        "``Finalizado`` o su estado no pertenece al catálogo, no se modifica."
    ),
    responses={404: {"description": "Contrato no encontrado."}},
)
def advance_contract(
    contract_id: ContractId,
    gateway: Annotated[DataGateway, Depends(get_gateway)],
) -> ContractWithClient:
    return ContractWithClient.model_validate(
        contract_service.advance_status(gateway, contract_id)
    )
