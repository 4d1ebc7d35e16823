"""Store failures during reads: pages render empty, exports and permissions do not."""

import pytest

from app.schemas.common import TableParams
from app.schemas.user import UserResponse
from app.services.gateway import DataGateway, PermissionDenied, StoreError
from app.services.table_service import render_table
from app.services.user_service import USERS_TABLE


def _unreachable(self, collection, *args, **kwargs):
    raise StoreError("Error de base de datos", collection=collection)


@pytest.fixture
def broken_store(monkeypatch):
    monkeypatch.setattr(DataGateway, "select", _unreachable)
    monkeypatch.setattr(DataGateway, "count", _unreachable)


def test_list_renders_empty_when_store_fails(api, auth_headers, make_client, broken_store):
    _, headers = auth_headers("reception")
    make_client()

    response = api.get("/api/clients/", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["rows"] == []
    assert body["total"] == 0
    assert body["empty_message"] == "No se encontraron clientes"


def test_dashboard_renders_zeros_when_store_fails(api, auth_headers, broken_store):
    _, headers = auth_headers("admin")

    response = api.get("/api/dashboard/", headers=headers)

    assert response.status_code == 200
    assert response.json()["stats"]["total_contracts"] == 0
    assert response.json()["recent_contracts"] == []


def test_export_reports_store_failure(api, auth_headers, broken_store):
    _, headers = auth_headers("admin")

    response = api.get("/api/exportar/excel", params={"table": "clients"}, headers=headers)

    assert response.status_code == 503


def test_render_table_does_not_hide_permission_errors(db, make_user):
    warehouse = make_user("warehouse")
    gateway = DataGateway(db, actor=warehouse)

    with pytest.raises(PermissionDenied):
        render_table(USERS_TABLE, gateway, TableParams(), UserResponse.model_validate)
