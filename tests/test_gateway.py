"""Tests for the data gateway: policies, filters, joins and delete modes."""

from datetime import date

import pytest

from app.models import Client, Frame
from app.services.gateway import (
    DataGateway,
    GatewayError,
    PermissionDenied,
    RecordNotFound,
    UnknownCollection,
    can_manage,
)


def test_select_orders_by_creation_descending(db, make_client):
    first = make_client("Ana")
    second = make_client("Beatriz")

    rows = DataGateway(db).select("clients")

    assert [r.id for r in rows] == [second.id, first.id]


def test_select_ascending_by_first_name_with_equality_filter(db, make_client):
    make_client("Zoe")
    make_client("Ana")
    make_client("Marta", is_active=False)

    rows = DataGateway(db).select(
        "clients", eq={"is_active": True}, order_by="first_name", ascending=True
    )

    assert [r.first_name for r in rows] == ["Ana", "Zoe"]


def test_select_with_inclusion_filter_and_join(db, make_client, make_contract):
    client = make_client("Luis")
    make_contract(client, status="Encargado")
    wanted = make_contract(client, status="Revisión por Calidad")

    rows = DataGateway(db).select(
        "contracts",
        in_={"status": ["Revisión por Calidad", "Entregado a Producción"]},
        joins=("client",),
    )

    assert [r.id for r in rows] == [wanted.id]
    assert rows[0].client.first_name == "Luis"


def test_nested_join_path(db, make_client, make_contract, make_task):
    contract = make_contract(make_client("Raúl"))
    make_task(contract)

    rows = DataGateway(db).select("tasks", joins=("contract", "contract.client"))

    assert rows[0].contract.client.first_name == "Raúl"


def test_tasks_are_ordered_by_assigned_date(db, make_client, make_contract, make_task):
    contract = make_contract(make_client())
    older = make_task(contract, assigned_date=date(2026, 1, 1))
    newer = make_task(contract, assigned_date=date(2026, 2, 1))

    rows = DataGateway(db).select("tasks")

    assert [r.id for r in rows] == [newer.id, older.id]


def test_limit_and_count(db, make_client):
    for name in ("A", "B", "C"):
        make_client(name)
    gateway = DataGateway(db)

    assert len(gateway.select("clients", limit=2)) == 2
    assert gateway.count("clients") == 3
    assert gateway.count("clients", eq={"first_name": "B"}) == 1


def test_unknown_collection(db):
    with pytest.raises(UnknownCollection):
        DataGateway(db).select("glasses")


def test_unknown_column_is_rejected(db):
    with pytest.raises(GatewayError):
        DataGateway(db).select("clients", eq={"nickname": "x"})


def test_unknown_join_is_rejected(db):
    with pytest.raises(GatewayError):
        DataGateway(db).select("clients", joins=("orders",))


def test_get_missing_row(db):
    with pytest.raises(RecordNotFound) as exc_info:
        DataGateway(db).get("frames", 999)
    assert exc_info.value.status_code == 404


def test_insert_and_partial_update(db):
    gateway = DataGateway(db)
    frame = gateway.insert(
        "frames", {"name": "Wayfarer", "brand": "Ray-Ban", "model": "RB2140", "stock": 3, "price": 10}
    )

    updated = gateway.update("frames", frame.id, {"stock": 8})

    assert updated.stock == 8
    assert updated.name == "Wayfarer"


def test_update_cannot_change_id(db, make_frame):
    frame = make_frame()
    with pytest.raises(GatewayError):
        DataGateway(db).update("frames", frame.id, {"id": 42})


def test_soft_delete_keeps_client_row(db, make_client):
    client = make_client()

    DataGateway(db).delete("clients", client.id)

    db.expire_all()
    row = db.get(Client, client.id)
    assert row is not None
    assert row.is_active is False


def test_hard_delete_removes_frame(db, make_frame):
    frame = make_frame()

    DataGateway(db).delete("frames", frame.id)

    db.expire_all()
    assert db.get(Frame, frame.id) is None


def test_deleting_contract_removes_its_tasks(db, make_client, make_contract, make_task):
    contract = make_contract(make_client())
    make_task(contract)
    gateway = DataGateway(db)

    gateway.delete("contracts", contract.id)

    assert gateway.count("tasks") == 0


def test_role_without_manage_permission_is_denied(db, make_user):
    warehouse = make_user("warehouse")
    gateway = DataGateway(db, actor=warehouse)

    with pytest.raises(PermissionDenied) as exc_info:
        gateway.insert("clients", {"first_name": "A", "last_name": "B", "ci": "1", "phone": "2"})
    assert exc_info.value.status_code == 403


def test_users_collection_is_admin_only(db, make_user):
    reception = make_user("reception")
    admin = make_user("admin")

    with pytest.raises(PermissionDenied):
        DataGateway(db, actor=reception).select("users")
    assert len(DataGateway(db, actor=admin).select("users")) == 2


def test_internal_gateway_skips_role_checks(db, make_user):
    make_user("reception")
    assert DataGateway(db).count("users") == 1


@pytest.mark.parametrize(
    "role, collection, expected",
    [
        ("admin", "users", True),
        ("reception", "clients", True),
        ("reception", "frames", False),
        ("warehouse", "crystals", True),
        ("warehouse", "contracts", True),
        ("warehouse", "clients", False),
        (None, "clients", False),
        ("admin", "unknown", False),
    ],
)
def test_can_manage(role, collection, expected):
    assert can_manage(role, collection) is expected
