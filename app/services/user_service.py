"""
Users page business logic (admin only).

Staff accounts are soft-deleted.  An administrator can never deactivate
their own account, either by deleting it or by toggling it, so the
console always keeps at least the acting admin able to log in.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from app.models.user import User
from app.schemas.common import TableParams, TableResponse
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.gateway import DataGateway
from app.services.table_service import TableSpec, render_table
from app.utils.security import hash_password
from app.utils.table_engine import ColumnDef, equals_value, text_search

logger = logging.getLogger(__name__)

COLLECTION = "users"

USERS_TABLE: TableSpec[User] = TableSpec(
    collection=COLLECTION,
    title="Usuarios",
    columns=[
        ColumnDef("first_name", "Nombre"),
        ColumnDef("last_name", "Apellidos"),
        ColumnDef("email", "Correo"),
        ColumnDef("role", "Rol", filter_fn=equals_value),
        ColumnDef(
            "is_active",
            "Estado",
            accessor=lambda u: "Activo" if u.is_active else "Inactivo",
            filter_fn=equals_value,
        ),
        ColumnDef("last_login", "Último acceso", filterable=False),
        ColumnDef("created_at", "Fecha de alta", filterable=False),
    ],
    fetch=lambda gateway: gateway.select(COLLECTION),
    global_filter_fn=text_search(
        lambda u: u.first_name,
        lambda u: u.last_name,
        lambda u: u.email,
    ),
    empty_message="No se encontraron usuarios",
    search_placeholder="Buscar por nombre o correo...",
)


def _reject_self_deactivation(gateway: DataGateway, user_id: int) -> None:
    if gateway.actor is not None and gateway.actor.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No puede desactivar su propia cuenta",
        )


def _ensure_email_free(gateway: DataGateway, email: str, user_id: int | None = None) -> None:
    for existing in gateway.select(COLLECTION, eq={"email": email}):
        if existing.id != user_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Ya existe un usuario con el correo '{email}'",
            )


def list_users(
    gateway: DataGateway,
    params: TableParams,
    role: str | None = None,
) -> TableResponse:
    return render_table(
        USERS_TABLE, gateway, params, UserResponse.model_validate, {"role": role}
    )


def get_user(gateway: DataGateway, user_id: int) -> User:
    return gateway.get(COLLECTION, user_id)


def create_user(gateway: DataGateway, data: UserCreate) -> User:
    """Create a staff account, storing only the bcrypt hash of the password.

    Raises:
        HTTPException 409: If the email is already registered.
    """
    _ensure_email_free(gateway, data.email)
    values = data.model_dump(exclude={"password"})
    values["password_hash"] = hash_password(data.password)
    user = gateway.insert(COLLECTION, values)
    logger.info("User created id=%s email='%s' role=%s", user.id, user.email, user.role)
    return user


def update_user(gateway: DataGateway, user_id: int, data: UserUpdate) -> User:
    """Partially update an account; a new password is re-hashed.

    Raises:
        HTTPException 400: If the admin tries to deactivate themselves.
        HTTPException 409: If the new email belongs to another account.
    """
    values = data.model_dump(exclude_unset=True, exclude={"password"})
    if data.password:
        values["password_hash"] = hash_password(data.password)
    if values.get("is_active") is False:
        _reject_self_deactivation(gateway, user_id)
    if values.get("email"):
        _ensure_email_free(gateway, values["email"], user_id)
    return gateway.update(COLLECTION, user_id, values)


def delete_user(gateway: DataGateway, user_id: int) -> None:
    _reject_self_deactivation(gateway, user_id)
    gateway.delete(COLLECTION, user_id)


def toggle_active(gateway: DataGateway, user_id: int) -> User:
    user = gateway.get(COLLECTION, user_id)
    if user.is_active:
        _reject_self_deactivation(gateway, user_id)
    return gateway.update(COLLECTION, user_id, {"is_active": not user.is_active})
