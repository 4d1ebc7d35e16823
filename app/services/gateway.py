"""
Data gateway — generic query / mutation access to the console collections.

Every page controller talks to the database through ``DataGateway``
instead of touching ORM models directly.  Collections are addressed by
name (``"clients"``, ``"contracts"``, ...) and each one carries a
``CollectionPolicy`` describing who may read it, who may change it, and
how it is deleted.

Design notes
------------
- Authorization lives here, at the data boundary.  Routers may also gate
  with ``require_role`` for an early 403, but a router that forgets to do
  so is still covered by the policy check.
- A gateway created without an ``actor`` is a trusted internal caller
  (startup seeding, scripts) and skips the role checks.
- ``SQLAlchemyError`` never escapes: it is rolled back, logged, and
  re-raised as ``StoreError``.
- Mutations are independent single-row commits.  Nothing spans two
  collections in one transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models.client import Client
from app.models.contract import Contract
from app.models.crystal import Crystal
from app.models.frame import Frame
from app.models.task import Task
from app.models.user import User
from app.utils.constants import ROLES

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GatewayError(Exception):
    """Base class for every failure surfaced by the gateway.

    ``status_code`` is the HTTP status the API exception handler uses.
    """

    status_code = 400

    def __init__(self, message: str, *, collection: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.collection = collection


class UnknownCollection(GatewayError):
    status_code = 404


class RecordNotFound(GatewayError):
    status_code = 404


class PermissionDenied(GatewayError):
    status_code = 403


class StoreError(GatewayError):
    status_code = 503


# ---------------------------------------------------------------------------
# Collection policies
# ---------------------------------------------------------------------------

_ALL_ROLES = frozenset(ROLES)


@dataclass(frozen=True)
class CollectionPolicy:
    """Access and lifecycle rules for one collection.

    Attributes:
        model: Mapped ORM class.
        read_roles: Roles allowed to select rows.
        manage_roles: Roles allowed to insert, update or delete.
        delete_mode: ``"soft"`` sets ``is_active = False``; ``"hard"``
            removes the row.
        order_by: Default ordering column (always descending).
    """

    model: type
    read_roles: frozenset[str]
    manage_roles: frozenset[str]
    delete_mode: Literal["soft", "hard"]
    order_by: str = "created_at"


COLLECTIONS: dict[str, CollectionPolicy] = {
    "clients": CollectionPolicy(
        model=Client,
        read_roles=_ALL_ROLES,
        manage_roles=frozenset({"admin", "reception"}),
        delete_mode="soft",
    ),
    "contracts": CollectionPolicy(
        model=Contract,
        read_roles=_ALL_ROLES,
        manage_roles=_ALL_ROLES,
        delete_mode="hard",
    ),
    "frames": CollectionPolicy(
        model=Frame,
        read_roles=_ALL_ROLES,
        manage_roles=frozenset({"admin", "warehouse"}),
        delete_mode="hard",
    ),
    "crystals": CollectionPolicy(
        model=Crystal,
        read_roles=_ALL_ROLES,
        manage_roles=frozenset({"admin", "warehouse"}),
        delete_mode="hard",
    ),
    "tasks": CollectionPolicy(
        model=Task,
        read_roles=_ALL_ROLES,
        manage_roles=_ALL_ROLES,
        delete_mode="hard",
        order_by="assigned_date",
    ),
    "users": CollectionPolicy(
        model=User,
        read_roles=frozenset({"admin"}),
        manage_roles=frozenset({"admin"}),
        delete_mode="soft",
    ),
}


def can_manage(role: str | None, collection: str) -> bool:
    """Presentation helper: whether *role* may mutate *collection*."""
    policy = COLLECTIONS.get(collection)
    return policy is not None and role in policy.manage_roles


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


class DataGateway:
    """Query / mutate named collections on behalf of one actor.

    Args:
        db: Active SQLAlchemy session (one per request).
        actor: The authenticated ``User``; ``None`` for trusted internal use.
    """

    def __init__(self, db: Session, actor: User | None = None) -> None:
        self.db = db
        self.actor = actor

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def policy(self, collection: str) -> CollectionPolicy:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise UnknownCollection(
                f"Colección desconocida: '{collection}'", collection=collection
            ) from None

    def _authorize(self, collection: str, policy: CollectionPolicy, *, write: bool) -> None:
        if self.actor is None:
            return
        allowed = policy.manage_roles if write else policy.read_roles
        if self.actor.role not in allowed:
            logger.warning(
                "Permission denied: user=%s role=%s %s on '%s'",
                self.actor.email, self.actor.role, "write" if write else "read", collection,
            )
            raise PermissionDenied(
                f"Acceso denegado a '{collection}'. Se requiere uno de los roles: "
                f"{sorted(allowed)}",
                collection=collection,
            )

    @staticmethod
    def _column(policy: CollectionPolicy, name: str, collection: str) -> Any:
        if name not in policy.model.__table__.columns:
            raise GatewayError(
                f"Columna desconocida '{name}' en '{collection}'", collection=collection
            )
        return getattr(policy.model, name)

    @staticmethod
    def _load_option(model: type, path: str) -> Any:
        """Build a ``selectinload`` chain for a dotted relationship path."""
        option = None
        current = model
        for name in path.split("."):
            attr = getattr(current, name, None)
            if attr is None or not hasattr(attr, "property") or not hasattr(attr.property, "mapper"):
                raise GatewayError(f"Relación desconocida '{path}'")
            option = selectinload(attr) if option is None else option.selectinload(attr)
            current = attr.property.mapper.class_
        return option

    def _fail(self, operation: str, collection: str, exc: SQLAlchemyError) -> StoreError:
        self.db.rollback()
        logger.exception("Gateway %s on '%s' failed", operation, collection)
        return StoreError(
            f"Error de base de datos al ejecutar {operation} sobre '{collection}'",
            collection=collection,
        )

    def _query(
        self,
        collection: str,
        policy: CollectionPolicy,
        eq: Mapping[str, Any] | None,
        in_: Mapping[str, Sequence[Any]] | None,
    ) -> Any:
        query = self.db.query(policy.model)
        for name, value in (eq or {}).items():
            query = query.filter(self._column(policy, name, collection) == value)
        for name, values in (in_ or {}).items():
            query = query.filter(self._column(policy, name, collection).in_(list(values)))
        return query

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def select(
        self,
        collection: str,
        *,
        eq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Sequence[Any]] | None = None,
        order_by: str | None = None,
        ascending: bool = False,
        joins: Sequence[str] = (),
        limit: int | None = None,
    ) -> list[Any]:
        """Return rows of *collection* matching equality / inclusion filters.

        Ordering defaults to the policy's timestamp column, descending.
        ``joins`` lists relationship paths (``"client"``,
        ``"contract.client"``) to load alongside each row.
        """
        policy = self.policy(collection)
        self._authorize(collection, policy, write=False)

        query = self._query(collection, policy, eq, in_)
        order_column = self._column(policy, order_by or policy.order_by, collection)
        query = query.order_by(order_column.asc() if ascending else order_column.desc())
        for path in joins:
            query = query.options(self._load_option(policy.model, path))
        if limit is not None:
            query = query.limit(limit)

        try:
            rows = query.all()
        except SQLAlchemyError as exc:
            raise self._fail("select", collection, exc) from exc

        logger.debug("select %s eq=%s in=%s -> %d rows", collection, eq, in_, len(rows))
        return rows

    def get(self, collection: str, row_id: Any, *, joins: Sequence[str] = ()) -> Any:
        """Return one row by primary key.

        Raises:
            RecordNotFound: If no row has that id.
        """
        policy = self.policy(collection)
        self._authorize(collection, policy, write=False)

        query = self.db.query(policy.model).filter(policy.model.id == row_id)
        for path in joins:
            query = query.options(self._load_option(policy.model, path))
        try:
            row = query.first()
        except SQLAlchemyError as exc:
            raise self._fail("get", collection, exc) from exc

        if row is None:
            raise RecordNotFound(
                f"Registro {row_id} no encontrado en '{collection}'.", collection=collection
            )
        return row

    def count(
        self,
        collection: str,
        *,
        eq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Sequence[Any]] | None = None,
    ) -> int:
        policy = self.policy(collection)
        self._authorize(collection, policy, write=False)
        try:
            return self._query(collection, policy, eq, in_).count()
        except SQLAlchemyError as exc:
            raise self._fail("count", collection, exc) from exc

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    def insert(self, collection: str, values: Mapping[str, Any]) -> Any:
        policy = self.policy(collection)
        self._authorize(collection, policy, write=True)
        for name in values:
            self._column(policy, name, collection)

        row = policy.model(**dict(values))
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail("insert", collection, exc) from exc

        logger.info("insert %s id=%s", collection, row.id)
        return row

    def update(self, collection: str, row_id: Any, values: Mapping[str, Any]) -> Any:
        """Apply a partial update; only the given keys are written."""
        policy = self.policy(collection)
        self._authorize(collection, policy, write=True)
        if "id" in values:
            raise GatewayError("No se puede modificar el ID de un registro", collection=collection)
        for name in values:
            self._column(policy, name, collection)

        row = self.get(collection, row_id)
        for name, value in values.items():
            setattr(row, name, value)
        try:
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            raise self._fail("update", collection, exc) from exc

        logger.info("update %s id=%s fields=%s", collection, row_id, list(values.keys()))
        return row

    def delete(self, collection: str, row_id: Any) -> None:
        """Remove a row, softly or physically according to the collection policy."""
        policy = self.policy(collection)
        self._authorize(collection, policy, write=True)

        row = self.get(collection, row_id)
        try:
            if policy.delete_mode == "soft":
                row.is_active = False
            else:
                self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", collection, exc) from exc

        logger.info("delete %s id=%s mode=%s", collection, row_id, policy.delete_mode)
