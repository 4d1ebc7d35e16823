"""
Authentication business logic for the Óptica console.

Provides:
- ``authenticate_user`` — credential verification against the DB.
- ``get_current_user`` — FastAPI dependency that extracts and validates
  the Bearer JWT from the ``Authorization`` header.
- ``require_role`` — dependency factory that enforces role-based access
  control on top of ``get_current_user``.
- ``get_gateway`` — dependency yielding a ``DataGateway`` bound to the
  authenticated user.
- ``sign_out`` — revokes the caller's current token.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.services.gateway import DataGateway
from app.utils.security import revoke_token, verify_password, verify_token

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# OAuth2 scheme: tells FastAPI/Swagger where to find the Bearer token.
# The ``tokenUrl`` must match the login endpoint path (relative to root).
# ---------------------------------------------------------------------------

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


# ---------------------------------------------------------------------------
# Core authentication function
# ---------------------------------------------------------------------------


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Verify email/password credentials against the database.

    Returns ``None`` (instead of raising) so that callers can control the
    HTTP error response.

    Args:
        db: An active SQLAlchemy session.
        email: The login email submitted by the client.
        password: The plain-text password submitted by the client.

    Returns:
        The ``User`` ORM instance on success, or ``None`` on failure
        (unknown user, inactive account, or wrong password).
    """
    user: User | None = (
        db.query(User)
        .filter(User.email == email, User.is_active.is_(True))
        .first()
    )

    if user is None:
        logger.debug("authenticate_user: unknown or inactive user '%s'", email)
        return None

    if not verify_password(password, user.password_hash):
        logger.debug("authenticate_user: wrong password for user '%s'", email)
        return None

    # Update last-login timestamp; a failure here does not fail the login.
    try:
        user.last_login = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError:  # pragma: no cover
        db.rollback()
        logger.warning("Could not update last_login for user '%s'", email)

    return user


# ---------------------------------------------------------------------------
# FastAPI dependency: current authenticated user
# ---------------------------------------------------------------------------


def get_token_payload(token: Annotated[str, Depends(oauth2_scheme)]) -> dict:
    try:
        return verify_token(token)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No se pudo validar las credenciales",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_user(
    payload: Annotated[dict, Depends(get_token_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """FastAPI dependency that resolves the caller's identity from a JWT.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired or
                           revoked, or if the referenced user no longer
                           exists or has been deactivated.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudo validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )

    # The ``sub`` claim stores the user's primary key as a string.
    user_id_str: str | None = payload.get("sub")
    if user_id_str is None:
        raise credentials_exception

    try:
        user_id = int(user_id_str)
    except (TypeError, ValueError):
        raise credentials_exception

    user: User | None = (
        db.query(User)
        .filter(User.id == user_id, User.is_active.is_(True))
        .first()
    )

    if user is None:
        raise credentials_exception

    return user


def get_gateway(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DataGateway:
    return DataGateway(db, actor=current_user)


def sign_out(payload: dict, user: User) -> None:
    revoke_token(payload)
    logger.info("Signed out user='%s'", user.email)


# ---------------------------------------------------------------------------
# Role enforcement dependency factory
# ---------------------------------------------------------------------------


def require_role(*roles: str):
    """Return a FastAPI dependency that restricts access to the given roles.

    .. code-block:: python

        @router.delete("/{frame_id}")
        def delete_frame(
            current_user: User = Depends(require_role("admin", "warehouse")),
        ):
            ...

    Raises:
        HTTPException 403: If the authenticated user's role is not in
                           the allowed *roles* set.
    """
    allowed = frozenset(roles)

    def _check_role(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    f"Acceso denegado. Se requiere uno de los roles: "
                    f"{sorted(allowed)}"
                ),
            )
        return current_user

    return _check_role
