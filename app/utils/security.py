"""
Security utilities for the Óptica console authentication system.

Provides JWT token creation/verification via python-jose and bcrypt
password hashing.  All configuration is sourced from the application
settings singleton so that secrets are never hard-coded in source files.

Signing out revokes the token's ``jti`` claim in a process-local map kept
only until the token's own expiry; a restart forgets revocations, but
tokens still expire on their own.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import get_settings

logger = logging.getLogger(__name__)

# jti -> expiry (epoch seconds); entries past their expiry are purged
_revoked_jtis: dict[str, float] = {}
_revoked_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Password helpers (bcrypt direct)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(pwd_bytes, salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------


def create_access_token(data: dict[str, Any]) -> str:
    """Create a signed JWT access token.

    The payload is a copy of *data* plus ``exp``, ``iat`` and a random
    ``jti`` used for revocation.  The ``sub`` claim should be set by the
    caller (``str(user.id)``).

    Example::

        token = create_access_token({"sub": str(user.id), "role": user.role})
    """
    settings = get_settings()
    payload = data.copy()
    now = datetime.now(timezone.utc)
    payload["exp"] = now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    payload["iat"] = now
    payload["jti"] = uuid.uuid4().hex

    return jwt.encode(
        payload,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT access token.

    Validates signature, expiration, and that the token was not revoked.

    Raises:
        ValueError: If the token is invalid, expired, revoked, or cannot be
                    decoded.  Callers should map this to an HTTP 401.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as exc:
        logger.debug("JWT verification failed: %s", exc)
        raise ValueError("Token inválido o expirado") from exc

    if is_revoked(payload.get("jti")):
        raise ValueError("Sesión cerrada")
    return payload


def revoke_token(payload: dict[str, Any]) -> None:
    """Revoke the token described by *payload* and forget expired revocations."""
    jti = payload.get("jti")
    if not jti:
        return
    now = datetime.now(timezone.utc).timestamp()
    expires = payload.get("exp")
    if expires is None:
        expires = now + get_settings().JWT_EXPIRATION_MINUTES * 60
    with _revoked_lock:
        for expired in [k for k, exp in _revoked_jtis.items() if exp <= now]:
            del _revoked_jtis[expired]
        _revoked_jtis[jti] = float(expires)
    logger.debug("Token revoked jti=%s", jti)


def is_revoked(jti: str | None) -> bool:
    if not jti:
        return False
    with _revoked_lock:
        return jti in _revoked_jtis
