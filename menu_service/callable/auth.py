from __future__ import annotations

import anyio
import structlog
from firebase_admin import auth as firebase_auth

from menu_service.callable.context import AuthContext
from menu_service.callable.protocol import HttpsError

logger = structlog.get_logger(__name__)


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HttpsError("unauthenticated", "Unauthenticated")
    return token.strip()


def verify_id_token(token: str) -> AuthContext:
    # Expired and revoked tokens subclass InvalidIdTokenError. Anything else
    # (no Firebase app, certificate fetch failures) is a server fault.
    try:
        claims = firebase_auth.verify_id_token(token)
    except (firebase_auth.InvalidIdTokenError, firebase_auth.UserDisabledError) as exc:
        logger.warning("id_token_rejected", error_type=type(exc).__name__)
        raise HttpsError("unauthenticated", "Unauthenticated") from exc
    return AuthContext(uid=claims["uid"], token=claims)


async def resolve_auth_context(authorization: str | None) -> AuthContext | None:
    """
    Resolve the caller identity from an ``Authorization`` header.

    A missing header is an anonymous call. A header that is present but
    carries no valid Firebase ID token rejects the whole request.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None
    # Token verification may fetch signing certificates over the network.
    return await anyio.to_thread.run_sync(verify_id_token, token)
