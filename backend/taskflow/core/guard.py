# taskflow/core/guard.py
"""
Request authentication gate.

Turns the bearer token presented with a request into a `Principal`, or
rejects the request. Per request the gate moves through:

    UNAUTHENTICATED -> VERIFYING -> AUTHENTICATED
                                 \-> REJECTED

There is no retry: a rejection ends the request and the client has to log
in again.
"""
from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass

from taskflow.core.errors import AuthenticationError, ExpiredTokenError, InvalidTokenError
from taskflow.core.security import decode_access_token
from taskflow.services.credentials import CredentialStore, credential_store

logger = logging.getLogger("uvicorn.error")

NO_TOKEN = "Not authorized, no token provided"
INVALID_TOKEN = "Not authorized, invalid token"
EXPIRED_TOKEN = "Not authorized, token expired"
USER_NOT_FOUND = "Not authorized, user not found"


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Principal:
    """Minimal identity of the caller. Carries no credential material."""
    id: uuid.UUID
    name: str
    email: str


class AuthGuard:
    """Resolves tokens to principals against the credential store."""

    def __init__(self, store: CredentialStore | None = None):
        self.store = store or credential_store

    async def authenticate(self, token: str | None) -> Principal:
        """
        Verify a token and resolve the user it names.

        Raises:
            AuthenticationError: no token, bad or expired token, or the user no longer exists
        """
        state = AuthState.UNAUTHENTICATED
        if not token:
            logger.debug("[guard] %s: no token", state.value)
            raise AuthenticationError(NO_TOKEN)

        state = AuthState.VERIFYING
        try:
            claims = decode_access_token(token)
        except ExpiredTokenError:
            state = AuthState.REJECTED
            logger.info("[guard] %s: token expired", state.value)
            raise AuthenticationError(EXPIRED_TOKEN) from None
        except InvalidTokenError:
            state = AuthState.REJECTED
            logger.info("[guard] %s: invalid token signature or structure", state.value)
            raise AuthenticationError(INVALID_TOKEN) from None

        user = await self.store.get(claims.user_id)
        if user is None:
            state = AuthState.REJECTED
            logger.info("[guard] %s: token subject %s no longer exists", state.value, claims.user_id)
            raise AuthenticationError(USER_NOT_FOUND)

        state = AuthState.AUTHENTICATED
        logger.debug("[guard] %s: user id=%s", state.value, user.id)
        return Principal(id=user.id, name=user.name, email=user.email)


auth_guard = AuthGuard()
