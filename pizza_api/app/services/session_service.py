"""
Admin session service.

The storefront has exactly one administrator, configured through the
``ADMIN_ID``, ``ADMIN_EMAIL`` and ``ADMIN_PASSWORD`` settings.  A
successful ``login`` issues a signed token embedding the admin's id
and email; ``verify`` checks a token statelessly on every request.
There is no server‑side session store, so ``logout`` cannot revoke a
token: the client simply discards it and the token stays valid until
it expires.

Failures are returned as ``AuthFailure`` values rather than raised,
so the HTTP layer can answer 401 without confusing a rejected login
with a server error.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Union

from pizza_api.app.core.security import create_access_token, decode_access_token

SessionToken = str


@dataclass(frozen=True)
class AdminIdentity:
    id: str
    email: str
    password: str


@dataclass(frozen=True)
class AuthFailure:
    """Why a login or token verification was rejected."""

    reason: str


class StaticIdentityProvider:
    """Identity lookup backed by a single configured admin.

    The session service only talks to this interface, so a provider
    reading several admins from storage can replace it later.
    """

    def __init__(self, identity: AdminIdentity) -> None:
        self._identity = identity

    def get_by_email(self, email: str) -> Optional[AdminIdentity]:
        if _equal(email, self._identity.email):
            return self._identity
        return None

    def get_by_id(self, identity_id: str) -> Optional[AdminIdentity]:
        if _equal(identity_id, self._identity.id):
            return self._identity
        return None


def _equal(a: str, b: str) -> bool:
    # Exact string equality in constant time
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class AdminSessionService:
    """Issues and verifies admin session tokens."""

    def __init__(
        self,
        identities: StaticIdentityProvider,
        secret_key: str,
        token_lifetime_seconds: int,
    ) -> None:
        self.identities = identities
        self._secret_key = secret_key
        self.token_lifetime_seconds = token_lifetime_seconds

    def login(self, email: str, password: str) -> Union[SessionToken, AuthFailure]:
        """Check the credential pair and issue a token on success."""
        logger = logging.getLogger(__name__)
        identity = self.identities.get_by_email(email)
        if identity is None or not _equal(password, identity.password):
            logger.warning("Rejected admin login for %r", email)
            return AuthFailure("Wrong email or password")
        logger.info("Admin %s logged in", identity.id)
        return self.issue_token(identity)

    def issue_token(self, identity: AdminIdentity, lifetime_seconds: Optional[int] = None) -> SessionToken:
        body = {"_id": identity.id, "email": identity.email}
        return create_access_token(
            {"user": body},
            self._secret_key,
            lifetime_seconds or self.token_lifetime_seconds,
        )

    def verify(self, token: str) -> Union[AdminIdentity, AuthFailure]:
        """Return the admin a token was issued to, or why it is invalid."""
        payload = decode_access_token(token, self._secret_key)
        if payload is None:
            return AuthFailure("Invalid or expired token")
        user = payload.get("user")
        if not isinstance(user, dict):
            return AuthFailure("Malformed token payload")
        identity_id = user.get("_id")
        email = user.get("email")
        if not isinstance(identity_id, str) or not isinstance(email, str):
            return AuthFailure("Malformed token payload")
        identity = self.identities.get_by_id(identity_id)
        if identity is None or not _equal(email, identity.email):
            return AuthFailure("Token does not belong to the admin")
        return identity

    def logout(self) -> None:
        """Nothing to do server side; the client discards its token."""
        return None
