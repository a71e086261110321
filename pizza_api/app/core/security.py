"""
Security helpers for JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
arbitrary claims and an expiration timestamp (``exp``).  The signing
secret is passed in explicitly by the admin session service, which
owns it.

``get_current_admin`` is the FastAPI dependency guarding mutating
ingredient routes.  It reads the ``Authorization: Bearer`` header and
asks the session service to verify the token.
"""

import base64
import json
import time
import hmac
import hashlib
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], secret: str, expires_in: int) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  The token is a string of the
    form ``header.payload.signature``, where each part is base64url
    encoded.  Clients must send it in the ``Authorization`` header as
    ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token.
    secret : str
        HMAC signing key.
    expires_in : int
        Lifetime of the token in seconds.

    Returns
    -------
    str
        A signed JWT token.
    """
    to_encode = dict(data)
    to_encode["exp"] = int(time.time()) + expires_in
    header_b64 = _b64_url_encode(json.dumps(JWT_HEADER, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Splits the token into header, payload and signature, verifies the
    HMAC signature and only then parses the header and payload and
    checks the ``exp`` field.  Returns the payload dictionary if the
    token is valid, otherwise ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    # Compare the encoded form so that any change to the signature text,
    # including unused trailing bits, invalidates the token.  Constant‑time
    # comparison to prevent timing attacks.
    expected_sig = _b64_url_encode(_sign(signing_input, secret))
    if not hmac.compare_digest(expected_sig.encode("ascii"), signature_b64.encode("utf-8")):
        return None
    try:
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError, RecursionError):
        # binascii.Error and JSONDecodeError are both ValueErrors
        return None
    if header != JWT_HEADER:
        return None
    if not isinstance(data, dict):
        return None
    try:
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (TypeError, ValueError):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
):
    """Dependency that returns the authenticated ``AdminIdentity``.

    Raises HTTP 401 when the header is missing or the session service
    rejects the token.
    """
    from pizza_api.app.services.session_service import AuthFailure

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    result = request.app.state.session_service.verify(credentials.credentials)
    if isinstance(result, AuthFailure):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result
