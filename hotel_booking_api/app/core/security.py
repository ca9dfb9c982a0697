"""
Bearer token verification and ownership checks.

Tokens are JSON Web Tokens signed with HMAC-SHA256 and base64url
encoded (``header.payload.signature``).  A token must carry an
``email`` claim, which becomes the caller's verified identity, and an
``exp`` timestamp.  The API never issues tokens to clients;
``create_access_token`` exists for development tooling and tests.

Write operations combine two checks: the token must verify
(``get_current_identity``) and the verified email must match the email
that owns the resource (``authorize``).
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import Forbidden, Unauthenticated


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Create a signed token with the given claims.

    The claims are extended with an ``exp`` field holding the expiration
    time as a UNIX timestamp.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"email": "guest@example.com"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.  A negative value
        produces an already expired token.

    Returns
    -------
    str
        A signed token.
    """
    to_encode = data.copy()
    exp_seconds = settings.access_token_expire_minutes * 60 if expires_delta is None else expires_delta
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": ALGORITHM, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, str]]:
    """Verify and decode a token.

    Checks the header algorithm, the HMAC signature and the ``exp``
    claim.  Returns the claims dictionary on success and ``None`` for any
    malformed, tampered or expired token.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(header, dict) or header.get("alg") != ALGORITHM:
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


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, str]:
    """Dependency returning the verified claims of the caller.

    ``HTTPBearer`` yields ``None`` when the ``Authorization`` header is
    missing or does not use the ``Bearer`` scheme.  Both that case and an
    invalid token raise ``Unauthenticated``.  The returned dictionary is
    guaranteed to contain a non-empty ``email`` claim.
    """
    if credentials is None:
        raise Unauthenticated("Unauthorized access", error="No token provided")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        logger.warning("Rejected invalid or expired bearer token")
        raise Unauthenticated("Unauthorized access", error="Invalid token")
    email = payload.get("email")
    if not isinstance(email, str) or not email:
        logger.warning("Rejected bearer token without an email claim")
        raise Unauthenticated("Unauthorized access", error="Invalid token")
    return payload


def authorize(verified_email: str, owner_email: Optional[str], message: str = "You are not authorized") -> None:
    """Ownership guard.

    Passes when ``verified_email`` equals ``owner_email`` exactly (case
    sensitive).  Otherwise raises ``Forbidden`` carrying only ``message``.
    """
    if owner_email is None or verified_email != owner_email:
        logger.warning("Denied %s acting on a resource owned by %s", verified_email, owner_email)
        raise Forbidden(message)
