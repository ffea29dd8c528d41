"""Bearer token handling for API requests.

Tokens are JWTs issued by the identity provider. The user id is read from
the ``user_id`` claim, falling back to ``sub``. Signatures are checked only
when a shared HS256 secret is configured; expiry is always enforced.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import jwt

from cryptotax.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
JWT_ALGORITHM = "HS256"


@dataclass
class TokenPayload:
    """Decoded claims of a bearer token."""

    user_id: str
    claims: dict[str, Any] = field(default_factory=dict)
    verified: bool = False


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the raw token from an Authorization header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Authorization header required")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("Authorization header required")
    return token


def decode_token(token: str, secret: Optional[str] = None) -> TokenPayload:
    """
    Decode a JWT and return its payload.

    Args:
        token: Raw JWT string (header.payload.signature)
        secret: Optional HS256 secret; when given the signature must match

    Raises:
        AuthenticationError: if the token is malformed or expired, the
            signature does not match, or no user id claim is present.
    """
    try:
        if secret:
            claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        else:
            claims = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": True},
            )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired bearer token")
        raise AuthenticationError("Invalid authorization token")
    except jwt.PyJWTError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise AuthenticationError("Invalid authorization token")

    user_id = claims.get("user_id") or claims.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise AuthenticationError("Invalid authorization token")

    return TokenPayload(user_id=user_id, claims=claims, verified=bool(secret))


def authenticate(authorization: Optional[str], secret: Optional[str] = None) -> str:
    """Resolve the user id for an Authorization header value."""
    token = extract_bearer_token(authorization)
    payload = decode_token(token, secret=secret)
    if not payload.verified:
        logger.warning("Accepted unverified bearer token for user %s", payload.user_id)
    return payload.user_id
