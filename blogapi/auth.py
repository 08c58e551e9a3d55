"""
Blog API Backend: Identity Extractor
=====================================

What:  Resolves the acting user's id from the request's bearer credential.
How:   Reads the Authorization header, strips the "Bearer" scheme, decodes
       the JWT with python-jose and returns the integer value of the user id
       claim (by default the first claim in the payload).
Who:   `get_current_user_id` is injected into the mutating post routes via
       FastAPI's Depends(); services receive a plain int.

Verification:
    With `settings.jwt_verify_signature` on (the default) the signature and
    `exp` are checked against `settings.jwt_secret_key`. Turning it off reads
    the claims unverified, for deployments where an upstream gateway has
    already verified the token.

Failure modes:
    Missing header, wrong scheme, undecodable token, bad signature, expired
    token, missing claim or non-integer claim all raise AuthenticationError,
    which the global handler turns into a 401 envelope.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from jose import JWTError, jwt

from blogapi.config import settings
from blogapi.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token part of an `Authorization: Bearer <token>` header value."""
    if not authorization or not authorization.strip():
        raise AuthenticationError("missing authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise AuthenticationError("malformed authorization header")
    return parts[1]


def decode_token(token: str) -> Dict[str, Any]:
    """Decode a JWT into its claims, verifying it unless configured otherwise."""
    try:
        if settings.jwt_verify_signature:
            return jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
                options={"verify_aud": False, "verify_sub": False},
            )
        return jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise AuthenticationError("invalid token", context={"error": str(exc)}) from exc


def user_id_from_claims(claims: Dict[str, Any], claim_name: Optional[str] = None) -> int:
    """
    Pick the user id claim and coerce it to int.

    Without `claim_name` the first claim in payload order is used; the
    identity service writes the user id first when it issues tokens.
    """
    if not claims:
        raise AuthenticationError("token has no claims")

    if claim_name is None:
        value = next(iter(claims.values()))
    elif claim_name in claims:
        value = claims[claim_name]
    else:
        raise AuthenticationError("user id claim missing", context={"claim": claim_name})

    # bool is an int subclass; a true/false claim is not a user id
    if isinstance(value, bool):
        raise AuthenticationError("user id claim is not an integer")
    # 7.0 is accepted, 7.9 is not
    if isinstance(value, float) and not value.is_integer():
        raise AuthenticationError("user id claim is not an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("user id claim is not an integer") from exc


def resolve_user_id(authorization: Optional[str]) -> int:
    """Full pipeline from raw header value to acting user id."""
    token = extract_bearer_token(authorization)
    claims = decode_token(token)
    return user_id_from_claims(claims, settings.jwt_user_id_claim)


async def get_current_user_id(request: Request) -> int:
    """
    FastAPI dependency returning the authenticated user's id.

    Example usage in a route:
        @router.post("/posts")
        async def create_post(user_id: int = Depends(get_current_user_id)):
            ...
    """
    try:
        user_id = resolve_user_id(request.headers.get("Authorization"))
    except AuthenticationError as exc:
        logger.warning(
            "Authentication failed for %s %s: %s",
            request.method,
            request.url.path,
            exc.reason,
        )
        raise
    request.state.user_id = user_id
    return user_id
