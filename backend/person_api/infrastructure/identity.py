"""Caller Identity — bearer JWT encoding/decoding into CallerIdentity.

Invariants:
    - decode_access_token returns a CallerIdentity or raises AuthenticationError
    - `sub` must be the integer id of a person (string-encoded per RFC 7519)
    - aud/iss enforced only when configured

Design Decisions:
    - PyJWT over hand-rolled HMAC: signature, exp and aud/iss checks handled by the library
    - create_access_token exists for operators and tests; no login flow in this service
"""

import time
from typing import Any

import jwt
from jwt.exceptions import InvalidTokenError

from person_api.config import Settings
from person_api.core.domain_types import CallerIdentity, PersonId
from person_api.core.errors import AuthenticationError


def create_access_token(
    person_id: int, settings: Settings, email: str | None = None,
    ttl_seconds: int | None = None,
) -> str:
    """Mint a signed token whose `sub` is the person id."""
    issued_at = int(time.time())
    payload: dict[str, Any] = {
        "sub": str(person_id),
        "iat": issued_at,
        "exp": issued_at + (ttl_seconds or settings.access_token_ttl_seconds),
    }
    if email:
        payload["email"] = email
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    return jwt.encode(
        payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, settings: Settings) -> CallerIdentity:
    """Verify the token and resolve the caller it names."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"require": ["sub", "exp"]},
        )
    except InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}") from e

    try:
        subject_id = PersonId(int(payload["sub"]))
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Token subject is not a person id") from e
    return CallerIdentity(subject_id=subject_id, email=payload.get("email"))
