"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to gate a route on
a bearer token and hand the verified claims to the handler:

    Authorization: Bearer <jwt>

- no header (or not a Bearer header) → 401 MissingCredentialError
- token fails verification           → 403 InvalidCredentialError
- token ok                           → AuthClaims, also on request.state.claims

The gate is pure: it never reads the user table. Handlers that need the
user record load it themselves.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from kazi.auth.jwt import (
    AuthClaims,
    ExpiredTokenError,
    InvalidSignatureError,
    TokenIssuer,
)
from kazi.errors import ForbiddenError, InvalidCredentialError, MissingCredentialError

logger = structlog.get_logger()

_BEARER_PREFIX = "bearer "


def get_token_issuer(request: Request) -> TokenIssuer:
    """The issuer built at startup from Settings."""
    return request.app.state.token_issuer


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    if authorization[: len(_BEARER_PREFIX)].lower() != _BEARER_PREFIX:
        return None
    token = authorization[len(_BEARER_PREFIX):].strip()
    return token or None


async def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(None),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthClaims:
    """Require a valid bearer token and return its claims."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise MissingCredentialError("Access token required")

    try:
        claims = issuer.verify(token)
    except ExpiredTokenError:
        logger.info("auth.token_expired", path=request.url.path)
        raise InvalidCredentialError("Invalid or expired token", status_code=403)
    except InvalidSignatureError as e:
        logger.warning("auth.token_invalid", path=request.url.path, reason=str(e))
        raise InvalidCredentialError("Invalid or expired token", status_code=403)

    request.state.claims = claims
    structlog.contextvars.bind_contextvars(user_id=claims.subject_id)
    return claims


async def require_employer(
    claims: AuthClaims = Depends(get_current_claims),
) -> AuthClaims:
    """Like get_current_claims, but only employers get through (403 otherwise)."""
    if not claims.is_employer:
        raise ForbiddenError("Only employers can manage job postings")
    return claims
