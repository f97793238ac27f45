"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
A token carries {sub, phone, role, iat, exp} signed with HS256 under the
server secret. Lifetime is a fixed 24 hours from issuance; there are no
refresh tokens and no revocation, so signing in again is the only way
to get a new token.

verify() checks the signature before anything else, then the expiry,
so a forged token is always reported as InvalidSignatureError even when
its exp is in the past.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

TOKEN_LIFETIME = timedelta(hours=24)

ROLES = ("employee", "employer")


class TokenError(Exception):
    """Raised when token verification fails."""


class InvalidSignatureError(TokenError):
    """Tampered, foreign-secret, malformed or incomplete token."""


class ExpiredTokenError(TokenError):
    """Correctly signed token past its expiry."""


@dataclass(frozen=True)
class AuthClaims:
    """Identity carried inside a verified token. Never persisted."""

    subject_id: str
    phone: str
    role: str
    issued_at: datetime
    expires_at: datetime

    @property
    def is_employer(self) -> bool:
        return self.role == "employer"


class TokenIssuer:
    """Signs and verifies tokens with one shared secret.

    Built once at startup from Settings and kept on app.state.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm

    def issue(
        self,
        subject_id: str,
        phone: str,
        role: str,
        now: Optional[datetime] = None,
    ) -> str:
        """Create a signed token valid for TOKEN_LIFETIME from `now`."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "phone": phone,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + TOKEN_LIFETIME,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> AuthClaims:
        """Verify signature, then expiry, and return the claims.

        Raises InvalidSignatureError or ExpiredTokenError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["sub", "exp", "iat"],
                    # Expiry is checked below, after the signature has passed.
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as e:
            raise InvalidSignatureError(f"Invalid token: {e}") from e

        phone = payload.get("phone")
        role = payload.get("role")
        if not isinstance(phone, str) or role not in ROLES:
            raise InvalidSignatureError("Invalid token: unexpected claims")

        try:
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidSignatureError("Invalid token: bad timestamps") from e

        current = now or datetime.now(timezone.utc)
        if current >= expires_at:
            raise ExpiredTokenError("Token has expired")

        return AuthClaims(
            subject_id=payload["sub"],
            phone=phone,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )
