"""Error taxonomy shared by services and routes.

Learn: Services raise these instead of HTTPException so business logic
stays HTTP-agnostic. main.py registers one handler for KaziError that
turns any of them into {"success": false, "error": <message>} with the
class's status_code.
"""

from typing import Optional


class KaziError(Exception):
    """Root of all expected, caller-facing errors."""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.headers = headers

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


class ValidationError(KaziError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(KaziError):
    """Uniqueness violation (phone already registered, duplicate application)."""

    status_code = 409


class NotFoundError(KaziError):
    status_code = 404


class MissingCredentialError(KaziError):
    """No bearer token on a route that needs one."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentialError(KaziError):
    """Wrong password, or a token that failed verification.

    Sign-in reports it as 401; the bearer gate raises it with 403.
    """

    status_code = 401


class ForbiddenError(KaziError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 403


class ServerError(KaziError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
