"""Auth service — sign-up, sign-in and credential changes.

Learn: The lifecycle of a user record is Unregistered → Registered.
Every entry point normalizes the phone before touching the store.

Sign-in answers "unknown phone" and "wrong password" with the same
InvalidCredentialError, so a caller can't probe which phones are
registered. The real reason only goes to the log.

Known gap: tokens are not tied to the password. Changing the password
or the profile leaves already-issued tokens valid until they expire.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import structlog

from kazi.auth.jwt import TokenIssuer
from kazi.auth.password import hash_password, verify_password
from kazi.db.models import User
from kazi.errors import ConflictError, InvalidCredentialError, NotFoundError, ValidationError
from kazi.logging_config import mask_phone
from kazi.phone import normalize_phone
from kazi.services.user_service import UserService

logger = structlog.get_logger()

SIGNIN_FAILED = "Invalid phone number or password"


@dataclass
class AuthResult:
    token: str
    user: User


class AuthService:
    """Business logic for registration and authentication."""

    def __init__(self, users: UserService, issuer: TokenIssuer):
        self.users = users
        self.issuer = issuer

    def _issue(self, user: User) -> str:
        return self.issuer.issue(str(user.id), user.phone, user.role)

    # ─── Sign-up ────────────────────────────────────────

    async def sign_up(
        self,
        name: str,
        phone: str,
        location: str,
        password: str,
        role: str,
        specialization: Optional[str] = None,
        job_type: Optional[str] = None,
    ) -> AuthResult:
        if not all([name, phone, location, password, role]):
            raise ValidationError("All fields are required")
        if role not in ("employee", "employer"):
            raise ValidationError("Role must be 'employee' or 'employer'")

        clean_phone = normalize_phone(phone)
        if not clean_phone:
            raise ValidationError("Phone number must contain digits")

        if await self.users.phone_exists(clean_phone):
            logger.info("auth.signup_conflict", phone=mask_phone(clean_phone))
            raise ConflictError("User already exists with this phone number")

        user = User(
            name=name,
            phone=clean_phone,
            location=location,
            password_hash=hash_password(password),
            role=role,
            specialization=(specialization or "") if role == "employee" else "",
            job_type=(job_type or "") if role == "employer" else "",
        )
        user = await self.users.add(user)

        logger.info(
            "auth.signup",
            user_id=str(user.id),
            role=user.role,
            phone=mask_phone(user.phone),
        )
        return AuthResult(token=self._issue(user), user=user)

    # ─── Sign-in ────────────────────────────────────────

    async def sign_in(self, phone: str, password: str) -> AuthResult:
        if not phone or not password:
            raise ValidationError("Phone and password are required")

        clean_phone = normalize_phone(phone)
        user = await self.users.get_by_phone(clean_phone) if clean_phone else None
        if user is None:
            logger.info(
                "auth.signin_failed", reason="unknown_phone", phone=mask_phone(clean_phone)
            )
            raise InvalidCredentialError(SIGNIN_FAILED)

        if not verify_password(password, user.password_hash):
            logger.info(
                "auth.signin_failed", reason="bad_password", user_id=str(user.id)
            )
            raise InvalidCredentialError(SIGNIN_FAILED)

        user.last_login = datetime.now(timezone.utc)
        user = await self.users.save(user)

        logger.info("auth.signin", user_id=str(user.id), role=user.role)
        return AuthResult(token=self._issue(user), user=user)

    async def phone_exists(self, phone: Optional[str]) -> bool:
        clean_phone = normalize_phone(phone)
        if not clean_phone:
            return False
        return await self.users.phone_exists(clean_phone)

    # ─── Authenticated account changes ──────────────────

    async def get_user(self, user_id: str) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
        specialization: Optional[str] = None,
        job_type: Optional[str] = None,
    ) -> User:
        """Apply a partial profile update. role and phone never change here."""
        user = await self.get_user(user_id)

        if name is not None:
            user.name = name
        if location is not None:
            user.location = location
        if specialization is not None and user.role == "employee":
            user.specialization = specialization
        if job_type is not None and user.role == "employer":
            user.job_type = job_type

        user = await self.users.save(user)
        logger.info("auth.profile_updated", user_id=str(user.id))
        return user

    async def change_password(
        self, user_id: str, current_password: str, new_password: str
    ) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current and new password are required")

        user = await self.get_user(user_id)
        if not verify_password(current_password, user.password_hash):
            logger.info("auth.password_change_failed", user_id=str(user.id))
            raise InvalidCredentialError("Current password is incorrect")

        user.password_hash = hash_password(new_password)
        await self.users.save(user)
        logger.info("auth.password_changed", user_id=str(user.id))
