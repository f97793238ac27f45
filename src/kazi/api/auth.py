"""Auth API — sign-up, sign-in, profile and password.

Learn: Routes for the user account lifecycle:
- POST /auth/signup      → create account, returns token + user
- POST /auth/signin      → phone/password → token + user
- POST /auth/check-phone → is this phone registered?
- GET  /auth/me          → current user (bearer token)
- PUT  /auth/profile     → partial profile update (bearer token)
- PUT  /auth/password    → change password (bearer token)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.auth.dependencies import get_current_claims, get_token_issuer
from kazi.auth.jwt import AuthClaims, TokenIssuer
from kazi.db.engine import get_db
from kazi.schemas.auth import (
    AuthResponse,
    CheckPhoneRequest,
    PasswordChange,
    PhoneExistsResponse,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
)
from kazi.schemas.common import AckResponse
from kazi.schemas.user import UserRead, UserResponse
from kazi.services.auth_service import AuthResult, AuthService
from kazi.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(UserService(db), issuer)


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=UserRead.model_validate(result.user))


# ─── Sign-up / sign-in ──────────────────────────────────


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(body: SignUpRequest, svc: AuthService = Depends(_svc)):
    """Register an employee or employer and log them straight in."""
    result = await svc.sign_up(
        name=body.name,
        phone=body.phone,
        location=body.location,
        password=body.password,
        role=body.role,
        specialization=body.specialization,
        job_type=body.job_type,
    )
    return _auth_response(result)


@router.post("/signin", response_model=AuthResponse)
async def signin(body: SignInRequest, svc: AuthService = Depends(_svc)):
    result = await svc.sign_in(phone=body.phone, password=body.password)
    return _auth_response(result)


@router.post("/check-phone", response_model=PhoneExistsResponse)
async def check_phone(body: CheckPhoneRequest, svc: AuthService = Depends(_svc)):
    return PhoneExistsResponse(exists=await svc.phone_exists(body.phone))


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserResponse)
async def get_me(
    claims: AuthClaims = Depends(get_current_claims),
    svc: AuthService = Depends(_svc),
):
    user = await svc.get_user(claims.subject_id)
    return UserResponse(user=UserRead.model_validate(user))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdate,
    claims: AuthClaims = Depends(get_current_claims),
    svc: AuthService = Depends(_svc),
):
    user = await svc.update_profile(
        claims.subject_id,
        name=body.name,
        location=body.location,
        specialization=body.specialization,
        job_type=body.job_type,
    )
    return UserResponse(user=UserRead.model_validate(user))


@router.put("/password", response_model=AckResponse)
async def change_password(
    body: PasswordChange,
    claims: AuthClaims = Depends(get_current_claims),
    svc: AuthService = Depends(_svc),
):
    await svc.change_password(
        claims.subject_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    return AckResponse(message="Password updated successfully")
