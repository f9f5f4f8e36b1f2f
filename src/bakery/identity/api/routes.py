"""FastAPI endpoints for accounts and sign-in."""

import hmac

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from bakery.errors import InvalidInput, Unauthorized
from bakery.identity.api.schemas import (
    AdminTokenResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    TokenResponse,
    UserSummary,
)
from bakery.identity.email import is_valid_email
from bakery.identity.passwords import check_password_strength
from bakery.identity.registration import RegisterUser
from bakery.identity.tokens import ADMIN_SUBJECT
from bakery.identity.user import User
from bakery.shared.dependencies import get_current_user, get_services

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=TokenResponse, response_model_exclude_none=True)
async def register(body: RegisterRequest, services=Depends(get_services)) -> TokenResponse:
    email = body.email.strip().lower()
    if not is_valid_email(email):
        raise InvalidInput("Please enter a valid email")
    if current_domain.repository_for(User).find_by_email(email) is not None:
        raise InvalidInput("User already exists")
    check_password_strength(body.password)

    command = RegisterUser(
        name=body.name,
        email=email,
        password_hash=services.passwords.hash(body.password),
    )
    user_id = current_domain.process(command, asynchronous=False)
    return TokenResponse(token=services.tokens.issue(user_id))


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, services=Depends(get_services)) -> TokenResponse:
    user = current_domain.repository_for(User).find_by_email(body.email.strip().lower())
    if user is None:
        raise Unauthorized("User doesn't exist")

    if not services.passwords.verify(body.password, user.password_hash):
        raise Unauthorized("Invalid Credentials")

    return TokenResponse(token=services.tokens.issue(str(user.id)), user=UserSummary.of(user))


@router.post("/admin", response_model=AdminTokenResponse)
async def admin_login(body: LoginRequest, services=Depends(get_services)) -> AdminTokenResponse:
    settings = services.settings
    if not settings.admin_email or not settings.admin_password:
        raise Unauthorized("Invalid admin credentials")

    email_ok = hmac.compare_digest(body.email.encode("utf-8"), settings.admin_email.encode("utf-8"))
    password_ok = hmac.compare_digest(body.password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    if not (email_ok and password_ok):
        raise Unauthorized("Invalid admin credentials")

    token = services.tokens.issue(ADMIN_SUBJECT, is_admin=True, email=settings.admin_email)
    return AdminTokenResponse(
        token=token,
        user=UserSummary(id=ADMIN_SUBJECT, name="Admin", email=settings.admin_email),
    )


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserSummary.of(user))
