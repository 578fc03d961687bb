# taskflow/api/v1/routers/auth.py
import logging

from fastapi import APIRouter, Response, status

from taskflow.config import settings
from taskflow.core.errors import AuthenticationError, FieldError, ValidationError
from taskflow.core.security import ACCESS_TOKEN_MAX_AGE, create_access_token
from taskflow.schemas.auth import LoginRequest, RegisterRequest
from taskflow.schemas.common import ok
from taskflow.services.credentials import credential_store

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


def _set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=ACCESS_TOKEN_MAX_AGE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, response: Response):
    """
    Register a new user account.

    Creates the account, issues an access token and sets it as the
    HttpOnly `token` cookie so the client is logged in straight away.

    Returns:
        dict: {success, message, data: {user, accessToken}}

    Errors:
        400: name/email/password invalid, or email already registered
    """
    user = await credential_store.create(body.name, body.email, body.password)
    token = create_access_token(str(user.id))
    _set_token_cookie(response, token)
    return ok(
        {"user": credential_store.to_public(user).model_dump(), "accessToken": token},
        message="User registered successfully",
    )


@router.post("/login")
async def login(body: LoginRequest, response: Response):
    """
    Authenticate user and create access token.

    Unknown email and wrong password produce the same 401 response.

    Returns:
        dict: {success, message, data: {user, accessToken}}
    """
    errors = []
    if not body.email.strip():
        errors.append(FieldError("email", "Email is required"))
    if not body.password:
        errors.append(FieldError("password", "Password is required"))
    if errors:
        raise ValidationError(errors)

    user = await credential_store.verify(body.email, body.password)
    if user is None:
        raise AuthenticationError(INVALID_CREDENTIALS)
    token = create_access_token(str(user.id))
    _set_token_cookie(response, token)
    logger.info("[auth] login user id=%s", user.id)
    return ok(
        {"user": credential_store.to_public(user).model_dump(), "accessToken": token},
        message="Login successful",
    )


@router.post("/logout")
async def logout(response: Response):
    """
    Clear the token cookie.

    The token itself stays valid until it expires; there is no server-side
    revocation.
    """
    response.delete_cookie(settings.cookie_name, httponly=True, samesite="strict")
    return ok(message="Logged out successfully")
