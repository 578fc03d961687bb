# taskflow/api/v1/deps.py
from fastapi import Header, Request
from taskflow.config import settings
from taskflow.core.guard import Principal, auth_guard

def extract_token(request: Request, authorization: str | None) -> str | None:
    """
    Find the bearer token for a request.

    Looks in:
    1. HttpOnly cookie (`token`) - set by register/login
    2. Authorization header (Bearer token) - for non-browser clients
    """
    token = request.cookies.get(settings.cookie_name)
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    return token or None

async def get_principal(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Principal:
    """
    FastAPI dependency resolving the authenticated principal.

    Returns:
        Principal: id, name and email of the caller (no credential material)

    Raises:
        AuthenticationError (401): no token, invalid or expired token, or user not found

    Usage:
        @router.get("/protected")
        async def protected_route(principal: Principal = Depends(get_principal)):
            return {"user_id": str(principal.id)}
    """
    return await auth_guard.authenticate(extract_token(request, authorization))
