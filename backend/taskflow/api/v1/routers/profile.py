# taskflow/api/v1/routers/profile.py
from fastapi import APIRouter, Depends

from taskflow.api.v1.deps import get_principal
from taskflow.core.errors import AuthenticationError
from taskflow.core.guard import USER_NOT_FOUND, Principal
from taskflow.schemas.auth import ProfileUpdateRequest
from taskflow.schemas.common import ok
from taskflow.services.credentials import credential_store

router = APIRouter(prefix="/profile", tags=["profile"])


async def _load_user(principal: Principal):
    user = await credential_store.get(principal.id)
    if user is None:
        # Deleted between the guard and this lookup
        raise AuthenticationError(USER_NOT_FOUND)
    return user


@router.get("")
async def get_profile(principal: Principal = Depends(get_principal)):
    """
    Get the authenticated user's profile.

    Returns:
        dict: {success, data: {user: {id, name, email, createdAt}}}
    """
    user = await _load_user(principal)
    return ok({"user": credential_store.to_public(user).model_dump()})


@router.put("")
async def update_profile(body: ProfileUpdateRequest, principal: Principal = Depends(get_principal)):
    """
    Update name and/or email of the authenticated user.

    Errors:
        400: invalid name/email, or email already used by another account
    """
    user = await _load_user(principal)
    fields = body.model_dump(exclude_unset=True)
    user = await credential_store.update_profile(user, name=fields.get("name"), email=fields.get("email"))
    return ok({"user": credential_store.to_public(user).model_dump()}, message="Profile updated successfully")
