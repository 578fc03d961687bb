# taskflow/schemas/auth.py
"""
Pydantic schemas for authentication and profile endpoints.
Shape constraints (lengths, email format) are enforced by the credential
store, so request models here only describe which keys are accepted.
"""
from typing import Optional

from pydantic import BaseModel

class RegisterRequest(BaseModel):
    """
    Request model for account registration.
    """
    name: str = ""
    email: str = ""
    password: str = ""  # Plain text, hashed server-side before storage

class LoginRequest(BaseModel):
    """
    Request model for user login endpoint.
    """
    email: str = ""
    password: str = ""

class ProfileUpdateRequest(BaseModel):
    """
    Request model for profile updates. Omitted fields are left unchanged.
    """
    name: Optional[str] = None
    email: Optional[str] = None

class PublicUser(BaseModel):
    """
    User information safe to return to clients.
    Deliberately has no password field: there is nothing to leak.
    """
    id: str  # User unique identifier
    name: str  # Display name
    email: str  # Normalized (lowercase) email
    createdAt: Optional[str] = None  # Account creation timestamp (ISO format)
