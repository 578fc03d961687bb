# taskflow/services/credentials.py
"""
Credential store.

Persists user accounts and owns every operation that touches the stored
password hash: hashing on creation, verification on login. Nothing outside
this module reads `User.password_hash`; callers that need to show a user get
a `PublicUser`, which has no password field at all.
"""
from __future__ import annotations

import logging
import re
import uuid

from tortoise.exceptions import IntegrityError

from taskflow.core.errors import DuplicateKeyError, FieldError, ValidationError
from taskflow.core.security import dummy_verify, hash_password, verify_password
from taskflow.models.user import User
from taskflow.schemas.auth import PublicUser
from taskflow.schemas.common import iso_utc

logger = logging.getLogger("uvicorn.error")

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
NAME_MAX = 100
PASSWORD_MIN = 6

EMAIL_IN_USE = "Email is already in use"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _name_errors(name: str | None, required: bool) -> list[FieldError]:
    if name is None and not required:
        return []
    name = (name or "").strip()
    if not name:
        return [FieldError("name", "Name is required")]
    if len(name) > NAME_MAX:
        return [FieldError("name", f"Name cannot exceed {NAME_MAX} characters")]
    return []


def _email_errors(email: str | None, required: bool) -> list[FieldError]:
    if email is None and not required:
        return []
    email = normalize_email(email)
    if not email:
        return [FieldError("email", "Email is required")]
    if not EMAIL_RE.match(email):
        return [FieldError("email", "Please provide a valid email address")]
    return []


def _password_errors(password: str | None) -> list[FieldError]:
    if not password:
        return [FieldError("password", "Password is required")]
    if len(password) < PASSWORD_MIN:
        return [FieldError("password", f"Password must be at least {PASSWORD_MIN} characters")]
    return []


def _parse_user_id(user_id: str | uuid.UUID) -> uuid.UUID | None:
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        return None


class CredentialStore:
    """Account persistence and password verification."""

    async def create(self, name: str, email: str, password: str) -> User:
        """
        Register a new account.

        Raises:
            ValidationError: name/email/password violate shape constraints (one entry per field)
            DuplicateKeyError: email is already registered
        """
        errors = _name_errors(name, required=True) + _email_errors(email, required=True) + _password_errors(password)
        if errors:
            raise ValidationError(errors)

        password_hash = hash_password(password)
        try:
            user = await User.create(
                name=name.strip(),
                email=normalize_email(email),
                password_hash=password_hash,
            )
        except IntegrityError as exc:
            raise DuplicateKeyError("email", EMAIL_IN_USE) from exc
        logger.info("[auth] registered user id=%s", user.id)
        return user

    async def verify(self, email: str, password: str) -> User | None:
        """
        Check a login attempt.

        Returns the user when the password matches its stored hash, otherwise None.
        Unknown emails still pay for a hash verification so the two failure cases
        take the same time.
        """
        user = await User.get_or_none(email=normalize_email(email))
        if user is None:
            dummy_verify()
            return None
        if not verify_password(password or "", user.password_hash):
            return None
        return user

    async def get(self, user_id: str | uuid.UUID) -> User | None:
        """Look up a user by id; malformed ids resolve to None."""
        uid = _parse_user_id(user_id)
        if uid is None:
            return None
        return await User.get_or_none(id=uid)

    async def update_profile(
        self,
        user: User,
        name: str | None = None,
        email: str | None = None,
    ) -> User:
        """
        Change name and/or email. The password is never touched here.

        Raises:
            ValidationError: supplied fields violate shape constraints
            DuplicateKeyError: email belongs to another account
        """
        errors = _name_errors(name, required=False) + _email_errors(email, required=False)
        if errors:
            raise ValidationError(errors)

        if name is not None:
            user.name = name.strip()
        if email is not None:
            user.email = normalize_email(email)
        try:
            await user.save()
        except IntegrityError as exc:
            raise DuplicateKeyError("email", EMAIL_IN_USE) from exc
        return user

    @staticmethod
    def to_public(user: User) -> PublicUser:
        """Projection handed to serializers; it has no password attribute."""
        return PublicUser(
            id=str(user.id),
            name=user.name,
            email=user.email,
            createdAt=iso_utc(user.created_at),
        )


credential_store = CredentialStore()
