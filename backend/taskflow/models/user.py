# taskflow/models/user.py
"""
Database model for users.
Represents a registered account: profile information and the stored
password hash. Instances of this model are never serialized directly;
`CredentialStore.to_public` builds the outward-facing projection.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Tasks (one-to-many, via related_name="tasks")

    Security:
    - Password is stored as an argon2 hash (never store plain text passwords)
    - Email is stored lowercased and is unique at the database level
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=100)  # Display name
    email = fields.CharField(
        max_length=254,
        unique=True,
        index=True
    )  # Login identifier (normalized to lowercase before storage)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never the plain password
    created_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created (auto-set on creation)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
