# taskflow/models/task.py
"""
Database model for tasks.
A task is a personal to-do record owned by exactly one user. The owner is
set once at creation from the authenticated principal and never changes.
"""
import enum
import uuid
from tortoise import fields, models


class TaskStatus(str, enum.Enum):
    """Closed set of task states."""
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class Task(models.Model):
    """
    Task database model.

    Relationships:
    - Belongs to a User (many-to-one); cascade delete with the owner
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique task identifier
    owner = fields.ForeignKeyField(
        "models.User",
        related_name="tasks",
        on_delete=fields.CASCADE
    )  # Owning user; immutable after creation
    title = fields.CharField(max_length=200)
    description = fields.CharField(max_length=1000, null=True)
    status = fields.CharEnumField(TaskStatus, max_length=16, default=TaskStatus.NOT_STARTED)
    due_date = fields.DatetimeField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)  # Refreshed on every save

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "tasks"
        indexes = (("owner_id", "status"),)  # Filtered list queries
