# taskflow/schemas/task.py
"""
Pydantic schemas for task endpoints.
Request models accept loosely typed values; `taskflow.services.tasks`
validates them so that direct service callers get the same rules as HTTP
clients.
"""
from typing import Optional

from pydantic import BaseModel

class TaskCreateIn(BaseModel):
    """
    Request model for task creation.
    """
    title: Optional[str] = None  # Required; checked by the task service for a field-tagged error
    description: Optional[str] = None
    status: Optional[str] = None  # not-started | in-progress | completed (default not-started)
    dueDate: Optional[str] = None  # ISO-8601 date or datetime

class TaskUpdateIn(BaseModel):
    """
    Request model for partial task updates.
    Only keys present in the request body are applied.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    dueDate: Optional[str] = None

class TaskOut(BaseModel):
    """
    Task representation returned to clients.
    """
    id: str  # Task unique identifier
    title: str
    description: Optional[str] = None
    status: str
    dueDate: Optional[str] = None  # ISO format
    owner: str  # Owning user id
    createdAt: str  # ISO format
    updatedAt: str  # ISO format
