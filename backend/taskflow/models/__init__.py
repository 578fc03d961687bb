# taskflow/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Account and stored credentials
- Task: Task record owned by a user
- TaskStatus: Allowed task states
"""
from .user import User
from .task import Task, TaskStatus
