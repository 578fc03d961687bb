# taskflow/services/tasks.py
"""
Task service.

CRUD over `Task`, scoped to the authenticated principal at every operation.
The principal is an explicit argument; nothing here reads request state.

Ownership policy:
- reads (`get_task`) hide other users' tasks behind NotFoundError
- writes (`update_task`, `delete_task`) answer AuthorizationError for a task
  that exists but belongs to someone else
"""
from __future__ import annotations

import datetime as dt
import uuid
from typing import Any

from tortoise.expressions import Q

from taskflow.core.errors import AuthorizationError, FieldError, NotFoundError, ValidationError
from taskflow.core.guard import Principal
from taskflow.models.task import Task, TaskStatus
from taskflow.schemas.common import iso_utc
from taskflow.schemas.task import TaskOut

TITLE_MAX = 200
DESCRIPTION_MAX = 1000

STATUS_MESSAGE = "Status must be not-started, in-progress, or completed"
INVALID_STATUS_FILTER = "Invalid status value. Must be not-started, in-progress, or completed"
TASK_NOT_FOUND = "Task not found"


def parse_due_date(value: str) -> dt.datetime:
    """
    Parse an ISO-8601 date or datetime and normalize it to UTC.
    Naive values are taken as UTC.

    Raises:
        ValueError: not ISO-8601
        OverflowError: the UTC instant falls outside the representable range
    """
    parsed = dt.datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)


def validate_task_fields(fields: dict[str, Any], partial: bool = False) -> dict[str, Any]:
    """
    Check task input and convert it to model attribute values.

    With `partial=False` (create) a title is required. With `partial=True`
    (update) only keys present in `fields` are checked and returned.

    Raises:
        ValidationError: one FieldError per violated constraint
    """
    errors: list[FieldError] = []
    clean: dict[str, Any] = {}

    if "title" in fields or not partial:
        title = fields.get("title")
        title = title.strip() if isinstance(title, str) else ""
        if not title:
            errors.append(FieldError("title", "Title cannot be empty" if partial else "Title is required"))
        elif len(title) > TITLE_MAX:
            errors.append(FieldError("title", f"Title cannot exceed {TITLE_MAX} characters"))
        else:
            clean["title"] = title

    if "description" in fields:
        description = fields["description"]
        if description is None:
            clean["description"] = None
        else:
            description = str(description).strip()
            if len(description) > DESCRIPTION_MAX:
                errors.append(FieldError("description", f"Description cannot exceed {DESCRIPTION_MAX} characters"))
            else:
                clean["description"] = description

    if "status" in fields:
        status = fields["status"]
        if status is None and not partial:
            clean["status"] = TaskStatus.NOT_STARTED
        elif status not in TaskStatus.values():
            errors.append(FieldError("status", STATUS_MESSAGE))
        else:
            clean["status"] = TaskStatus(status)
    elif not partial:
        clean["status"] = TaskStatus.NOT_STARTED

    if "dueDate" in fields:
        due = fields["dueDate"]
        if due is None:
            clean["due_date"] = None
        else:
            try:
                clean["due_date"] = parse_due_date(str(due))
            except (ValueError, OverflowError):
                errors.append(FieldError("dueDate", "Due date must be a valid date"))

    if errors:
        raise ValidationError(errors)
    return clean


def task_to_dict(t: Task) -> dict:
    """
    Convert Task model instance to dictionary format for API responses.
    """
    return TaskOut(
        id=str(t.id),
        title=t.title,
        description=t.description,
        status=TaskStatus(t.status).value,
        dueDate=iso_utc(t.due_date),
        owner=str(t.owner_id),
        createdAt=iso_utc(t.created_at),
        updatedAt=iso_utc(t.updated_at),
    ).model_dump()


def _parse_task_id(task_id: str | uuid.UUID) -> uuid.UUID:
    # A malformed id cannot name any task
    if isinstance(task_id, uuid.UUID):
        return task_id
    try:
        return uuid.UUID(str(task_id))
    except ValueError:
        raise NotFoundError(TASK_NOT_FOUND) from None


async def _get_for_write(principal: Principal, task_id: str | uuid.UUID, action: str) -> Task:
    task = await Task.get_or_none(id=_parse_task_id(task_id))
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    if str(task.owner_id) != str(principal.id):
        raise AuthorizationError(f"Not authorized to {action} this task")
    return task


async def create_task(principal: Principal, fields: dict[str, Any]) -> Task:
    """
    Create a task owned by the principal.
    Any owner supplied in `fields` is ignored.
    """
    clean = validate_task_fields(fields)
    return await Task.create(owner_id=principal.id, **clean)


async def list_tasks(
    principal: Principal,
    search: str | None = None,
    status: str | None = None,
) -> list[Task]:
    """
    List the principal's tasks, newest first.

    Args:
        search: keyword matched case-insensitively against title or description
        status: exact status; must be one of the TaskStatus values

    Raises:
        ValidationError: status is given but not a valid value
    """
    query = Task.filter(owner_id=principal.id)
    if status:
        if status not in TaskStatus.values():
            raise ValidationError.single("status", INVALID_STATUS_FILTER)
        query = query.filter(status=TaskStatus(status))
    if search:
        query = query.filter(Q(title__icontains=search) | Q(description__icontains=search))
    return await query.order_by("-created_at")


async def get_task(principal: Principal, task_id: str | uuid.UUID) -> Task:
    """
    Fetch one of the principal's tasks.
    Tasks owned by other users are reported exactly like missing ones.
    """
    task = await Task.get_or_none(id=_parse_task_id(task_id), owner_id=principal.id)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return task


async def update_task(principal: Principal, task_id: str | uuid.UUID, fields: dict[str, Any]) -> Task:
    """
    Apply a partial update. Only keys present in `fields` change;
    `updated_at` is refreshed on every call.
    """
    clean = validate_task_fields(fields, partial=True)
    task = await _get_for_write(principal, task_id, "update")
    for attr, value in clean.items():
        setattr(task, attr, value)
    await task.save()
    return task


async def delete_task(principal: Principal, task_id: str | uuid.UUID) -> None:
    """Permanently remove one of the principal's tasks."""
    task = await _get_for_write(principal, task_id, "delete")
    await task.delete()
