# taskflow/api/v1/routers/tasks.py
from fastapi import APIRouter, Depends, Query, status

from taskflow.api.v1.deps import get_principal
from taskflow.core.guard import Principal
from taskflow.schemas.common import ok
from taskflow.schemas.task import TaskCreateIn, TaskUpdateIn
from taskflow.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(body: TaskCreateIn, principal: Principal = Depends(get_principal)):
    """
    Create a task owned by the authenticated user.

    Returns:
        dict: {success, message, data: {task}}

    Errors:
        400: title missing/too long, description too long, unknown status, bad dueDate
        401: not authenticated
    """
    task = await task_service.create_task(principal, body.model_dump(exclude_unset=True))
    return ok({"task": task_service.task_to_dict(task)}, message="Task created successfully")


@router.get("")
async def list_tasks(
    principal: Principal = Depends(get_principal),
    search: str | None = Query(default=None, description="Keyword matched against title or description"),
    status_: str | None = Query(default=None, alias="status", description="not-started | in-progress | completed"),
):
    """
    List the authenticated user's tasks, newest first.

    Returns:
        dict: {success, data: {count, tasks}}

    Errors:
        400: status is not a valid value
    """
    rows = await task_service.list_tasks(principal, search=search, status=status_)
    items = [task_service.task_to_dict(t) for t in rows]
    return ok({"count": len(items), "tasks": items})


@router.get("/{task_id}")
async def get_task(task_id: str, principal: Principal = Depends(get_principal)):
    """
    Get one task. Other users' tasks answer 404, like missing ones.
    """
    task = await task_service.get_task(principal, task_id)
    return ok({"task": task_service.task_to_dict(task)})


@router.put("/{task_id}")
async def update_task(task_id: str, body: TaskUpdateIn, principal: Principal = Depends(get_principal)):
    """
    Partially update a task; only fields present in the body change.

    Errors:
        400: invalid field values
        403: task belongs to another user
        404: task does not exist
    """
    task = await task_service.update_task(principal, task_id, body.model_dump(exclude_unset=True))
    return ok({"task": task_service.task_to_dict(task)}, message="Task updated successfully")


@router.delete("/{task_id}")
async def delete_task(task_id: str, principal: Principal = Depends(get_principal)):
    """
    Permanently delete a task.

    Errors:
        403: task belongs to another user
        404: task does not exist (including a second delete)
    """
    await task_service.delete_task(principal, task_id)
    return ok(message="Task deleted successfully")
