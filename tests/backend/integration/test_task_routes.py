import asyncio
import uuid

import pytest

from taskflow.core.security import verify_password
from taskflow.models.user import User


pytestmark = pytest.mark.asyncio


async def _create(client, headers, **fields):
    resp = await client.post("/api/v1/tasks", headers=headers, json=fields)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["task"]


async def test_full_task_crud_flow(client, auth_header_factory):
    headers, user_id = await auth_header_factory()

    list_resp = await client.get("/api/v1/tasks", headers=headers)
    assert list_resp.status_code == 200
    assert list_resp.json()["data"] == {"count": 0, "tasks": []}

    task = await _create(client, headers, title="Initial title", dueDate="2030-01-15")
    assert task["owner"] == user_id
    assert task["status"] == "not-started"
    assert task["description"] is None
    assert task["dueDate"].startswith("2030-01-15")
    assert set(task) == {"id", "title", "description", "status", "dueDate", "owner", "createdAt", "updatedAt"}

    detail_resp = await client.get(f"/api/v1/tasks/{task['id']}", headers=headers)
    assert detail_resp.status_code == 200
    assert detail_resp.json()["data"]["task"]["title"] == "Initial title"

    update_resp = await client.put(
        f"/api/v1/tasks/{task['id']}",
        headers=headers,
        json={"status": "completed"},
    )
    updated = update_resp.json()["data"]["task"]
    assert update_resp.status_code == 200
    assert updated["status"] == "completed"
    assert updated["title"] == "Initial title"

    delete_resp = await client.delete(f"/api/v1/tasks/{task['id']}", headers=headers)
    assert delete_resp.status_code == 200
    assert delete_resp.json() == {"success": True, "message": "Task deleted successfully"}

    missing_resp = await client.get(f"/api/v1/tasks/{task['id']}", headers=headers)
    assert missing_resp.status_code == 404

    second_delete = await client.delete(f"/api/v1/tasks/{task['id']}", headers=headers)
    assert second_delete.status_code == 404
    assert second_delete.json()["message"] == "Task not found"


async def test_read_write_asymmetry_between_users(client, auth_header_factory):
    headers_a, _ = await auth_header_factory()
    headers_b, _ = await auth_header_factory()
    task = await _create(client, headers_a, title="A's task")

    get_resp = await client.get(f"/api/v1/tasks/{task['id']}", headers=headers_b)
    assert get_resp.status_code == 404
    assert get_resp.json()["message"] == "Task not found"

    put_resp = await client.put(f"/api/v1/tasks/{task['id']}", headers=headers_b, json={"title": "mine now"})
    assert put_resp.status_code == 403

    delete_resp = await client.delete(f"/api/v1/tasks/{task['id']}", headers=headers_b)
    assert delete_resp.status_code == 403

    still_there = await client.get(f"/api/v1/tasks/{task['id']}", headers=headers_a)
    assert still_there.json()["data"]["task"]["title"] == "A's task"


async def test_list_isolated_per_user(client, auth_header_factory):
    headers_a, user_a = await auth_header_factory()
    headers_b, user_b = await auth_header_factory()
    await _create(client, headers_a, title="A1")
    await _create(client, headers_a, title="A2")
    await _create(client, headers_b, title="B1")

    tasks_a = (await client.get("/api/v1/tasks", headers=headers_a)).json()["data"]["tasks"]
    tasks_b = (await client.get("/api/v1/tasks", headers=headers_b)).json()["data"]["tasks"]
    assert {t["owner"] for t in tasks_a} == {user_a}
    assert {t["owner"] for t in tasks_b} == {user_b}
    assert len(tasks_a) == 2 and len(tasks_b) == 1


async def test_search_and_status_filters(client, auth_header_factory):
    headers, _ = await auth_header_factory()
    await _create(client, headers, title="Foo report", status="completed")
    await _create(client, headers, title="Groceries", description="buy FOOd", status="in-progress")
    await _create(client, headers, title="Gym", status="completed")

    def titles(resp):
        return {t["title"] for t in resp.json()["data"]["tasks"]}

    by_status = await client.get("/api/v1/tasks", headers=headers, params={"status": "completed"})
    assert titles(by_status) == {"Foo report", "Gym"}

    by_search = await client.get("/api/v1/tasks", headers=headers, params={"search": "foo"})
    assert titles(by_search) == {"Foo report", "Groceries"}

    both = await client.get("/api/v1/tasks", headers=headers, params={"search": "foo", "status": "completed"})
    assert titles(both) == {"Foo report"}
    assert both.json()["data"]["count"] == 1


async def test_invalid_status_rejected_everywhere(client, auth_header_factory):
    headers, _ = await auth_header_factory()

    create_resp = await client.post("/api/v1/tasks", headers=headers, json={"title": "t", "status": "todo"})
    assert create_resp.status_code == 400
    assert create_resp.json()["errors"][0]["field"] == "status"

    task = await _create(client, headers, title="t")
    update_resp = await client.put(f"/api/v1/tasks/{task['id']}", headers=headers, json={"status": "archived"})
    assert update_resp.status_code == 400

    list_resp = await client.get("/api/v1/tasks", headers=headers, params={"status": "todo"})
    assert list_resp.status_code == 400
    assert list_resp.json()["errors"] == [
        {"field": "status", "message": "Invalid status value. Must be not-started, in-progress, or completed"}
    ]


async def test_create_validation_errors_are_field_tagged(client, auth_header_factory):
    headers, _ = await auth_header_factory()
    resp = await client.post(
        "/api/v1/tasks",
        headers=headers,
        json={"description": "d" * 1001, "dueDate": "not a date"},
    )
    body = resp.json()
    assert resp.status_code == 400
    assert body["success"] is False
    assert {e["field"] for e in body["errors"]} == {"title", "description", "dueDate"}


async def test_due_date_beyond_utc_range_is_400(client, auth_header_factory):
    headers, _ = await auth_header_factory()
    resp = await client.post("/api/v1/tasks", headers=headers, json={"title": "t", "dueDate": "9999-12-31T23:59:59-05:00"})
    assert resp.status_code == 400
    assert resp.json()["errors"] == [{"field": "dueDate", "message": "Due date must be a valid date"}]
    assert (await client.get("/api/v1/tasks", headers=headers)).json()["data"]["count"] == 0


async def test_owner_in_body_is_ignored(client, auth_header_factory):
    headers_a, user_a = await auth_header_factory()
    _, user_b = await auth_header_factory()
    task = await _create(client, headers_a, title="t", owner=user_b)
    assert task["owner"] == user_a


async def test_malformed_task_id_is_not_found(client, auth_header_factory):
    headers, _ = await auth_header_factory()
    assert (await client.get("/api/v1/tasks/not-a-uuid", headers=headers)).status_code == 404
    assert (await client.put("/api/v1/tasks/not-a-uuid", headers=headers, json={})).status_code == 404
    assert (await client.get(f"/api/v1/tasks/{uuid.uuid4()}", headers=headers)).status_code == 404


async def test_tasks_require_authentication(client):
    assert (await client.get("/api/v1/tasks")).status_code == 401
    assert (await client.post("/api/v1/tasks", json={"title": "t"})).status_code == 401
    assert (await client.delete(f"/api/v1/tasks/{uuid.uuid4()}")).status_code == 401


async def test_example_scenario(client):
    """Ann registers, creates a task, another user cannot see it, double delete is 404."""
    register = await client.post(
        "/api/v1/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "secret1"},
    )
    client.cookies.clear()
    ann_id = register.json()["data"]["user"]["id"]
    ann_headers = {"Authorization": f"Bearer {register.json()['data']['accessToken']}"}

    stored = await User.get(id=ann_id)
    assert stored.password_hash != "secret1"
    assert verify_password("secret1", stored.password_hash)

    task = await _create(client, ann_headers, title="Write spec")
    assert task["owner"] == ann_id
    assert task["status"] == "not-started"

    other = await client.post(
        "/api/v1/auth/register",
        json={"name": "Bob", "email": "bob@x.com", "password": "secret2"},
    )
    client.cookies.clear()
    bob_headers = {"Authorization": f"Bearer {other.json()['data']['accessToken']}"}
    assert (await client.get(f"/api/v1/tasks/{task['id']}", headers=bob_headers)).status_code == 404

    assert (await client.delete(f"/api/v1/tasks/{task['id']}", headers=ann_headers)).status_code == 200
    assert (await client.delete(f"/api/v1/tasks/{task['id']}", headers=ann_headers)).status_code == 404


async def test_concurrent_task_creation(client, auth_header_factory):
    headers, _ = await auth_header_factory()
    responses = await asyncio.gather(
        *[client.post("/api/v1/tasks", headers=headers, json={"title": f"Concurrent {i}"}) for i in range(10)]
    )
    assert all(r.status_code == 201 for r in responses)
    ids = [r.json()["data"]["task"]["id"] for r in responses]
    assert len(set(ids)) == 10

    listed = (await client.get("/api/v1/tasks", headers=headers)).json()["data"]
    assert listed["count"] == 10
    assert {t["title"] for t in listed["tasks"]} == {f"Concurrent {i}" for i in range(10)}


async def test_unknown_route_uses_error_envelope(client):
    resp = await client.get("/api/v1/nope")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Not Found - /api/v1/nope"}


async def test_healthz(client):
    resp = await client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
