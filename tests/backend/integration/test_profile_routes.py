import pytest


pytestmark = pytest.mark.asyncio


async def test_get_profile_never_exposes_password(client, auth_header_factory):
    headers, user_id = await auth_header_factory(name="Ann")
    resp = await client.get("/api/v1/profile", headers=headers)
    user = resp.json()["data"]["user"]
    assert resp.status_code == 200
    assert user["id"] == user_id
    assert user["name"] == "Ann"
    assert set(user) == {"id", "name", "email", "createdAt"}
    assert "argon2" not in resp.text


async def test_update_profile(client, auth_header_factory):
    headers, _ = await auth_header_factory(name="Ann")
    resp = await client.put("/api/v1/profile", headers=headers, json={"name": "Ann B", "email": "Ann.B@Example.com"})
    assert resp.status_code == 200
    user = resp.json()["data"]["user"]
    assert user["name"] == "Ann B"
    assert user["email"] == "ann.b@example.com"

    again = await client.get("/api/v1/profile", headers=headers)
    assert again.json()["data"]["user"]["email"] == "ann.b@example.com"


async def test_update_profile_partial(client, auth_header_factory):
    headers, _ = await auth_header_factory(name="Ann")
    before = (await client.get("/api/v1/profile", headers=headers)).json()["data"]["user"]
    resp = await client.put("/api/v1/profile", headers=headers, json={"name": "Annie"})
    after = resp.json()["data"]["user"]
    assert after["name"] == "Annie"
    assert after["email"] == before["email"]


async def test_update_profile_email_taken(client, auth_header_factory):
    headers_a, _ = await auth_header_factory()
    headers_b, _ = await auth_header_factory()
    email_b = (await client.get("/api/v1/profile", headers=headers_b)).json()["data"]["user"]["email"]

    resp = await client.put("/api/v1/profile", headers=headers_a, json={"email": email_b})
    assert resp.status_code == 400
    assert resp.json()["errors"] == [{"field": "email", "message": "Email is already in use"}]


async def test_update_profile_invalid_fields(client, auth_header_factory):
    headers, _ = await auth_header_factory()
    resp = await client.put("/api/v1/profile", headers=headers, json={"name": "x" * 101, "email": "nope"})
    assert resp.status_code == 400
    assert {e["field"] for e in resp.json()["errors"]} == {"name", "email"}
