"""Create User — POST /users validation, persistence, and body decoding.

Invariants:
    - Valid payload → 201 {"Data": {email, id, admin, created}} without password or hash
    - Any rule failure → 422 {"FieldErrors": ...} and nothing is stored
    - Malformed / empty bodies → 400 {"Error": ...}
"""

from uuid import UUID

import bcrypt
import pytest

from userapi.core.domain_types import UserListParams


async def test_create_user_happy_path(client, store):
    res = await client.post(
        "/users", json={"email": "msyt@gmail.com", "password": "qweqweqwe", "admin": False},
    )
    assert res.status_code == 201
    data = res.json()["Data"]
    assert data["email"] == "msyt@gmail.com"
    assert data["admin"] is False
    assert UUID(data["id"])
    assert "created" in data
    assert "password" not in data
    assert "hashed_password" not in data


async def test_created_user_has_non_reversible_password(client, store):
    await client.post(
        "/users", json={"email": "admin@example.com", "password": "qweqweqwe", "admin": True},
    )
    user = await store.user_retrieve_by_email("admin@example.com")
    assert user.admin is True
    assert user.hashed_password != "qweqweqwe"
    assert bcrypt.checkpw(b"qweqweqwe", user.hashed_password.encode())


async def test_admin_defaults_to_false(client):
    res = await client.post("/users", json={"email": "a@example.com", "password": "qweqweqwe"})
    assert res.status_code == 201
    assert res.json()["Data"]["admin"] is False


@pytest.mark.parametrize("email,message", [
    ("", "Email is required"),
    ("msyt", "Must be a valid email address"),
])
async def test_invalid_email(client, store, email, message):
    res = await client.post("/users", json={"email": email, "password": "qweqweqwe"})
    assert res.status_code == 422
    assert res.json() == {"FieldErrors": {"email": message}}
    assert len(store) == 0


@pytest.mark.parametrize("password,message", [
    ("", "Password is required"),
    ("qwe", "Password is too short"),
    ("qweqweq", "Password is too short"),
    ("x" * 73, "Password is too long"),
    ("password", "Password is too common"),
    ("12345678", "Password is too common"),
])
async def test_invalid_password(client, store, password, message):
    res = await client.post("/users", json={"email": "a@example.com", "password": password})
    assert res.status_code == 422
    assert res.json() == {"FieldErrors": {"password": message}}
    assert len(store) == 0


@pytest.mark.parametrize("password", ["qweqweqw", "y" * 72])
async def test_password_length_bounds_are_inclusive(client, password):
    res = await client.post("/users", json={"email": "a@example.com", "password": password})
    assert res.status_code == 201


async def test_multibyte_password_length_counts_bytes(client):
    res = await client.post("/users", json={"email": "a@example.com", "password": "é" * 37})
    assert res.status_code == 422
    assert res.json()["FieldErrors"]["password"] == "Password is too long"


async def test_all_field_errors_reported_together(client):
    res = await client.post("/users", json={"email": "", "password": ""})
    assert res.status_code == 422
    assert res.json() == {
        "FieldErrors": {
            "email": "Email is required",
            "password": "Password is required",
        },
    }


async def test_duplicate_email_rejected(client, store):
    body = {"email": "msyt@gmail.com", "password": "qweqweqwe", "admin": False}
    first = await client.post("/users", json=body)
    assert first.status_code == 201

    second = await client.post("/users", json=body)
    assert second.status_code == 422
    assert second.json() == {"FieldErrors": {"email": "Email is already in use"}}

    listed = await store.user_list(UserListParams(1, 10))
    assert [u.email for u in listed.data] == ["msyt@gmail.com"]


async def test_duplicate_email_rejected_on_sql_store(sql_client, sql_store):
    body = {"email": "msyt@gmail.com", "password": "qweqweqwe"}
    assert (await sql_client.post("/users", json=body)).status_code == 201
    res = await sql_client.post("/users", json=body)
    assert res.status_code == 422
    assert (await sql_store.user_list(UserListParams(1, 10))).total == 1


async def test_bad_json_body(client):
    res = await client.post(
        "/users", content=b'{"asd"', headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"Error": "Body contains badly-formed JSON"}


async def test_empty_body(client):
    res = await client.post("/users", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json() == {"Error": "Body must not be empty"}


async def test_wrong_json_type_for_field(client):
    res = await client.post("/users", json={"email": "a@example.com", "password": "qweqweqwe", "admin": "yes"})
    assert res.status_code == 400
    assert res.json() == {"Error": 'Body contains incorrect JSON type for field "admin"'}


async def test_unknown_key(client):
    res = await client.post("/users", json={"email": "a@example.com", "password": "qweqweqwe", "role": "x"})
    assert res.status_code == 400
    assert res.json() == {"Error": 'Body contains unknown key "role"'}
