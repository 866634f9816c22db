"""Error Responses — routing errors and unexpected failures use the {"Error": ...} body.

Invariants:
    - Unknown route → 404, unsupported method → 405
    - Store faults surface as 500 with a generic message, never internal details
"""

from userapi.core.errors import DatabaseError


async def test_unknown_route(client):
    res = await client.get("/nowhere")
    assert res.status_code == 404
    assert res.json() == {"Error": "The requested resource could not be found"}


async def test_method_not_allowed(client):
    res = await client.delete("/status")
    assert res.status_code == 405
    assert res.json() == {"Error": "The DELETE method is not supported for this resource"}


async def test_store_failure_is_server_error(client, store, monkeypatch):
    async def broken(email):
        raise DatabaseError("connection reset by 10.0.0.5", "query")

    monkeypatch.setattr(store, "user_retrieve_by_email", broken)
    res = await client.post("/users", json={"email": "a@example.com", "password": "qweqweqwe"})
    assert res.status_code == 500
    assert res.json() == {
        "Error": "The server encountered a problem and could not process your request",
    }
    assert "10.0.0.5" not in res.text


async def test_unexpected_exception_is_server_error(client, store, monkeypatch):
    async def broken(params):
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "user_list", broken)
    res = await client.get("/users")
    assert res.status_code == 500
    assert res.json() == {
        "Error": "The server encountered a problem and could not process your request",
    }


async def test_authentication_lookup_failure_is_server_error(client, store, monkeypatch):
    async def broken(email):
        raise DatabaseError("timeout", "query")

    monkeypatch.setattr(store, "user_retrieve_by_email", broken)
    res = await client.post(
        "/authentication-tokens", json={"email": "a@example.com", "password": "qweqweqwe"},
    )
    assert res.status_code == 500
