"""Request logging — access log records and their structured fields.

Tests cover:
    - Every request produces one userapi.access record with method, path and status
    - Authenticated requests carry the user id; anonymous ones do not
    - JSONFormatter surfaces the extra fields
"""

import json
import logging

from userapi.infrastructure.observability import JSONFormatter


def _access_records(caplog):
    return [r for r in caplog.records if r.name == "userapi.access"]


async def test_anonymous_request_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="userapi.access")
    await client.get("/status")

    [record] = _access_records(caplog)
    assert record.method == "GET"
    assert record.path == "/status"
    assert record.status_code == 200
    assert not hasattr(record, "user_id")


async def test_authenticated_request_carries_user_id(client, register_user, login, caplog):
    user = await register_user("logged@example.com")
    headers = await login("logged@example.com")

    caplog.set_level(logging.INFO, logger="userapi.access")
    caplog.clear()
    await client.get("/protected", headers=headers)

    [record] = _access_records(caplog)
    assert record.status_code == 200
    assert record.user_id == user["id"]


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        "userapi.access", logging.INFO, __file__, 1, "GET /users 200", None, None,
    )
    record.method = "GET"
    record.status_code = 200

    out = json.loads(JSONFormatter().format(record))
    assert out["level"] == "INFO"
    assert out["logger"] == "userapi.access"
    assert out["message"] == "GET /users 200"
    assert out["method"] == "GET"
    assert out["status_code"] == 200
    assert "user_id" not in out
