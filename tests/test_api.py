# tests/test_api.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from task_tracker.api.app import create_app
from task_tracker.tasks.reminder_scheduler import TickReport, compute_window


@pytest.fixture()
def client(state):
    app = create_app(state, start_scheduler=False)
    with TestClient(app) as c:
        yield c


def _register_and_login(client: TestClient, email: str = "alice@example.com") -> dict[str, str]:
    r = client.post(
        "/register",
        json={"email": email, "password": "pw-123", "firstname": "Alice", "lastname": "Rao"},
    )
    assert r.status_code == 201
    r = client.post("/login", json={"email": email, "password": "pw-123"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


def _new_task(client: TestClient, headers, **overrides) -> dict:
    payload = {
        "task": "Water plants",
        "type": "Personal",
        "remindertime": "19/10/2026, 6:30:00 PM",
        "timeofentry": "19/10/2026, 9:00:00 AM",
        "completestatus": False,
        "currentstatus": False,
    }
    payload.update(overrides)
    r = client.post("/tasks", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_healthcheck(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "last_reminder_tick": None, "last_reminder_report": None}


def test_healthcheck_shows_last_tick_counts(client: TestClient, state, ten_am) -> None:
    state.scheduler_status.last_tick_at = ten_am
    state.scheduler_status.last_report = TickReport(window=compute_window(ten_am), matched=3, sent=2, failed=1)

    body = client.get("/health").json()

    assert body["last_reminder_tick"] == ten_am.isoformat()
    assert body["last_reminder_report"] == {
        "matched": 3,
        "sent": 2,
        "failed": 1,
        "skipped": 0,
        "aborted": False,
    }


def test_register_validation_and_conflict(client: TestClient) -> None:
    r = client.post("/register", json={"email": "a@example.com"})
    assert r.status_code == 400

    body = {"email": "a@example.com", "password": "pw", "firstname": "A", "lastname": "B"}
    first = client.post("/register", json=body)
    assert first.status_code == 201
    payload = first.json()
    assert payload["status"] == "success"
    assert payload["user"]["email"] == "a@example.com"
    assert "password" not in payload["user"]

    assert client.post("/register", json=body).status_code == 409
    assert client.get("/usercount").json() == {"usercount": 1}


def test_login_errors(client: TestClient) -> None:
    _register_and_login(client)
    assert client.post("/login", json={"email": "alice@example.com"}).status_code == 400
    assert client.post("/login", json={"email": "nobody@example.com", "password": "x"}).status_code == 404
    assert client.post("/login", json={"email": "alice@example.com", "password": "nope"}).status_code == 401

    ok = client.post("/login", json={"email": "alice@example.com", "password": "pw-123"}).json()
    assert ok["success"] is True
    assert ok["firstname"] == "Alice" and ok["lastname"] == "Rao"


def test_passwords_longer_than_bcrypt_limit_are_rejected(client: TestClient) -> None:
    body = {"email": "long@example.com", "password": "p" * 80, "firstname": "L", "lastname": "P"}
    r = client.post("/register", json=body)
    assert r.status_code == 400
    assert "72 bytes" in r.json()["detail"]
    assert client.get("/usercount").json() == {"usercount": 0}

    # 72 ASCII bytes is still accepted; multi-byte characters count by their encoded size.
    assert client.post("/register", json={**body, "password": "p" * 72}).status_code == 201
    assert client.post("/login", json={"email": "long@example.com", "password": "é" * 37}).status_code == 400


def test_unknown_huge_task_id_is_not_found(client: TestClient) -> None:
    headers = _register_and_login(client)
    huge = "99999999999999999999"

    assert client.patch(f"/tasks/{huge}", json={"completestatus": True}, headers=headers).status_code == 404
    assert client.patch(f"/dtasks/{huge}", json={"currentstatus": True}, headers=headers).status_code == 404
    assert client.put(f"/tasks/{huge}", json={"editedtask": "x"}, headers=headers).status_code == 404


def test_task_routes_require_token(client: TestClient) -> None:
    assert client.get("/tasks").status_code == 401
    assert client.get("/tasks", headers={"Authorization": "Bearer garbage"}).status_code == 403


def test_create_task_validation(client: TestClient) -> None:
    headers = _register_and_login(client)
    missing = client.post("/tasks", json={"task": "x", "type": "Work"}, headers=headers)
    assert missing.status_code == 400

    bad_type = client.post(
        "/tasks",
        json={"task": "x", "type": "Chores", "remindertime": "19/10/2026, 6:30:00 PM"},
        headers=headers,
    )
    assert bad_type.status_code == 400

    bad_time = client.post(
        "/tasks",
        json={"task": "x", "type": "Work", "remindertime": "sometime soon"},
        headers=headers,
    )
    assert bad_time.status_code == 400


def test_task_lifecycle(client: TestClient) -> None:
    headers = _register_and_login(client)
    task = _new_task(client, headers)
    assert task["remindertime"] == "19/10/2026, 6:30:00 PM"
    assert task["completestatus"] is False

    pending = client.get("/tasks", headers=headers).json()
    assert [t["id"] for t in pending] == [task["id"]]

    done = client.patch(
        f"/tasks/{task['id']}", json={"completestatus": True, "currentstatus": False}, headers=headers
    )
    assert done.status_code == 200
    assert client.get("/tasks", headers=headers).json() == []
    assert [t["id"] for t in client.get("/taskschange", headers=headers).json()] == [task["id"]]

    undo = client.patch(
        f"/taskschange/{task['id']}", json={"completestatus": False, "currentstatus": False}, headers=headers
    )
    assert undo.status_code == 200
    assert undo.json()["completestatus"] is False

    edited = client.put(
        f"/tasks/{task['id']}", json={"editedtask": "Water all plants", "editedtype": "Family"}, headers=headers
    )
    assert edited.status_code == 200
    assert edited.json()["task"] == "Water all plants"
    assert edited.json()["type"] == "Family"
    assert client.put(f"/tasks/{task['id']}", json={"editedtype": "Work"}, headers=headers).status_code == 400


def test_other_users_tasks_are_not_found(client: TestClient) -> None:
    alice = _register_and_login(client)
    bob = _register_and_login(client, "bob@example.com")
    task = _new_task(client, alice)

    r = client.patch(f"/tasks/{task['id']}", json={"completestatus": True}, headers=bob)
    assert r.status_code == 404
    assert client.put(f"/tasks/{task['id']}", json={"editedtask": "mine"}, headers=bob).status_code == 404
    assert client.get("/tasks", headers=bob).json() == []


def test_reminder_stats(client: TestClient) -> None:
    headers = _register_and_login(client)
    a = _new_task(client, headers, type="Work")
    b = _new_task(client, headers, type="Group Activity")
    _new_task(client, headers, type="Family")

    for task in (a, b):
        client.patch(f"/tasks/{task['id']}", json={"completestatus": True, "currentstatus": False}, headers=headers)
    client.patch(f"/dtasks/{a['id']}", json={"completestatus": True, "currentstatus": True}, headers=headers)

    assert client.get("/reminders", headers=headers).json() == {"count": 3, "pendingcount": 1}
    assert client.get("/reminderspie", headers=headers).json() == {
        "personalcount": 0,
        "familycount": 0,
        "workcount": 1,
        "groupactivitycount": 0,
    }
