# tests/test_task_store.py

from __future__ import annotations

from datetime import timedelta

import pytest

from task_tracker.core.errors import ConflictError
from task_tracker.tasks import task_api
from task_tracker.tasks.reminder_scheduler import compute_window, run_reminder_tick
from task_tracker.tasks.task_store import TaskStore


def _user(store: TaskStore, email: str = "alice@example.com"):
    return store.add_user(email=email, password_hash="x", firstname="Alice", lastname="Rao")


def test_user_roundtrip_and_unique_email(store: TaskStore) -> None:
    user = _user(store)
    assert user.id > 0
    assert store.get_user_by_email("alice@example.com") == user
    assert store.resolve_owner(user.id) == user
    assert store.resolve_owner(user.id + 100) is None
    assert store.count_users() == 1

    with pytest.raises(ConflictError):
        _user(store)


def test_flags_updates_are_owner_scoped(store: TaskStore) -> None:
    alice = _user(store)
    bob = _user(store, "bob@example.com")
    task = store.add_task(
        user_id=alice.id,
        task="Buy milk",
        type="Personal",
        remindertime="19/10/2026, 6:00:00 PM",
        remind_at=None,
    )

    assert store.update_task_flags(task.id, bob.id, completestatus=True) is None
    assert store.get_task(task.id).completestatus is False

    done = store.update_task_flags(task.id, alice.id, completestatus=True, currentstatus=False)
    assert done is not None and done.completestatus and not done.currentstatus
    assert store.list_tasks(alice.id, completestatus=False, currentstatus=False) == []
    assert [t.id for t in store.list_tasks(alice.id, completestatus=True, currentstatus=False)] == [task.id]

    edited = store.update_task_content(task.id, alice.id, task="Buy oat milk", type="Family")
    assert edited is not None and edited.task == "Buy oat milk" and edited.type == "Family"
    assert store.update_task_content(task.id, bob.id, task="hijack") is None


def test_ids_beyond_sqlite_integer_range_are_not_found(store: TaskStore) -> None:
    alice = _user(store)
    huge = 2**63

    assert store.get_task(huge) is None
    assert store.update_task_flags(huge, alice.id, completestatus=True) is None
    assert store.update_task_content(-huge - 1, alice.id, task="x") is None


def test_list_tasks_newest_first(store: TaskStore) -> None:
    alice = _user(store)
    first = store.add_task(user_id=alice.id, task="one", type="Work", remindertime="r", remind_at=None)
    second = store.add_task(user_id=alice.id, task="two", type="Work", remindertime="r", remind_at=None)

    pending = store.list_tasks(alice.id, completestatus=False, currentstatus=False)
    assert [t.id for t in pending] == [second.id, first.id]


def test_schema_is_reopenable(settings, store: TaskStore) -> None:
    _user(store)
    again = TaskStore(settings.db_path)
    assert again.count_users() == 1


# ---- window scenarios against SQLite ----


def test_due_task_scenario(state, ten_am) -> None:
    alice = _user(state.store)
    a = task_api.create_task(
        state, alice.id, task="A", type="Personal", remindertime="19/10/2026, 10:14:45 AM"
    )
    task_api.create_task(state, alice.id, task="B", type="Work", remindertime="19/10/2026, 10:16:00 AM")
    task_api.create_task(
        state,
        alice.id,
        task="C",
        type="Family",
        remindertime="19/10/2026, 10:14:45 AM",
        completestatus=True,
    )

    due = state.store.find_due_tasks(compute_window(ten_am))
    assert [t.id for t in due] == [a.id]


@pytest.mark.parametrize(
    "remindertime, selected",
    [
        ("19/10/2026, 10:14:29 AM", False),
        ("19/10/2026, 10:14:30 AM", True),
        ("19/10/2026, 10:15:00 AM", True),
        ("19/10/2026, 10:15:30 AM", True),
        ("19/10/2026, 10:15:31 AM", False),
    ],
)
def test_window_bounds_are_inclusive(state, ten_am, remindertime: str, selected: bool) -> None:
    alice = _user(state.store)
    task_api.create_task(state, alice.id, task="edge", type="Work", remindertime=remindertime)

    due = state.store.find_due_tasks(compute_window(ten_am))
    assert bool(due) is selected


def test_archived_but_incomplete_flag_does_not_hide_reminder(state, ten_am) -> None:
    alice = _user(state.store)
    task = task_api.create_task(
        state, alice.id, task="hidden", type="Work", remindertime="19/10/2026, 10:15:00 AM"
    )
    state.store.update_task_flags(task.id, alice.id, currentstatus=True)

    assert [t.id for t in state.store.find_due_tasks(compute_window(ten_am))] == [task.id]


def test_tick_against_sqlite_emails_owner(state, ten_am) -> None:
    alice = _user(state.store)
    task_api.create_task(
        state, alice.id, task="Stand-up", type="Work", remindertime="19/10/2026, 10:15:00 am"
    )
    # Orphaned row: owner id that was never registered.
    state.store.add_task(
        user_id=alice.id + 41,
        task="orphan",
        type="Work",
        remindertime="19/10/2026, 10:15:00 am",
        remind_at=(ten_am + timedelta(minutes=15)).timestamp(),
    )

    report = run_reminder_tick(state.store, state.mailer, now=ten_am, from_addr="r@example.com")

    assert report.matched == 2
    assert report.skipped == 1
    assert report.sent == 1
    (msg,) = state.mailer.sent
    assert msg.to_addr == "alice@example.com"
    assert "19/10/2026, 10:15:00 am" in msg.body
    assert "Task: Stand-up." in msg.body
