"""Unit tests for tasks/store.py -- owner-scoped task persistence.

Covers:
- list_by_owner() returns only the owner's tasks, in insertion order
- get/update/delete never touch another owner's task
- update_by_id_and_owner() applies only the given fields and stamps updated_at
- malformed ids raise ValidationError before any query runs
"""

import pytest

from core.errors import ValidationError
from tasks.models import Task
from tasks.store import TaskStore, parse_task_id

OWNER_A = 1
OWNER_B = 2


@pytest.fixture
def store(task_store: TaskStore) -> TaskStore:
    """TaskStore with three tasks for owner A and one for owner B."""
    for title in ("first", "second", "third"):
        task_store.create_task(Task(title=title, owner_id=OWNER_A))
    task_store.create_task(Task(title="b-only", description="private", owner_id=OWNER_B))
    return task_store


class TestListByOwner:
    def test_returns_insertion_order(self, store: TaskStore) -> None:
        titles = [t.title for t in store.list_by_owner(OWNER_A)]
        assert titles == ["first", "second", "third"]

    def test_excludes_other_owners(self, store: TaskStore) -> None:
        tasks = store.list_by_owner(OWNER_B)
        assert [t.title for t in tasks] == ["b-only"]
        assert all(t.owner_id == OWNER_B for t in tasks)

    def test_unknown_owner_gets_empty_list(self, store: TaskStore) -> None:
        assert store.list_by_owner(999) == []


class TestCreate:
    def test_defaults_and_timestamps(self, task_store: TaskStore) -> None:
        task_id = task_store.create_task(Task(title="buy milk", owner_id=OWNER_A))
        task = task_store.get_by_id_and_owner(task_id, OWNER_A)
        assert task is not None
        assert task.completed is False
        assert task.description is None
        assert task.created_at == task.updated_at
        assert task.created_at.tzinfo is not None


class TestOwnershipFilter:
    def test_get_other_owners_task_is_none(self, store: TaskStore) -> None:
        b_task = store.list_by_owner(OWNER_B)[0]
        assert store.get_by_id_and_owner(b_task.id, OWNER_A) is None

    def test_update_other_owners_task_matches_nothing(self, store: TaskStore) -> None:
        b_task = store.list_by_owner(OWNER_B)[0]
        assert store.update_by_id_and_owner(b_task.id, OWNER_A, title="hijacked") == 0
        assert store.get_by_id_and_owner(b_task.id, OWNER_B).title == "b-only"

    def test_delete_other_owners_task_deletes_nothing(self, store: TaskStore) -> None:
        b_task = store.list_by_owner(OWNER_B)[0]
        assert store.delete_by_id_and_owner(b_task.id, OWNER_A) == 0
        assert store.get_by_id_and_owner(b_task.id, OWNER_B) is not None


class TestUpdate:
    def test_only_given_fields_change(self, store: TaskStore) -> None:
        before = store.list_by_owner(OWNER_B)[0]
        assert store.update_by_id_and_owner(before.id, OWNER_B, completed=True) == 1
        after = store.get_by_id_and_owner(before.id, OWNER_B)
        assert after.completed is True
        assert after.title == before.title
        assert after.description == before.description
        assert after.created_at == before.created_at
        assert after.updated_at >= before.updated_at

    def test_description_can_be_cleared(self, store: TaskStore) -> None:
        task = store.list_by_owner(OWNER_B)[0]
        store.update_by_id_and_owner(task.id, OWNER_B, description=None)
        assert store.get_by_id_and_owner(task.id, OWNER_B).description is None

    def test_owner_id_is_not_updatable(self, store: TaskStore) -> None:
        task = store.list_by_owner(OWNER_A)[0]
        with pytest.raises(ValueError):
            store.update_by_id_and_owner(task.id, OWNER_A, owner_id=OWNER_B)

    def test_missing_task_matches_nothing(self, store: TaskStore) -> None:
        assert store.update_by_id_and_owner(12345, OWNER_A, completed=True) == 0


class TestDelete:
    def test_delete_twice(self, store: TaskStore) -> None:
        task = store.list_by_owner(OWNER_A)[0]
        assert store.delete_by_id_and_owner(task.id, OWNER_A) == 1
        assert store.delete_by_id_and_owner(task.id, OWNER_A) == 0
        assert store.get_by_id_and_owner(task.id, OWNER_A) is None


class TestParseTaskId:
    @pytest.mark.parametrize("raw", ["", "abc", "0", "-3", "1.5", "12ab", "0x1f", "99999999999999999999"])
    def test_malformed_ids_raise_validation_error(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            parse_task_id(raw)

    def test_accepts_decimal_string_and_int(self) -> None:
        assert parse_task_id("42") == 42
        assert parse_task_id(" 7 ") == 7
        assert parse_task_id(3) == 3

    def test_store_rejects_malformed_id_before_query(self, store: TaskStore) -> None:
        with pytest.raises(ValidationError):
            store.get_by_id_and_owner("not-an-id", OWNER_A)
        with pytest.raises(ValidationError):
            store.delete_by_id_and_owner("not-an-id", OWNER_A)
