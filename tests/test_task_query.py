# tests/test_task_query.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import Session

from taskdesk.errors import ValidationError
from taskdesk.models.task import Task, TaskPriority, TaskStatus
from taskdesk.services.tag_codec import encode_tags
from taskdesk.services.task_query import (
    MAX_LIMIT,
    MAX_OFFSET,
    TaskQuery,
    TaskQueryService,
    parse_task_query,
)

BASE = datetime(2030, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def owner(make_user):
    return make_user("lister@taskdesk.io")


@pytest.fixture()
def other(make_user):
    return make_user("other@taskdesk.io")


@pytest.fixture()
def add_task(session: Session):
    """Insert tasks with explicit timestamps so ordering is predictable."""

    def _add(owner_id: str, title: str, *, minutes: int = 0, due_in_days: int | None = None,
             status: str = "todo", priority: str = "medium", tags: list[str] | None = None) -> Task:
        created = BASE + timedelta(minutes=minutes)
        task = Task(
            owner_id=owner_id,
            title=title,
            status=status,
            priority=priority,
            tags=encode_tags(tags),
            due_date=BASE + timedelta(days=due_in_days) if due_in_days is not None else None,
            completed_at=created if status == "done" else None,
            created_at=created,
            updated_at=created,
        )
        session.add(task)
        session.commit()
        session.refresh(task)
        return task

    return _add


def run_listing(engine, owner_id: str, **params):
    return asyncio.run(TaskQueryService(engine).list_tasks(owner_id, parse_task_query(**params)))


# --- parameter parsing -------------------------------------------------------


def test_defaults() -> None:
    query = parse_task_query()
    assert query == TaskQuery(page=1, limit=10, status=None, priority=None, tags=[],
                              sort_by="createdAt", sort_dir="desc")


@pytest.mark.parametrize(
    ("page", "limit", "expected_page", "expected_limit"),
    [
        ("0", "0", 1, 1),
        ("-5", "-1", 1, 1),
        ("3", "1000", 3, MAX_LIMIT),
        ("2", "100", 2, 100),
        ("7", "25", 7, 25),
    ],
)
def test_page_and_limit_are_clamped(page, limit, expected_page, expected_limit) -> None:
    query = parse_task_query(page=page, limit=limit)
    assert (query.page, query.limit) == (expected_page, expected_limit)


@pytest.mark.parametrize("field", ["page", "limit"])
@pytest.mark.parametrize("raw", ["abc", "1_0", " 3", "3 ", "+3", "3.0", "\u0663"])
def test_non_integer_page_or_limit_is_rejected(field, raw) -> None:
    with pytest.raises(ValidationError):
        parse_task_query(**{field: raw})


@pytest.mark.parametrize(
    ("page", "limit"),
    [
        ("99999999999999999999", None),
        ("9223372036854775807", "100"),
        ("9" * 5000, "1"),
    ],
)
def test_huge_page_is_capped_to_a_bindable_offset(page, limit) -> None:
    query = parse_task_query(page=page, limit=limit)

    assert query.page > 1
    assert query.offset <= MAX_OFFSET


def test_huge_page_lists_nothing(engine, owner, add_task) -> None:
    add_task(owner.id, "only task")

    page = run_listing(engine, owner.id, page="9223372036854775807", limit="100")

    assert page.items == []
    assert page.total == 1


@pytest.mark.parametrize(
    "params",
    [
        {"status": "finished"},
        {"priority": "urgent"},
        {"sort_by": "title"},
        {"sort_dir": "sideways"},
    ],
)
def test_unknown_enum_values_are_rejected(params) -> None:
    with pytest.raises(ValidationError):
        parse_task_query(**params)


def test_enum_values_are_parsed() -> None:
    query = parse_task_query(status="in_progress", priority="high", sort_by="dueDate", sort_dir="asc")
    assert query.status is TaskStatus.IN_PROGRESS
    assert query.priority is TaskPriority.HIGH
    assert (query.sort_by, query.sort_dir) == ("dueDate", "asc")


def test_tag_filter_is_split_and_trimmed() -> None:
    assert parse_task_query(tags=" work, urgent ,,").tags == ["work", "urgent"]


# --- listing -----------------------------------------------------------------


def test_pagination_windows_and_total(engine, owner, add_task) -> None:
    for i in range(7):
        add_task(owner.id, f"task {i}", minutes=i)

    first = run_listing(engine, owner.id, page="1", limit="3", sort_by="createdAt", sort_dir="asc")
    third = run_listing(engine, owner.id, page="3", limit="3", sort_by="createdAt", sort_dir="asc")
    beyond = run_listing(engine, owner.id, page="4", limit="3")

    assert [t.title for t in first.items] == ["task 0", "task 1", "task 2"]
    assert [t.title for t in third.items] == ["task 6"]
    assert beyond.items == []
    assert first.total == third.total == beyond.total == 7
    assert (third.page, third.limit) == (3, 3)


def test_items_never_exceed_limit(engine, owner, add_task) -> None:
    for i in range(12):
        add_task(owner.id, f"task {i}", minutes=i)

    page = run_listing(engine, owner.id)

    assert len(page.items) == 10
    assert page.total == 12


def test_default_sort_is_newest_first(engine, owner, add_task) -> None:
    add_task(owner.id, "old", minutes=0)
    add_task(owner.id, "new", minutes=10)

    page = run_listing(engine, owner.id)

    assert [t.title for t in page.items] == ["new", "old"]


def test_sort_by_due_date_ascending(engine, owner, add_task) -> None:
    add_task(owner.id, "later", due_in_days=5)
    add_task(owner.id, "sooner", due_in_days=1)
    add_task(owner.id, "middle", due_in_days=3)

    page = run_listing(engine, owner.id, sort_by="dueDate", sort_dir="asc")

    assert [t.title for t in page.items] == ["sooner", "middle", "later"]


def test_sort_by_due_date_descending(engine, owner, add_task) -> None:
    add_task(owner.id, "later", due_in_days=5)
    add_task(owner.id, "sooner", due_in_days=1)

    page = run_listing(engine, owner.id, sort_by="dueDate", sort_dir="desc")

    assert [t.title for t in page.items] == ["later", "sooner"]


def test_status_and_priority_filters(engine, owner, add_task) -> None:
    add_task(owner.id, "todo-high", priority="high")
    add_task(owner.id, "done-high", status="done", priority="high")
    add_task(owner.id, "todo-low", priority="low")

    by_status = run_listing(engine, owner.id, status="todo")
    by_both = run_listing(engine, owner.id, status="todo", priority="high")

    assert {t.title for t in by_status.items} == {"todo-high", "todo-low"}
    assert [t.title for t in by_both.items] == ["todo-high"]
    assert by_both.total == 1


def test_tag_filter_requires_every_tag(engine, owner, add_task) -> None:
    add_task(owner.id, "both", tags=["work", "urgent"])
    add_task(owner.id, "work only", tags=["work"])
    add_task(owner.id, "personal", tags=["personal"])

    assert {t.title for t in run_listing(engine, owner.id, tags="work").items} == {"both", "work only"}
    assert [t.title for t in run_listing(engine, owner.id, tags="work,urgent").items] == ["both"]
    assert run_listing(engine, owner.id, tags="personal,work").items == []


def test_tag_filter_is_substring_containment(engine, owner, add_task) -> None:
    # Known quirk: "work" also matches the stored tag "workshop"
    add_task(owner.id, "workshop prep", tags=["workshop"])

    page = run_listing(engine, owner.id, tags="work")

    assert [t.title for t in page.items] == ["workshop prep"]


def test_tag_filter_treats_like_wildcards_literally(engine, owner, add_task) -> None:
    add_task(owner.id, "plain", tags=["work"])

    assert run_listing(engine, owner.id, tags="%").items == []
    assert run_listing(engine, owner.id, tags="w_rk").items == []


def test_returned_items_have_decoded_tags(engine, owner, add_task) -> None:
    add_task(owner.id, "tagged", tags=["work", "urgent"])

    item = run_listing(engine, owner.id).items[0]

    assert item.tags == ["work", "urgent"]


def test_listing_is_owner_scoped(engine, owner, other, add_task) -> None:
    add_task(owner.id, "mine", tags=["shared"])
    add_task(other.id, "theirs", tags=["shared"])

    page = run_listing(engine, owner.id, tags="shared")

    assert [t.title for t in page.items] == ["mine"]
    assert page.total == 1
