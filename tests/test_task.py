# tests/test_task.py

from datetime import datetime

import pytest

from duke.task import Deadline, Event, ToDo, datetime_or_none, task_from_dict


def test_display_forms() -> None:
    todo = ToDo("Buy milk")
    deadline = Deadline("Submit report", "2024-01-01 1800")
    event = Event("Team meeting", "2024-01-01 1400-1500")

    assert str(todo) == "[T][ ] Buy milk"
    assert str(deadline) == "[D][ ] Submit report (by: 2024-01-01 1800)"
    assert str(event) == "[E][ ] Team meeting (at: 2024-01-01 1400-1500)"

    todo.mark_as_done()
    assert str(todo) == "[T][X] Buy milk"


def test_new_task_is_pending_with_created_stamp() -> None:
    task = ToDo("x")

    assert task.done is False
    assert task.created.tzinfo is not None


def test_has_word_is_whole_word() -> None:
    task = ToDo("read book today")

    assert task.has_word("book")
    assert not task.has_word("boo")
    assert not task.has_word("Book")


def test_deadline_due_parses_command_line_format() -> None:
    due = Deadline("x", "2024-01-01 1800").due

    assert (due.year, due.month, due.day, due.hour, due.minute) == (2024, 1, 1, 18, 0)
    assert due.tzinfo is not None


def test_unparseable_dates_are_none() -> None:
    assert Deadline("x", "whenever you like").due is None
    assert Event("x", "not a time").start is None


def test_event_range() -> None:
    event = Event("x", "2024-05-06 1400-1530")

    assert (event.start.hour, event.start.minute) == (14, 0)
    assert (event.end.hour, event.end.minute) == (15, 30)
    assert event.when == event.start


def test_datetime_or_none_accepts_datetimes() -> None:
    naive = datetime(2024, 1, 1, 12, 0)

    assert datetime_or_none(naive).tzinfo is not None
    assert datetime_or_none(None) is None


def test_task_from_dict() -> None:
    task = task_from_dict(
        {"type": "deadline", "description": "Pay rent", "done": True, "by": "2024-02-01 0900"}
    )

    assert isinstance(task, Deadline)
    assert task.done is True
    assert str(task) == "[D][X] Pay rent (by: 2024-02-01 0900)"


def test_task_from_dict_rejects_invalid_entries() -> None:
    assert task_from_dict({"type": "chore", "description": "x"}) is None
    assert task_from_dict({"type": "todo"}) is None
    assert task_from_dict("todo x") is None


def test_to_dict_round_trip() -> None:
    event = Event("Party", "2024-12-31 2000-2359", done=True)

    assert task_from_dict(event.to_dict()) == event


def test_tasks_are_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(ToDo("Buy milk"))
