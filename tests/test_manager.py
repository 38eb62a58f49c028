# tests/test_manager.py

from __future__ import annotations

from datetime import datetime

import pytest

from task_tracker.core.manager import (
    EMPTY_HINT_FRESH,
    EMPTY_HINT_SEARCH,
    TaskManagerView,
    format_date,
)
from task_tracker.tasks.task_models import TaskStatus
from task_tracker.tasks.task_store import TaskStore

from .fakes import RecordingRepo


@pytest.fixture()
def repo(store: TaskStore) -> RecordingRepo:
    return RecordingRepo(store)


@pytest.fixture()
def view(repo: RecordingRepo) -> TaskManagerView:
    v = TaskManagerView(repo)
    v.load()
    return v


def _titles(view: TaskManagerView) -> list[str]:
    return [t.title for t in view.filtered_tasks()]


def test_load_clears_loading_even_on_failure(repo: RecordingRepo) -> None:
    repo.failing.add("list_tasks")
    v = TaskManagerView(repo)
    assert v.loading
    result = v.load()
    assert not result.ok
    assert not v.loading
    assert v.filtered_tasks() == []


def test_add_blank_title_never_touches_storage(view: TaskManagerView, repo: RecordingRepo) -> None:
    view.open_add_dialog()
    for blank in ("", "   ", "\t\n"):
        result = view.add_task(blank)
        assert not result.ok
    assert repo.calls["add_task"] == 0
    assert view.add_dialog_open


def test_add_trims_closes_dialog_resets_form_and_reloads(
    view: TaskManagerView, repo: RecordingRepo
) -> None:
    loads_before = repo.calls["list_tasks"]
    view.open_add_dialog()
    result = view.add_task("  Write report  ", TaskStatus.COMPLETE)

    assert result.ok
    assert result.task is not None and result.task.title == "Write report"
    assert not view.add_dialog_open
    assert view.new_title == ""
    assert view.new_status is TaskStatus.PENDING
    assert repo.calls["list_tasks"] == loads_before + 1
    assert _titles(view) == ["Write report"]


def test_every_mutation_reloads_once(view: TaskManagerView, repo: RecordingRepo) -> None:
    view.add_task("a")
    task = view.cache.tasks[0]
    n = repo.calls["list_tasks"]

    view.toggle_status(task)
    assert repo.calls["list_tasks"] == n + 1

    view.open_edit_dialog(view.cache.tasks[0])
    view.submit_edit("b")
    assert repo.calls["list_tasks"] == n + 2

    view.open_delete_dialog(12345)  # unknown id still counts as success
    assert view.confirm_delete().ok
    assert repo.calls["list_tasks"] == n + 3


def test_search_is_client_side_case_insensitive_substring(
    view: TaskManagerView, repo: RecordingRepo
) -> None:
    view.add_task("Buy Milk")
    view.add_task("Walk dog")
    n = repo.calls["list_tasks"]

    for term in ("buy", "MILK", "y mi"):
        view.set_search(term)
        assert _titles(view) == ["Buy Milk"]

    view.set_search("eggs")
    assert _titles(view) == []
    assert view.empty_message()[1] == EMPTY_HINT_SEARCH

    view.set_search("")
    assert _titles(view) == ["Walk dog", "Buy Milk"]
    assert repo.calls["list_tasks"] == n


def test_empty_message_without_search(view: TaskManagerView) -> None:
    assert view.empty_message() == ("No tasks found", EMPTY_HINT_FRESH)


def test_toggle_twice_restores_status(view: TaskManagerView) -> None:
    view.add_task("flip")
    original = view.cache.tasks[0]

    view.toggle_status(original)
    assert view.cache.tasks[0].status is original.status.toggled()

    view.toggle_status(view.cache.tasks[0])
    assert view.cache.tasks[0].status is original.status


def test_submit_edit_requires_selection_and_title(view: TaskManagerView, repo: RecordingRepo) -> None:
    assert not view.submit_edit("something").ok

    view.add_task("orig")
    view.open_edit_dialog(view.cache.tasks[0])
    assert not view.submit_edit("   ").ok
    assert repo.calls["update_task"] == 0
    assert view.edit_dialog_open


def test_submit_edit_sends_title_and_status_together(view: TaskManagerView) -> None:
    view.add_task("orig")
    view.open_edit_dialog(view.cache.tasks[0])
    assert view.edit_title == "orig"
    assert view.edit_status is TaskStatus.PENDING

    result = view.submit_edit("renamed", TaskStatus.COMPLETE)
    assert result.ok
    assert view.editing_task is None
    assert not view.edit_dialog_open
    t = view.cache.tasks[0]
    assert (t.title, t.status) == ("renamed", TaskStatus.COMPLETE)


def test_delete_flow_clears_pending_id(view: TaskManagerView) -> None:
    view.add_task("gone soon")
    item = view.items()[0]

    assert item.request_delete(view)
    assert item.is_deleting
    assert view.delete_dialog_open
    assert view.delete_task_id == item.task.id

    # second click while pending is ignored
    assert not item.request_delete(view)

    assert view.confirm_delete().ok
    assert not view.delete_dialog_open
    assert view.delete_task_id is None
    assert view.filtered_tasks() == []


def test_cancel_delete_resets_item_flag(view: TaskManagerView) -> None:
    view.add_task("keep me")
    item = view.items()[0]
    item.request_delete(view)
    view.close_delete_dialog()
    assert not item.is_deleting
    assert view.delete_task_id is None
    assert view.items()[0].is_deleting is False


def test_failed_delete_resets_flag_and_keeps_dialog(view: TaskManagerView, repo: RecordingRepo) -> None:
    view.add_task("stubborn")
    item = view.items()[0]
    item.request_delete(view)

    repo.failing.add("delete_task")
    result = view.confirm_delete()

    assert not result.ok
    assert not item.is_deleting
    assert view.delete_dialog_open
    assert view.delete_task_id == item.task.id
    assert _titles(view) == ["stubborn"]

    repo.failing.clear()
    assert view.confirm_delete().ok
    assert _titles(view) == []


def test_failed_add_keeps_form(view: TaskManagerView, repo: RecordingRepo) -> None:
    repo.failing.add("add_task")
    view.open_add_dialog()
    result = view.add_task("will fail")
    assert not result.ok
    assert view.add_dialog_open
    assert view.new_title == "will fail"


def test_failed_reload_keeps_previous_snapshot(view: TaskManagerView, repo: RecordingRepo) -> None:
    view.add_task("cached")
    repo.failing.add("list_tasks")
    assert not view.reload().ok
    assert _titles(view) == ["cached"]


def test_second_delete_request_releases_the_first(view: TaskManagerView) -> None:
    view.add_task("Alpha")
    view.add_task("Beta")
    beta, alpha = view.items()

    assert alpha.request_delete(view)
    assert beta.request_delete(view)

    assert not alpha.is_deleting
    assert beta.is_deleting
    assert view.delete_task_id == beta.task.id

    assert view.confirm_delete().ok
    assert _titles(view) == ["Alpha"]

    # Alpha is deletable again
    alpha = view.items()[0]
    assert alpha.request_delete(view)
    assert view.confirm_delete().ok
    assert _titles(view) == []


def test_failed_toggle_keeps_cache(view: TaskManagerView, repo: RecordingRepo) -> None:
    view.add_task("steady")
    task = view.cache.tasks[0]
    lists_before = repo.calls["list_tasks"]

    repo.failing.add("update_task_status")
    result = view.toggle_status(task)

    assert not result.ok
    assert result.message == "Failed to update task status."
    assert view.cache.tasks[0].status is TaskStatus.PENDING
    assert repo.calls["list_tasks"] == lists_before


def test_failed_edit_keeps_dialog_for_retry(view: TaskManagerView, repo: RecordingRepo) -> None:
    view.add_task("draft")
    view.open_edit_dialog(view.cache.tasks[0])

    repo.failing.add("update_task")
    result = view.submit_edit("final", TaskStatus.COMPLETE)

    assert not result.ok
    assert view.edit_dialog_open
    assert view.editing_task is not None
    assert view.edit_title == "final"
    assert view.edit_status is TaskStatus.COMPLETE
    assert _titles(view) == ["draft"]

    repo.failing.clear()
    assert view.submit_edit().ok
    assert _titles(view) == ["final"]


def test_end_to_end_scenario(view: TaskManagerView) -> None:
    view.add_task("Older")
    view.add_task("Write report")

    tasks = view.filtered_tasks()
    assert tasks[0].title == "Write report"
    assert tasks[0].status is TaskStatus.PENDING

    view.toggle_status(tasks[0])
    assert view.filtered_tasks()[0].status is TaskStatus.COMPLETE

    view.open_edit_dialog(view.filtered_tasks()[0])
    view.submit_edit("Write final report", TaskStatus.PENDING)
    top = view.filtered_tasks()[0]
    assert (top.title, top.status) == ("Write final report", TaskStatus.PENDING)

    view.open_delete_dialog(top.id)
    view.confirm_delete()
    assert _titles(view) == ["Older"]


def test_format_date() -> None:
    ts = datetime(2026, 10, 9, 15, 2).timestamp()
    assert format_date(ts) == "Oct 9, 2026, 03:02 PM"
