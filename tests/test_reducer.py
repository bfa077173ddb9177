# tests/test_reducer.py

from __future__ import annotations

import itertools

from todo_keeper.core.actions import (
    AddTask,
    DeleteTask,
    FinishTask,
    ReorderTasks,
    SyncStorage,
    ToggleTaskEditing,
)
from todo_keeper.core.models import Task
from todo_keeper.core.reducer import calc_next_order, todo_reducer


def _counter_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


def test_add_on_empty_state_creates_first_task() -> None:
    result = todo_reducer((), AddTask(text="buy milk"))

    assert len(result) == 1
    task = result[0]
    assert task.text == "buy milk"
    assert task.order == 1
    assert task.is_done is False
    assert task.is_editing is False
    assert task.id


def test_sequential_adds_get_orders_one_to_n() -> None:
    new_id = _counter_ids()
    state = ()
    for n in range(5):
        state = todo_reducer(state, AddTask(text=f"t{n}"), id_factory=new_id)

    assert [t.order for t in state] == [1, 2, 3, 4, 5]
    assert [t.text for t in state] == ["t0", "t1", "t2", "t3", "t4"]


def test_add_uses_max_order_not_length() -> None:
    state = (Task(id="a", text="A", order=7), Task(id="b", text="B", order=3))
    result = todo_reducer(state, AddTask(text="C"))

    assert result[-1].order == 8
    assert calc_next_order(()) == 1


def test_add_after_delete_keeps_counting_from_stored_max_and_never_reuses_ids() -> None:
    new_id = _counter_ids()
    state = ()
    for text in ("a", "b", "c"):
        state = todo_reducer(state, AddTask(text=text), id_factory=new_id)
    deleted = state[-1]

    state = todo_reducer(state, DeleteTask(task_id=deleted.id))
    state = todo_reducer(state, AddTask(text="d"), id_factory=new_id)

    assert state[-1].id != deleted.id
    assert len({t.id for t in state}) == len(state)
    # max is now 2 (the task with order 3 is gone)
    assert state[-1].order == 3


def test_add_returns_new_tuple(three_tasks) -> None:
    result = todo_reducer(three_tasks, AddTask(text="x"))
    assert result is not three_tasks
    assert len(three_tasks) == 3


def test_delete_removes_matching_task(three_tasks) -> None:
    result = todo_reducer(three_tasks, DeleteTask(task_id="2"))
    assert [t.id for t in result] == ["1", "3"]


def test_delete_last_task_gives_empty_collection() -> None:
    state = (Task(id="1", text="only"),)
    assert todo_reducer(state, DeleteTask(task_id="1")) == ()


def test_delete_unknown_id_returns_same_reference(three_tasks) -> None:
    assert todo_reducer(three_tasks, DeleteTask(task_id="nope")) is three_tasks
    assert todo_reducer((), DeleteTask(task_id="nope")) == ()


def test_finish_toggles_only_is_done(three_tasks) -> None:
    result = todo_reducer(three_tasks, FinishTask(task_id="2"))

    assert result[1].is_done is True
    assert result[1].order == 2
    assert result[1].text == "Task 2"
    assert result[0] is three_tasks[0]
    assert result[2] is three_tasks[2]


def test_finish_twice_restores_original(three_tasks) -> None:
    once = todo_reducer(three_tasks, FinishTask(task_id="1"))
    twice = todo_reducer(once, FinishTask(task_id="1"))
    assert twice == three_tasks


def test_finish_unknown_id_returns_same_reference(three_tasks) -> None:
    assert todo_reducer(three_tasks, FinishTask(task_id="nope")) is three_tasks


def test_toggle_editing_sets_text_and_flips_flag(three_tasks) -> None:
    result = todo_reducer(three_tasks, ToggleTaskEditing(task_id="1", input_text="Updated"))
    assert result[0].text == "Updated"
    assert result[0].is_editing is True

    back = todo_reducer(result, ToggleTaskEditing(task_id="1", input_text="Updated again"))
    assert back[0].text == "Updated again"
    assert back[0].is_editing is False


def test_toggle_editing_takes_empty_text_verbatim(three_tasks) -> None:
    # Reverting blank drafts is the edit controller's job, not the reducer's.
    result = todo_reducer(three_tasks, ToggleTaskEditing(task_id="1", input_text=""))
    assert result[0].text == ""


def test_reorder_moves_dragged_item_to_below_position(three_tasks) -> None:
    result = todo_reducer(three_tasks, ReorderTasks(dragged_id="1", below_id="3"))

    assert [t.id for t in result] == ["2", "3", "1"]
    assert [t.order for t in result] == [1, 2, 3]


def test_reorder_upwards_renumbers(three_tasks) -> None:
    result = todo_reducer(three_tasks, ReorderTasks(dragged_id="3", below_id="1"))

    assert [t.id for t in result] == ["3", "1", "2"]
    assert [t.order for t in result] == [1, 2, 3]


def test_reorder_adjacent_downwards_swaps() -> None:
    state = (
        Task(id="1", text="a", order=1),
        Task(id="2", text="b", order=2),
    )
    result = todo_reducer(state, ReorderTasks(dragged_id="1", below_id="2"))
    assert [t.id for t in result] == ["2", "1"]


def test_reorder_onto_itself_keeps_positions_and_compacts_orders() -> None:
    state = (
        Task(id="1", text="a", order=2),
        Task(id="2", text="b", order=5),
        Task(id="3", text="c", order=9),
    )
    result = todo_reducer(state, ReorderTasks(dragged_id="2", below_id="2"))

    assert [t.id for t in result] == ["1", "2", "3"]
    assert [t.order for t in result] == [1, 2, 3]


def test_reorder_with_unknown_ids_is_noop(three_tasks) -> None:
    assert todo_reducer(three_tasks, ReorderTasks(dragged_id="x", below_id="3")) is three_tasks
    assert todo_reducer(three_tasks, ReorderTasks(dragged_id="1", below_id="x")) is three_tasks
    assert todo_reducer((), ReorderTasks(dragged_id="a", below_id="b")) == ()


def test_sync_replaces_state_with_payload(three_tasks) -> None:
    payload = (Task(id="9", text="From elsewhere", is_done=True, order=1),)
    result = todo_reducer(three_tasks, SyncStorage(payload=payload))
    assert result is payload

    assert todo_reducer(three_tasks, SyncStorage(payload=())) == ()


def test_unknown_action_returns_identical_state(three_tasks) -> None:
    assert todo_reducer(three_tasks, object()) is three_tasks  # type: ignore[arg-type]
