# tests/test_drag_engine.py

from __future__ import annotations

from todo_keeper.core.actions import FinishTask, ReorderTasks
from todo_keeper.core.ports import BoundingBox
from todo_keeper.core.store import TodoStore
from todo_keeper.drag.engine import DragReorderEngine, hysteresis_thresholds, should_reorder
from todo_keeper.drag.layout import RowLayout, simulate_drag

from .fakes import FakeGeometry


class RecordingDispatch:
    def __init__(self, store: TodoStore) -> None:
        self.store = store
        self.actions: list[object] = []

    def __call__(self, action) -> None:
        self.actions.append(action)
        self.store.dispatch(action)


def _engine(store: TodoStore, geometry) -> tuple[DragReorderEngine, RecordingDispatch]:
    dispatch = RecordingDispatch(store)
    return DragReorderEngine(store.get_state, dispatch, geometry, store), dispatch


def test_thresholds_sit_at_quarter_and_three_quarters() -> None:
    low, high = hysteresis_thresholds(BoundingBox(top=0, height=40))
    assert (low, high) == (10.0, 30.0)


def test_should_reorder_respects_direction() -> None:
    box = BoundingBox(top=100, height=40)
    assert should_reorder(ghost_middle=131, box=box, dragged_order=1, hovered_order=2)
    assert not should_reorder(ghost_middle=129, box=box, dragged_order=1, hovered_order=2)
    assert should_reorder(ghost_middle=109, box=box, dragged_order=3, hovered_order=2)
    assert not should_reorder(ghost_middle=111, box=box, dragged_order=3, hovered_order=2)
    # moving "up" past the low threshold means nothing when dragging downward
    assert not should_reorder(ghost_middle=101, box=box, dragged_order=1, hovered_order=2)


def test_start_captures_offset_and_sets_drag_flag(three_tasks) -> None:
    store = TodoStore(three_tasks)
    engine, _ = _engine(store, FakeGeometry())

    assert engine.start("1", pointer_y=100, box=BoundingBox(top=80, height=40))

    assert engine.dragged_id == "1"
    assert engine.drag_offset == 0.0
    assert store.is_dragging is True


def test_drag_down_past_high_threshold_emits_one_reorder(three_tasks) -> None:
    store = TodoStore(three_tasks)
    geometry = FakeGeometry({"2": BoundingBox(top=100, height=50)})
    engine, dispatch = _engine(store, geometry)
    engine.start("1", pointer_y=60, box=BoundingBox(top=50, height=50))
    # grabbed 15px above the centre
    assert engine.drag_offset == -15.0

    # ghost = pointer + 15; high threshold = 37.5 below the top of item 2
    assert not engine.over("2", pointer_y=100 + 37.5 - 15)
    assert dispatch.actions == []

    assert engine.over("2", pointer_y=100 + 38 - 15)
    assert dispatch.actions == [ReorderTasks(dragged_id="1", below_id="2")]
    assert [t.id for t in store.state] == ["2", "1", "3"]


def test_drag_up_past_low_threshold_emits_reorder(three_tasks) -> None:
    store = TodoStore(three_tasks)
    geometry = FakeGeometry({"2": BoundingBox(top=40, height=40)})
    engine, dispatch = _engine(store, geometry)
    engine.start("3", pointer_y=100, box=BoundingBox(top=80, height=40))

    assert not engine.over("2", pointer_y=55)  # inside dead zone
    assert engine.over("2", pointer_y=49)
    assert dispatch.actions == [ReorderTasks(dragged_id="3", below_id="2")]


def test_over_is_noop_without_drag_or_on_self(three_tasks) -> None:
    store = TodoStore(three_tasks)
    geometry = FakeGeometry({"1": BoundingBox(0, 40), "2": BoundingBox(40, 40)})
    engine, dispatch = _engine(store, geometry)

    assert not engine.over("2", pointer_y=79)

    engine.start("1", pointer_y=20, box=BoundingBox(0, 40))
    assert not engine.over("1", pointer_y=39)
    assert not engine.over("", pointer_y=79)
    assert not engine.over("missing", pointer_y=79)
    assert dispatch.actions == []


def test_over_without_box_is_noop(three_tasks) -> None:
    store = TodoStore(three_tasks)
    engine, dispatch = _engine(store, FakeGeometry())
    engine.start("1", pointer_y=20, box=BoundingBox(0, 40))
    assert not engine.over("2", pointer_y=1000)
    assert dispatch.actions == []


def test_completed_tasks_cannot_be_dragged(three_tasks) -> None:
    store = TodoStore(three_tasks)
    store.dispatch(FinishTask(task_id="1"))
    engine, _ = _engine(store, FakeGeometry())

    assert not engine.start("1", pointer_y=20, box=BoundingBox(0, 40))
    assert not engine.start("unknown", pointer_y=20, box=BoundingBox(0, 40))
    assert engine.is_active is False
    assert store.is_dragging is False


def test_end_clears_state_and_drag_flag(three_tasks) -> None:
    store = TodoStore(three_tasks)
    engine, _ = _engine(store, FakeGeometry())
    engine.start("2", pointer_y=60, box=BoundingBox(40, 40))

    engine.end()

    assert engine.dragged_id == ""
    assert store.is_dragging is False


def test_row_layout_follows_display_order(three_tasks) -> None:
    store = TodoStore(three_tasks)
    store.dispatch(FinishTask(task_id="1"))
    layout = RowLayout(store.get_state, row_height=40)

    assert [t.id for t in layout.rows()] == ["2", "3", "1"]
    assert layout.box_for("1") == BoundingBox(top=80, height=40)
    assert layout.row_at(45).id == "3"
    assert layout.row_at(500) is None


def test_simulated_drag_moves_task_down_to_target_row(three_tasks) -> None:
    store = TodoStore(three_tasks)
    layout = RowLayout(store.get_state, row_height=40)
    engine = DragReorderEngine(store.get_state, store.dispatch, layout, store)

    swaps = simulate_drag(engine, layout, "1", 2)

    assert swaps == 2
    assert [t.id for t in layout.rows()] == ["2", "3", "1"]
    assert store.is_dragging is False


def test_simulated_drag_moves_task_up(three_tasks) -> None:
    store = TodoStore(three_tasks)
    layout = RowLayout(store.get_state, row_height=40)
    engine = DragReorderEngine(store.get_state, store.dispatch, layout, store)

    simulate_drag(engine, layout, "3", 0)

    assert [t.id for t in layout.rows()] == ["3", "1", "2"]
    assert [t.order for t in store.state] == [1, 2, 3]


def test_simulated_drag_onto_same_row_changes_nothing(three_tasks) -> None:
    store = TodoStore(three_tasks)
    layout = RowLayout(store.get_state, row_height=40)
    engine = DragReorderEngine(store.get_state, store.dispatch, layout, store)

    assert simulate_drag(engine, layout, "2", 1) == 0
    assert store.state is three_tasks or store.state == three_tasks
