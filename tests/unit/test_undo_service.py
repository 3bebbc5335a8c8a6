"""Unit tests for undo_service module."""

import pytest

from tasktree.domain.history import CreateTaskAction, ToggleTaskAction
from tasktree.services.undo_service import UndoHistory


@pytest.fixture
def create_action(make_task):
    def _make(task_id: int = 1) -> CreateTaskAction:
        return CreateTaskAction(task=make_task(task_id))

    return _make


@pytest.mark.unit
class TestAddAction:
    """Tests for UndoHistory.add_action."""

    def test_adds_action_to_past(self, history, create_action):
        """Test add_action appends to the undo stack."""
        history.add_action(create_action())

        assert len(history.state.past) == 1
        assert history.can_undo() is True

    def test_caps_history_and_keeps_most_recent(self, history, create_action):
        """Test history keeps only the most recent entries."""
        actions = [create_action(i) for i in range(60)]

        for action in actions:
            history.add_action(action)
            assert len(history.state.past) <= 50

        assert list(history.state.past) == actions[-50:]

    def test_custom_capacity(self, create_action):
        """Test a custom capacity is honored."""
        history = UndoHistory(max_history=3)
        for i in range(5):
            history.add_action(create_action(i))

        assert [a.task.id for a in history.state.past] == [2, 3, 4]

    def test_rejects_non_positive_capacity(self):
        """Test capacity below one is rejected."""
        with pytest.raises(ValueError, match="max_history"):
            UndoHistory(max_history=0)

    def test_new_action_clears_future(self, history, create_action):
        """Test a new action empties the redo stack."""
        history.add_action(create_action(1))
        history.undo()
        assert history.can_redo() is True

        history.add_action(create_action(2))

        assert history.can_redo() is False
        assert history.state.future == ()


@pytest.mark.unit
class TestUndoRedo:
    """Tests for UndoHistory.undo and UndoHistory.redo."""

    def test_undo_on_empty_history_returns_none(self, history):
        """Test undo with no history returns None."""
        assert history.undo() is None
        assert history.can_undo() is False

    def test_redo_on_empty_future_returns_none(self, history):
        """Test redo with no undone actions returns None."""
        assert history.redo() is None
        assert history.can_redo() is False

    def test_undo_returns_latest_and_moves_it_to_future_front(self, history, create_action):
        """Test undo pops the latest entry onto the front of the redo stack."""
        first, second = create_action(1), create_action(2)
        history.add_action(first)
        history.add_action(second)

        assert history.undo() == second
        assert history.undo() == first
        assert history.state.future == (first, second)
        assert history.can_undo() is False

    def test_redo_returns_earliest_future_and_appends_to_past(self, history, create_action):
        """Test redo takes the front of the redo stack back onto the undo stack."""
        first, second = create_action(1), create_action(2)
        history.add_action(first)
        history.add_action(second)
        history.undo()
        history.undo()

        assert history.redo() == first
        assert history.state.past == (first,)
        assert history.state.future == (second,)

    def test_undo_then_redo_round_trip(self, history):
        """Test undo followed by redo restores the original stacks."""
        action = ToggleTaskAction(task_id=1, before=False, after=True)
        history.add_action(action)

        assert history.undo() == action
        assert history.redo() == action
        assert history.state.past == (action,)
        assert history.can_redo() is False

    def test_clear_empties_both_stacks(self, history, create_action):
        """Test clear empties both stacks."""
        history.add_action(create_action(1))
        history.add_action(create_action(2))
        history.undo()

        history.clear()

        assert history.can_undo() is False
        assert history.can_redo() is False


@pytest.mark.unit
class TestSubscribe:
    """Tests for UndoHistory.subscribe."""

    def test_listener_sees_initial_and_later_snapshots(self, history, create_action):
        """Test listeners get the current snapshot and each change."""
        seen = []
        unsubscribe = history.subscribe(seen.append)

        history.add_action(create_action(1))
        unsubscribe()
        history.clear()

        assert len(seen) == 2
        assert seen[0].past == ()
        assert len(seen[1].past) == 1
