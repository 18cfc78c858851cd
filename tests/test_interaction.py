"""
Unit tests for the click/drag state machine and the duplicate-click debouncer.
"""

from datetime import date

from app.modules.schedules import interaction
from app.modules.schedules.interaction import (
    ClickDebouncer, GesturePhase, MarkRange, OpenEditor, Point
)

THRESHOLD = 5.0
JUNE = (2024, 5)


def _press(day=date(2024, 6, 3), x=10.0, y=10.0):
    return interaction.pointer_down(interaction.IDLE, Point(x, y), day).state


class TestGestureTransitions:
    def test_pointer_down_arms(self):
        state = _press()
        assert state.phase == GesturePhase.ARMED
        assert state.start_date == date(2024, 6, 3)

    def test_small_movement_then_release_opens_editor(self):
        state = _press()
        moved = interaction.pointer_move(state, Point(13.0, 14.0), THRESHOLD)  # exactly 5 units
        assert moved.state.phase == GesturePhase.ARMED
        assert moved.effects == ()

        released = interaction.pointer_up(moved.state, Point(13.0, 14.0), JUNE, THRESHOLD)
        assert released.state == interaction.IDLE
        assert released.effects == (OpenEditor(date(2024, 6, 3), None),)

    def test_large_movement_starts_drag_on_the_start_cell(self):
        moved = interaction.pointer_move(_press(), Point(16.0, 10.0), THRESHOLD)
        assert moved.state.phase == GesturePhase.DRAGGING
        assert moved.effects == (MarkRange(date(2024, 6, 3)),)

    def test_drag_marks_each_new_cell_once(self):
        state = interaction.pointer_move(_press(), Point(30.0, 10.0), THRESHOLD).state
        entered = interaction.pointer_enter(state, date(2024, 6, 4))
        assert entered.effects == (MarkRange(date(2024, 6, 4)),)
        again = interaction.pointer_enter(entered.state, date(2024, 6, 4))
        assert again.effects == ()
        back = interaction.pointer_enter(again.state, date(2024, 6, 3))
        assert back.effects == ()

    def test_drag_release_never_opens_editor(self):
        state = interaction.pointer_move(_press(), Point(30.0, 10.0), THRESHOLD).state
        released = interaction.pointer_up(state, Point(30.0, 10.0), JUNE, THRESHOLD)
        assert released.state == interaction.IDLE
        assert released.effects == ()

    def test_enter_while_armed_does_nothing(self):
        state = _press()
        assert interaction.pointer_enter(state, date(2024, 6, 4)).effects == ()

    def test_release_far_away_without_move_events_is_not_a_click(self):
        released = interaction.pointer_up(_press(), Point(40.0, 10.0), JUNE, THRESHOLD)
        assert released.effects == ()

    def test_click_on_adjacent_month_navigates_first(self):
        state = _press(day=date(2024, 7, 2))
        released = interaction.pointer_up(state, None, JUNE, THRESHOLD)
        assert released.effects == (OpenEditor(date(2024, 7, 2), (2024, 6)),)

    def test_leaving_the_grid_resets(self):
        state = interaction.pointer_move(_press(), Point(30.0, 10.0), THRESHOLD).state
        assert interaction.pointer_leave(state).state == interaction.IDLE

    def test_up_without_down_is_ignored(self):
        released = interaction.pointer_up(interaction.IDLE, Point(0, 0), JUNE, THRESHOLD)
        assert released.effects == ()


class TestClickDebouncer:
    def test_same_date_within_window_is_suppressed(self):
        debouncer = ClickDebouncer(window_ms=500)
        assert debouncer.should_notify("2024-06-03", now=10.0)
        assert not debouncer.should_notify("2024-06-03", now=10.3)

    def test_same_date_after_window_notifies(self):
        debouncer = ClickDebouncer(window_ms=500)
        assert debouncer.should_notify("2024-06-03", now=10.0)
        assert debouncer.should_notify("2024-06-03", now=10.6)

    def test_other_date_always_notifies(self):
        debouncer = ClickDebouncer(window_ms=500)
        assert debouncer.should_notify("2024-06-03", now=10.0)
        assert debouncer.should_notify("2024-06-04", now=10.1)

    def test_uses_injected_clock(self):
        ticks = iter([1.0, 1.2])
        debouncer = ClickDebouncer(window_ms=500, clock=lambda: next(ticks))
        assert debouncer.should_notify("2024-06-03")
        assert not debouncer.should_notify("2024-06-03")
