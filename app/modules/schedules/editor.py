"""
Availability editor: one member's calendar session.

Wires the month grid, the gesture state machine, the availability store and
the sync layer together. Clicking a cell opens the memo editor for that date
(switching month first when the date belongs to a neighbouring month);
dragging marks every cell entered. Saving is always explicit.
"""

import calendar
import time
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from app.config import settings
from app.core.exceptions import ScheduleSaveError
from app.modules.calendar import grid
from app.modules.schedules import interaction
from app.modules.schedules.availability import AvailabilitySnapshot, AvailabilityStore, is_available
from app.modules.schedules.interaction import ClickDebouncer, MarkRange, OpenEditor, Point
from app.modules.schedules.sync import SaveResult, ScheduleSync


@dataclass(frozen=True)
class Notification:
    message: str
    level: str = "success"  # success | info | error
    duration_ms: int = 2000


@dataclass(frozen=True)
class EditorCell:
    date: date
    in_month: bool
    is_today: bool
    is_holiday: bool
    weekday: str
    selected: bool
    memo: str


def editor_cells(store: AvailabilityStore, year: int, month_index: int,
                 current: Optional[date] = None) -> List[EditorCell]:
    snapshot = store.snapshot()
    cells = []
    for cell in grid.grid_cells(year, month_index, current):
        selected = is_available(snapshot, cell.date)
        cells.append(EditorCell(
            date=cell.date,
            in_month=cell.in_month,
            is_today=cell.is_today,
            is_holiday=cell.is_holiday,
            weekday=cell.weekday,
            selected=selected,
            memo=snapshot.notes.get(grid.format_date(cell.date), "") if selected else "",
        ))
    return cells


def _day_label(value: date) -> str:
    return f"{calendar.month_name[value.month]} {value.day}"


class ScheduleEditor:
    def __init__(
        self,
        store: AvailabilityStore,
        sync: ScheduleSync,
        current: Optional[date] = None,
        drag_threshold: Optional[float] = None,
        duplicate_click_window_ms: Optional[int] = None,
        clock=time.monotonic,
    ):
        self.store = store
        self.sync = sync
        self.today = current or grid.today()
        self.year, self.month_index = self.today.year, self.today.month - 1
        self.drag_threshold = settings.drag_threshold_px if drag_threshold is None else drag_threshold
        window = settings.duplicate_click_window_ms if duplicate_click_window_ms is None else duplicate_click_window_ms
        self.debouncer = ClickDebouncer(window, clock)
        self.gesture = interaction.IDLE
        self.editor_date: Optional[date] = None
        self.notifications: List[Notification] = []
        self.saving = False

    @property
    def visible_month(self):
        return self.year, self.month_index

    def cells(self) -> List[EditorCell]:
        return editor_cells(self.store, self.year, self.month_index, self.today)

    def selected_count(self) -> int:
        return self.store.selected_count(self.year, self.month_index)

    def notify(self, message: str, level: str = "success", duration_ms: int = 2000) -> None:
        self.notifications.append(Notification(message, level, duration_ms))

    # Month navigation

    def previous_month(self) -> None:
        self.year, self.month_index = grid.shift_month(self.year, self.month_index, -1)

    def next_month(self) -> None:
        self.year, self.month_index = grid.shift_month(self.year, self.month_index, 1)

    def go_to_today(self) -> None:
        self.year, self.month_index = self.today.year, self.today.month - 1

    # Pointer events

    def _apply(self, transition: interaction.Transition) -> None:
        self.gesture = transition.state
        for effect in transition.effects:
            if isinstance(effect, MarkRange):
                self.store.mark_range(effect.date)
            elif isinstance(effect, OpenEditor):
                if effect.navigate_to is not None:
                    self.year, self.month_index = effect.navigate_to
                self.editor_date = effect.date

    def pointer_down(self, x: float, y: float, day: date) -> None:
        self._apply(interaction.pointer_down(self.gesture, Point(x, y), day))

    def pointer_move(self, x: float, y: float) -> None:
        self._apply(interaction.pointer_move(self.gesture, Point(x, y), self.drag_threshold))

    def pointer_enter(self, day: date) -> None:
        self._apply(interaction.pointer_enter(self.gesture, day))

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        pos = Point(x, y) if x is not None and y is not None else None
        self._apply(interaction.pointer_up(self.gesture, pos, self.visible_month, self.drag_threshold))

    def pointer_leave(self) -> None:
        self._apply(interaction.pointer_leave(self.gesture))

    # Date actions

    def toggle_date(self, day, notify: bool = True) -> AvailabilitySnapshot:
        key = grid.as_date_key(day)
        was_selected = key in self.store.snapshot().selected
        show = notify and self.debouncer.should_notify(key)
        snapshot = self.store.toggle(key)
        if show:
            value = grid.parse_date(key)
            if was_selected:
                self.notify(f"{_day_label(value)} removed", "info")
            else:
                self.notify(f"{_day_label(value)} added")
        return snapshot

    def save_memo(self, day, text: str) -> AvailabilitySnapshot:
        return self.store.set_memo(day, text)

    def close_editor(self) -> None:
        self.editor_date = None

    def confirm_memo(self, text: str) -> Optional[SaveResult]:
        """Memo dialog "save": store the memo (selecting the date) and persist."""
        if self.editor_date is None:
            return None
        self.save_memo(self.editor_date, text)
        self.close_editor()
        return self.save("Schedule saved")

    def cancel_date(self) -> Optional[SaveResult]:
        """Memo dialog "cancel schedule": deselect the date (dropping its memo) and persist."""
        if self.editor_date is None:
            return None
        if grid.as_date_key(self.editor_date) in self.store.snapshot().selected:
            self.toggle_date(self.editor_date, notify=False)
        self.close_editor()
        return self.save("Schedule cancelled")

    def save(self, message: str = "Schedule saved") -> SaveResult:
        self.saving = True
        try:
            result = self.sync.save(self.store)
        except ScheduleSaveError:
            self.notify("Failed to save. Please try again.", "error", 4000)
            raise
        finally:
            self.saving = False
        self.notify(message)
        return result
