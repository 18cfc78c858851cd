"""
Click vs drag disambiguation for the availability calendar.

Pure transition functions over an immutable GestureState:

    idle     --pointer_down(pos, date)--------------------> armed
    armed    --pointer_move(pos), moved > threshold-------> dragging  [MarkRange(start_date)]
    dragging --pointer_enter(date), new cell--------------> dragging  [MarkRange(date)]
    armed    --pointer_up(pos), moved <= threshold--------> idle      [OpenEditor(start_date)]
    armed    --pointer_up(pos), moved > threshold---------> idle
    dragging --pointer_up-------------------------------->  idle
    any      --pointer_leave (grid)-----------------------> idle

Effects are returned, never executed here; the editor applies them to the
availability store.
"""

import math
import time
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union


class GesturePhase(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class GestureState:
    phase: GesturePhase = GesturePhase.IDLE
    start: Optional[Point] = None
    start_date: Optional[date] = None
    entered: Tuple[date, ...] = ()


@dataclass(frozen=True)
class MarkRange:
    date: date


@dataclass(frozen=True)
class OpenEditor:
    date: date
    # (year, zero-based month) to show first when the date is outside the visible month
    navigate_to: Optional[Tuple[int, int]] = None


Effect = Union[MarkRange, OpenEditor]


@dataclass(frozen=True)
class Transition:
    state: GestureState
    effects: Tuple[Effect, ...] = ()


IDLE = GestureState()


def pointer_down(state: GestureState, pos: Point, day: date) -> Transition:
    return Transition(GestureState(phase=GesturePhase.ARMED, start=pos, start_date=day))


def pointer_move(state: GestureState, pos: Point, threshold: float) -> Transition:
    if state.phase != GesturePhase.ARMED:
        return Transition(state)
    if pos.distance_to(state.start) <= threshold:
        return Transition(state)
    dragging = replace(state, phase=GesturePhase.DRAGGING, entered=(state.start_date,))
    return Transition(dragging, (MarkRange(state.start_date),))


def pointer_enter(state: GestureState, day: date) -> Transition:
    if state.phase != GesturePhase.DRAGGING or day in state.entered:
        return Transition(state)
    return Transition(replace(state, entered=state.entered + (day,)), (MarkRange(day),))


def pointer_up(
    state: GestureState,
    pos: Optional[Point],
    visible_month: Tuple[int, int],
    threshold: float,
) -> Transition:
    if state.phase != GesturePhase.ARMED:
        return Transition(IDLE)
    if pos is not None and pos.distance_to(state.start) > threshold:
        return Transition(IDLE)
    day = state.start_date
    year, month_index = visible_month
    navigate_to = None
    if (day.year, day.month - 1) != (year, month_index):
        navigate_to = (day.year, day.month - 1)
    return Transition(IDLE, (OpenEditor(day, navigate_to),))


def pointer_leave(state: GestureState) -> Transition:
    return Transition(IDLE)


class ClickDebouncer:
    """Suppresses the notification for a click replayed on the same date within window_ms.

    Only the notification is suppressed; callers still apply the state change.
    """

    def __init__(self, window_ms: int = 500, clock=time.monotonic):
        self.window_ms = window_ms
        self._clock = clock
        self._last: Optional[Tuple[str, float]] = None

    def should_notify(self, date_key: str, now: Optional[float] = None) -> bool:
        now = self._clock() if now is None else now
        if self._last is not None:
            last_key, last_at = self._last
            if last_key == date_key and (now - last_at) * 1000 < self.window_ms:
                return False
        self._last = (date_key, now)
        return True
