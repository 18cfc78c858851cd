"""
In-memory working copy of one member's availability.

A schedule is either legacy (a set of weekday labels) or date based (a set of
ISO dates). Date based data wins as soon as it is non-empty; every reader goes
through resolve_availability / is_available instead of checking fields.

The store is single-writer and synchronous. Each state-changing operation
bumps a monotonic version and is journaled, so edits made while a save is in
flight can be replayed on top of the canonical record that comes back.
"""

import logging
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from app.modules.calendar.grid import (
    WEEK_LABELS, as_date_key, days_in_month, parse_date, weekday_label
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegacyDays:
    days: FrozenSet[str]


@dataclass(frozen=True)
class DateBased:
    dates: FrozenSet[str]


Availability = Union[LegacyDays, DateBased]


def resolve_availability(available_dates, available_days) -> Availability:
    if available_dates:
        return DateBased(frozenset(available_dates))
    return LegacyDays(frozenset(available_days or ()))


def is_available(schedule, day) -> bool:
    """Whether the schedule marks the member available on day.

    schedule is anything exposing available_dates and available_days
    (a ScheduleResponse, an AvailabilitySnapshot, ...).
    """
    availability = resolve_availability(schedule.available_dates, schedule.available_days)
    if isinstance(availability, DateBased):
        return as_date_key(day) in availability.dates
    value = day if isinstance(day, date) else parse_date(day)
    return weekday_label(value) in availability.days


def sort_weekdays(days: Iterable[str]) -> List[str]:
    order = {label: i for i, label in enumerate(WEEK_LABELS)}
    return sorted(set(days), key=lambda d: order.get(d, len(order)))


def covered_notes(notes: Mapping[str, str], dates: Iterable[str], legacy_days: Iterable[str]) -> dict:
    """Non-blank memos on days the member is available, sorted by date.

    With any explicit date only those dates count, otherwise the legacy
    weekdays do. notes keys must already be canonical date keys.
    """
    dates = set(dates)
    legacy_days = set(legacy_days)

    def covered(key: str) -> bool:
        if dates:
            return key in dates
        return weekday_label(parse_date(key)) in legacy_days

    return {key: notes[key].strip() for key in sorted(notes) if notes[key] and notes[key].strip() and covered(key)}


@dataclass(frozen=True)
class AvailabilitySnapshot:
    member_id: str
    member_name: str
    selected: FrozenSet[str]
    notes: Mapping[str, str]
    legacy_days: Tuple[str, ...] = ()
    week_start_date: Optional[str] = None
    version: int = 0

    @property
    def available_dates(self) -> List[str]:
        return sorted(self.selected)

    @property
    def available_days(self) -> List[str]:
        return list(self.legacy_days)

    @property
    def date_notes(self) -> dict:
        return dict(self.notes)


class AvailabilityStore:
    def __init__(self, member_id: str, member_name: str = ""):
        self.member_id = member_id
        self.member_name = member_name
        self._selected = set()
        self._notes = {}
        self._legacy_days: Tuple[str, ...] = ()
        self._week_start_date: Optional[str] = None
        self._version = 0
        self._loaded_version = 0
        self._journal: List[Tuple[int, str, tuple]] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def has_changes(self) -> bool:
        return self._version != self._loaded_version

    def snapshot(self) -> AvailabilitySnapshot:
        return AvailabilitySnapshot(
            member_id=self.member_id,
            member_name=self.member_name,
            selected=frozenset(self._selected),
            notes=MappingProxyType(dict(self._notes)),
            legacy_days=self._legacy_days,
            week_start_date=self._week_start_date,
            version=self._version,
        )

    def load(self, records: Iterable) -> AvailabilitySnapshot:
        """Replace the working copy with the canonical records.

        Call once per successful fetch. An empty list is a legitimate empty
        schedule and clears the store.
        """
        record = next((r for r in records if r.member_id == self.member_id), None)
        if record is None:
            self._selected = set()
            self._notes = {}
            self._legacy_days = ()
            self._week_start_date = None
        else:
            self._selected = set(record.available_dates or [])
            self._notes = {k: v for k, v in (record.date_notes or {}).items() if v}
            self._legacy_days = tuple(sort_weekdays(record.available_days or []))
            self._week_start_date = record.week_start_date or None
            if not self.member_name:
                self.member_name = record.member_name or ""
        self._journal = []
        self._loaded_version = self._version
        return self.snapshot()

    def rebase(self, records: Iterable, since_version: int) -> int:
        """Load records, then replay the edits journaled after since_version.

        Returns the number of replayed edits.
        """
        pending = [entry for entry in self._journal if entry[0] > since_version]
        self.load(records)
        for _, operation, args in pending:
            getattr(self, operation)(*args)
        if pending:
            logger.info(f"Re-applied {len(pending)} local edit(s) for member {self.member_id} after reload")
        return len(pending)

    def mark_saved(self, version: int) -> None:
        """Record that everything up to version is persisted without reloading."""
        self._journal = [entry for entry in self._journal if entry[0] > version]
        self._loaded_version = version

    def _record(self, operation: str, *args) -> None:
        self._version += 1
        self._journal.append((self._version, operation, args))

    def is_selected(self, day) -> bool:
        return is_available(self.snapshot(), day)

    def memo(self, day) -> str:
        return self._notes.get(as_date_key(day), "")

    def toggle(self, day) -> AvailabilitySnapshot:
        """Select day, or deselect it and drop its memo."""
        key = as_date_key(day)
        if key in self._selected:
            self._selected.discard(key)
            self._notes.pop(key, None)
        else:
            self._selected.add(key)
        self._record("toggle", key)
        return self.snapshot()

    def mark_range(self, day) -> AvailabilitySnapshot:
        """Select day if it is not already selected. Never deselects."""
        key = as_date_key(day)
        if key not in self._selected:
            self._selected.add(key)
            self._record("mark_range", key)
        return self.snapshot()

    def set_memo(self, day, text: str) -> AvailabilitySnapshot:
        """Attach a memo (selecting the day) or remove it when text is blank."""
        key = as_date_key(day)
        text = (text or "").strip()
        if text:
            if key not in self._selected or self._notes.get(key) != text:
                self._selected.add(key)
                self._notes[key] = text
                self._record("set_memo", key, text)
        elif key in self._notes:
            del self._notes[key]
            self._record("set_memo", key, "")
        return self.snapshot()

    def selected_count(self, year: int, month_index: int) -> int:
        """Number of available days in the given month."""
        if self._selected:
            prefix = f"{year:04d}-{month_index + 1:02d}-"
            return sum(1 for d in self._selected if d.startswith(prefix))
        if not self._legacy_days:
            return 0
        return sum(
            1 for day in range(1, days_in_month(year, month_index) + 1)
            if weekday_label(date(year, month_index + 1, day)) in self._legacy_days
        )
