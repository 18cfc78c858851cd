"""
Reconciliation of a local availability store with the canonical schedule.

A save is one upsert keyed by member id followed by a refetch. The store is
reloaded from the refetched record; edits made after the save started are
replayed on top of it instead of being discarded.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from app.core.exceptions import ScheduleSaveError
from app.modules.calendar.grid import as_date_key, format_date, today, week_start
from app.modules.schedules.availability import (
    AvailabilitySnapshot, AvailabilityStore, covered_notes, sort_weekdays
)
from app.modules.schedules.schemas import ScheduleResponse, ScheduleUpsert
from app.modules.schedules.service import ScheduleService

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    schedule_id: str
    schedule: Optional[ScheduleResponse] = None
    replayed: int = 0


@dataclass
class BatchSaveResult:
    saved: List[str]
    failed: List[str]

    @property
    def success(self) -> bool:
        return not self.failed


def build_schedule_document(snapshot: AvailabilitySnapshot) -> ScheduleUpsert:
    """Serialize a snapshot into the canonical schedule shape."""
    dates = sorted(snapshot.selected)
    # memos left on a date that is no longer available are not persisted
    notes = covered_notes(snapshot.notes, dates, snapshot.legacy_days)
    return ScheduleUpsert(
        member_id=snapshot.member_id,
        member_name=snapshot.member_name,
        # legacy days are dropped once any date exists
        available_days=[] if dates else list(snapshot.legacy_days),
        available_dates=dates,
        date_notes=notes,
        week_start_date=snapshot.week_start_date or format_date(week_start(today())),
    )


def canonicalize_document(document: ScheduleUpsert) -> ScheduleUpsert:
    """Normalize a client-supplied schedule to the canonical shape."""
    dates = sorted({as_date_key(d) for d in document.available_dates})
    days = [] if dates else sort_weekdays(document.available_days)
    notes = {as_date_key(k): v for k, v in document.date_notes.items()}
    return document.model_copy(update={
        "available_dates": dates,
        "date_notes": covered_notes(notes, dates, days),
        "available_days": days,
    })


class ScheduleSync:
    def __init__(self, service: ScheduleService):
        self.service = service

    def _upsert(self, document: ScheduleUpsert) -> str:
        try:
            return self.service.upsert_schedule(document)
        except Exception as e:
            message = getattr(e, "detail", None) or str(e)
            logger.error(f"Schedule upsert failed for member {document.member_id}: {message}")
            raise ScheduleSaveError(document.member_id, str(message)) from e

    def save_snapshot(self, snapshot: AvailabilitySnapshot) -> str:
        """Upsert one snapshot without touching any store."""
        return self._upsert(build_schedule_document(snapshot))

    def save(self, store: AvailabilityStore) -> SaveResult:
        """Persist the store, then reload it from the canonical record.

        Raises ScheduleSaveError if the upsert fails; the store is left as is.
        """
        snapshot = store.snapshot()
        schedule_id = self.save_snapshot(snapshot)
        logger.info(
            f"Saved schedule {schedule_id} for member {store.member_id} "
            f"({len(snapshot.selected)} dates, {len(snapshot.notes)} memos)"
        )
        schedule, replayed = self.refresh(store, since_version=snapshot.version)
        return SaveResult(schedule_id=schedule_id, schedule=schedule, replayed=replayed)

    def refresh(self, store: AvailabilityStore, since_version: Optional[int] = None):
        """Refetch the member's canonical schedule and reset the store from it.

        With since_version, edits journaled after that version are replayed.
        Returns (schedule or None, replayed edit count).
        """
        try:
            schedule = self.service.find_schedule_by_member(store.member_id)
        except Exception as e:
            logger.warning(f"Could not reload schedule for member {store.member_id}: {e}")
            if since_version is not None:
                store.mark_saved(since_version)
            return None, 0
        records = [schedule] if schedule else []
        if since_version is None or store.version == since_version:
            store.load(records)
            return schedule, 0
        return schedule, store.rebase(records, since_version)

    def save_many(self, documents: Iterable[ScheduleUpsert]) -> BatchSaveResult:
        """Upsert several schedules. Each record succeeds or fails on its own."""
        # validate every record before the first write
        documents = [canonicalize_document(document) for document in documents]
        saved, failed = [], []
        for document in documents:
            try:
                saved.append(self._upsert(document))
            except ScheduleSaveError:
                failed.append(document.member_id)
        if failed:
            logger.warning(f"Batch schedule save: {len(saved)} saved, {len(failed)} failed")
        return BatchSaveResult(saved=saved, failed=failed)
