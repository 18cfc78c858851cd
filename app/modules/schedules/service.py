import logging
from datetime import datetime
from supabase import Client
from app.modules.schedules.availability import AvailabilityStore
from app.modules.schedules.schemas import ScheduleUpsert, ScheduleResponse
from app.modules.calendar.grid import format_date, today, week_start
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ScheduleService:
    """Persistence collaborator for schedules: find by member, upsert, list."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def _to_response(row: dict) -> ScheduleResponse:
        # JSON columns may come back as null on rows written before they existed
        return ScheduleResponse(
            id=str(row["id"]) if row.get("id") is not None else None,
            member_id=str(row["member_id"]),
            member_name=row.get("member_name") or "",
            available_days=row.get("available_days") or [],
            available_dates=row.get("available_dates") or [],
            date_notes=row.get("date_notes") or {},
            week_start_date=row.get("week_start_date") or "",
            updated_at=row.get("updated_at"),
        )

    def list_schedules(self) -> List[ScheduleResponse]:
        """List every member's schedule"""
        try:
            result = self.supabase.table("schedules")\
                .select("*")\
                .order("member_name")\
                .execute()
            return [self._to_response(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error listing schedules: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def find_schedule_by_member(self, member_id: str) -> Optional[ScheduleResponse]:
        """Get the schedule owned by a member, or None"""
        try:
            result = self.supabase.table("schedules")\
                .select("*")\
                .eq("member_id", member_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return self._to_response(result.data[0])
        except Exception as e:
            logger.error(f"Error fetching schedule for member {member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def upsert_schedule(self, schedule: ScheduleUpsert) -> str:
        """Update the member's schedule if one exists, else create it. Returns the schedule id."""
        try:
            existing = self.find_schedule_by_member(schedule.member_id)
            data = {
                "member_id": schedule.member_id,
                "member_name": schedule.member_name,
                "available_days": list(schedule.available_days),
                "available_dates": list(schedule.available_dates),
                "date_notes": dict(schedule.date_notes),
                "week_start_date": schedule.week_start_date or format_date(week_start(today())),
                "updated_at": datetime.utcnow().isoformat(),
            }

            if existing and existing.id:
                result = self.supabase.table("schedules")\
                    .update(data)\
                    .eq("id", existing.id)\
                    .execute()
                if not result.data:
                    raise HTTPException(status_code=404, detail="Schedule not found")
                return existing.id

            result = self.supabase.table("schedules").insert(data).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create schedule")
            return str(result.data[0]["id"])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving schedule for member {schedule.member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def load_store(self, member_id: str, member_name: str = "") -> AvailabilityStore:
        """Working copy of a member's schedule, loaded from the canonical record"""
        store = AvailabilityStore(member_id, member_name)
        existing = self.find_schedule_by_member(member_id)
        store.load([existing] if existing else [])
        return store
