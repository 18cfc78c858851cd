from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.calendar import grid
from app.modules.calendar.schemas import MyCalendarResponse, MonthAttendanceResponse, DateAttendanceResponse
from app.modules.calendar.service import CalendarService, personal_calendar
from app.modules.schedules.service import ScheduleService
from app.modules.users.schemas import UserProfileResponse
from app.modules.users.service import UserService, member_display_name
from app.core.dependencies import require_capability
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["calendar"])


def get_schedule_service(supabase: Client = Depends(get_supabase)) -> ScheduleService:
    return ScheduleService(supabase)


def get_calendar_service(supabase: Client = Depends(get_supabase)) -> CalendarService:
    return CalendarService(ScheduleService(supabase), UserService(supabase))


def _month_or_current(year: Optional[int], month: Optional[int]):
    current = grid.today()
    return (year or current.year), (month or current.month) - 1


@router.get("/me", response_model=MyCalendarResponse)
async def get_my_calendar(
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    profile: UserProfileResponse = Depends(require_capability("schedules:access")),
    service: ScheduleService = Depends(get_schedule_service)
):
    """The caller's month grid with selections and memos (defaults to this month)"""
    year, month_index = _month_or_current(year, month)
    store = service.load_store(profile.id, member_display_name(profile))
    return personal_calendar(store, year, month_index)


@router.get("/month", response_model=MonthAttendanceResponse)
async def get_month_attendance(
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    profile: UserProfileResponse = Depends(require_capability("dashboard:access")),
    service: CalendarService = Depends(get_calendar_service)
):
    """Attendance grid for a month: available members per day"""
    year, month_index = _month_or_current(year, month)
    return service.month_attendance(year, month_index)


@router.get("/dates/{date}", response_model=DateAttendanceResponse)
async def get_date_attendance(
    date: str,
    profile: UserProfileResponse = Depends(require_capability("dashboard:access")),
    service: CalendarService = Depends(get_calendar_service)
):
    return service.date_attendance(date)
