import logging
from datetime import date
from typing import Dict, List, Optional

from app.modules.calendar import grid
from app.modules.calendar.schemas import (
    Attendee, AttendanceCell, CalendarCell, DateAttendanceResponse, MonthAttendanceResponse, MyCalendarResponse
)
from app.modules.schedules.availability import AvailabilityStore, is_available
from app.modules.schedules.editor import editor_cells
from app.modules.schedules.schemas import ScheduleResponse
from app.modules.schedules.service import ScheduleService
from app.modules.users.schemas import UserProfileResponse
from app.modules.users.service import UserService, member_display_name

logger = logging.getLogger(__name__)


def attendees_on(day: date, schedules: List[ScheduleResponse],
                 profiles: Dict[str, UserProfileResponse]) -> List[Attendee]:
    """Members available on day, in schedule order, with their memo for that day."""
    key = grid.format_date(day)
    attendees = []
    for schedule in schedules:
        if not is_available(schedule, day):
            continue
        profile = profiles.get(schedule.member_id)
        # schedules can outlive their user profile
        name = member_display_name(profile) if profile else schedule.member_name
        attendees.append(Attendee(
            member_id=schedule.member_id,
            name=name or "Unknown",
            instrument=(profile.instrument or "") if profile else "",
            memo=schedule.date_notes.get(key, ""),
        ))
    return attendees


def personal_calendar(store: AvailabilityStore, year: int, month_index: int,
                      current: Optional[date] = None) -> MyCalendarResponse:
    cells = [
        CalendarCell(
            date=grid.format_date(cell.date),
            in_month=cell.in_month,
            is_today=cell.is_today,
            is_holiday=cell.is_holiday,
            weekday=cell.weekday,
            selected=cell.selected,
            memo=cell.memo,
        )
        for cell in editor_cells(store, year, month_index, current)
    ]
    return MyCalendarResponse(
        year=year,
        month=month_index + 1,
        cells=cells,
        selected_count=store.selected_count(year, month_index),
    )


class CalendarService:
    """Attendance views over every member's schedule."""

    def __init__(self, schedule_service: ScheduleService, user_service: UserService):
        self.schedule_service = schedule_service
        self.user_service = user_service

    def _load(self):
        schedules = self.schedule_service.list_schedules()
        profiles = {profile.id: profile for profile in self.user_service.list_users()}
        return schedules, profiles

    def month_attendance(self, year: int, month_index: int,
                         current: Optional[date] = None) -> MonthAttendanceResponse:
        """The 42-cell grid with the available members on each in-month day"""
        cells = grid.grid_cells(year, month_index, current)
        schedules, profiles = self._load()
        result = []
        for cell in cells:
            # neighbouring-month padding is shown without attendance
            attendees = attendees_on(cell.date, schedules, profiles) if cell.in_month else []
            result.append(AttendanceCell(
                date=grid.format_date(cell.date),
                in_month=cell.in_month,
                is_today=cell.is_today,
                is_holiday=cell.is_holiday,
                weekday=cell.weekday,
                attendees=attendees,
                count=len(attendees),
            ))
        logger.debug(f"Built attendance grid for {year}-{month_index + 1:02d} from {len(schedules)} schedules")
        return MonthAttendanceResponse(year=year, month=month_index + 1, cells=result)

    def date_attendance(self, day) -> DateAttendanceResponse:
        value = grid.parse_date(grid.as_date_key(day))
        schedules, profiles = self._load()
        attendees = attendees_on(value, schedules, profiles)
        return DateAttendanceResponse(
            date=grid.format_date(value),
            is_holiday=grid.is_holiday(value),
            holiday_name=grid.holiday_name(value),
            attendees=attendees,
            count=len(attendees),
        )
