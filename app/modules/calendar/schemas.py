from pydantic import BaseModel
from typing import Optional, List


class CalendarCell(BaseModel):
    date: str
    in_month: bool
    is_today: bool
    is_holiday: bool
    weekday: str
    selected: bool = False
    memo: str = ""


class MyCalendarResponse(BaseModel):
    year: int
    month: int
    cells: List[CalendarCell]
    selected_count: int


class Attendee(BaseModel):
    member_id: str
    name: str
    instrument: str = ""
    memo: str = ""


class AttendanceCell(BaseModel):
    date: str
    in_month: bool
    is_today: bool
    is_holiday: bool
    weekday: str
    attendees: List[Attendee] = []
    count: int = 0


class MonthAttendanceResponse(BaseModel):
    year: int
    month: int
    cells: List[AttendanceCell]


class DateAttendanceResponse(BaseModel):
    date: str
    is_holiday: bool
    holiday_name: Optional[str] = None
    attendees: List[Attendee]
    count: int
