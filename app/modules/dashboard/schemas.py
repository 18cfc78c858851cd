from pydantic import BaseModel
from typing import List


class InstrumentStat(BaseModel):
    name: str
    abbreviation: str
    count: int


class DayStat(BaseModel):
    day: str
    date: str
    date_display: str
    count: int
    holiday: bool
    is_today: bool = False


class DashboardSummary(BaseModel):
    total_members: int
    total_instruments: int
    instrument_stats: List[InstrumentStat]
    weekly_stats: List[DayStat]
    weekly_practices: int
    average_attendance: float
    current_week: str
