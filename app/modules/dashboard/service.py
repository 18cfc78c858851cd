"""
Orchestra statistics for the dashboard.

Members are the registered user profiles. The week is Monday..Sunday around
today; a day counts a member when their schedule marks them available.
"""

import logging
from collections import Counter
from datetime import date
from typing import Dict, List, Optional

from app.modules.calendar import grid
from app.modules.dashboard.schemas import DashboardSummary, DayStat, InstrumentStat
from app.modules.instruments.service import InstrumentService
from app.modules.schedules.availability import is_available
from app.modules.schedules.schemas import ScheduleResponse
from app.modules.schedules.service import ScheduleService
from app.modules.users.schemas import UserProfileResponse
from app.modules.users.service import UserService

logger = logging.getLogger(__name__)


def instrument_stats(profiles: List[UserProfileResponse], names: Dict[str, str]) -> List[InstrumentStat]:
    counts = Counter(p.instrument for p in profiles if p.instrument)
    return [
        InstrumentStat(name=names.get(abbreviation, abbreviation), abbreviation=abbreviation, count=count)
        for abbreviation, count in counts.most_common()
    ]


def weekly_stats(schedules: List[ScheduleResponse], current: Optional[date] = None) -> List[DayStat]:
    current = current or grid.today()
    stats = []
    for label, day in zip(grid.WEEK_LABELS, grid.current_week(current)):
        stats.append(DayStat(
            day=label,
            date=grid.format_date(day),
            date_display=f"{day.month}/{day.day}",
            count=sum(1 for schedule in schedules if is_available(schedule, day)),
            holiday=grid.is_holiday(day),
            is_today=(day == current),
        ))
    return stats


class DashboardService:
    def __init__(self, user_service: UserService, schedule_service: ScheduleService,
                 instrument_service: InstrumentService):
        self.user_service = user_service
        self.schedule_service = schedule_service
        self.instrument_service = instrument_service

    def summary(self, current: Optional[date] = None) -> DashboardSummary:
        current = current or grid.today()
        profiles = self.user_service.list_users()
        schedules = self.schedule_service.list_schedules()
        names = self.instrument_service.names_by_abbreviation()

        week = weekly_stats(schedules, current)
        total_attendance = sum(stat.count for stat in week)
        logger.debug(f"Dashboard summary: {len(profiles)} members, {len(schedules)} schedules")
        return DashboardSummary(
            total_members=len(profiles),
            total_instruments=len({p.instrument for p in profiles if p.instrument}),
            instrument_stats=instrument_stats(profiles, names),
            weekly_stats=week,
            weekly_practices=sum(1 for stat in week if stat.count > 0),
            average_attendance=round(total_attendance / len(week), 1),
            current_week=grid.format_date(grid.week_start(current)),
        )
