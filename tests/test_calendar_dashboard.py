"""
Tests for the attendance calendar and dashboard statistics.
"""

from datetime import date

import pytest

from app.modules.dashboard.service import DashboardService
from app.modules.instruments.service import InstrumentService
from app.modules.schedules.service import ScheduleService
from app.modules.users.service import UserService
from tests.conftest import profile_row


def _schedule_row(member_id, name, dates=(), days=(), notes=None):
    return {
        "id": f"s-{member_id}",
        "member_id": member_id,
        "member_name": name,
        "available_days": list(days),
        "available_dates": list(dates),
        "date_notes": notes or {},
        "week_start_date": "2024-06-03",
    }


@pytest.fixture
def orchestra(fake_db):
    fake_db.tables["user_profiles"] = [
        profile_row("kim", name="Kim", instrument="Vn"),
        profile_row("lee", name="Lee", instrument="Vn"),
        profile_row("park", name="Park", instrument="Vc"),
        profile_row("jung", name="", display_name="Jung H.", instrument=""),
    ]
    fake_db.tables["schedules"] = [
        _schedule_row("kim", "Kim", dates=["2024-06-03", "2024-06-05"], notes={"2024-06-03": "after 8pm"}),
        # legacy weekday schedule: every Monday
        _schedule_row("lee", "Lee", days=["월"]),
        # dates win over the stale legacy days
        _schedule_row("park", "Park", dates=["2024-06-06"], days=["월"]),
        # schedule without a profile
        _schedule_row("gone", "Former Member", dates=["2024-06-03"]),
    ]
    fake_db.tables["instruments"] = [
        {"id": "i-1", "name": "바이올린", "english": "Violin", "abbreviation": "Vn"},
        {"id": "i-2", "name": "첼로", "english": "Cello", "abbreviation": "Vc"},
    ]
    return fake_db


class TestCalendarRoutes:
    def test_month_attendance(self, api, orchestra):
        response = api("kim").get("/api/v1/calendar/month", params={"year": 2024, "month": 6})

        assert response.status_code == 200
        body = response.json()
        assert body["month"] == 6
        assert len(body["cells"]) == 42
        cells = {cell["date"]: cell for cell in body["cells"]}

        monday = cells["2024-06-03"]
        assert [a["name"] for a in monday["attendees"]] == ["Former Member", "Kim", "Lee"]
        assert monday["count"] == 3
        kim = next(a for a in monday["attendees"] if a["member_id"] == "kim")
        assert kim["memo"] == "after 8pm"
        assert kim["instrument"] == "Vn"
        assert cells["2024-06-06"]["count"] == 1

    def test_padding_days_have_no_attendees(self, api, orchestra):
        body = api("kim").get("/api/v1/calendar/month", params={"year": 2024, "month": 7}).json()
        first = body["cells"][0]
        assert first["date"] == "2024-06-30"
        assert first["in_month"] is False
        assert first["attendees"] == []

    def test_month_out_of_range_is_rejected(self, api, orchestra):
        response = api("kim").get("/api/v1/calendar/month", params={"year": 2024, "month": 13})
        assert response.status_code == 422

    def test_date_attendance(self, api, orchestra):
        body = api("kim").get("/api/v1/calendar/dates/2024-06-06").json()
        assert body["count"] == 1
        assert body["attendees"][0]["name"] == "Park"
        assert body["is_holiday"] is True
        assert body["holiday_name"] == "Memorial Day"

    def test_date_attendance_bad_date(self, api, orchestra):
        assert api("kim").get("/api/v1/calendar/dates/2024-6-6").status_code == 400

    def test_my_calendar(self, api, orchestra):
        body = api("kim").get("/api/v1/calendar/me", params={"year": 2024, "month": 6}).json()
        assert body["selected_count"] == 2
        selected = [c["date"] for c in body["cells"] if c["selected"]]
        assert selected == ["2024-06-03", "2024-06-05"]

    def test_my_calendar_legacy_schedule(self, api, orchestra):
        body = api("lee").get("/api/v1/calendar/me", params={"year": 2024, "month": 6}).json()
        assert body["selected_count"] == 4


class TestDashboard:
    def test_summary(self, orchestra):
        service = DashboardService(
            UserService(orchestra), ScheduleService(orchestra), InstrumentService(orchestra)
        )
        summary = service.summary(current=date(2024, 6, 5))

        assert summary.total_members == 4
        assert summary.total_instruments == 2
        assert [(s.name, s.count) for s in summary.instrument_stats] == [("바이올린", 2), ("첼로", 1)]
        assert summary.current_week == "2024-06-03"

        week = {stat.date: stat for stat in summary.weekly_stats}
        assert [stat.day for stat in summary.weekly_stats] == ["월", "화", "수", "목", "금", "토", "일"]
        assert week["2024-06-03"].count == 3
        assert week["2024-06-03"].date_display == "6/3"
        assert week["2024-06-05"].is_today
        assert week["2024-06-06"].holiday
        assert summary.weekly_practices == 3
        assert summary.average_attendance == round(5 / 7, 1)

    def test_summary_route(self, api, orchestra):
        response = api("kim").get("/api/v1/dashboard/summary")
        assert response.status_code == 200
        assert response.json()["total_members"] == 4
