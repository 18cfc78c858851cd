"""
Route and service tests for member records.
"""

import pytest
from fastapi import HTTPException

from app.modules.members.schemas import MemberCreate
from app.modules.members.service import MemberService
from tests.conftest import profile_row


@pytest.fixture
def staff(fake_db):
    fake_db.tables["user_profiles"] = [
        profile_row("admin", name="Choi", role="Admin"),
        profile_row("kim", name="Kim"),
    ]
    fake_db.tables["members"] = [
        {"id": "m-1", "name": "Han", "instrument": "Fl", "part": "1st", "remarks": ""},
    ]
    return fake_db


class TestMemberService:
    @pytest.mark.parametrize("payload", [
        {"instrument": "Vn"},
        {"name": "Han"},
        {"name": "  ", "instrument": "Vn"},
    ])
    def test_create_requires_name_and_instrument_before_any_db_call(self, fake_db, payload):
        with pytest.raises(HTTPException) as exc_info:
            MemberService(fake_db).create_member(MemberCreate(**payload))
        assert exc_info.value.status_code == 400
        assert fake_db.calls == []

    def test_create_trims_fields(self, fake_db):
        member = MemberService(fake_db).create_member(MemberCreate(name=" Han ", instrument=" Fl "))
        assert member.name == "Han"
        assert member.instrument == "Fl"


class TestMemberRoutes:
    def test_admin_lists_and_creates(self, api, staff):
        client = api("admin")
        created = client.post("/api/v1/members", json={"name": "Seo", "instrument": "Ob"})
        assert created.status_code == 201

        listed = client.get("/api/v1/members").json()
        assert [m["name"] for m in listed] == ["Han", "Seo"]

    def test_regular_user_is_forbidden(self, api, staff):
        response = api("kim").get("/api/v1/members")
        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions. Required: members:access"

    def test_update_and_delete(self, api, staff):
        client = api("admin")
        updated = client.put("/api/v1/members/m-1", json={"part": "2nd"})
        assert updated.json()["part"] == "2nd"
        assert client.delete("/api/v1/members/m-1").status_code == 204
        assert client.get("/api/v1/members/m-1").status_code == 404

    def test_delete_missing_member_is_404(self, api, staff):
        assert api("admin").delete("/api/v1/members/nope").status_code == 404
