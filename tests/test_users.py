"""
Route tests for profiles, first sign-in bootstrap and role management.
"""

import pytest

from tests.conftest import profile_row


@pytest.fixture
def orchestra(fake_db):
    fake_db.tables["user_profiles"] = [
        profile_row("boss", name="Park", role="SuperAdmin"),
        profile_row("admin", name="Choi", role="Admin"),
        profile_row("kim", name="Kim", instrument="Vn"),
        profile_row("lee", name="Lee", instrument="Vc"),
    ]
    return fake_db


class TestCurrentUser:
    def test_first_sign_in_creates_default_profile(self, api, fake_db):
        response = api("newbie").get("/api/v1/auth/me")

        assert response.status_code == 200
        body = response.json()
        assert body["profile"]["role"] == "User"
        assert body["needs_setup"] is True
        assert body["capabilities"] == ["dashboard:access", "schedules:access"]
        assert [row["id"] for row in fake_db.rows("user_profiles")] == ["newbie"]

    def test_existing_profile_is_not_recreated(self, api, orchestra):
        response = api("boss").get("/api/v1/auth/me")

        body = response.json()
        assert body["needs_setup"] is False
        assert "roles:manage" in body["capabilities"]
        assert ("user_profiles", "insert") not in orchestra.calls

    def test_setup_trims_name(self, api, fake_db):
        response = api("newbie").post("/api/v1/users/me/setup", json={"name": "  Kim Minji  "})
        assert response.status_code == 200
        assert response.json()["name"] == "Kim Minji"

    def test_setup_requires_name(self, api, fake_db):
        response = api("newbie").post("/api/v1/users/me/setup", json={"name": "   "})
        assert response.status_code == 400
        assert response.json()["detail"] == "Name is required"

    def test_update_my_instrument(self, api, orchestra):
        response = api("kim").put("/api/v1/users/me", json={"instrument": "Va", "part": "2nd"})
        assert response.status_code == 200
        assert response.json()["instrument"] == "Va"
        assert response.json()["name"] == "Kim"


class TestUserAccess:
    def test_user_can_read_self_but_not_others(self, api, orchestra):
        client = api("kim")
        assert client.get("/api/v1/users/kim").status_code == 200
        assert client.get("/api/v1/users/lee").status_code == 403

    def test_admin_can_update_others(self, api, orchestra):
        response = api("admin").put("/api/v1/users/lee", json={"remarks": "on leave"})
        assert response.status_code == 200
        assert response.json()["remarks"] == "on leave"

    def test_missing_user_is_404(self, api, orchestra):
        assert api("admin").get("/api/v1/users/ghost").status_code == 404

    def test_list_users(self, api, orchestra):
        response = api("kim").get("/api/v1/users")
        assert response.status_code == 200
        assert len(response.json()) == 4


class TestRoles:
    def test_super_admin_changes_another_users_role(self, api, orchestra):
        response = api("boss").patch("/api/v1/users/kim/role", json={"role": "Admin"})
        assert response.status_code == 200
        assert response.json()["role"] == "Admin"

    def test_cannot_change_own_role(self, api, orchestra):
        response = api("boss").patch("/api/v1/users/boss/role", json={"role": "User"})
        assert response.status_code == 400
        assert [row["role"] for row in orchestra.rows("user_profiles") if row["id"] == "boss"] == ["SuperAdmin"]

    @pytest.mark.parametrize("caller", ["admin", "kim"])
    def test_only_super_admin_changes_roles(self, api, orchestra, caller):
        response = api(caller).patch("/api/v1/users/lee/role", json={"role": "Admin"})
        assert response.status_code == 403

    def test_unknown_role_is_rejected(self, api, orchestra):
        response = api("boss").patch("/api/v1/users/kim/role", json={"role": "Conductor"})
        assert response.status_code == 400

    def test_role_matrix_for_super_admin(self, api, orchestra):
        response = api("boss").get("/api/v1/users/roles")
        assert response.status_code == 200
        roles = {role["name"]: role["capabilities"] for role in response.json()["roles"]}
        assert roles["User"] == ["dashboard:access", "schedules:access"]
        assert api("admin").get("/api/v1/users/roles").status_code == 403
