# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""HTTP tests for the user directory endpoints."""

import pytest

USERS_URL = "/api/v1/users"
NEW_PASSWORD = "Welcome-2026!"


@pytest.mark.integration
class TestUserDirectory:
    """Admin user management over HTTP."""

    def test_create_user_qualifies_mailbox_name(self, client, admin_headers):
        """A bare mailbox name gets the organisation's domain."""
        response = client.post(
            USERS_URL,
            json={"name": "Carol Diaz", "email": "carol.diaz", "isIam": True,
                  "password": NEW_PASSWORD},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "carol.diaz@TRIARQHealth.com"
        assert body["isIam"] is True
        assert body["isActive"] is True
        assert body["userId"].startswith("USR-")
        assert "passwordHash" not in body
        assert "password" not in body

    def test_duplicate_email(self, client, admin_headers):
        response = client.post(
            USERS_URL,
            json={"name": "Alice Again", "email": "ALICE.JOHNSON@triarqhealth.com",
                  "password": NEW_PASSWORD},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "conflict"

    def test_blank_name(self, client, admin_headers):
        response = client.post(
            USERS_URL,
            json={"name": " ", "email": "x@example.org", "password": NEW_PASSWORD},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == {"name": "Name is required"}

    def test_non_admin_forbidden(self, client, iam_headers):
        response = client.post(
            USERS_URL,
            json={"name": "Eve", "email": "eve", "password": NEW_PASSWORD},
            headers=iam_headers,
        )
        assert response.status_code == 403
        assert client.get(USERS_URL, headers=iam_headers).status_code == 403

    def test_list_sorted_by_name(self, client, admin_headers):
        names = [u["name"] for u in client.get(USERS_URL, headers=admin_headers).json()]
        assert names == sorted(names, key=str.lower)
        assert len(names) == 6

    def test_assignees_are_active_iam_members(self, client, employee_headers):
        response = client.get(f"{USERS_URL}/assignees", headers=employee_headers)

        assert response.status_code == 200
        assert [u["userId"] for u in response.json()] == ["USR-iam2", "USR-admin", "USR-iam"]

    def test_deactivate_and_reactivate(self, client, admin_headers, audit_repo):
        client.patch(f"{USERS_URL}/USR-emp2", json={"isActive": False}, headers=admin_headers)
        response = client.patch(
            f"{USERS_URL}/USR-emp2", json={"isActive": True}, headers=admin_headers
        )

        assert response.json()["isActive"] is True
        actions = [e.action_type.value for e in audit_repo.find_all()]
        assert "USER_DEACTIVATE" in actions
        assert "USER_REACTIVATE" in actions

    def test_update_unknown_user(self, client, admin_headers):
        response = client.patch(
            f"{USERS_URL}/USR-missing", json={"name": "Nobody"}, headers=admin_headers
        )
        assert response.status_code == 404

    def test_create_requires_password(self, client, admin_headers):
        response = client.post(
            USERS_URL, json={"name": "Dee", "email": "dee"}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_create_rejects_short_password(self, client, admin_headers):
        response = client.post(
            USERS_URL,
            json={"name": "Dee", "email": "dee", "password": "short"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert "password" in response.json()["detail"]["fields"]


@pytest.mark.integration
class TestPasswordReset:
    """Admin password reset over HTTP."""

    def test_reset_password(self, client, admin_headers, user_repo, audit_repo):
        response = client.post(
            f"{USERS_URL}/USR-emp/password", json={"password": NEW_PASSWORD},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password reset successfully", "userId": "USR-emp"}
        assert user_repo.find_by_id("USR-emp").password_hash.startswith("$argon2id$")
        resets = [e for e in audit_repo.find_all() if e.action_type.value == "PASSWORD_RESET"]
        assert [(e.target_id, e.detail) for e in resets] == [("USR-emp", {"resetBy": "Jon"})]

    def test_non_admin_forbidden(self, client, iam_headers, user_repo):
        response = client.post(
            f"{USERS_URL}/USR-emp/password", json={"password": NEW_PASSWORD},
            headers=iam_headers,
        )

        assert response.status_code == 403
        assert user_repo.find_by_id("USR-emp").password_hash is None

    def test_short_password(self, client, admin_headers):
        response = client.post(
            f"{USERS_URL}/USR-emp/password", json={"password": "1234567"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_unknown_user(self, client, admin_headers):
        response = client.post(
            f"{USERS_URL}/USR-missing/password", json={"password": NEW_PASSWORD},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_login_stays_email_only(self, client, admin_headers, login):
        """Sign-in ignores the stored password."""
        client.post(
            f"{USERS_URL}/USR-emp/password", json={"password": NEW_PASSWORD},
            headers=admin_headers,
        )

        headers = login("alice.johnson@TRIARQHealth.com")
        assert "Authorization" in headers
