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

"""Unit tests for SessionUseCase."""

import pytest

from access_portal.core.requests.value_objects import AuditAction
from access_portal.core.users.exceptions import InactiveUserError, UserNotFoundError


@pytest.mark.unit
class TestLogin:
    """Tests for signing in."""

    def test_login_active_user(self, sessions, audit_repo):
        """Active users sign in and LOGIN_SUCCESS is audited."""
        actor = sessions.login("Pintal@TRIARQHealth.com")

        assert actor.user_id == "USR-iam"
        assert actor.is_iam
        entry = audit_repo.find_all()[0]
        assert entry.action_type == AuditAction.LOGIN_SUCCESS
        assert entry.success is True

    def test_unknown_user(self, sessions, audit_repo):
        """Unknown emails fail and are audited with a reason."""
        with pytest.raises(UserNotFoundError):
            sessions.login("nobody@TRIARQHealth.com")

        entry = audit_repo.find_all()[0]
        assert entry.action_type == AuditAction.LOGIN_FAILURE
        assert entry.success is False
        assert entry.detail == {"reason": "User not found"}

    def test_inactive_user(self, sessions, audit_repo):
        """Inactive accounts cannot sign in."""
        with pytest.raises(InactiveUserError):
            sessions.login("gone@TRIARQHealth.com")

        assert audit_repo.find_all()[0].detail == {"reason": "Account inactive"}


@pytest.mark.unit
class TestValidateAndLogout:
    """Tests for session refresh and sign-out."""

    def test_validate_reads_current_roles(self, sessions, iam_actor, user_repo):
        """Capabilities come from the directory, not the presented identity."""
        user = user_repo.find_by_id("USR-iam")
        user.is_iam = False
        user_repo.save(user)

        assert sessions.validate(iam_actor).is_iam is False

    def test_validate_rejects_inactive(self, sessions, iam_actor, user_repo):
        """Deactivated users lose their session."""
        user = user_repo.find_by_id("USR-iam")
        user.is_active = False
        user_repo.save(user)

        with pytest.raises(InactiveUserError):
            sessions.validate(iam_actor)

    def test_logout_audits_and_broadcasts(self, sessions, employee_actor, audit_repo, notifier):
        """Logout writes LOGOUT and publishes a logout message."""
        sessions.logout(employee_actor)

        assert audit_repo.find_all()[0].action_type == AuditAction.LOGOUT
        assert notifier.messages == [{"type": "LOGOUT"}]
