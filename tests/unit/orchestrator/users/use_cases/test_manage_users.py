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

"""Unit tests for UserManagementUseCase."""

import pytest

from access_portal.config import PortalConfig
from access_portal.core.requests.exceptions import RequestAuthorizationError
from access_portal.core.requests.value_objects import AuditAction, TargetType
from access_portal.core.users.exceptions import (
    InvalidUserError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from access_portal.infra.password_hasher import verify_password
from access_portal.infra.repositories import StoreUserRepository
from access_portal.orchestrator.users.use_cases import (
    CreateUserCommand,
    UpdateUserCommand,
    UserManagementUseCase,
)
from tests.utils.fakes import FlakyRecordStore


@pytest.mark.unit
class TestCreateUser:
    """Tests for adding users."""

    def test_admin_creates_user(self, manage_users, admin_actor, user_repo, audit_repo, notifier):
        """New users are stored active, audited and announced."""
        user = manage_users.create_user(admin_actor, CreateUserCommand(
            name=" Carol Diaz ", email="carol.diaz@TRIARQHealth.com", is_iam=True,
        ))

        assert user.user_id.startswith("USR-")
        assert user.name == "Carol Diaz"
        assert user.is_active and user.is_iam and not user.is_admin
        assert user_repo.find_by_email("carol.diaz@triarqhealth.com").user_id == user.user_id
        entry = audit_repo.find_all()[0]
        assert entry.action_type == AuditAction.USER_CREATE
        assert entry.target_id == user.user_id
        assert notifier.messages == [{"type": "DATA_CHANGED"}]

    def test_bare_mailbox_gets_company_domain(self, manage_users, admin_actor):
        """A mailbox name without a domain is completed with the company domain."""
        user = manage_users.create_user(admin_actor, CreateUserCommand(name="Dee", email="dee"))
        assert user.email == "dee@TRIARQHealth.com"

    def test_duplicate_email_rejected(self, manage_users, admin_actor):
        """Emails are unique regardless of case."""
        with pytest.raises(UserAlreadyExistsError):
            manage_users.create_user(admin_actor, CreateUserCommand(
                name="Jon Again", email="JON@triarqhealth.com",
            ))

    @pytest.mark.parametrize("name,email,field", [
        ("", "x@TRIARQHealth.com", "name"),
        ("X", "", "email"),
        ("X", "x@", "email"),
    ])
    def test_invalid_input(self, manage_users, admin_actor, name, email, field):
        """Missing names and malformed emails are rejected."""
        with pytest.raises(InvalidUserError) as exc_info:
            manage_users.create_user(admin_actor, CreateUserCommand(name=name, email=email))
        assert exc_info.value.field == field

    @pytest.mark.parametrize("actor_fixture", ["iam_actor", "employee_actor"])
    def test_non_admin_refused(self, manage_users, request, actor_fixture):
        """Only admins manage users."""
        actor = request.getfixturevalue(actor_fixture)
        with pytest.raises(RequestAuthorizationError):
            manage_users.create_user(actor, CreateUserCommand(name="Eve", email="eve"))

    def test_password_is_stored_hashed(self, manage_users, admin_actor, user_repo):
        """Only the Argon2id hash of a new password is kept."""
        user = manage_users.create_user(admin_actor, CreateUserCommand(
            name="Dee", email="dee", password="Welcome-2026!",
        ))

        stored = user_repo.find_by_id(user.user_id)
        assert stored.password_hash.startswith("$argon2id$")
        assert "Welcome-2026!" not in stored.password_hash
        assert verify_password("Welcome-2026!", stored.password_hash)

    def test_short_password_rejected(self, manage_users, admin_actor, user_repo):
        with pytest.raises(InvalidUserError) as exc_info:
            manage_users.create_user(admin_actor, CreateUserCommand(
                name="Dee", email="dee", password="1234567",
            ))

        assert exc_info.value.field == "password"
        assert user_repo.find_by_email("dee@TRIARQHealth.com") is None


@pytest.mark.unit
class TestUpdateUser:
    """Tests for editing users."""

    def test_deactivate_and_reactivate(self, manage_users, admin_actor, audit_repo, user_repo):
        """Active flag changes are audited as deactivation and reactivation."""
        manage_users.update_user(admin_actor, UpdateUserCommand("USR-iam2", is_active=False))
        assert not user_repo.find_by_id("USR-iam2").is_assignable()

        manage_users.update_user(admin_actor, UpdateUserCommand("USR-iam2", is_active=True))

        actions = [e.action_type for e in sorted(audit_repo.find_all(), key=lambda e: e.entry_id)]
        assert actions == [AuditAction.USER_DEACTIVATE, AuditAction.USER_REACTIVATE]

    def test_role_change_is_update(self, manage_users, admin_actor, audit_repo):
        """Other edits are audited as USER_UPDATE."""
        user = manage_users.update_user(admin_actor, UpdateUserCommand(
            "USR-emp", is_iam=True, default_department="Security",
        ))

        assert user.is_iam
        assert user.default_department == "Security"
        assert user.email == "alice.johnson@TRIARQHealth.com"
        entry = audit_repo.find_all()[0]
        assert entry.action_type == AuditAction.USER_UPDATE
        assert entry.detail["isIam"] is True

    def test_unknown_user(self, manage_users, admin_actor):
        """Editing a missing user raises UserNotFoundError."""
        with pytest.raises(UserNotFoundError):
            manage_users.update_user(admin_actor, UpdateUserCommand("USR-nope", name="X"))

    def test_blank_name_rejected(self, manage_users, admin_actor):
        """Names cannot be blanked."""
        with pytest.raises(InvalidUserError):
            manage_users.update_user(admin_actor, UpdateUserCommand("USR-emp", name="  "))


@pytest.mark.unit
class TestResetPassword:
    """Tests for admin password resets."""

    def test_admin_resets_password(self, manage_users, admin_actor, user_repo, audit_repo,
                                   notifier, clock):
        """A reset stores a new hash, audits PASSWORD_RESET and announces the change."""
        later = clock.advance(hours=1)

        user = manage_users.reset_password(admin_actor, "USR-emp", "Welcome-2026!")

        stored = user_repo.find_by_id("USR-emp")
        assert verify_password("Welcome-2026!", stored.password_hash)
        assert not verify_password("wrong-password", stored.password_hash)
        assert stored.updated_at == later
        assert user.user_id == "USR-emp"
        entry = audit_repo.find_all()[0]
        assert entry.action_type == AuditAction.PASSWORD_RESET
        assert entry.target_type == TargetType.USER
        assert entry.target_id == "USR-emp"
        assert entry.detail == {"resetBy": "Jon"}
        assert notifier.messages == [{"type": "DATA_CHANGED"}]

    def test_second_reset_replaces_hash(self, manage_users, admin_actor, user_repo):
        manage_users.reset_password(admin_actor, "USR-emp", "first-password")
        manage_users.reset_password(admin_actor, "USR-emp", "second-password")

        stored = user_repo.find_by_id("USR-emp")
        assert verify_password("second-password", stored.password_hash)
        assert not verify_password("first-password", stored.password_hash)

    @pytest.mark.parametrize("password", ["", "1234567"])
    def test_short_password_rejected(self, manage_users, admin_actor, user_repo, audit_repo,
                                     password):
        with pytest.raises(InvalidUserError):
            manage_users.reset_password(admin_actor, "USR-emp", password)

        assert user_repo.find_by_id("USR-emp").password_hash is None
        assert audit_repo.find_all() == []

    def test_unknown_user(self, manage_users, admin_actor):
        with pytest.raises(UserNotFoundError):
            manage_users.reset_password(admin_actor, "USR-nope", "Welcome-2026!")

    @pytest.mark.parametrize("actor_fixture", ["iam_actor", "employee_actor"])
    def test_non_admin_refused(self, manage_users, request, actor_fixture, user_repo):
        actor = request.getfixturevalue(actor_fixture)
        with pytest.raises(RequestAuthorizationError):
            manage_users.reset_password(actor, "USR-emp", "Welcome-2026!")
        assert user_repo.find_by_id("USR-emp").password_hash is None


@pytest.mark.unit
class TestListAndSeed:
    """Tests for listing and seeding."""

    def test_list_sorted_by_name(self, manage_users, admin_actor):
        """Users are listed alphabetically."""
        names = [u.name for u in manage_users.list_users(admin_actor)]
        assert names == sorted(names, key=str.lower)
        assert len(names) == 6

    def test_list_assignees(self, manage_users):
        """Only active IAM members are assignable."""
        assert [u.user_id for u in manage_users.list_assignees()] == [
            "USR-iam2", "USR-admin", "USR-iam",
        ]

    def test_seed_empty_directory(self, audit, notifier, clock, audit_repo):
        """An empty directory receives the default users and one system audit entry."""
        repo = StoreUserRepository(FlakyRecordStore())
        use_case = UserManagementUseCase(repo, audit, notifier, clock)

        created = use_case.seed_default_users(PortalConfig().seed_users())

        assert created == 5
        jon = repo.find_by_email("jon@TRIARQHealth.com")
        assert jon.is_iam and jon.is_admin
        entries = audit_repo.find_all()
        assert len(entries) == 1
        assert entries[0].target_type == TargetType.SYSTEM
        assert entries[0].target_id == "SEED"
        assert entries[0].detail["message"] == "Seeded default users"

    def test_seed_skipped_when_users_exist(self, manage_users, audit_repo):
        """Seeding is a no-op on a populated directory."""
        assert manage_users.seed_default_users(PortalConfig().seed_users()) == 0
        assert audit_repo.find_all() == []
