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

"""Shared pytest fixtures for portal tests."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# pylint: disable=wrong-import-position
from access_portal.config import PortalConfig
from access_portal.container import build_container
from access_portal.core.users.user import User
from access_portal.infra.repositories import (
    StoreAccessRequestRepository,
    StoreAuditEntryRepository,
    StoreUserRepository,
)
from access_portal.orchestrator.common import AuditRecorder
from tests.utils.fakes import (
    FakeClock,
    FakeUUIDGenerator,
    FlakyRecordStore,
    RecordingNotifier,
    SequenceRequestIdGenerator,
)

IAM_USER = User(user_id="USR-iam", name="Pintal", email="pintal@TRIARQHealth.com", is_iam=True)
SECOND_IAM_USER = User(user_id="USR-iam2", name="Ami", email="ami@TRIARQHealth.com", is_iam=True)
ADMIN_USER = User(user_id="USR-admin", name="Jon", email="jon@TRIARQHealth.com",
                  is_iam=True, is_admin=True)
EMPLOYEE_USER = User(user_id="USR-emp", name="Alice Johnson",
                     email="alice.johnson@TRIARQHealth.com", default_department="Finance")
OTHER_EMPLOYEE_USER = User(user_id="USR-emp2", name="Bob Smith",
                           email="bob.smith@TRIARQHealth.com")
INACTIVE_IAM_USER = User(user_id="USR-gone", name="Gone", email="gone@TRIARQHealth.com",
                         is_iam=True, is_active=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return FlakyRecordStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def uuid_generator():
    return FakeUUIDGenerator()


@pytest.fixture
def request_id_generator():
    return SequenceRequestIdGenerator()


@pytest.fixture
def request_repo(store):
    return StoreAccessRequestRepository(store)


@pytest.fixture
def audit_repo(store):
    return StoreAuditEntryRepository(store)


@pytest.fixture
def user_repo(store):
    """User repository preloaded with the standard directory."""
    repo = StoreUserRepository(store)
    for user in (IAM_USER, SECOND_IAM_USER, ADMIN_USER, EMPLOYEE_USER,
                 OTHER_EMPLOYEE_USER, INACTIVE_IAM_USER):
        repo.save(user)
    return repo


@pytest.fixture
def audit(audit_repo, uuid_generator, clock):
    return AuditRecorder(audit_repo, uuid_generator, clock)


@pytest.fixture
def iam_actor():
    return IAM_USER.as_actor()


@pytest.fixture
def admin_actor():
    return ADMIN_USER.as_actor()


@pytest.fixture
def employee_actor():
    return EMPLOYEE_USER.as_actor()


@pytest.fixture
def other_employee_actor():
    return OTHER_EMPLOYEE_USER.as_actor()


@pytest.fixture
def portal(store, clock, request_id_generator, uuid_generator, user_repo):
    """Fully wired container over the shared fakes, directory preloaded."""
    return build_container(
        config=PortalConfig(),
        store=store,
        clock=clock,
        request_id_generator=request_id_generator,
        uuid_generator=uuid_generator,
        seed=False,
    )

