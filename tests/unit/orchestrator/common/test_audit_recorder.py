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

"""Unit tests for the best-effort audit recorder."""

import pytest

from access_portal.core.requests.value_objects import AuditAction, TargetType
from access_portal.orchestrator.common.audit import AuditRecorder
from access_portal.infra.record_store import AUDIT
from tests.utils.fakes import T0


@pytest.mark.unit
class TestAuditRecorder:
    """Tests for AuditRecorder."""

    def test_records_actor_and_detail(self, audit, audit_repo, iam_actor):
        """Entries capture actor identity, target and detail."""
        entry = audit.record(
            AuditAction.REQUEST_ASSIGN, TargetType.REQUEST, "REQ-000001", True,
            actor=iam_actor, detail={"newAssignee": "Ami"},
        )

        assert entry is not None
        stored = audit_repo.find_all()
        assert stored == [entry]
        assert entry.actor_id == "USR-iam"
        assert entry.actor_name == "Pintal"
        assert entry.timestamp == T0
        assert entry.detail == {"newAssignee": "Ami"}

    def test_system_actions_have_no_actor(self, audit):
        """Without an actor the entry is attributed to System."""
        entry = audit.record(AuditAction.USER_CREATE, TargetType.SYSTEM, "SEED", True)

        assert entry.actor_id is None
        assert entry.actor_name == "System"

    def test_write_failure_is_swallowed(self, audit, store, audit_repo):
        """A failing audit write returns None instead of raising."""
        store.failing_puts.add(AUDIT)

        result = audit.record(AuditAction.LOGOUT, TargetType.USER, "USR-1", True)

        assert result is None
        store.failing_puts.clear()
        assert audit_repo.find_all() == []

    def test_entry_construction_failure_is_swallowed(self, audit_repo, clock):
        """A failing id generator does not escape the recorder."""

        class BrokenGenerator:
            def generate(self):
                raise RuntimeError("entropy unavailable")

        recorder = AuditRecorder(audit_repo, BrokenGenerator(), clock)

        result = recorder.record(AuditAction.LOGIN_SUCCESS, TargetType.USER, "USR-1", True)

        assert result is None
        assert audit_repo.find_all() == []
