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

"""Unit tests for the AccessRequest aggregate."""

from datetime import datetime, timedelta, timezone

import pytest

from access_portal.core.requests.entities import AccessRequest
from access_portal.core.requests.exceptions import (
    RequestAuthorizationError,
    RequestValidationError,
)
from access_portal.core.requests.value_objects import (
    ActorIdentity,
    ApplicationSystem,
    CommentType,
    Environment,
    EventKind,
    RequestId,
    RequestStatus,
    RequestType,
    Urgency,
)

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
REQUESTER = ActorIdentity("USR-emp", "Alice Johnson", "alice@example.com")
IAM = ActorIdentity("USR-iam", "Pintal", is_iam=True)
STRANGER = ActorIdentity("USR-x", "Mallory")


def _submit(**overrides) -> AccessRequest:
    fields = dict(
        department="Finance",
        application_or_system=ApplicationSystem.VPN,
        environment=Environment.PROD,
        request_type=RequestType.ADD,
        requested_role_or_permission="VPN user",
        justification="Remote work",
        urgency=Urgency.HIGH,
    )
    fields.update(overrides)
    return AccessRequest.submit(RequestId("REQ-000001"), REQUESTER, "evt-0", T0, **fields)


@pytest.mark.unit
class TestSubmit:
    """Tests for request submission."""

    def test_submit_starts_new_with_created_event(self):
        """A submitted request is New and has one Created event by the requester."""
        request = _submit()

        assert request.status == RequestStatus.NEW
        assert request.version == 1
        assert request.created_at == request.updated_at == T0
        assert len(request.history) == 1
        created = request.history[0]
        assert created.kind == EventKind.CREATED
        assert created.actor_id == "USR-emp"
        assert created.new_value == "New"
        assert created.timestamp == T0

    def test_requester_fields_come_from_actor(self):
        """Requester identity is taken from the submitting actor."""
        request = _submit()
        assert request.requester_id == "USR-emp"
        assert request.requester_name == "Alice Johnson"
        assert request.requester_email == "alice@example.com"

    def test_system_display_name_resolves_other(self):
        """Other shows the free-text system name."""
        request = _submit(application_or_system=ApplicationSystem.OTHER,
                          application_other_text="Payroll Portal")
        assert request.system_display_name == "Payroll Portal"
        assert _submit().system_display_name == "VPN"

    def test_updated_at_is_never_before_created_at(self):
        """Construction clamps updated_at to created_at."""
        request = AccessRequest(
            request_id=RequestId("REQ-000002"),
            requester_id="USR-emp",
            requester_name="Alice",
            requester_email=None,
            department="Finance",
            application_or_system=ApplicationSystem.VPN,
            environment=Environment.PROD,
            request_type=RequestType.ADD,
            requested_role_or_permission="VPN user",
            justification="Remote work",
            urgency=Urgency.LOW,
            created_at=T0,
            updated_at=T0 - timedelta(days=1),
        )
        assert request.updated_at == T0


@pytest.mark.unit
class TestTriage:
    """Tests for status and assignee changes."""

    def test_change_status_appends_event(self):
        """Status change records old and new value."""
        request = _submit()
        event = request.change_status(RequestStatus.IN_REVIEW, IAM, "evt-1", T0 + timedelta(hours=1))

        assert request.status == RequestStatus.IN_REVIEW
        assert event.kind == EventKind.STATUS_CHANGED
        assert (event.old_value, event.new_value) == ("New", "In Review")
        assert request.history[-1] is event

    def test_any_state_reachable_from_any_state(self):
        """No transition graph: Completed can go back to New."""
        request = _submit()
        request.change_status(RequestStatus.COMPLETED, IAM, "evt-1", T0)
        request.change_status(RequestStatus.NEW, IAM, "evt-2", T0)
        assert request.status == RequestStatus.NEW

    def test_unchanged_status_is_noop(self):
        """Setting the current status appends nothing."""
        request = _submit()
        assert request.change_status(RequestStatus.NEW, IAM, "evt-1", T0) is None
        assert len(request.history) == 1

    def test_non_privileged_cannot_change_status(self):
        """The requester cannot triage their own request."""
        request = _submit()
        with pytest.raises(RequestAuthorizationError):
            request.change_status(RequestStatus.COMPLETED, REQUESTER, "evt-1", T0)
        assert request.status == RequestStatus.NEW
        assert len(request.history) == 1

    def test_assign_and_unassign(self):
        """Assigned events carry names; unassign clears both fields."""
        request = _submit()
        assigned = request.assign("USR-iam", "Pintal", IAM, "evt-1", T0)
        assert (request.assignee_id, request.assignee_name) == ("USR-iam", "Pintal")
        assert (assigned.old_value, assigned.new_value) == (None, "Pintal")

        cleared = request.assign(None, None, IAM, "evt-2", T0)
        assert request.assignee_id is None and request.assignee_name is None
        assert (cleared.old_value, cleared.new_value) == ("Pintal", None)

    def test_history_timestamps_never_decrease(self):
        """An event stamped before the last one is clamped to it."""
        request = _submit()
        event = request.change_status(RequestStatus.IN_REVIEW, IAM, "evt-1", T0 - timedelta(minutes=5))
        assert event.timestamp == T0


@pytest.mark.unit
class TestComments:
    """Tests for comment permissions and tagging."""

    def test_iam_comment_tagged_iam(self):
        """Privileged authors produce IAM comments."""
        request = _submit()
        event = request.add_comment("Looking into it", IAM, "evt-1", T0)
        assert event.comment_type == CommentType.IAM
        assert request.comments_for(CommentType.IAM) == [event]

    def test_requester_may_comment_only_in_need_info(self):
        """The requester can reply once IAM asks for information."""
        request = _submit()
        assert not request.can_comment(REQUESTER)
        with pytest.raises(RequestAuthorizationError):
            request.add_comment("Any update?", REQUESTER, "evt-1", T0)

        request.change_status(RequestStatus.NEED_INFO, IAM, "evt-2", T0)
        event = request.add_comment("Manager approved", REQUESTER, "evt-3", T0)
        assert event.comment_type == CommentType.EMPLOYEE

    def test_other_user_never_comments(self):
        """Non-owners without capability cannot comment even in Need Info."""
        request = _submit()
        request.change_status(RequestStatus.NEED_INFO, IAM, "evt-1", T0)
        assert not request.can_comment(STRANGER)

    def test_blank_comment_rejected(self):
        """Whitespace-only comments are validation errors."""
        request = _submit()
        with pytest.raises(RequestValidationError) as exc_info:
            request.add_comment("   ", IAM, "evt-1", T0)
        assert "comment" in exc_info.value.errors

    def test_comment_text_is_trimmed(self):
        """Surrounding whitespace is dropped."""
        event = _submit().add_comment("  ok  ", IAM, "evt-1", T0)
        assert event.comment == "ok"


@pytest.mark.unit
class TestVisibilityAndTouch:
    """Tests for visibility and version bumps."""

    def test_can_view(self):
        """Owners and privileged actors can view; others cannot."""
        request = _submit()
        assert request.can_view(REQUESTER)
        assert request.can_view(IAM)
        assert not request.can_view(STRANGER)

    def test_touch_bumps_version_and_timestamp(self):
        """Touch advances updated_at and the version by one."""
        request = _submit()
        later = T0 + timedelta(hours=2)
        request.touch(later)
        assert request.updated_at == later
        assert request.version == 2
