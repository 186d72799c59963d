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

"""Access request response DTOs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from access_portal.core.requests.services import SLA_DAYS, SlaService


@dataclass(frozen=True)
class LifecycleEventResponse:
    """Serialized history entry. Timestamps are ISO 8601 strings."""

    event_id: str
    kind: str
    actor_id: str
    actor_name: str
    actor_email: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]
    comment: Optional[str]
    comment_type: Optional[str]
    timestamp: str

    @staticmethod
    def from_entity(event) -> "LifecycleEventResponse":
        """Create response DTO from a LifecycleEvent."""
        return LifecycleEventResponse(
            event_id=event.event_id,
            kind=event.kind.value,
            actor_id=event.actor_id,
            actor_name=event.actor_name,
            actor_email=event.actor_email,
            old_value=event.old_value,
            new_value=event.new_value,
            comment=event.comment,
            comment_type=event.comment_type.value if event.comment_type else None,
            timestamp=event.timestamp.isoformat(),
        )


@dataclass(frozen=True)
class AccessRequestResponse:
    """Response DTO for access request operations.

    Immutable data transfer object for returning request information
    to the API layer. All timestamps are ISO 8601 formatted strings.

    Attributes:
        request_id: Unique request identifier.
        requester_id: Submitting user.
        requester_name: Submitter display name.
        requester_email: Submitter email.
        department: Department or team.
        application_or_system: Catalog value.
        application_other_text: Free-text system for "Other".
        system_display_name: Resolved system name.
        environment: Target environment.
        request_type: Kind of access change.
        requested_role_or_permission: Role or permission asked for.
        justification: Business justification.
        urgency: Urgency value.
        status: Current lifecycle state.
        assignee_id: Assigned IAM user, if any.
        assignee_name: Assigned IAM user's name, if any.
        created_at: Submission timestamp (ISO 8601).
        updated_at: Last modification timestamp (ISO 8601).
        version: Mutation counter.
        over_sla: Derived SLA flag at the time of the response.
        history: Lifecycle events, oldest first.
        is_new: True if the request was created by this operation.
    """

    request_id: str
    requester_id: str
    requester_name: str
    requester_email: Optional[str]
    department: str
    application_or_system: str
    application_other_text: str
    system_display_name: str
    environment: str
    request_type: str
    requested_role_or_permission: str
    justification: str
    urgency: str
    status: str
    assignee_id: Optional[str]
    assignee_name: Optional[str]
    created_at: str
    updated_at: str
    version: int
    over_sla: bool
    history: Tuple[LifecycleEventResponse, ...]
    is_new: bool = False

    @staticmethod
    def from_entity(
        request,
        now: datetime,
        is_new: bool = False,
        sla_days: int = SLA_DAYS,
    ) -> "AccessRequestResponse":
        """Create response DTO from an AccessRequest entity.

        Args:
            request: AccessRequest domain entity.
            now: Reference time for the SLA flag.
            is_new: True if the request was just created.
            sla_days: SLA threshold in whole days.

        Returns:
            AccessRequestResponse DTO with serialized values.
        """
        return AccessRequestResponse(
            request_id=str(request.request_id),
            requester_id=request.requester_id,
            requester_name=request.requester_name,
            requester_email=request.requester_email,
            department=request.department,
            application_or_system=request.application_or_system.value,
            application_other_text=request.application_other_text,
            system_display_name=request.system_display_name,
            environment=request.environment.value,
            request_type=request.request_type.value,
            requested_role_or_permission=request.requested_role_or_permission,
            justification=request.justification,
            urgency=request.urgency.value,
            status=request.status.value,
            assignee_id=request.assignee_id,
            assignee_name=request.assignee_name,
            created_at=request.created_at.isoformat(),
            updated_at=request.updated_at.isoformat(),
            version=request.version,
            over_sla=SlaService.is_over_sla(request, now, sla_days),
            history=tuple(LifecycleEventResponse.from_entity(e) for e in request.history),
            is_new=is_new,
        )


@dataclass(frozen=True)
class ApplyChangesResult:
    """Outcome of an apply-changes call.

    Attributes:
        changed: False when there was nothing to save.
        message: User-facing outcome message.
        request: Request state after the call.
        events_added: Kinds of history events appended, in order.
    """

    changed: bool
    message: str
    request: AccessRequestResponse
    events_added: Tuple[str, ...] = ()
