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

"""Pydantic schemas for the access request endpoints.

Response fields use the portal's camelCase wire names.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from access_portal.core.requests.services import RequestStats
from access_portal.orchestrator.requests.dtos import (
    AccessRequestResponse,
    ApplyChangesResult,
    LifecycleEventResponse,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateRequestBody(BaseModel):
    """New access request form."""

    department: str = ""
    application_or_system: str = Field("", alias="applicationOrSystem")
    application_other_text: str = Field("", alias="applicationOtherText")
    environment: str = ""
    request_type: str = Field("", alias="requestType")
    requested_role_or_permission: str = Field("", alias="requestedRoleOrPermission")
    justification: str = ""
    urgency: str = ""

    model_config = ConfigDict(populate_by_name=True)


class ApplyChangesBody(BaseModel):
    """Triage changes and/or a comment. Omitted fields are not proposed."""

    status: Optional[str] = None
    assignee_id: Optional[str] = Field(None, alias="iamAssigneeUserId")
    unassign: bool = False
    comment: Optional[str] = None
    expected_version: Optional[int] = Field(None, alias="expectedVersion", ge=1)

    model_config = ConfigDict(populate_by_name=True)


class LifecycleEventSchema(_WireModel):
    event_id: str = Field(alias="eventId")
    kind: str
    actor_id: str = Field(alias="actorUserId")
    actor_name: str = Field(alias="actorName")
    actor_email: Optional[str] = Field(None, alias="actorEmail")
    old_value: Optional[str] = Field(None, alias="oldValue")
    new_value: Optional[str] = Field(None, alias="newValue")
    comment: Optional[str] = None
    comment_type: Optional[str] = Field(None, alias="commentType")
    timestamp: str

    @classmethod
    def from_dto(cls, dto: LifecycleEventResponse) -> "LifecycleEventSchema":
        return cls(
            event_id=dto.event_id,
            kind=dto.kind,
            actor_id=dto.actor_id,
            actor_name=dto.actor_name,
            actor_email=dto.actor_email,
            old_value=dto.old_value,
            new_value=dto.new_value,
            comment=dto.comment,
            comment_type=dto.comment_type,
            timestamp=dto.timestamp,
        )


class AccessRequestSchema(_WireModel):
    """Access request as returned by the API."""

    request_id: str = Field(alias="id")
    requester_id: str = Field(alias="requesterUserId")
    requester_name: str = Field(alias="requesterName")
    requester_email: Optional[str] = Field(None, alias="requesterEmail")
    department: str
    application_or_system: str = Field(alias="applicationOrSystem")
    application_other_text: str = Field(alias="applicationOtherText")
    system_display_name: str = Field(alias="systemDisplayName")
    environment: str
    request_type: str = Field(alias="requestType")
    requested_role_or_permission: str = Field(alias="requestedRoleOrPermission")
    justification: str
    urgency: str
    status: str
    assignee_id: Optional[str] = Field(None, alias="iamAssigneeUserId")
    assignee_name: Optional[str] = Field(None, alias="iamAssigneeName")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    version: int
    over_sla: bool = Field(alias="overSla")
    history: List[LifecycleEventSchema]

    @classmethod
    def from_dto(cls, dto: AccessRequestResponse) -> "AccessRequestSchema":
        return cls(
            request_id=dto.request_id,
            requester_id=dto.requester_id,
            requester_name=dto.requester_name,
            requester_email=dto.requester_email,
            department=dto.department,
            application_or_system=dto.application_or_system,
            application_other_text=dto.application_other_text,
            system_display_name=dto.system_display_name,
            environment=dto.environment,
            request_type=dto.request_type,
            requested_role_or_permission=dto.requested_role_or_permission,
            justification=dto.justification,
            urgency=dto.urgency,
            status=dto.status,
            assignee_id=dto.assignee_id,
            assignee_name=dto.assignee_name,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
            version=dto.version,
            over_sla=dto.over_sla,
            history=[LifecycleEventSchema.from_dto(e) for e in dto.history],
        )


class ApplyChangesResponse(_WireModel):
    changed: bool
    message: str
    events_added: List[str] = Field(alias="eventsAdded")
    request: AccessRequestSchema

    @classmethod
    def from_result(cls, result: ApplyChangesResult) -> "ApplyChangesResponse":
        return cls(
            changed=result.changed,
            message=result.message,
            events_added=list(result.events_added),
            request=AccessRequestSchema.from_dto(result.request),
        )


class RequestStatsSchema(_WireModel):
    """Dashboard counters."""

    total: int
    new: int
    in_review: int = Field(alias="inReview")
    need_info: int = Field(alias="needInfo")
    over_sla: int = Field(alias="overSla")

    @classmethod
    def from_stats(cls, stats: RequestStats) -> "RequestStatsSchema":
        return cls(
            total=stats.total,
            new=stats.new,
            in_review=stats.in_review,
            need_info=stats.need_info,
            over_sla=stats.over_sla,
        )
