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

"""Access request endpoints."""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, status

from access_portal.container import Container
from access_portal.core.requests.value_objects import ActorIdentity
from access_portal.orchestrator.requests.commands import (
    ApplyChangesCommand,
    CreateRequestCommand,
)

from ..dependencies import get_container, get_current_actor
from .schemas import (
    AccessRequestSchema,
    ApplyChangesBody,
    ApplyChangesResponse,
    CreateRequestBody,
    RequestStatsSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/requests", tags=["requests"])


def _correlation_id(header_value: Optional[str]) -> str:
    return header_value or str(uuid.uuid4())


@router.post("", response_model=AccessRequestSchema, status_code=status.HTTP_201_CREATED)
def create_request(
    body: CreateRequestBody,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
    x_correlation_id: Optional[str] = Header(None),
) -> AccessRequestSchema:
    """Submit a new access request as the signed-in user."""
    command = CreateRequestCommand(
        requester=actor,
        department=body.department,
        application_or_system=body.application_or_system,
        environment=body.environment,
        request_type=body.request_type,
        requested_role_or_permission=body.requested_role_or_permission,
        justification=body.justification,
        urgency=body.urgency,
        application_other_text=body.application_other_text,
        correlation_id=_correlation_id(x_correlation_id),
    )
    return AccessRequestSchema.from_dto(container.create_request.execute(command))


@router.get("", response_model=List[AccessRequestSchema])
def list_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    urgency: Optional[str] = None,
    search: Optional[str] = None,
    mine: bool = False,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> List[AccessRequestSchema]:
    """List requests visible to the signed-in user."""
    requests = container.query_requests.list(
        actor, status=status_filter, urgency=urgency, search=search, mine_only=mine,
    )
    return [AccessRequestSchema.from_dto(r) for r in requests]


@router.get("/stats", response_model=RequestStatsSchema)
def request_stats(
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> RequestStatsSchema:
    """Dashboard counters (IAM and admins)."""
    return RequestStatsSchema.from_stats(container.query_requests.stats(actor))


@router.get("/{request_id}", response_model=AccessRequestSchema)
def get_request(
    request_id: str,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> AccessRequestSchema:
    """Read one request with its history."""
    return AccessRequestSchema.from_dto(container.query_requests.get(request_id, actor))


@router.patch("/{request_id}", response_model=ApplyChangesResponse)
def apply_changes(
    request_id: str,
    body: ApplyChangesBody,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
    x_correlation_id: Optional[str] = Header(None),
) -> ApplyChangesResponse:
    """Change status and/or assignee and/or add a comment in one call."""
    command = ApplyChangesCommand(
        request_id=request_id,
        actor=actor,
        status=body.status,
        assignee_id=body.assignee_id,
        unassign=body.unassign,
        comment=body.comment,
        expected_version=body.expected_version,
        correlation_id=_correlation_id(x_correlation_id),
    )
    return ApplyChangesResponse.from_result(container.apply_changes.execute(command))
