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

"""Audit log and snapshot transfer endpoints (admin)."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from access_portal.container import Container
from access_portal.core.requests.entities import AuditEntry
from access_portal.core.requests.value_objects import ActorIdentity

from ..dependencies import get_container, get_current_actor

router = APIRouter(tags=["data"])


class AuditEntrySchema(BaseModel):
    entry_id: str = Field(alias="entryId")
    timestamp: str
    actor_id: Optional[str] = Field(None, alias="actorUserId")
    actor_name: str = Field(alias="actorName")
    actor_email: Optional[str] = Field(None, alias="actorEmail")
    action_type: str = Field(alias="actionType")
    target_type: str = Field(alias="targetType")
    target_id: str = Field(alias="targetId")
    success: bool
    detail: Dict[str, Any]

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, entry: AuditEntry) -> "AuditEntrySchema":
        return cls(
            entry_id=entry.entry_id,
            timestamp=entry.timestamp.isoformat(),
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            actor_email=entry.actor_email,
            action_type=entry.action_type.value,
            target_type=entry.target_type.value,
            target_id=entry.target_id,
            success=entry.success,
            detail=dict(entry.detail),
        )


class ImportResponse(BaseModel):
    requests: int
    audit: int
    message: str


class SampleResponse(BaseModel):
    requests: int
    message: str


@router.get("/audit", response_model=List[AuditEntrySchema])
def list_audit(
    action_type: Optional[str] = Query(None, alias="actionType"),
    actor_id: Optional[str] = Query(None, alias="actorUserId"),
    success: Optional[bool] = None,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> List[AuditEntrySchema]:
    """Audit entries, newest first."""
    entries = container.audit_log.list(
        actor, action_type=action_type, actor_id=actor_id, success=success,
    )
    return [AuditEntrySchema.from_entity(e) for e in entries]


@router.get("/data/export")
def export_data(
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> Dict[str, Any]:
    """Download a snapshot of users, requests and audit entries."""
    return container.data_transfer.export(actor)


@router.post("/data/import", response_model=ImportResponse)
def import_data(
    snapshot: Dict[str, Any] = Body(...),
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> ImportResponse:
    """Replace all requests and audit entries with a snapshot's."""
    summary = container.data_transfer.import_snapshot(actor, snapshot)
    return ImportResponse(
        requests=summary.requests,
        audit=summary.audit,
        message=f"Imported {summary.requests} requests",
    )


@router.post("/data/samples", response_model=SampleResponse)
def load_samples(
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> SampleResponse:
    """Add the demo sample requests."""
    loaded = container.sample_data.load_samples(actor)
    return SampleResponse(requests=loaded, message=f"Loaded {loaded} sample requests")


@router.post("/data/reset")
def reset_data(
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> Dict[str, str]:
    """Delete every request and audit entry; users are kept."""
    container.sample_data.reset(actor)
    return {"message": "Requests and audit log cleared"}


@router.get("/changes")
def data_revision(
    _actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> Dict[str, int]:
    """Current data revision; clients refetch when it moves."""
    return {"revision": container.revision.value}
