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

"""Record-store backed repository implementations.

This module is the only place that knows the camelCase wire field names.
Requests written by older portal versions (``statusHistory`` plus separate
comment lists instead of ``history``) are converted on load.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from access_portal.core.requests.entities import AccessRequest, AuditEntry, LifecycleEvent
from access_portal.core.requests.value_objects import (
    ApplicationSystem,
    AuditAction,
    CommentType,
    Environment,
    EventKind,
    RequestId,
    RequestStatus,
    RequestType,
    TargetType,
    Urgency,
)
from access_portal.core.users.user import User

from .record_store import AUDIT, REQUESTS, USERS, RecordStore

logger = logging.getLogger(__name__)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp as ISO 8601."""
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be an ISO 8601 string, got {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def event_to_record(event: LifecycleEvent) -> Dict[str, Any]:
    """Map a LifecycleEvent to its wire form."""
    return {
        "eventId": event.event_id,
        "kind": event.kind.value,
        "actorUserId": event.actor_id,
        "actorName": event.actor_name,
        "actorEmail": event.actor_email,
        "oldValue": event.old_value,
        "newValue": event.new_value,
        "comment": event.comment,
        "commentType": event.comment_type.value if event.comment_type else None,
        "timestamp": format_timestamp(event.timestamp),
    }


def event_from_record(record: Dict[str, Any]) -> LifecycleEvent:
    """Map a wire event back to a LifecycleEvent."""
    comment_type = record.get("commentType")
    return LifecycleEvent(
        event_id=record["eventId"],
        kind=EventKind(record["kind"]),
        actor_id=record.get("actorUserId") or "",
        actor_name=record.get("actorName") or "",
        actor_email=record.get("actorEmail"),
        timestamp=parse_timestamp(record["timestamp"]),
        old_value=record.get("oldValue"),
        new_value=record.get("newValue"),
        comment=record.get("comment"),
        comment_type=CommentType(comment_type) if comment_type else None,
    )


def _legacy_history(record: Dict[str, Any]) -> List[LifecycleEvent]:
    """Rebuild a history from ``statusHistory`` and comment lists."""
    request_id = record["id"]
    events: List[LifecycleEvent] = []
    previous_status: Optional[str] = None
    for entry in record.get("statusHistory") or []:
        events.append(LifecycleEvent(
            event_id=f"{request_id}-legacy-{len(events)}",
            kind=EventKind.CREATED if previous_status is None else EventKind.STATUS_CHANGED,
            actor_id=entry.get("changedByUserId") or "",
            actor_name=entry.get("changedByName") or "",
            timestamp=parse_timestamp(entry["changedAt"]),
            old_value=previous_status,
            new_value=entry.get("status"),
        ))
        previous_status = entry.get("status")
    for key, comment_type in (("iamComments", CommentType.IAM),
                              ("employeeComments", CommentType.EMPLOYEE)):
        for comment in record.get(key) or []:
            events.append(LifecycleEvent(
                event_id=f"{request_id}-legacy-{len(events)}",
                kind=EventKind.COMMENT_ADDED,
                actor_id=comment.get("authorUserId") or "",
                actor_name=comment.get("authorName") or "",
                timestamp=parse_timestamp(comment["timestamp"]),
                comment=comment.get("text"),
                comment_type=comment_type,
            ))
    return sorted(events, key=lambda event: event.timestamp)


def request_to_record(request: AccessRequest) -> Dict[str, Any]:
    """Map an AccessRequest to its wire form."""
    return {
        "id": str(request.request_id),
        "createdAt": format_timestamp(request.created_at),
        "updatedAt": format_timestamp(request.updated_at),
        "requesterUserId": request.requester_id,
        "requesterName": request.requester_name,
        "requesterEmail": request.requester_email,
        "department": request.department,
        "applicationOrSystem": request.application_or_system.value,
        "applicationOtherText": request.application_other_text,
        "environment": request.environment.value,
        "requestType": request.request_type.value,
        "requestedRoleOrPermission": request.requested_role_or_permission,
        "justification": request.justification,
        "urgency": request.urgency.value,
        "status": request.status.value,
        "iamAssigneeUserId": request.assignee_id,
        "iamAssigneeName": request.assignee_name,
        "history": [event_to_record(event) for event in request.history],
        "version": request.version,
    }


def request_from_record(record: Dict[str, Any]) -> AccessRequest:
    """Map a wire request back to an AccessRequest."""
    if "history" in record:
        history = [event_from_record(event) for event in record["history"]]
    else:
        history = _legacy_history(record)
    return AccessRequest(
        request_id=RequestId(record["id"]),
        requester_id=record["requesterUserId"],
        requester_name=record.get("requesterName") or "",
        requester_email=record.get("requesterEmail"),
        department=record.get("department") or "",
        application_or_system=ApplicationSystem(record["applicationOrSystem"]),
        application_other_text=record.get("applicationOtherText") or "",
        environment=Environment(record["environment"]),
        request_type=RequestType(record["requestType"]),
        requested_role_or_permission=record.get("requestedRoleOrPermission") or "",
        justification=record.get("justification") or "",
        urgency=Urgency(record["urgency"]),
        status=RequestStatus(record["status"]),
        assignee_id=record.get("iamAssigneeUserId"),
        assignee_name=record.get("iamAssigneeName"),
        created_at=parse_timestamp(record.get("createdAt")),
        updated_at=parse_timestamp(record.get("updatedAt")),
        history=history,
        version=int(record.get("version") or 1),
    )


def audit_to_record(entry: AuditEntry) -> Dict[str, Any]:
    """Map an AuditEntry to its wire form."""
    return {
        "entryId": entry.entry_id,
        "timestamp": format_timestamp(entry.timestamp),
        "actorUserId": entry.actor_id,
        "actorName": entry.actor_name,
        "actorEmail": entry.actor_email,
        "actionType": entry.action_type.value,
        "targetType": entry.target_type.value,
        "targetId": entry.target_id,
        "success": entry.success,
        "detail": dict(entry.detail),
    }


def audit_from_record(record: Dict[str, Any]) -> AuditEntry:
    """Map a wire audit entry back to an AuditEntry."""
    return AuditEntry(
        entry_id=record["entryId"],
        timestamp=parse_timestamp(record["timestamp"]),
        action_type=AuditAction(record["actionType"]),
        target_type=TargetType(record["targetType"]),
        target_id=record.get("targetId") or "",
        success=bool(record.get("success")),
        actor_id=record.get("actorUserId"),
        actor_name=record.get("actorName") or "System",
        actor_email=record.get("actorEmail"),
        detail=dict(record.get("detail") or {}),
    )


def user_to_record(user: User) -> Dict[str, Any]:
    """Map a User to its wire form."""
    record = {
        "userId": user.user_id,
        "name": user.name,
        "email": user.email,
        "emailKey": user.email.lower(),
        "defaultDepartment": user.default_department,
        "isIam": user.is_iam,
        "isAdmin": user.is_admin,
        "isActive": user.is_active,
        "createdAt": format_timestamp(user.created_at),
        "updatedAt": format_timestamp(user.updated_at),
    }
    if user.password_hash:
        record["passwordHash"] = user.password_hash
    return record


def user_from_record(record: Dict[str, Any]) -> User:
    """Map a wire user back to a User."""
    return User(
        user_id=record["userId"],
        name=record["name"],
        email=record["email"],
        default_department=record.get("defaultDepartment") or "",
        is_iam=bool(record.get("isIam")),
        is_admin=bool(record.get("isAdmin")),
        is_active=record.get("isActive", True) is not False,
        password_hash=record.get("passwordHash") or None,
        created_at=parse_timestamp(record.get("createdAt")),
        updated_at=parse_timestamp(record.get("updatedAt")),
    )


class StoreAccessRequestRepository:
    """AccessRequestRepository over a RecordStore.

    The record and its history travel in one ``put``, which is the
    store's atomic unit. ``save_changes`` re-reads the stored record
    first and merges the change set into it, giving last-write-wins per
    field rather than per record.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def save(self, request: AccessRequest) -> None:
        self._store.put(REQUESTS, request_to_record(request))

    def save_changes(
        self,
        request: AccessRequest,
        changed_fields: Iterable[str],
        new_events: Iterable[LifecycleEvent],
    ) -> AccessRequest:
        current = self.find_by_id(request.request_id)
        if current is None:
            self.save(request)
            return request
        fields = set(changed_fields)
        if "status" in fields:
            current.status = request.status
        if "assignee" in fields:
            current.assignee_id = request.assignee_id
            current.assignee_name = request.assignee_name
        known = {event.event_id for event in current.history}
        current.history.extend(e for e in new_events if e.event_id not in known)
        current.touch(max(request.updated_at, current.updated_at))
        self.save(current)
        return current

    def find_by_id(self, request_id: RequestId) -> Optional[AccessRequest]:
        record = self._store.get(REQUESTS, str(request_id))
        return request_from_record(record) if record is not None else None

    def exists(self, request_id: RequestId) -> bool:
        return self._store.get(REQUESTS, str(request_id)) is not None

    def find_all(self) -> List[AccessRequest]:
        return [request_from_record(r) for r in self._store.get_all(REQUESTS)]

    def find_by_requester(self, requester_id: str) -> List[AccessRequest]:
        return [
            request_from_record(r)
            for r in self._store.get_by_field(REQUESTS, "requesterUserId", requester_id)
        ]


class StoreAuditEntryRepository:
    """AuditEntryRepository over a RecordStore."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def save(self, entry: AuditEntry) -> None:
        self._store.put(AUDIT, audit_to_record(entry))

    def find_all(self) -> List[AuditEntry]:
        return [audit_from_record(r) for r in self._store.get_all(AUDIT)]


class StoreUserRepository:
    """UserRepository over a RecordStore."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def save(self, user: User) -> None:
        self._store.put(USERS, user_to_record(user))

    def find_by_id(self, user_id: str) -> Optional[User]:
        record = self._store.get(USERS, user_id)
        return user_from_record(record) if record is not None else None

    def find_by_email(self, email: str) -> Optional[User]:
        matches = self._store.get_by_field(USERS, "emailKey", (email or "").strip().lower())
        if len(matches) > 1:
            logger.warning("Multiple users share one email address")
        return user_from_record(matches[0]) if matches else None

    def find_all(self) -> List[User]:
        return [user_from_record(r) for r in self._store.get_all(USERS)]
