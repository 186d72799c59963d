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

"""ApplyChanges use case implementation."""

import logging
from typing import List, Optional, Tuple

from access_portal.core.requests.entities import AccessRequest, LifecycleEvent
from access_portal.core.requests.exceptions import (
    OptimisticLockError,
    RequestAuthorizationError,
    RequestNotFoundError,
    RequestPersistenceError,
    RequestValidationError,
)
from access_portal.core.requests.repositories import (
    AccessRequestRepository,
    ChangeNotifier,
    Clock,
    UUIDGenerator,
)
from access_portal.core.requests.services import SLA_DAYS
from access_portal.core.requests.value_objects import (
    AuditAction,
    EventKind,
    RequestId,
    RequestStatus,
    TargetType,
)
from access_portal.core.users.repositories import UserRepository
from access_portal.infra.notifications import data_changed
from access_portal.infra.record_store import StoreError

from ...common import AuditRecorder
from ..commands import ApplyChangesCommand
from ..dtos import AccessRequestResponse, ApplyChangesResult

logger = logging.getLogger(__name__)

NOTHING_TO_SAVE = "No changes to save"
REQUEST_UPDATED = "Request updated"
COMMENT_ADDED = "Comment added"

_KEEP = object()


class ApplyChangesUseCase:
    """Use case for status/assignee transitions and comments.

    Guarantees:
    - Authorization is checked for every proposed change before any of them
      is applied, so a rejected call leaves the record untouched
    - One history event per changed field, in the order status, assignee,
      comment, and a single ``updated_at`` bump per call
    - The record and its new events are one store write; on failure nothing
      is audited or broadcast
    - Without ``expected_version`` the last write wins per field: only the
      fields this call changed are written over the stored record

    Attributes:
        request_repo: Access request repository port.
        user_repo: User directory used to resolve assignees.
        audit: Best-effort audit recorder.
        notifier: Change notification port.
    """

    def __init__(
        self,
        request_repo: AccessRequestRepository,
        user_repo: UserRepository,
        audit: AuditRecorder,
        notifier: ChangeNotifier,
        uuid_generator: UUIDGenerator,
        clock: Clock,
        sla_days: int = SLA_DAYS,
    ) -> None:
        """Initialize use case with its collaborators.

        Args:
            request_repo: Access request repository implementation.
            user_repo: User repository implementation.
            audit: Audit recorder.
            notifier: Change notifier implementation.
            uuid_generator: UUID generator for event identifiers.
            clock: Time source.
            sla_days: SLA threshold used in responses.
        """
        self._request_repo = request_repo
        self._user_repo = user_repo
        self._audit = audit
        self._notifier = notifier
        self._uuid_generator = uuid_generator
        self._clock = clock
        self._sla_days = sla_days

    def execute(self, command: ApplyChangesCommand) -> ApplyChangesResult:
        """Apply proposed changes to a request.

        Args:
            command: ApplyChanges command.

        Returns:
            ApplyChangesResult; ``changed`` is False when there was nothing
            to save.

        Raises:
            RequestNotFoundError: If the request does not exist.
            RequestValidationError: If a proposed value is invalid.
            RequestAuthorizationError: If the actor may not view the request
                or make a proposed change.
            OptimisticLockError: If ``expected_version`` does not match.
            RequestPersistenceError: If the store failed; nothing was committed.
        """
        request = self._load(command)
        if not request.can_view(command.actor):
            raise RequestAuthorizationError(
                command.actor.user_id,
                "view",
                str(request.request_id),
                correlation_id=command.correlation_id,
            )
        self._check_version(request, command)

        new_status = self._resolve_status(command)
        assignee = self._resolve_assignee(command)
        comment = (command.comment or "").strip()

        status_changes = new_status is not None and new_status != request.status
        assignee_changes = assignee is not _KEEP and assignee[0] != request.assignee_id
        if status_changes:
            request.ensure_can_modify(command.actor, "change_status")
        if assignee_changes:
            request.ensure_can_modify(command.actor, "assign")
        if comment:
            request.ensure_can_comment(command.actor)

        if not (status_changes or assignee_changes or comment):
            logger.debug("Nothing to save for request %s", request.request_id)
            return ApplyChangesResult(
                changed=False,
                message=NOTHING_TO_SAVE,
                request=self._to_response(request),
            )

        now = self._clock.now()
        previous_assignee = request.assignee_name
        events: List[LifecycleEvent] = []
        if status_changes:
            events.append(request.change_status(
                new_status, command.actor, self._generate_event_id(), now
            ))
        if assignee_changes:
            events.append(request.assign(
                assignee[0], assignee[1], command.actor, self._generate_event_id(), now
            ))
        if comment:
            events.append(request.add_comment(
                comment, command.actor, self._generate_event_id(), now
            ))
        request.touch(now)

        changed_fields = [name for name, changed in (
            ("status", status_changes), ("assignee", assignee_changes),
        ) if changed]
        request = self._save(request, command, changed_fields, events)
        logger.info(
            "Request %s updated by %s: %s",
            request.request_id,
            command.actor.user_id,
            ", ".join(event.kind.value for event in events),
        )

        self._notifier.publish(data_changed())
        self._emit_audit_entries(request, command, events, previous_assignee)

        only_comment = len(events) == 1 and events[0].kind == EventKind.COMMENT_ADDED
        return ApplyChangesResult(
            changed=True,
            message=COMMENT_ADDED if only_comment else REQUEST_UPDATED,
            request=self._to_response(request),
            events_added=tuple(event.kind.value for event in events),
        )

    def _load(self, command: ApplyChangesCommand) -> AccessRequest:
        """Load a fresh copy of the target request."""
        try:
            request_id = RequestId(command.request_id)
        except ValueError:
            raise RequestNotFoundError(
                command.request_id, correlation_id=command.correlation_id
            ) from None
        try:
            request = self._request_repo.find_by_id(request_id)
        except StoreError as exc:
            logger.error("Failed to load request %s", request_id)
            raise RequestPersistenceError(
                "load", str(request_id), correlation_id=command.correlation_id
            ) from exc
        if request is None:
            raise RequestNotFoundError(
                str(request_id), correlation_id=command.correlation_id
            )
        return request

    def _check_version(self, request: AccessRequest, command: ApplyChangesCommand) -> None:
        """Enforce a conditional update when the caller asked for one."""
        if command.expected_version is None:
            return
        if command.expected_version != request.version:
            raise OptimisticLockError(
                entity_type="AccessRequest",
                entity_id=str(request.request_id),
                expected_version=command.expected_version,
                actual_version=request.version,
                correlation_id=command.correlation_id,
            )

    def _resolve_status(self, command: ApplyChangesCommand) -> Optional[RequestStatus]:
        if command.status is None:
            return None
        try:
            return RequestStatus(command.status)
        except ValueError:
            allowed = ", ".join(status.value for status in RequestStatus)
            raise RequestValidationError(
                {"status": f"Must be one of: {allowed}"},
                correlation_id=command.correlation_id,
            ) from None

    def _resolve_assignee(self, command: ApplyChangesCommand):
        """Resolve the proposed assignee to an (id, name) pair.

        Returns:
            ``_KEEP`` when no assignee change is proposed, ``(None, None)``
            to unassign, otherwise the assignee's id and name.
        """
        if command.unassign and command.assignee_id:
            raise RequestValidationError(
                {"assignee_id": "Cannot assign and unassign at once"},
                correlation_id=command.correlation_id,
            )
        if command.unassign:
            return (None, None)
        if not command.assignee_id:
            return _KEEP
        try:
            user = self._user_repo.find_by_id(command.assignee_id)
        except StoreError as exc:
            raise RequestPersistenceError(
                "load", command.request_id, correlation_id=command.correlation_id
            ) from exc
        if user is None or not user.is_assignable():
            raise RequestValidationError(
                {"assignee_id": "Assignee must be an active IAM member"},
                correlation_id=command.correlation_id,
            )
        return (user.user_id, user.name)

    def _save(
        self,
        request: AccessRequest,
        command: ApplyChangesCommand,
        changed_fields: List[str],
        events: List[LifecycleEvent],
    ) -> AccessRequest:
        """Write the change set; returns the request as stored."""
        try:
            return self._request_repo.save_changes(request, changed_fields, events)
        except StoreError as exc:
            logger.error("Failed to update request %s", request.request_id)
            raise RequestPersistenceError(
                "save", str(request.request_id), correlation_id=command.correlation_id
            ) from exc

    def _emit_audit_entries(
        self,
        request: AccessRequest,
        command: ApplyChangesCommand,
        events: List[LifecycleEvent],
        previous_assignee: Optional[str],
    ) -> None:
        """Write one audit entry per applied change."""
        for event in events:
            action, detail = self._audit_detail(event, previous_assignee)
            self._audit.record(
                action,
                TargetType.REQUEST,
                str(request.request_id),
                True,
                actor=command.actor,
                detail=detail,
            )

    @staticmethod
    def _audit_detail(
        event: LifecycleEvent,
        previous_assignee: Optional[str],
    ) -> Tuple[AuditAction, dict]:
        if event.kind == EventKind.STATUS_CHANGED:
            return AuditAction.REQUEST_STATUS_CHANGE, {
                "oldStatus": event.old_value,
                "newStatus": event.new_value,
            }
        if event.kind == EventKind.ASSIGNED:
            return AuditAction.REQUEST_ASSIGN, {
                "oldAssignee": previous_assignee,
                "newAssignee": event.new_value or "Unassigned",
            }
        return AuditAction.COMMENT_ADD, {"commentType": event.comment_type.value}

    def _to_response(self, request: AccessRequest) -> AccessRequestResponse:
        """Map domain entity to response DTO."""
        return AccessRequestResponse.from_entity(
            request, self._clock.now(), sla_days=self._sla_days
        )

    def _generate_event_id(self) -> str:
        """Generate event ID for history events."""
        return str(self._uuid_generator.generate())
