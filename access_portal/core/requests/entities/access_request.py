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

"""AccessRequest aggregate root entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from ..exceptions import RequestAuthorizationError, RequestValidationError
from ..value_objects import (
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
from .lifecycle_event import LifecycleEvent


@dataclass
class AccessRequest:
    """AccessRequest aggregate root.

    Represents one employee request for access to a system, with its
    triage state and an append-only history of lifecycle events.

    Attributes:
        request_id: Unique request identifier.
        requester_id: User who submitted the request.
        requester_name: Requester display name.
        requester_email: Requester email.
        department: Requester's department or team.
        application_or_system: Target system from the catalog.
        environment: Target environment.
        request_type: Kind of access change.
        requested_role_or_permission: Role or permission asked for.
        justification: Business justification.
        urgency: Requester-declared urgency.
        application_other_text: System name when the catalog entry is Other.
        status: Current lifecycle state.
        assignee_id: IAM user handling the request.
        assignee_name: Name of the assignee.
        created_at: Submission timestamp.
        updated_at: Last modification timestamp.
        history: Ordered lifecycle events, oldest first.
        version: Mutation counter.
    """

    request_id: RequestId
    requester_id: str
    requester_name: str
    requester_email: Optional[str]
    department: str
    application_or_system: ApplicationSystem
    environment: Environment
    request_type: RequestType
    requested_role_or_permission: str
    justification: str
    urgency: Urgency
    application_other_text: str = ""
    status: RequestStatus = RequestStatus.NEW
    assignee_id: Optional[str] = None
    assignee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    history: List[LifecycleEvent] = field(default_factory=list)
    version: int = 1

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
        if self.updated_at is None or self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @classmethod
    def submit(
        cls,
        request_id: RequestId,
        requester: ActorIdentity,
        event_id: str,
        submitted_at: datetime,
        **fields,
    ) -> "AccessRequest":
        """Create a new request in NEW state with its Created event.

        Args:
            request_id: Freshly generated identifier.
            requester: Authenticated submitter.
            event_id: Identifier for the Created event.
            submitted_at: Submission timestamp.
            **fields: Validated request fields.

        Returns:
            AccessRequest with a single Created history entry.
        """
        request = cls(
            request_id=request_id,
            requester_id=requester.user_id,
            requester_name=requester.name,
            requester_email=requester.email,
            created_at=submitted_at,
            updated_at=submitted_at,
            **fields,
        )
        request._append(LifecycleEvent.by(
            requester,
            EventKind.CREATED,
            event_id=event_id,
            timestamp=submitted_at,
            new_value=RequestStatus.NEW.value,
        ))
        return request

    @property
    def system_display_name(self) -> str:
        """System name as shown to users, resolving the Other sentinel."""
        if self.application_or_system == ApplicationSystem.OTHER:
            return self.application_other_text
        return self.application_or_system.value

    def is_owned_by(self, actor: ActorIdentity) -> bool:
        """Check if actor is the original requester."""
        return actor.user_id == self.requester_id

    def can_comment(self, actor: ActorIdentity) -> bool:
        """Privileged actors may always comment; the requester only in NEED_INFO."""
        if actor.is_privileged:
            return True
        return self.is_owned_by(actor) and self.status == RequestStatus.NEED_INFO

    def can_view(self, actor: ActorIdentity) -> bool:
        """Privileged actors see every request; others only their own."""
        return actor.is_privileged or self.is_owned_by(actor)

    def ensure_can_modify(self, actor: ActorIdentity, action: str) -> None:
        """Reject status or assignee changes from non-privileged actors.

        Raises:
            RequestAuthorizationError: If actor lacks IAM/Admin capability.
        """
        if not actor.is_privileged:
            raise RequestAuthorizationError(
                actor_id=actor.user_id,
                action=action,
                request_id=str(self.request_id),
            )

    def ensure_can_comment(self, actor: ActorIdentity) -> None:
        """Reject comments the actor is not allowed to add.

        Raises:
            RequestAuthorizationError: If actor may not comment now.
        """
        if not self.can_comment(actor):
            raise RequestAuthorizationError(
                actor_id=actor.user_id,
                action="comment",
                request_id=str(self.request_id),
            )

    def _append(self, event: LifecycleEvent) -> LifecycleEvent:
        """Append an event, keeping history timestamps non-decreasing."""
        if self.history and event.timestamp < self.history[-1].timestamp:
            event = LifecycleEvent(
                event_id=event.event_id,
                kind=event.kind,
                actor_id=event.actor_id,
                actor_name=event.actor_name,
                actor_email=event.actor_email,
                timestamp=self.history[-1].timestamp,
                old_value=event.old_value,
                new_value=event.new_value,
                comment=event.comment,
                comment_type=event.comment_type,
            )
        self.history.append(event)
        return event

    def change_status(
        self,
        new_status: RequestStatus,
        actor: ActorIdentity,
        event_id: str,
        at: datetime,
    ) -> Optional[LifecycleEvent]:
        """Move the request to ``new_status``.

        Any state is reachable from any other.

        Args:
            new_status: Target state.
            actor: Privileged actor performing the change.
            event_id: Identifier for the StatusChanged event.
            at: Change timestamp.

        Returns:
            The StatusChanged event, or None if status is unchanged.

        Raises:
            RequestAuthorizationError: If actor is not privileged.
        """
        if new_status == self.status:
            return None
        self.ensure_can_modify(actor, "change_status")
        event = self._append(LifecycleEvent.by(
            actor,
            EventKind.STATUS_CHANGED,
            event_id=event_id,
            timestamp=at,
            old_value=self.status.value,
            new_value=new_status.value,
        ))
        self.status = new_status
        return event

    def assign(
        self,
        assignee_id: Optional[str],
        assignee_name: Optional[str],
        actor: ActorIdentity,
        event_id: str,
        at: datetime,
    ) -> Optional[LifecycleEvent]:
        """Hand the request to another IAM user, or unassign it with None.

        The event carries assignee names; ids stay on the record.

        Returns:
            The Assigned event, or None if assignee is unchanged.

        Raises:
            RequestAuthorizationError: If actor is not privileged.
        """
        if assignee_id == self.assignee_id:
            return None
        self.ensure_can_modify(actor, "assign")
        event = self._append(LifecycleEvent.by(
            actor,
            EventKind.ASSIGNED,
            event_id=event_id,
            timestamp=at,
            old_value=self.assignee_name,
            new_value=assignee_name if assignee_id else None,
        ))
        self.assignee_id = assignee_id
        self.assignee_name = assignee_name if assignee_id else None
        return event

    def add_comment(
        self,
        text: str,
        actor: ActorIdentity,
        event_id: str,
        at: datetime,
    ) -> LifecycleEvent:
        """Append a comment without touching status or assignee.

        Raises:
            RequestValidationError: If text is blank.
            RequestAuthorizationError: If actor may not comment now.
        """
        body = (text or "").strip()
        if not body:
            raise RequestValidationError({"comment": "Please enter a comment"})
        self.ensure_can_comment(actor)
        return self._append(LifecycleEvent.by(
            actor,
            EventKind.COMMENT_ADDED,
            event_id=event_id,
            timestamp=at,
            comment=body,
            comment_type=CommentType.for_actor(actor),
        ))

    def touch(self, at: datetime) -> None:
        """Bump modification timestamp and version after a committed change set."""
        self.updated_at = max(at, self.created_at)
        self.version += 1

    def events_of(self, kind: EventKind) -> List[LifecycleEvent]:
        """Return history entries of one kind, in order."""
        return [event for event in self.history if event.kind == kind]

    def comments_for(self, comment_type: CommentType) -> List[LifecycleEvent]:
        """Return comments tagged with ``comment_type``, in order."""
        return [
            event for event in self.events_of(EventKind.COMMENT_ADDED)
            if event.comment_type == comment_type
        ]
