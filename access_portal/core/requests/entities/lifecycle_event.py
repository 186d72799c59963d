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

"""Lifecycle event entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects import ActorIdentity, CommentType, EventKind


@dataclass(frozen=True)
class LifecycleEvent:
    """Immutable entry in a request's history.

    Attributes:
        event_id: Unique event identifier.
        kind: What happened (Created, StatusChanged, Assigned, CommentAdded).
        actor_id: User who caused the event.
        actor_name: Display name of the actor at the time of the event.
        actor_email: Email of the actor, if known.
        timestamp: Event occurrence timestamp.
        old_value: Previous value for StatusChanged/Assigned events.
        new_value: New value for Created/StatusChanged/Assigned events.
        comment: Comment text, CommentAdded only.
        comment_type: Audience tag of the comment, CommentAdded only.
    """

    event_id: str
    kind: EventKind
    actor_id: str
    actor_name: str
    timestamp: datetime
    actor_email: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    comment: Optional[str] = None
    comment_type: Optional[CommentType] = None

    @classmethod
    def by(
        cls,
        actor: ActorIdentity,
        kind: EventKind,
        event_id: str,
        timestamp: datetime,
        **values: Optional[str],
    ) -> "LifecycleEvent":
        """Build an event authored by ``actor``."""
        return cls(
            event_id=event_id,
            kind=kind,
            actor_id=actor.user_id,
            actor_name=actor.name,
            actor_email=actor.email,
            timestamp=timestamp,
            **values,
        )
