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

"""Best-effort audit trail writer."""

import logging
from typing import Any, Dict, Optional

from access_portal.core.requests.entities import AuditEntry
from access_portal.core.requests.repositories import (
    AuditEntryRepository,
    Clock,
    UUIDGenerator,
)
from access_portal.core.requests.value_objects import (
    ActorIdentity,
    AuditAction,
    TargetType,
)

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Appends entries to the security audit log.

    Audit writes are not part of any operation's commit unit: a failing
    write is logged and swallowed so the primary operation still reports
    its own outcome.
    """

    def __init__(
        self,
        audit_repo: AuditEntryRepository,
        uuid_generator: UUIDGenerator,
        clock: Clock,
    ) -> None:
        """Initialize recorder.

        Args:
            audit_repo: Audit entry repository implementation.
            uuid_generator: Generator for entry identifiers.
            clock: Time source for entry timestamps.
        """
        self._audit_repo = audit_repo
        self._uuid_generator = uuid_generator
        self._clock = clock

    def record(
        self,
        action_type: AuditAction,
        target_type: TargetType,
        target_id: str,
        success: bool,
        actor: Optional[ActorIdentity] = None,
        detail: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditEntry]:
        """Append one audit entry.

        Args:
            action_type: Audited action.
            target_type: Kind of target.
            target_id: Target identifier.
            success: Whether the action succeeded.
            actor: Acting user; None records a system action.
            detail: Additional action-specific details.

        Returns:
            The stored entry, or None if it could not be built or written.
        """
        try:
            entry = AuditEntry(
                entry_id=str(self._uuid_generator.generate()),
                timestamp=self._clock.now(),
                action_type=action_type,
                target_type=target_type,
                target_id=target_id,
                success=success,
                actor_id=actor.user_id if actor else None,
                actor_name=actor.name if actor else "System",
                actor_email=actor.email if actor else None,
                detail=dict(detail or {}),
            )
            self._audit_repo.save(entry)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Failed to write audit entry %s for %s %s",
                action_type.value, target_type.value, target_id,
            )
            return None
        logger.debug("Audit logged: %s %s", action_type.value,
                     "SUCCESS" if success else "FAILURE")
        return entry
