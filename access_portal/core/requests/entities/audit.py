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

"""Audit entry entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects import AuditAction, TargetType


@dataclass(frozen=True)
class AuditEntry:
    """Immutable security audit record.

    Process-wide log of security-relevant actions, independent of the
    per-request history. Never updated or deleted in normal operation.

    Attributes:
        entry_id: Unique entry identifier.
        timestamp: Occurrence timestamp.
        action_type: Audited action.
        target_type: Kind of target (REQUEST, USER, SYSTEM).
        target_id: Identifier of the target.
        success: Whether the action succeeded.
        actor_id: Acting user, None for system actions.
        actor_name: Acting user's name, "System" when there is no actor.
        actor_email: Acting user's email, if known.
        detail: Additional action-specific details.
    """

    entry_id: str
    timestamp: datetime
    action_type: AuditAction
    target_type: TargetType
    target_id: str
    success: bool
    actor_id: Optional[str] = None
    actor_name: str = "System"
    actor_email: Optional[str] = None
    detail: dict = field(default_factory=dict)
