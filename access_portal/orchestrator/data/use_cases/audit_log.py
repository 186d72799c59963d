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

"""Audit log viewer use case."""

from typing import List, Optional

from access_portal.core.requests.entities import AuditEntry
from access_portal.core.requests.exceptions import (
    RequestAuthorizationError,
    RequestValidationError,
)
from access_portal.core.requests.repositories import AuditEntryRepository
from access_portal.core.requests.services import AuditQueryService
from access_portal.core.requests.value_objects import ActorIdentity, AuditAction


class AuditLogUseCase:
    """Lists audit entries for admins."""

    def __init__(self, audit_repo: AuditEntryRepository) -> None:
        self._audit_repo = audit_repo

    def list(
        self,
        actor: ActorIdentity,
        action_type: Optional[str] = None,
        actor_id: Optional[str] = None,
        success: Optional[bool] = None,
    ) -> List[AuditEntry]:
        """Return audit entries matching the filters, newest first.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            RequestValidationError: If action_type is not a known action.
        """
        if not actor.is_admin:
            raise RequestAuthorizationError(actor.user_id, "view audit log")
        action = None
        if action_type:
            try:
                action = AuditAction(action_type)
            except ValueError:
                raise RequestValidationError(
                    {"action_type": f"Unknown audit action: {action_type}"}
                ) from None
        return AuditQueryService.filter(
            self._audit_repo.find_all(),
            action_type=action,
            actor_id=actor_id or None,
            success=success,
        )
