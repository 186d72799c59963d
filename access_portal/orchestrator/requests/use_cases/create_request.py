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

"""CreateRequest use case implementation."""

import logging
from enum import Enum
from typing import Any, Dict, Type

from access_portal.core.requests.entities import AccessRequest
from access_portal.core.requests.exceptions import (
    RequestAlreadyExistsError,
    RequestPersistenceError,
    RequestValidationError,
)
from access_portal.core.requests.repositories import (
    AccessRequestRepository,
    ChangeNotifier,
    Clock,
    RequestIdGenerator,
    UUIDGenerator,
)
from access_portal.core.requests.services import SLA_DAYS
from access_portal.core.requests.value_objects import (
    ApplicationSystem,
    AuditAction,
    Environment,
    RequestId,
    RequestType,
    TargetType,
    Urgency,
)
from access_portal.infra.notifications import data_changed
from access_portal.infra.record_store import StoreError

from ...common import AuditRecorder
from ..commands import CreateRequestCommand
from ..dtos import AccessRequestResponse

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 5

_REQUIRED_TEXT_FIELDS = {
    "department": "Department / Team is required",
    "requested_role_or_permission": "Requested role or permission is required",
    "justification": "Business justification is required",
}

_ENUM_FIELDS: Dict[str, Type[Enum]] = {
    "application_or_system": ApplicationSystem,
    "environment": Environment,
    "request_type": RequestType,
    "urgency": Urgency,
}


class CreateRequestUseCase:
    """Use case for submitting a new access request.

    This use case orchestrates request creation with the following guarantees:
    - Validation: every problem is reported before anything is persisted
    - Atomicity: the record and its Created event are one store write
    - Audit trail: emits REQUEST_CREATE after a successful write
    - Sync: publishes one DATA_CHANGED message after a successful write

    Attributes:
        request_repo: Access request repository port.
        audit: Best-effort audit recorder.
        notifier: Change notification port.
    """

    def __init__(
        self,
        request_repo: AccessRequestRepository,
        audit: AuditRecorder,
        notifier: ChangeNotifier,
        request_id_generator: RequestIdGenerator,
        uuid_generator: UUIDGenerator,
        clock: Clock,
        sla_days: int = SLA_DAYS,
    ) -> None:
        """Initialize use case with its collaborators.

        Args:
            request_repo: Access request repository implementation.
            audit: Audit recorder.
            notifier: Change notifier implementation.
            request_id_generator: Request identifier generator to use.
            uuid_generator: UUID generator for event identifiers.
            clock: Time source.
            sla_days: SLA threshold used in responses.
        """
        self._request_repo = request_repo
        self._audit = audit
        self._notifier = notifier
        self._request_id_generator = request_id_generator
        self._uuid_generator = uuid_generator
        self._clock = clock
        self._sla_days = sla_days

    def execute(self, command: CreateRequestCommand) -> AccessRequestResponse:
        """Execute request submission.

        Args:
            command: CreateRequest command with form values.

        Returns:
            AccessRequestResponse DTO with the created request.

        Raises:
            RequestValidationError: If any field is missing or invalid.
            RequestAlreadyExistsError: If no unused id could be generated.
            RequestPersistenceError: If the store failed; nothing was committed.
        """
        fields = self._validate(command)
        request_id = self._generate_request_id(command)

        now = self._clock.now()
        request = AccessRequest.submit(
            request_id=request_id,
            requester=command.requester,
            event_id=self._generate_event_id(),
            submitted_at=now,
            **fields,
        )

        self._save(request, command)
        logger.info(
            "Request %s submitted by %s", request_id, command.requester.user_id
        )

        self._notifier.publish(data_changed())
        self._audit.record(
            AuditAction.REQUEST_CREATE,
            TargetType.REQUEST,
            str(request_id),
            True,
            actor=command.requester,
            detail={
                "system": request.application_or_system.value,
                "requestType": request.request_type.value,
            },
        )
        return AccessRequestResponse.from_entity(
            request, now, is_new=True, sla_days=self._sla_days
        )

    def _validate(self, command: CreateRequestCommand) -> Dict[str, Any]:
        """Validate raw form values and return entity fields.

        Raises:
            RequestValidationError: Listing every invalid field.
        """
        errors: Dict[str, str] = {}
        fields: Dict[str, Any] = {}

        for name, message in _REQUIRED_TEXT_FIELDS.items():
            value = (getattr(command, name) or "").strip()
            if not value:
                errors[name] = message
            fields[name] = value

        for name, enum_type in _ENUM_FIELDS.items():
            raw = (getattr(command, name) or "").strip()
            try:
                fields[name] = enum_type(raw)
            except ValueError:
                allowed = ", ".join(member.value for member in enum_type)
                errors[name] = f"Must be one of: {allowed}"

        other_text = (command.application_other_text or "").strip()
        if fields.get("application_or_system") == ApplicationSystem.OTHER:
            if not other_text:
                errors["application_other_text"] = "Please specify the system name"
            fields["application_other_text"] = other_text
        else:
            fields["application_other_text"] = ""

        if errors:
            raise RequestValidationError(errors, correlation_id=command.correlation_id)
        return fields

    def _generate_request_id(self, command: CreateRequestCommand) -> RequestId:
        """Generate a RequestId not yet used in the store."""
        request_id = None
        for _ in range(MAX_ID_ATTEMPTS):
            request_id = self._request_id_generator.generate()
            try:
                taken = self._request_repo.exists(request_id)
            except StoreError as exc:
                logger.error("Failed to check request id %s", request_id)
                raise RequestPersistenceError(
                    "load", str(request_id), correlation_id=command.correlation_id
                ) from exc
            if not taken:
                return request_id
            logger.warning("Request id collision on %s, retrying", request_id)
        raise RequestAlreadyExistsError(
            request_id=str(request_id),
            correlation_id=command.correlation_id,
        )

    def _save(self, request: AccessRequest, command: CreateRequestCommand) -> None:
        """Persist the new request with its history."""
        try:
            self._request_repo.save(request)
        except StoreError as exc:
            logger.error("Failed to save request %s", request.request_id)
            raise RequestPersistenceError(
                "save", str(request.request_id), correlation_id=command.correlation_id
            ) from exc

    def _generate_event_id(self) -> str:
        """Generate event ID for history events."""
        return str(self._uuid_generator.generate())
