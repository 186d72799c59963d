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

"""Demo sample requests and data reset (admin)."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from access_portal.core.requests.entities import AccessRequest
from access_portal.core.requests.exceptions import (
    RequestAuthorizationError,
    RequestPersistenceError,
)
from access_portal.core.requests.repositories import (
    AccessRequestRepository,
    ChangeNotifier,
    Clock,
    UUIDGenerator,
)
from access_portal.core.requests.value_objects import (
    ActorIdentity,
    ApplicationSystem,
    AuditAction,
    Environment,
    RequestId,
    RequestStatus,
    RequestType,
    TargetType,
    Urgency,
)
from access_portal.core.users.repositories import UserRepository
from access_portal.core.users.user import User
from access_portal.infra.notifications import data_changed
from access_portal.infra.record_store import AUDIT, REQUESTS, RecordStore, StoreError

from ...common import AuditRecorder

logger = logging.getLogger(__name__)

FIRST_SAMPLE_NUMBER = 100001


@dataclass(frozen=True)
class SampleRequest:
    """Template for one demo request.

    Requester and assignee indexes pick from the directory's employees and
    assignees sorted by name, falling back to the last one available.
    """

    department: str
    system: ApplicationSystem
    environment: Environment
    role: str
    justification: str
    urgency: Urgency
    status: RequestStatus
    days_ago: int
    requester_index: int = 0
    assignee_index: Optional[int] = None


SAMPLE_REQUESTS = (
    SampleRequest(
        department="Engineering",
        system=ApplicationSystem.GITHUB,
        environment=Environment.PROD,
        role="Write access to main repository",
        justification="Need to contribute to the main codebase for the Q2 feature release.",
        urgency=Urgency.NORMAL,
        status=RequestStatus.NEW,
        days_ago=2,
    ),
    SampleRequest(
        department="Finance",
        system=ApplicationSystem.DATA_WAREHOUSE,
        environment=Environment.PROD,
        role="Read access to financial reports",
        justification="Required for monthly financial analysis and reporting to leadership.",
        urgency=Urgency.HIGH,
        status=RequestStatus.IN_REVIEW,
        days_ago=5,
        requester_index=1,
        assignee_index=0,
    ),
    SampleRequest(
        department="Engineering",
        system=ApplicationSystem.AWS_CONSOLE,
        environment=Environment.NON_PROD,
        role="EC2 and S3 management permissions",
        justification="Setting up new development environment for mobile team.",
        urgency=Urgency.HIGH,
        status=RequestStatus.COMPLETED,
        days_ago=10,
        assignee_index=1,
    ),
)


class SampleDataUseCase:
    """Loads demo requests and wipes request data.

    Samples get fixed ids from ``REQ-100001`` on; an id already in use is
    left alone. Reset clears requests and the audit log but keeps the user
    directory so the signed-in admin stays valid.
    """

    def __init__(
        self,
        store: RecordStore,
        request_repo: AccessRequestRepository,
        user_repo: UserRepository,
        audit: AuditRecorder,
        notifier: ChangeNotifier,
        uuid_generator: UUIDGenerator,
        clock: Clock,
        samples: Sequence[SampleRequest] = SAMPLE_REQUESTS,
    ) -> None:
        self._store = store
        self._request_repo = request_repo
        self._user_repo = user_repo
        self._audit = audit
        self._notifier = notifier
        self._uuid_generator = uuid_generator
        self._clock = clock
        self._samples = tuple(samples)

    def load_samples(self, actor: ActorIdentity) -> int:
        """Add the sample requests.

        Returns:
            Number of requests added.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            RequestPersistenceError: If the store fails.
        """
        self._require_admin(actor, "load sample data")
        return self._load(actor)

    def seed_if_empty(self) -> int:
        """Add the sample requests when no request exists yet.

        Returns:
            Number of requests added; 0 when requests already exist.
        """
        try:
            if self._request_repo.find_all():
                logger.info("Requests already exist, skipping sample data")
                return 0
        except StoreError as exc:
            raise RequestPersistenceError("load") from exc
        return self._load(None)

    def reset(self, actor: ActorIdentity) -> None:
        """Delete every request and audit entry.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            RequestPersistenceError: If the store fails.
        """
        self._require_admin(actor, "reset data")
        try:
            self._store.clear(REQUESTS)
            self._store.clear(AUDIT)
        except StoreError as exc:
            logger.error("Reset failed: %s", exc)
            raise RequestPersistenceError("reset") from exc

        self._notifier.publish(data_changed())
        self._audit.record(
            AuditAction.DATA_IMPORT, TargetType.SYSTEM, "RESET", True, actor=actor,
            detail={"message": "Requests and audit log cleared"},
        )
        logger.warning("Request data reset by %s", actor.user_id)

    def _load(self, actor: Optional[ActorIdentity]) -> int:
        users = self._user_repo.find_all()
        employees = sorted(
            (u for u in users if u.is_active and not u.is_iam), key=lambda u: u.name.lower()
        )
        assignees = sorted((u for u in users if u.is_assignable()), key=lambda u: u.name.lower())
        if not employees:
            logger.warning("No active employees, no sample requests loaded")
            return 0

        now = self._clock.now()
        loaded = 0
        try:
            for index, sample in enumerate(self._samples):
                request_id = RequestId.from_number(FIRST_SAMPLE_NUMBER + index)
                if self._request_repo.exists(request_id):
                    logger.info("Sample %s already present", request_id)
                    continue
                request = self._build(request_id, sample, employees, assignees, now)
                if request is None:
                    continue
                self._request_repo.save(request)
                loaded += 1
        except StoreError as exc:
            logger.error("Loading sample data failed after %d requests: %s", loaded, exc)
            raise RequestPersistenceError("save") from exc

        if loaded:
            self._notifier.publish(data_changed())
        self._audit.record(
            AuditAction.DATA_IMPORT, TargetType.SYSTEM, "SAMPLES", True, actor=actor,
            detail={"message": "Loaded sample requests", "requests": loaded},
        )
        logger.info("Loaded %d sample requests", loaded)
        return loaded

    def _build(
        self,
        request_id: RequestId,
        sample: SampleRequest,
        employees: List[User],
        assignees: List[User],
        now: datetime,
    ) -> Optional[AccessRequest]:
        requester = employees[min(sample.requester_index, len(employees) - 1)]
        submitted_at = now - timedelta(days=sample.days_ago)
        request = AccessRequest.submit(
            request_id,
            requester.as_actor(),
            self._event_id(),
            submitted_at,
            department=sample.department,
            application_or_system=sample.system,
            environment=sample.environment,
            request_type=RequestType.ADD,
            requested_role_or_permission=sample.role,
            justification=sample.justification,
            urgency=sample.urgency,
        )
        if sample.assignee_index is None:
            return request
        if not assignees:
            logger.warning("No IAM assignee for sample %s, skipped", request_id)
            return None

        assignee = assignees[min(sample.assignee_index, len(assignees) - 1)]
        handler = assignee.as_actor()
        handled_at = submitted_at + timedelta(days=1)
        request.assign(assignee.user_id, assignee.name, handler, self._event_id(), handled_at)
        request.change_status(sample.status, handler, self._event_id(), handled_at)
        request.touch(handled_at)
        return request

    def _event_id(self) -> str:
        return str(self._uuid_generator.generate())

    @staticmethod
    def _require_admin(actor: ActorIdentity, action: str) -> None:
        if not actor.is_admin:
            raise RequestAuthorizationError(actor.user_id, action)
