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

"""Read-side use cases for access requests."""

import logging
from typing import List, Optional

from access_portal.core.requests.exceptions import (
    RequestAuthorizationError,
    RequestNotFoundError,
    RequestPersistenceError,
    RequestValidationError,
)
from access_portal.core.requests.repositories import AccessRequestRepository, Clock
from access_portal.core.requests.services import (
    SLA_DAYS,
    RequestQueryService,
    RequestStats,
)
from access_portal.core.requests.value_objects import (
    ActorIdentity,
    RequestId,
    RequestStatus,
    Urgency,
)
from access_portal.infra.record_store import StoreError

from ..dtos import AccessRequestResponse

logger = logging.getLogger(__name__)


class QueryRequestsUseCase:
    """Loads requests visible to an actor.

    Privileged actors see every request; everyone else sees only the
    requests they submitted.
    """

    def __init__(
        self,
        request_repo: AccessRequestRepository,
        clock: Clock,
        sla_days: int = SLA_DAYS,
    ) -> None:
        self._request_repo = request_repo
        self._clock = clock
        self._sla_days = sla_days

    def get(self, request_id: str, actor: ActorIdentity) -> AccessRequestResponse:
        """Return one request.

        Raises:
            RequestNotFoundError: If the request does not exist.
            RequestAuthorizationError: If the actor may not view it.
            RequestPersistenceError: If the store failed.
        """
        try:
            parsed_id = RequestId(request_id)
        except ValueError:
            raise RequestNotFoundError(request_id) from None
        try:
            request = self._request_repo.find_by_id(parsed_id)
        except StoreError as exc:
            logger.error("Failed to load request %s", request_id)
            raise RequestPersistenceError("load", request_id) from exc
        if request is None:
            raise RequestNotFoundError(request_id)
        if not request.can_view(actor):
            raise RequestAuthorizationError(actor.user_id, "view", request_id)
        return AccessRequestResponse.from_entity(
            request, self._clock.now(), sla_days=self._sla_days
        )

    def list(
        self,
        actor: ActorIdentity,
        status: Optional[str] = None,
        urgency: Optional[str] = None,
        search: Optional[str] = None,
        mine_only: bool = False,
    ) -> List[AccessRequestResponse]:
        """Return requests visible to ``actor``, newest update first.

        Args:
            actor: Viewing actor.
            status: Optional status filter value.
            urgency: Optional urgency filter value.
            search: Optional free-text filter.
            mine_only: Restrict privileged actors to their own submissions.

        Raises:
            RequestValidationError: If a filter value is not a known enum value.
            RequestPersistenceError: If the store failed.
        """
        status_filter = self._parse(RequestStatus, "status", status)
        urgency_filter = self._parse(Urgency, "urgency", urgency)
        try:
            if actor.is_privileged and not mine_only:
                requests = self._request_repo.find_all()
            else:
                requests = self._request_repo.find_by_requester(actor.user_id)
        except StoreError as exc:
            logger.error("Failed to load requests")
            raise RequestPersistenceError("load") from exc

        now = self._clock.now()
        return [
            AccessRequestResponse.from_entity(request, now, sla_days=self._sla_days)
            for request in RequestQueryService.filter(
                requests, status=status_filter, urgency=urgency_filter, search=search
            )
        ]

    def stats(self, actor: ActorIdentity) -> RequestStats:
        """Return dashboard counters over all requests.

        Raises:
            RequestAuthorizationError: If the actor is not privileged.
            RequestPersistenceError: If the store failed.
        """
        if not actor.is_privileged:
            raise RequestAuthorizationError(actor.user_id, "view dashboard")
        try:
            requests = self._request_repo.find_all()
        except StoreError as exc:
            logger.error("Failed to load requests")
            raise RequestPersistenceError("load") from exc
        return RequestQueryService.stats(requests, self._clock.now(), self._sla_days)

    @staticmethod
    def _parse(enum_type, field: str, value: Optional[str]):
        if not value:
            return None
        try:
            return enum_type(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_type)
            raise RequestValidationError({field: f"Must be one of: {allowed}"}) from None
