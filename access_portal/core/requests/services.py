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

"""Domain services for the access request domain."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from .entities import AccessRequest, AuditEntry
from .value_objects import AuditAction, RequestStatus, Urgency

SLA_DAYS = 7
SECONDS_PER_DAY = 24 * 60 * 60


class SlaService:
    """Domain service for service-level checks.

    Elapsed time is measured in whole days truncated toward zero, so a
    request is over SLA only once more than ``sla_days`` full days have
    passed since submission.
    """

    @staticmethod
    def elapsed_days(created_at: datetime, now: datetime) -> int:
        """Return whole days between ``created_at`` and ``now``, truncated.

        Example:
            >>> from datetime import timedelta
            >>> t0 = datetime(2026, 1, 1)
            >>> SlaService.elapsed_days(t0, t0 + timedelta(days=7, hours=23))
            7
        """
        return int((now - created_at).total_seconds() / SECONDS_PER_DAY)

    @staticmethod
    def is_over_sla(
        request: AccessRequest,
        now: datetime,
        sla_days: int = SLA_DAYS,
    ) -> bool:
        """Check whether an open request has exceeded the SLA.

        Args:
            request: Request to check.
            now: Reference timestamp.
            sla_days: Allowed whole days before a request is overdue.

        Returns:
            False for COMPLETED or DECLINED requests; otherwise True iff
            elapsed whole days exceed ``sla_days``.
        """
        if request.status.is_terminal():
            return False
        return SlaService.elapsed_days(request.created_at, now) > sla_days


@dataclass(frozen=True)
class RequestStats:
    """Dashboard counters over a set of requests."""

    total: int
    new: int
    in_review: int
    need_info: int
    over_sla: int


class RequestQueryService:
    """Read-side filtering and aggregation over loaded requests."""

    @staticmethod
    def filter(
        requests: Iterable[AccessRequest],
        status: Optional[RequestStatus] = None,
        urgency: Optional[Urgency] = None,
        search: Optional[str] = None,
    ) -> List[AccessRequest]:
        """Filter requests and sort them by last update, newest first.

        Args:
            requests: Requests to filter.
            status: Keep only this status.
            urgency: Keep only this urgency.
            search: Case-insensitive text matched against id, requester,
                department, system and requested role.

        Returns:
            Matching requests sorted by ``updated_at`` descending.
        """
        needle = (search or "").strip().lower()
        matched = []
        for request in requests:
            if status is not None and request.status != status:
                continue
            if urgency is not None and request.urgency != urgency:
                continue
            if needle and not RequestQueryService._matches(request, needle):
                continue
            matched.append(request)
        return sorted(matched, key=lambda r: r.updated_at, reverse=True)

    @staticmethod
    def _matches(request: AccessRequest, needle: str) -> bool:
        haystack = (
            str(request.request_id),
            request.requester_name,
            request.department,
            request.system_display_name,
            request.requested_role_or_permission,
        )
        return any(needle in (value or "").lower() for value in haystack)

    @staticmethod
    def stats(
        requests: Iterable[AccessRequest],
        now: datetime,
        sla_days: int = SLA_DAYS,
    ) -> RequestStats:
        """Count requests per open status and over SLA."""
        requests = list(requests)
        return RequestStats(
            total=len(requests),
            new=sum(1 for r in requests if r.status == RequestStatus.NEW),
            in_review=sum(1 for r in requests if r.status == RequestStatus.IN_REVIEW),
            need_info=sum(1 for r in requests if r.status == RequestStatus.NEED_INFO),
            over_sla=sum(
                1 for r in requests if SlaService.is_over_sla(r, now, sla_days)
            ),
        )


class AuditQueryService:
    """Read-side filtering of the audit log."""

    @staticmethod
    def filter(
        entries: Iterable[AuditEntry],
        action_type: Optional[AuditAction] = None,
        actor_id: Optional[str] = None,
        success: Optional[bool] = None,
    ) -> List[AuditEntry]:
        """Filter audit entries, newest first.

        Args:
            entries: Entries to filter.
            action_type: Keep only this action.
            actor_id: Keep only entries by this actor.
            success: Keep only successful (True) or failed (False) actions.

        Returns:
            Matching entries sorted by timestamp descending.
        """
        matched = [
            entry for entry in entries
            if (action_type is None or entry.action_type == action_type)
            and (actor_id is None or entry.actor_id == actor_id)
            and (success is None or entry.success is success)
        ]
        return sorted(matched, key=lambda e: e.timestamp, reverse=True)
