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

"""Repository port interfaces (Protocols) for the access request domain.

These define the contracts that infrastructure implementations must satisfy.
Using Protocol instead of ABC allows for structural subtyping (duck typing).
"""

from datetime import datetime
from typing import Callable, Iterable, List, Optional, Protocol
import uuid

from .entities import AccessRequest, AuditEntry, LifecycleEvent
from .value_objects import RequestId


class RequestIdGenerator(Protocol):
    """Generator port for creating request identifiers."""

    def generate(self) -> RequestId:
        """Generate a candidate request identifier.

        Returns:
            A RequestId; uniqueness is checked by the caller.
        """
        ...


class AccessRequestRepository(Protocol):
    """Repository port for AccessRequest aggregate persistence.

    A save writes the record and its embedded history in one atomic
    single-record write.
    """

    def save(self, request: AccessRequest) -> None:
        """Persist an access request with its history.

        Args:
            request: AccessRequest entity to persist.

        Raises:
            StoreError: If the underlying store fails.
        """
        ...

    def save_changes(
        self,
        request: AccessRequest,
        changed_fields: Iterable[str],
        new_events: Iterable[LifecycleEvent],
    ) -> AccessRequest:
        """Apply one change set onto the latest stored copy of a request.

        Only ``changed_fields`` (``status``, ``assignee``) are written and
        ``new_events`` are appended to the stored history, so writers
        working from the same stale copy each land their own fields and
        events; the later write wins per field.

        Args:
            request: Locally modified request.
            changed_fields: Names of the fields this change set touched.
            new_events: History events produced by this change set.

        Returns:
            The request as stored after the write.

        Raises:
            StoreError: If the underlying store fails.
        """
        ...

    def find_by_id(self, request_id: RequestId) -> Optional[AccessRequest]:
        """Retrieve a request by its identifier.

        Args:
            request_id: Unique request identifier.

        Returns:
            A freshly loaded AccessRequest if found, None otherwise.
        """
        ...

    def exists(self, request_id: RequestId) -> bool:
        """Check if a request exists.

        Args:
            request_id: Unique request identifier.

        Returns:
            True if request exists, False otherwise.
        """
        ...

    def find_all(self) -> List[AccessRequest]:
        """Retrieve every request (may be empty)."""
        ...

    def find_by_requester(self, requester_id: str) -> List[AccessRequest]:
        """Retrieve all requests submitted by one user."""
        ...


class AuditEntryRepository(Protocol):
    """Repository port for AuditEntry persistence."""

    def save(self, entry: AuditEntry) -> None:
        """Append an audit entry.

        Args:
            entry: Audit entry to persist.
        """
        ...

    def find_all(self) -> List[AuditEntry]:
        """Retrieve all audit entries (may be empty)."""
        ...


ChangeHandler = Callable[[dict], None]


class ChangeNotifier(Protocol):
    """Port for the best-effort "data changed" broadcast.

    Delivery is at-most-once with no ordering guarantee; a missed message is
    only recovered by the next full reload.
    """

    def publish(self, message: dict) -> None:
        """Broadcast a message to subscribers. Never raises."""
        ...

    def subscribe(self, handler: ChangeHandler) -> Callable[[], None]:
        """Register a handler.

        Returns:
            Callable that removes the subscription.
        """
        ...


class Clock(Protocol):
    """Port for reading the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware UTC timestamp."""
        ...


class UUIDGenerator(Protocol):
    """Interface for generating UUID objects."""

    def generate(self) -> uuid.UUID:
        """Generate a UUID object.

        Returns:
            uuid.UUID: A UUID object.
        """
        ...
