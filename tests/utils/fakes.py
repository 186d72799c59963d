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

"""In-memory fakes for the portal's ports."""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from access_portal.core.requests.value_objects import RequestId
from access_portal.infra.record_store import InMemoryRecordStore, StoreError

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


class SequenceRequestIdGenerator:
    """Yields REQ-000001, REQ-000002, ... or a scripted sequence."""

    def __init__(self, numbers: Optional[List[int]] = None) -> None:
        self._numbers = list(numbers) if numbers else None
        self._counter = 0

    def generate(self) -> RequestId:
        if self._numbers is not None:
            return RequestId.from_number(self._numbers.pop(0))
        self._counter += 1
        return RequestId.from_number(self._counter)


class FakeUUIDGenerator:
    """Predictable UUID generator."""

    def __init__(self) -> None:
        self._counter = 1

    def generate(self) -> uuid.UUID:
        value = uuid.UUID(f"123e4567-e89b-12d3-a456-426614174{self._counter:03d}")
        self._counter += 1
        return value


class FlakyRecordStore(InMemoryRecordStore):
    """In-memory store whose reads or writes can be made to fail per collection."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_puts: set = set()
        self.failing_reads: set = set()

    def _check_read(self, collection: str) -> None:
        if collection in self.failing_reads:
            raise StoreError(f"read failed for {collection}")

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        self._check_read(collection)
        return super().get(collection, key)

    def get_all(self, collection: str) -> List[Dict[str, Any]]:
        self._check_read(collection)
        return super().get_all(collection)

    def get_by_field(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        self._check_read(collection)
        return super().get_by_field(collection, field, value)

    def put(self, collection: str, record: Dict[str, Any]) -> None:
        if collection in self.failing_puts:
            raise StoreError(f"write failed for {collection}")
        super().put(collection, record)

    def clear(self, collection: str) -> None:
        if collection in self.failing_puts:
            raise StoreError(f"clear failed for {collection}")
        super().clear(collection)


class RecordingNotifier:
    """ChangeNotifier that keeps every published message."""

    def __init__(self) -> None:
        self.messages: List[dict] = []

    def publish(self, message: dict) -> None:
        self.messages.append(dict(message))

    def subscribe(self, handler):
        raise NotImplementedError("RecordingNotifier does not fan out")


class StaleReadRequestRepository:
    """Request repository whose reads return a copy pinned earlier.

    Writes go through to the wrapped repository, so several use case calls
    act like sessions that loaded the same request before any of them saved.
    """

    def __init__(self, inner) -> None:
        self._inner = inner
        self._pinned: Dict[str, Any] = {}

    def pin(self, request_id: RequestId) -> None:
        self._pinned[str(request_id)] = copy.deepcopy(self._inner.find_by_id(request_id))

    def find_by_id(self, request_id: RequestId):
        pinned = self._pinned.get(str(request_id))
        if pinned is None:
            return self._inner.find_by_id(request_id)
        return copy.deepcopy(pinned)

    def __getattr__(self, name: str):
        return getattr(self._inner, name)
