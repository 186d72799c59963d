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

"""Record store port and in-memory implementation.

Records are plain JSON-compatible dicts using the portal's camelCase wire
field names. A store guarantees that a single ``put`` is atomic; it offers
no multi-record transactions.
"""

import copy
import logging
import threading
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

REQUESTS = "requests"
AUDIT = "audit"
USERS = "users"

DEFAULT_KEY_FIELDS: Dict[str, str] = {
    REQUESTS: "id",
    AUDIT: "entryId",
    USERS: "userId",
}


class StoreError(Exception):
    """Raised when the record store cannot complete an operation."""


class RecordStore(Protocol):
    """Port for the external key-value/query record store."""

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """Return the record stored under ``key`` or None."""
        ...

    def get_all(self, collection: str) -> List[Dict[str, Any]]:
        """Return every record of a collection."""
        ...

    def get_by_field(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        """Return records whose ``field`` equals ``value``."""
        ...

    def put(self, collection: str, record: Dict[str, Any]) -> None:
        """Insert or replace a record, keyed by the collection's key field."""
        ...

    def delete(self, collection: str, key: str) -> None:
        """Remove a record if present."""
        ...

    def clear(self, collection: str) -> None:
        """Remove every record of a collection."""
        ...


class InMemoryRecordStore(RecordStore):
    """Thread-safe in-process record store.

    Records are deep-copied on the way in and out, so callers never share
    mutable state with the store.
    """

    def __init__(self, key_fields: Optional[Dict[str, str]] = None) -> None:
        """Initialize empty collections.

        Args:
            key_fields: Mapping of collection name to its key field.
        """
        self._key_fields = dict(key_fields or DEFAULT_KEY_FIELDS)
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {
            name: {} for name in self._key_fields
        }
        self._lock = threading.Lock()

    def _collection(self, collection: str) -> Dict[str, Dict[str, Any]]:
        try:
            return self._collections[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}") from None

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._collection(collection).get(key)
            return copy.deepcopy(record) if record is not None else None

    def get_all(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._collection(collection).values()]

    def get_by_field(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                copy.deepcopy(r) for r in self._collection(collection).values()
                if r.get(field) == value
            ]

    def put(self, collection: str, record: Dict[str, Any]) -> None:
        key_field = self._key_fields.get(collection)
        if key_field is None:
            raise StoreError(f"Unknown collection: {collection}")
        key = record.get(key_field)
        if not key:
            raise StoreError(f"Record for {collection} is missing key field {key_field}")
        with self._lock:
            self._collection(collection)[key] = copy.deepcopy(record)

    def delete(self, collection: str, key: str) -> None:
        with self._lock:
            self._collection(collection).pop(key, None)

    def clear(self, collection: str) -> None:
        with self._lock:
            self._collection(collection).clear()
        logger.info("Cleared collection %s", collection)
