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

"""Snapshot export and import of portal data.

A snapshot is a JSON-compatible dict::

    {"version": "2.0", "exportedAt": ..., "users": [...],
     "requests": [...], "audit": [...]}

Import replaces requests and audit entries wholesale; the user directory
is left untouched.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate as validate_schema

from access_portal.core.requests.exceptions import (
    RequestAuthorizationError,
    RequestPersistenceError,
    RequestValidationError,
)
from access_portal.core.requests.repositories import ChangeNotifier, Clock, UUIDGenerator
from access_portal.core.requests.value_objects import (
    ActorIdentity,
    AuditAction,
    EventKind,
    TargetType,
)
from access_portal.infra.notifications import data_changed
from access_portal.infra.record_store import AUDIT, REQUESTS, USERS, RecordStore, StoreError
from access_portal.infra.repositories import (
    audit_from_record,
    audit_to_record,
    format_timestamp,
    request_from_record,
    request_to_record,
)

from ...common import AuditRecorder

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "2.0"

# Directory fields never leave the store.
_PRIVATE_USER_FIELDS = ("emailKey", "passwordHash")

SNAPSHOT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["version", "requests"],
    "properties": {
        "version": {"type": ["string", "number"], "minLength": 1},
        "exportedAt": {"type": ["string", "null"]},
        "requests": {"type": "array", "items": {"type": "object"}},
        "audit": {"type": ["array", "null"], "items": {"type": "object"}},
        "users": {"type": ["array", "null"]},
    },
}


@dataclass(frozen=True)
class ImportSummary:
    """Counts of imported records."""

    requests: int
    audit: int


class DataTransferUseCase:
    """Exports and imports portal snapshots (admin only)."""

    def __init__(
        self,
        store: RecordStore,
        audit: AuditRecorder,
        notifier: ChangeNotifier,
        uuid_generator: UUIDGenerator,
        clock: Clock,
    ) -> None:
        self._store = store
        self._audit = audit
        self._notifier = notifier
        self._uuid_generator = uuid_generator
        self._clock = clock

    def export(self, actor: ActorIdentity) -> Dict[str, Any]:
        """Build a snapshot of users, requests and audit entries.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            RequestPersistenceError: If the store cannot be read.
        """
        self._require_admin(actor, "export data")
        try:
            snapshot = {
                "version": SNAPSHOT_VERSION,
                "exportedAt": format_timestamp(self._clock.now()),
                "users": [self._public_user(u) for u in self._store.get_all(USERS)],
                "requests": self._store.get_all(REQUESTS),
                "audit": self._store.get_all(AUDIT),
            }
        except StoreError as exc:
            raise RequestPersistenceError("export") from exc

        self._audit.record(
            AuditAction.DATA_EXPORT, TargetType.SYSTEM, "EXPORT", True, actor=actor,
            detail={"requests": len(snapshot["requests"]), "audit": len(snapshot["audit"])},
        )
        logger.info("Exported %d requests", len(snapshot["requests"]))
        return snapshot

    def import_snapshot(self, actor: ActorIdentity, snapshot: Dict[str, Any]) -> ImportSummary:
        """Replace all requests and audit entries with a snapshot's.

        Every record is parsed before anything is cleared, so a malformed
        snapshot leaves existing data in place.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            RequestValidationError: If the snapshot is malformed.
            RequestPersistenceError: If the store fails mid-import.
        """
        self._require_admin(actor, "import data")
        try:
            validate_schema(instance=snapshot, schema=SNAPSHOT_SCHEMA)
        except SchemaValidationError as exc:
            raise RequestValidationError(
                {"snapshot": f"Invalid data format: {exc.message}"}
            ) from exc

        requests = self._normalize_requests(snapshot["requests"])
        audit = self._normalize_audit(snapshot.get("audit") or [])

        try:
            self._store.clear(REQUESTS)
            self._store.clear(AUDIT)
            for record in requests:
                self._store.put(REQUESTS, record)
            for record in audit:
                self._store.put(AUDIT, record)
        except StoreError as exc:
            logger.error("Import failed after clearing data: %s", exc)
            raise RequestPersistenceError("import") from exc

        self._notifier.publish(data_changed())
        self._audit.record(
            AuditAction.DATA_IMPORT, TargetType.SYSTEM, "IMPORT", True, actor=actor,
            detail={"requests": len(requests), "audit": len(audit),
                    "version": str(snapshot["version"])},
        )
        logger.info("Imported %d requests and %d audit entries", len(requests), len(audit))
        return ImportSummary(requests=len(requests), audit=len(audit))

    @staticmethod
    def _normalize_requests(records: List[Any]) -> List[Dict[str, Any]]:
        normalized = []
        for index, record in enumerate(records):
            try:
                request = request_from_record(record)
                if not request.history or request.history[0].kind != EventKind.CREATED:
                    raise ValueError("history must start with a Created event")
                normalized.append(request_to_record(request))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise RequestValidationError(
                    {f"requests[{index}]": f"Invalid request record: {exc}"}
                ) from exc
        return normalized

    def _normalize_audit(self, records: List[Any]) -> List[Dict[str, Any]]:
        normalized = []
        for index, record in enumerate(records):
            try:
                record = dict(record)
                record.setdefault("entryId", str(self._uuid_generator.generate()))
                if isinstance(record.get("detail"), str):
                    record["detail"] = json.loads(record["detail"] or "{}")
                normalized.append(audit_to_record(audit_from_record(record)))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise RequestValidationError(
                    {f"audit[{index}]": f"Invalid audit record: {exc}"}
                ) from exc
        return normalized

    @staticmethod
    def _public_user(record: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in record.items() if k not in _PRIVATE_USER_FIELDS}

    @staticmethod
    def _require_admin(actor: ActorIdentity, action: str) -> None:
        if not actor.is_admin:
            raise RequestAuthorizationError(actor.user_id, action)
