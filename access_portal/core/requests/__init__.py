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

"""Access request domain module."""

from .entities import AccessRequest, LifecycleEvent, AuditEntry
from .exceptions import (
    RequestDomainError,
    RequestNotFoundError,
    RequestAlreadyExistsError,
    RequestValidationError,
    RequestAuthorizationError,
    RequestPersistenceError,
    OptimisticLockError,
)
from .repositories import (
    AccessRequestRepository,
    AuditEntryRepository,
    ChangeNotifier,
    Clock,
    RequestIdGenerator,
    UUIDGenerator,
)
from .services import SLA_DAYS, AuditQueryService, RequestQueryService, RequestStats, SlaService
from .value_objects import (
    ActorIdentity,
    ApplicationSystem,
    AuditAction,
    CommentType,
    Environment,
    EventKind,
    RequestId,
    RequestStatus,
    RequestType,
    TargetType,
    Urgency,
)

__all__ = [
    "AccessRequest",
    "LifecycleEvent",
    "AuditEntry",
    "RequestDomainError",
    "RequestNotFoundError",
    "RequestAlreadyExistsError",
    "RequestValidationError",
    "RequestAuthorizationError",
    "RequestPersistenceError",
    "OptimisticLockError",
    "AccessRequestRepository",
    "AuditEntryRepository",
    "ChangeNotifier",
    "Clock",
    "RequestIdGenerator",
    "UUIDGenerator",
    "SLA_DAYS",
    "SlaService",
    "RequestQueryService",
    "RequestStats",
    "AuditQueryService",
    "ActorIdentity",
    "ApplicationSystem",
    "AuditAction",
    "CommentType",
    "Environment",
    "EventKind",
    "RequestId",
    "RequestStatus",
    "RequestType",
    "TargetType",
    "Urgency",
]
