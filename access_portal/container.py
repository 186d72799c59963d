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

"""Wiring of repositories, services and use cases."""

import logging
from dataclasses import dataclass
from typing import Optional

from access_portal.config import PortalConfig
from access_portal.core.requests.repositories import Clock, RequestIdGenerator, UUIDGenerator
from access_portal.infra.clock import SystemClock
from access_portal.infra.id_generator import (
    RandomRequestIdGenerator,
    UserIdGenerator,
    UUIDv4Generator,
)
from access_portal.infra.notifications import (
    InProcessChangeNotifier,
    ReloadOnChange,
    RevisionCounter,
)
from access_portal.infra.record_store import InMemoryRecordStore, RecordStore
from access_portal.infra.repositories import (
    StoreAccessRequestRepository,
    StoreAuditEntryRepository,
    StoreUserRepository,
)
from access_portal.orchestrator.common import AuditRecorder
from access_portal.orchestrator.data.use_cases import (
    AuditLogUseCase,
    DataTransferUseCase,
    SampleDataUseCase,
)
from access_portal.orchestrator.requests.use_cases import (
    ApplyChangesUseCase,
    CreateRequestUseCase,
    QueryRequestsUseCase,
)
from access_portal.orchestrator.users.use_cases import SessionUseCase, UserManagementUseCase

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Use cases sharing one record store, notifier and clock."""

    config: PortalConfig
    store: RecordStore
    notifier: InProcessChangeNotifier
    revision: RevisionCounter
    clock: Clock
    create_request: CreateRequestUseCase
    apply_changes: ApplyChangesUseCase
    query_requests: QueryRequestsUseCase
    users: UserManagementUseCase
    sessions: SessionUseCase
    audit_log: AuditLogUseCase
    data_transfer: DataTransferUseCase
    sample_data: SampleDataUseCase


def build_container(
    config: Optional[PortalConfig] = None,
    store: Optional[RecordStore] = None,
    clock: Optional[Clock] = None,
    request_id_generator: Optional[RequestIdGenerator] = None,
    uuid_generator: Optional[UUIDGenerator] = None,
    seed: bool = True,
) -> Container:
    """Build a container, defaulting every collaborator to its production form.

    Args:
        config: Portal configuration; read from the environment when None.
        store: Record store; a fresh in-memory store when None.
        clock: Time source.
        request_id_generator: Request id source.
        uuid_generator: Event and audit id source.
        seed: Seed default users into an empty directory, and sample
            requests into an empty portal when the config asks for them.
    """
    config = config or PortalConfig.from_env()
    store = store if store is not None else InMemoryRecordStore()
    clock = clock or SystemClock()
    request_id_generator = request_id_generator or RandomRequestIdGenerator()
    uuid_generator = uuid_generator or UUIDv4Generator()
    notifier = InProcessChangeNotifier()
    revision = RevisionCounter()
    notifier.subscribe(ReloadOnChange(reload=revision.bump))

    request_repo = StoreAccessRequestRepository(store)
    audit_repo = StoreAuditEntryRepository(store)
    user_repo = StoreUserRepository(store)
    audit = AuditRecorder(audit_repo, uuid_generator, clock)

    users = UserManagementUseCase(
        user_repo, audit, notifier, clock,
        user_id_generator=UserIdGenerator(),
        email_domain=config.email_domain,
    )
    if seed:
        users.seed_default_users(config.seed_users())

    container = Container(
        config=config,
        store=store,
        notifier=notifier,
        revision=revision,
        clock=clock,
        create_request=CreateRequestUseCase(
            request_repo=request_repo,
            audit=audit,
            notifier=notifier,
            request_id_generator=request_id_generator,
            uuid_generator=uuid_generator,
            clock=clock,
            sla_days=config.sla_days,
        ),
        apply_changes=ApplyChangesUseCase(
            request_repo=request_repo,
            user_repo=user_repo,
            audit=audit,
            notifier=notifier,
            uuid_generator=uuid_generator,
            clock=clock,
            sla_days=config.sla_days,
        ),
        query_requests=QueryRequestsUseCase(request_repo, clock, config.sla_days),
        users=users,
        sessions=SessionUseCase(user_repo, audit, notifier),
        audit_log=AuditLogUseCase(audit_repo),
        data_transfer=DataTransferUseCase(store, audit, notifier, uuid_generator, clock),
        sample_data=SampleDataUseCase(
            store, request_repo, user_repo, audit, notifier, uuid_generator, clock,
        ),
    )
    if seed and config.seed_sample_requests:
        container.sample_data.seed_if_empty()
    logger.info("Portal container ready (SLA %d days)", config.sla_days)
    return container
