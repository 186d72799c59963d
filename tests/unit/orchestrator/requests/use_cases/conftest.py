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

"""Fixtures wiring the request use cases over fakes."""

import pytest

from access_portal.orchestrator.requests.use_cases import (
    ApplyChangesUseCase,
    CreateRequestUseCase,
    QueryRequestsUseCase,
)
from tests.utils.builders import make_create_command


@pytest.fixture
def create_use_case(request_repo, audit, notifier, request_id_generator, uuid_generator, clock):
    return CreateRequestUseCase(
        request_repo=request_repo,
        audit=audit,
        notifier=notifier,
        request_id_generator=request_id_generator,
        uuid_generator=uuid_generator,
        clock=clock,
    )


@pytest.fixture
def apply_use_case(request_repo, user_repo, audit, notifier, uuid_generator, clock):
    return ApplyChangesUseCase(
        request_repo=request_repo,
        user_repo=user_repo,
        audit=audit,
        notifier=notifier,
        uuid_generator=uuid_generator,
        clock=clock,
    )


@pytest.fixture
def query_use_case(request_repo, clock):
    return QueryRequestsUseCase(request_repo, clock)


@pytest.fixture
def submitted(create_use_case, employee_actor, notifier, audit_repo):
    """A request submitted by the employee; notifications reset afterwards."""
    response = create_use_case.execute(make_create_command(employee_actor))
    notifier.messages.clear()
    return response
