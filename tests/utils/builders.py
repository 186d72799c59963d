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

"""Builders for valid test inputs."""

from access_portal.core.requests.value_objects import ActorIdentity
from access_portal.orchestrator.requests.commands import CreateRequestCommand


def make_create_command(requester: ActorIdentity, **overrides) -> CreateRequestCommand:
    """Build a valid CreateRequestCommand, overriding selected fields."""
    values = dict(
        requester=requester,
        department="Finance",
        application_or_system="GitHub",
        environment="Prod",
        request_type="Add",
        requested_role_or_permission="Maintainer on billing-service",
        justification="Owning the billing pipeline from next sprint",
        urgency="Normal",
    )
    values.update(overrides)
    return CreateRequestCommand(**values)


def create_body(**overrides) -> dict:
    """Build a valid JSON body for POST /api/v1/requests."""
    body = {
        "department": "Finance",
        "applicationOrSystem": "GitHub",
        "environment": "Prod",
        "requestType": "Add",
        "requestedRoleOrPermission": "Maintainer on billing-service",
        "justification": "Owning the billing pipeline from next sprint",
        "urgency": "Normal",
    }
    body.update(overrides)
    return body
