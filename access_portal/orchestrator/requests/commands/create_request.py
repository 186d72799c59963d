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

"""CreateRequest command DTO."""

from dataclasses import dataclass
from typing import Optional

from access_portal.core.requests.value_objects import ActorIdentity


@dataclass(frozen=True)
class CreateRequestCommand:
    """Command to submit a new access request.

    Immutable command object carrying raw form values. All validation is
    performed in the use case layer.

    Attributes:
        requester: Authenticated submitter; never taken from the form.
        department: Requester's department or team.
        application_or_system: System catalog value, or "Other".
        environment: Target environment value.
        request_type: Kind of access change.
        requested_role_or_permission: Role or permission asked for.
        justification: Business justification.
        urgency: Urgency value.
        application_other_text: System name when application_or_system is "Other".
        correlation_id: Request correlation identifier for tracing.
    """

    requester: ActorIdentity
    department: str
    application_or_system: str
    environment: str
    request_type: str
    requested_role_or_permission: str
    justification: str
    urgency: str
    application_other_text: str = ""
    correlation_id: Optional[str] = None
