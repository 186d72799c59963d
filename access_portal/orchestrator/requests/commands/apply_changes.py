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

"""ApplyChanges command DTO."""

from dataclasses import dataclass
from typing import Optional

from access_portal.core.requests.value_objects import ActorIdentity


@dataclass(frozen=True)
class ApplyChangesCommand:
    """Command to triage a request and/or comment on it.

    Fields left as None are not proposed and stay untouched.

    Attributes:
        request_id: Target request identifier.
        actor: Authenticated actor.
        status: Proposed status value.
        assignee_id: Proposed assignee (user id of an active IAM member).
        unassign: Clear the current assignee.
        comment: Comment text to append.
        expected_version: When set, the change only applies if the stored
            request still has this version. When None, the last write wins.
        correlation_id: Request correlation identifier for tracing.
    """

    request_id: str
    actor: ActorIdentity
    status: Optional[str] = None
    assignee_id: Optional[str] = None
    unassign: bool = False
    comment: Optional[str] = None
    expected_version: Optional[int] = None
    correlation_id: Optional[str] = None
