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

"""Value objects for the access request domain.

All value objects are immutable and defined by their values, not identity.
Enum values are the wire vocabulary shared with the record store and must
not be renamed.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional


@dataclass(frozen=True)
class RequestId:
    """Human-readable access request identifier.

    Attributes:
        value: Identifier in ``REQ-NNNNNN`` form.

    Raises:
        ValueError: If value does not match the request id pattern.
    """

    value: str

    PATTERN: ClassVar[str] = r'^REQ-\d{6}$'
    PREFIX: ClassVar[str] = "REQ-"

    def __post_init__(self) -> None:
        """Validate request id format."""
        if not re.match(self.PATTERN, self.value):
            raise ValueError(
                f"Invalid request id: {self.value}. Expected format REQ-NNNNNN"
            )

    @classmethod
    def from_number(cls, number: int) -> "RequestId":
        """Build a RequestId from its numeric part (1-999999)."""
        if number < 1 or number > 999999:
            raise ValueError(f"Request number out of range: {number}")
        return cls(f"{cls.PREFIX}{number:06d}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ActorIdentity:
    """Identity of the user performing an operation.

    Supplied by the authenticated session, never by request payloads.

    Attributes:
        user_id: Directory identifier of the actor.
        name: Display name.
        email: Email address.
        is_iam: Actor belongs to the IAM team.
        is_admin: Actor may manage users and view the audit log.
    """

    user_id: str
    name: str
    email: Optional[str] = None
    is_iam: bool = False
    is_admin: bool = False

    MAX_LENGTH: ClassVar[int] = 128

    def __post_init__(self) -> None:
        """Validate actor id is present and within length limit."""
        if not self.user_id or not self.user_id.strip():
            raise ValueError("Actor user id cannot be empty")
        if len(self.user_id) > self.MAX_LENGTH:
            raise ValueError(
                f"Actor user id length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.user_id)}"
            )

    @property
    def is_privileged(self) -> bool:
        """True for IAM or Admin actors."""
        return self.is_iam or self.is_admin


class RequestStatus(str, Enum):
    """Access request lifecycle states.

    No transition graph is enforced: a privileged actor may move a request
    from any state to any other. COMPLETED and DECLINED are terminal only
    for SLA purposes.
    """

    NEW = "New"
    IN_REVIEW = "In Review"
    NEED_INFO = "Need Info"
    DECLINED = "Declined"
    COMPLETED = "Completed"

    def is_terminal(self) -> bool:
        """Check if state closes the request for SLA tracking.

        Returns:
            True if state is COMPLETED or DECLINED.
        """
        return self in {RequestStatus.COMPLETED, RequestStatus.DECLINED}


class Urgency(str, Enum):
    """Requester-declared urgency."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


class Environment(str, Enum):
    """Target environment of the requested access."""

    PROD = "Prod"
    NON_PROD = "Non-Prod"
    BOTH = "Both"


class RequestType(str, Enum):
    """Kind of access change requested."""

    ADD = "Add"
    REMOVE = "Remove"
    CHANGE_ROLE = "Change Role"
    OTHER = "Other"


class ApplicationSystem(str, Enum):
    """Catalog of systems access can be requested for.

    OTHER is a sentinel: the actual system name is carried as free text.
    """

    OKTA_SSO = "Okta / SSO"
    MICROSOFT_365 = "Microsoft 365 / Exchange"
    AZURE_AD = "Azure AD"
    VPN = "VPN"
    EMR = "EMR"
    DATA_WAREHOUSE = "Data Warehouse / BI"
    GITHUB = "GitHub"
    JIRA = "Jira"
    SHAREPOINT = "Shared Drive / SharePoint"
    AWS_CONSOLE = "AWS Console"
    OTHER = "Other"


class EventKind(str, Enum):
    """Kinds of entries in a request's history."""

    CREATED = "Created"
    STATUS_CHANGED = "StatusChanged"
    ASSIGNED = "Assigned"
    COMMENT_ADDED = "CommentAdded"


class CommentType(str, Enum):
    """Audience tag of a comment, derived from the author's capability."""

    IAM = "IAM"
    EMPLOYEE = "Employee"

    @classmethod
    def for_actor(cls, actor: ActorIdentity) -> "CommentType":
        """Return IAM for privileged actors, EMPLOYEE otherwise."""
        return cls.IAM if actor.is_privileged else cls.EMPLOYEE


class AuditAction(str, Enum):
    """Security audit action types."""

    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILURE = "LOGIN_FAILURE"
    LOGOUT = "LOGOUT"
    USER_CREATE = "USER_CREATE"
    USER_UPDATE = "USER_UPDATE"
    USER_DEACTIVATE = "USER_DEACTIVATE"
    USER_REACTIVATE = "USER_REACTIVATE"
    PASSWORD_RESET = "PASSWORD_RESET"
    REQUEST_CREATE = "REQUEST_CREATE"
    REQUEST_STATUS_CHANGE = "REQUEST_STATUS_CHANGE"
    REQUEST_ASSIGN = "REQUEST_ASSIGN"
    COMMENT_ADD = "COMMENT_ADD"
    DATA_IMPORT = "DATA_IMPORT"
    DATA_EXPORT = "DATA_EXPORT"


class TargetType(str, Enum):
    """Kinds of audit targets."""

    REQUEST = "REQUEST"
    USER = "USER"
    SYSTEM = "SYSTEM"
