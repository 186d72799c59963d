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

"""User directory entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..requests.value_objects import ActorIdentity


@dataclass
class User:
    """Portal user.

    Attributes:
        user_id: Directory identifier (``USR-`` prefix).
        name: Display name.
        email: Unique email address.
        default_department: Department pre-filled on new requests.
        is_iam: Member of the IAM team.
        is_admin: May manage users and read the audit log.
        is_active: Inactive users cannot sign in or be assigned.
        password_hash: Argon2id hash of the account password, if one is set.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    user_id: str
    name: str
    email: str
    default_department: str = ""
    is_iam: bool = False
    is_admin: bool = False
    is_active: bool = True
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
        if self.updated_at is None:
            self.updated_at = self.created_at

    def as_actor(self) -> ActorIdentity:
        """Return the identity this user acts with."""
        return ActorIdentity(
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            is_iam=self.is_iam,
            is_admin=self.is_admin,
        )

    def is_assignable(self) -> bool:
        """Only active IAM members can own requests."""
        return self.is_active and self.is_iam
