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

"""Repository port for the user directory."""

from typing import List, Optional, Protocol

from .user import User


class UserRepository(Protocol):
    """Repository port for User persistence."""

    def save(self, user: User) -> None:
        """Persist a user.

        Args:
            user: User entity to persist.
        """
        ...

    def find_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve a user by identifier."""
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by email address (case-insensitive)."""
        ...

    def find_all(self) -> List[User]:
        """Retrieve every user (may be empty)."""
        ...
