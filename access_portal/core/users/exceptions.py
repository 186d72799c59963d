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

"""Domain exceptions for the user directory."""

from typing import Optional


class UserDomainError(Exception):
    """Base exception for user directory errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class UserNotFoundError(UserDomainError):
    """User does not exist in the directory."""

    def __init__(self, user_ref: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(f"User not found: {user_ref}", correlation_id=correlation_id)
        self.user_ref = user_ref


class UserAlreadyExistsError(UserDomainError):
    """A user with the given email is already registered."""

    def __init__(self, email: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(f"User already exists: {email}", correlation_id=correlation_id)
        self.email = email


class InactiveUserError(UserDomainError):
    """User account is deactivated."""

    def __init__(self, user_id: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(f"Account is deactivated: {user_id}", correlation_id=correlation_id)
        self.user_id = user_id


class InvalidUserError(UserDomainError):
    """Submitted user fields failed validation."""

    def __init__(self, field: str, problem: str, correlation_id: Optional[str] = None) -> None:
        super().__init__(f"Invalid user {field}: {problem}", correlation_id=correlation_id)
        self.field = field
        self.problem = problem
