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

"""Domain exceptions for the AccessRequest aggregate."""

from typing import Dict, Optional


class RequestDomainError(Exception):
    """Base exception for all access request domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class RequestNotFoundError(RequestDomainError):
    """Access request does not exist in the system."""

    def __init__(self, request_id: str, correlation_id: Optional[str] = None) -> None:
        """Initialize request not found error.

        Args:
            request_id: The request ID that was not found.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Request not found: {request_id}",
            correlation_id=correlation_id
        )
        self.request_id = request_id


class RequestAlreadyExistsError(RequestDomainError):
    """Access request with the given ID already exists."""

    def __init__(self, request_id: str, correlation_id: Optional[str] = None) -> None:
        """Initialize request already exists error.

        Args:
            request_id: The request ID that already exists.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Request already exists: {request_id}",
            correlation_id=correlation_id
        )
        self.request_id = request_id


class RequestValidationError(RequestDomainError):
    """Submitted request fields failed validation."""

    def __init__(
        self,
        errors: Dict[str, str],
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize validation error.

        Args:
            errors: Mapping of field name to user-facing problem description.
            correlation_id: Optional correlation ID for tracing.
        """
        details = "; ".join(f"{field}: {problem}" for field, problem in errors.items())
        super().__init__(
            f"Invalid request: {details}",
            correlation_id=correlation_id
        )
        self.errors = dict(errors)


class RequestAuthorizationError(RequestDomainError):
    """Actor lacks the capability for the attempted change."""

    def __init__(
        self,
        actor_id: str,
        action: str,
        request_id: Optional[str] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize authorization error.

        Args:
            actor_id: Identifier of the rejected actor.
            action: Attempted action (e.g. change_status, comment).
            request_id: Target request, if any.
            correlation_id: Optional correlation ID for tracing.
        """
        target = f" on {request_id}" if request_id else ""
        super().__init__(
            f"Actor {actor_id} is not allowed to {action}{target}",
            correlation_id=correlation_id
        )
        self.actor_id = actor_id
        self.action = action
        self.request_id = request_id


class RequestPersistenceError(RequestDomainError):
    """The record store failed; the operation was not committed and may be retried."""

    def __init__(
        self,
        operation: str,
        request_id: Optional[str] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize persistence error.

        Args:
            operation: Operation that failed (save or load).
            request_id: Affected request, if known.
            correlation_id: Optional correlation ID for tracing.
        """
        target = f" {request_id}" if request_id else ""
        super().__init__(
            f"Failed to {operation} request{target}",
            correlation_id=correlation_id
        )
        self.operation = operation
        self.request_id = request_id


class OptimisticLockError(RequestDomainError):
    """Version conflict detected during a conditional update."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        expected_version: int,
        actual_version: int,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize optimistic lock error.

        Args:
            entity_type: Type of entity.
            entity_id: Identifier of the entity.
            expected_version: Version expected by the client.
            actual_version: Current version in the system.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Version conflict for {entity_type} {entity_id}: "
            f"expected {expected_version}, found {actual_version}",
            correlation_id=correlation_id
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
