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

"""User management use case (admin only)."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from access_portal.core.requests.exceptions import RequestAuthorizationError
from access_portal.core.requests.repositories import ChangeNotifier, Clock
from access_portal.core.requests.value_objects import ActorIdentity, AuditAction, TargetType
from access_portal.core.users.exceptions import (
    InvalidUserError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from access_portal.core.users.repositories import UserRepository
from access_portal.core.users.user import User
from access_portal.infra.id_generator import UserIdGenerator
from access_portal.infra.notifications import data_changed
from access_portal.infra.password_hasher import hash_password

from ...common import AuditRecorder

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_DOMAIN = "@TRIARQHealth.com"
MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class CreateUserCommand:
    """Command to add a user to the directory.

    A None password leaves the account without one; sign-in does not
    check passwords.
    """

    name: str
    email: str
    default_department: str = ""
    is_iam: bool = False
    is_admin: bool = False
    password: Optional[str] = None


@dataclass(frozen=True)
class UpdateUserCommand:
    """Command to edit a user. None leaves a field unchanged; email is immutable."""

    user_id: str
    name: Optional[str] = None
    default_department: Optional[str] = None
    is_iam: Optional[bool] = None
    is_admin: Optional[bool] = None
    is_active: Optional[bool] = None


class UserManagementUseCase:
    """Creates, edits and lists directory users.

    Every mutation is audited and broadcast as a data change. Only admins
    may call the mutating operations.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        audit: AuditRecorder,
        notifier: ChangeNotifier,
        clock: Clock,
        user_id_generator: Optional[UserIdGenerator] = None,
        email_domain: str = DEFAULT_EMAIL_DOMAIN,
    ) -> None:
        self._user_repo = user_repo
        self._audit = audit
        self._notifier = notifier
        self._clock = clock
        self._user_id_generator = user_id_generator or UserIdGenerator()
        self._email_domain = email_domain

    def create_user(self, actor: ActorIdentity, command: CreateUserCommand) -> User:
        """Register a new active user.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            InvalidUserError: If name or email is missing or malformed.
            UserAlreadyExistsError: If the email is already registered.
        """
        self._require_admin(actor, "create users")
        user = self._add(command)
        self._audit.record(
            AuditAction.USER_CREATE, TargetType.USER, user.user_id, True,
            actor=actor, detail={"name": user.name, "email": user.email},
        )
        self._notifier.publish(data_changed())
        return user

    def update_user(self, actor: ActorIdentity, command: UpdateUserCommand) -> User:
        """Edit a user's profile, roles or active flag.

        Deactivation and reactivation are audited as such; any other edit
        is audited as USER_UPDATE.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            UserNotFoundError: If the user does not exist.
            InvalidUserError: If the new name is blank.
        """
        self._require_admin(actor, "update users")
        user = self._user_repo.find_by_id(command.user_id)
        if user is None:
            raise UserNotFoundError(command.user_id)

        was_active = user.is_active
        if command.name is not None:
            name = command.name.strip()
            if not name:
                raise InvalidUserError("name", "Name is required")
            user.name = name
        if command.default_department is not None:
            user.default_department = command.default_department.strip()
        if command.is_iam is not None:
            user.is_iam = command.is_iam
        if command.is_admin is not None:
            user.is_admin = command.is_admin
        if command.is_active is not None:
            user.is_active = command.is_active
        user.updated_at = self._clock.now()
        self._user_repo.save(user)

        if was_active and not user.is_active:
            action, detail = AuditAction.USER_DEACTIVATE, {"name": user.name}
        elif not was_active and user.is_active:
            action, detail = AuditAction.USER_REACTIVATE, {"name": user.name}
        else:
            action, detail = AuditAction.USER_UPDATE, {
                "name": user.name, "isIam": user.is_iam, "isAdmin": user.is_admin,
            }
        self._audit.record(action, TargetType.USER, user.user_id, True,
                           actor=actor, detail=detail)
        self._notifier.publish(data_changed())
        logger.info("User %s updated by %s", user.user_id, actor.user_id)
        return user

    def reset_password(self, actor: ActorIdentity, user_id: str, new_password: str) -> User:
        """Replace a user's password with a fresh Argon2id hash.

        Raises:
            RequestAuthorizationError: If actor is not an admin.
            UserNotFoundError: If the user does not exist.
            InvalidUserError: If the password is too short.
        """
        self._require_admin(actor, "reset passwords")
        user = self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        self._check_password(new_password)

        user.password_hash = hash_password(new_password)
        user.updated_at = self._clock.now()
        self._user_repo.save(user)
        self._audit.record(
            AuditAction.PASSWORD_RESET, TargetType.USER, user.user_id, True,
            actor=actor, detail={"resetBy": actor.name},
        )
        self._notifier.publish(data_changed())
        logger.info("Password of %s reset by %s", user.user_id, actor.user_id)
        return user

    def list_users(self, actor: ActorIdentity) -> List[User]:
        """Return every user sorted by name (admin only)."""
        self._require_admin(actor, "list users")
        return sorted(self._user_repo.find_all(), key=lambda u: u.name.lower())

    def list_assignees(self) -> List[User]:
        """Return active IAM members, the valid request assignees."""
        return sorted(
            (u for u in self._user_repo.find_all() if u.is_assignable()),
            key=lambda u: u.name.lower(),
        )

    def seed_default_users(self, defaults: Iterable[CreateUserCommand]) -> int:
        """Populate an empty directory.

        Returns:
            Number of users created; 0 when the directory already has users.
        """
        if self._user_repo.find_all():
            logger.info("Users already exist, skipping seed")
            return 0
        created = 0
        for command in defaults:
            try:
                self._add(command)
            except (InvalidUserError, UserAlreadyExistsError) as exc:
                logger.error("Failed to seed user %s: %s", command.email, exc.message)
                continue
            created += 1
        self._audit.record(
            AuditAction.USER_CREATE, TargetType.SYSTEM, "SEED", True,
            detail={"message": "Seeded default users", "count": created},
        )
        logger.info("Seeded %d default users", created)
        return created

    def _add(self, command: CreateUserCommand) -> User:
        name = (command.name or "").strip()
        email = self._qualify((command.email or "").strip())
        if not name:
            raise InvalidUserError("name", "Name is required")
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise InvalidUserError("email", "A valid email address is required")
        if command.password is not None:
            self._check_password(command.password)
        if self._user_repo.find_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        now = self._clock.now()
        user = User(
            user_id=self._user_id_generator.generate(),
            name=name,
            email=email,
            default_department=(command.default_department or "").strip(),
            is_iam=command.is_iam,
            is_admin=command.is_admin,
            password_hash=(
                hash_password(command.password) if command.password is not None else None
            ),
            created_at=now,
            updated_at=now,
        )
        self._user_repo.save(user)
        logger.info("Created user %s", user.user_id)
        return user

    def _qualify(self, email: str) -> str:
        """Append the company domain to a bare mailbox name."""
        if email and "@" not in email:
            return f"{email}{self._email_domain}"
        return email

    @staticmethod
    def _check_password(password: Optional[str]) -> None:
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise InvalidUserError(
                "password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

    @staticmethod
    def _require_admin(actor: ActorIdentity, action: str) -> None:
        if not actor.is_admin:
            raise RequestAuthorizationError(actor.user_id, action)
