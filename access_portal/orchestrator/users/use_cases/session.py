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

"""Sign-in and sign-out use case.

Authentication mechanics are delegated to the identity provider; this use
case only checks that the account exists and is active, and audits the
outcome.
"""

import logging

from access_portal.core.requests.repositories import ChangeNotifier
from access_portal.core.requests.value_objects import ActorIdentity, AuditAction, TargetType
from access_portal.core.users.exceptions import InactiveUserError, UserNotFoundError
from access_portal.core.users.repositories import UserRepository
from access_portal.infra.notifications import logout

from ...common import AuditRecorder

logger = logging.getLogger(__name__)


class SessionUseCase:
    """Opens and closes portal sessions."""

    def __init__(
        self,
        user_repo: UserRepository,
        audit: AuditRecorder,
        notifier: ChangeNotifier,
    ) -> None:
        self._user_repo = user_repo
        self._audit = audit
        self._notifier = notifier

    def login(self, email: str) -> ActorIdentity:
        """Resolve an email to the actor identity of an active user.

        Raises:
            UserNotFoundError: If no user has this email.
            InactiveUserError: If the account is deactivated.
        """
        user = self._user_repo.find_by_email(email)
        if user is None:
            self._audit.record(
                AuditAction.LOGIN_FAILURE, TargetType.USER, email, False,
                detail={"reason": "User not found"},
            )
            logger.warning("Login attempted for unknown user")
            raise UserNotFoundError(email)
        if not user.is_active:
            self._audit.record(
                AuditAction.LOGIN_FAILURE, TargetType.USER, user.user_id, False,
                detail={"reason": "Account inactive"},
            )
            logger.warning("Login attempted for inactive user %s", user.user_id)
            raise InactiveUserError(user.user_id)

        actor = user.as_actor()
        self._audit.record(
            AuditAction.LOGIN_SUCCESS, TargetType.USER, user.user_id, True, actor=actor,
        )
        logger.info("User %s signed in", user.user_id)
        return actor

    def validate(self, actor: ActorIdentity) -> ActorIdentity:
        """Refresh a session identity from the directory.

        Raises:
            UserNotFoundError: If the user no longer exists.
            InactiveUserError: If the account was deactivated.
        """
        user = self._user_repo.find_by_id(actor.user_id)
        if user is None:
            raise UserNotFoundError(actor.user_id)
        if not user.is_active:
            raise InactiveUserError(user.user_id)
        return user.as_actor()

    def logout(self, actor: ActorIdentity) -> None:
        """Audit the sign-out and tell other sessions of this user to drop."""
        self._audit.record(
            AuditAction.LOGOUT, TargetType.USER, actor.user_id, True, actor=actor,
        )
        self._notifier.publish(logout())
        logger.info("User %s signed out", actor.user_id)
