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

"""JWT session token handling.

Tokens carry the actor identity (``sub``, ``name``, ``email``, ``is_iam``,
``is_admin``). Capabilities in the token are advisory: every request
re-reads the user from the directory before acting.
"""

import logging
import os
import secrets
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Set, Tuple

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from access_portal.core.requests.value_objects import ActorIdentity

logger = logging.getLogger(__name__)


class JWTHandlerError(Exception):
    """Base exception for token handling failures."""


class JWTCreationError(JWTHandlerError):
    """Token could not be created."""


class JWTValidationError(JWTHandlerError):
    """Token is malformed or its claims are invalid."""


class JWTExpiredError(JWTValidationError):
    """Token has expired."""


class JWTRevokedError(JWTValidationError):
    """Token was revoked by a logout."""


@dataclass
class JWTConfig:
    """Token signing settings."""

    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    issuer: str = "access-portal-api"
    audience: str = "access-portal-api"

    @classmethod
    def from_env(cls) -> "JWTConfig":
        """Create configuration from environment variables.

        Without JWT_SECRET_KEY an ephemeral secret is generated, so tokens
        do not survive a restart.
        """
        secret_key = os.getenv("JWT_SECRET_KEY")
        if not secret_key:
            logger.warning("JWT_SECRET_KEY not set, using an ephemeral signing key")
            secret_key = secrets.token_urlsafe(32)
        return cls(
            secret_key=secret_key,
            algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(
                os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "60")
            ),
            issuer=os.getenv("JWT_ISSUER", "access-portal-api"),
            audience=os.getenv("JWT_AUDIENCE", "access-portal-api"),
        )


@dataclass(frozen=True)
class TokenData:
    """Validated token contents."""

    user_id: str
    name: str
    email: Optional[str]
    is_iam: bool
    is_admin: bool
    token_id: str

    def as_actor(self) -> ActorIdentity:
        """Return the identity claimed by the token."""
        return ActorIdentity(
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            is_iam=self.is_iam,
            is_admin=self.is_admin,
        )


class JWTHandler:
    """Creates, validates and revokes session tokens."""

    def __init__(self, config: Optional[JWTConfig] = None) -> None:
        self.config = config or JWTConfig.from_env()
        self._revoked: Set[str] = set()
        self._lock = threading.Lock()

    def create_access_token(self, actor: ActorIdentity) -> Tuple[str, int]:
        """Issue a token for an actor.

        Returns:
            Tuple of (token, expires_in seconds).

        Raises:
            JWTCreationError: If signing fails.
        """
        now = datetime.now(timezone.utc)
        expires_in = self.config.access_token_expire_minutes * 60
        claims = {
            "iss": self.config.issuer,
            "aud": self.config.audience,
            "sub": actor.user_id,
            "name": actor.name,
            "email": actor.email,
            "is_iam": actor.is_iam,
            "is_admin": actor.is_admin,
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
            "jti": str(uuid.uuid4()),
        }
        try:
            token = jwt.encode(claims, self.config.secret_key, algorithm=self.config.algorithm)
        except JWTError as exc:
            logger.error("Failed to sign token: %s", exc)
            raise JWTCreationError("Failed to create access token") from exc
        return token, expires_in

    def validate_token(self, token: str) -> TokenData:
        """Decode and verify a token.

        Raises:
            JWTExpiredError: If the token has expired.
            JWTRevokedError: If the token was revoked.
            JWTValidationError: If the signature or claims are invalid.
        """
        try:
            claims = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                audience=self.config.audience,
                issuer=self.config.issuer,
            )
        except ExpiredSignatureError as exc:
            raise JWTExpiredError("Token has expired") from exc
        except JWTClaimsError as exc:
            raise JWTValidationError(f"Invalid token claims: {exc}") from exc
        except JWTError as exc:
            raise JWTValidationError("Invalid token") from exc

        token_id = claims.get("jti")
        if not claims.get("sub") or not token_id:
            raise JWTValidationError("Token is missing required claims")
        with self._lock:
            if token_id in self._revoked:
                raise JWTRevokedError("Token has been revoked")

        return TokenData(
            user_id=claims["sub"],
            name=claims.get("name") or "",
            email=claims.get("email"),
            is_iam=bool(claims.get("is_iam")),
            is_admin=bool(claims.get("is_admin")),
            token_id=token_id,
        )

    def revoke(self, token_id: str) -> None:
        """Reject a token id for the rest of the process lifetime."""
        with self._lock:
            self._revoked.add(token_id)
