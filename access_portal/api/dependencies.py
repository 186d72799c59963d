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

"""FastAPI dependencies shared by the route modules.

The container and token handler are module-level so the application
factory can install them and tests can swap them.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from access_portal.container import Container
from access_portal.core.requests.value_objects import ActorIdentity
from access_portal.core.users.exceptions import InactiveUserError, UserNotFoundError

from .auth.jwt_handler import JWTExpiredError, JWTHandler, JWTValidationError, TokenData
from .errors import error_detail

logger = logging.getLogger(__name__)

_container: Optional[Container] = None
_jwt_handler: Optional[JWTHandler] = None

_bearer = HTTPBearer(auto_error=False)


def install(container: Container, jwt_handler: JWTHandler) -> None:
    """Make a container and token handler available to the routes."""
    global _container, _jwt_handler  # pylint: disable=global-statement
    _container = container
    _jwt_handler = jwt_handler


def get_container() -> Container:
    if _container is None:
        raise RuntimeError("Portal container is not installed")
    return _container


def get_jwt_handler() -> JWTHandler:
    if _jwt_handler is None:
        raise RuntimeError("JWT handler is not installed")
    return _jwt_handler


def _unauthorized(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error_detail(code, message),
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_data(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    jwt_handler: JWTHandler = Depends(get_jwt_handler),
) -> TokenData:
    """Validate the bearer token of the current request."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("missing_token", "Authentication required")
    try:
        return jwt_handler.validate_token(credentials.credentials)
    except JWTExpiredError:
        raise _unauthorized("token_expired", "Session has expired") from None
    except JWTValidationError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise _unauthorized("invalid_token", "Invalid session token") from None


def get_current_actor(
    token_data: TokenData = Depends(get_token_data),
    container: Container = Depends(get_container),
) -> ActorIdentity:
    """Resolve the acting user, with capabilities re-read from the directory."""
    try:
        return container.sessions.validate(token_data.as_actor())
    except (UserNotFoundError, InactiveUserError):
        raise _unauthorized("invalid_session", "User is no longer active") from None
