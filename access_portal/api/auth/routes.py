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

"""Login and logout endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from access_portal.container import Container
from access_portal.core.requests.value_objects import ActorIdentity
from access_portal.core.users.exceptions import InactiveUserError, UserNotFoundError

from ..dependencies import get_container, get_current_actor, get_jwt_handler, get_token_data
from ..errors import error_detail
from .jwt_handler import JWTCreationError, JWTHandler, TokenData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Login by directory email."""

    email: str = Field(..., min_length=3, max_length=254)


class LoginResponse(BaseModel):
    """Issued session token and the signed-in identity."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user_id: str
    name: str
    email: str
    is_iam: bool
    is_admin: bool


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    container: Container = Depends(get_container),
    jwt_handler: JWTHandler = Depends(get_jwt_handler),
) -> LoginResponse:
    """Sign in an active directory user."""
    try:
        actor = container.sessions.login(body.email)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_detail("invalid_credentials", "User not found"),
        ) from None
    except InactiveUserError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail("account_inactive", "Account is inactive"),
        ) from None

    try:
        token, expires_in = jwt_handler.create_access_token(actor)
    except JWTCreationError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("server_error", "Could not issue a session token"),
        ) from None

    return LoginResponse(
        access_token=token,
        expires_in=expires_in,
        user_id=actor.user_id,
        name=actor.name,
        email=actor.email or "",
        is_iam=actor.is_iam,
        is_admin=actor.is_admin,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token_data: TokenData = Depends(get_token_data),
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
    jwt_handler: JWTHandler = Depends(get_jwt_handler),
) -> None:
    """End the current session and revoke its token."""
    jwt_handler.revoke(token_data.token_id)
    container.sessions.logout(actor)
