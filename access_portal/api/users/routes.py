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

"""User directory endpoints (admin)."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from access_portal.container import Container
from access_portal.core.requests.value_objects import ActorIdentity
from access_portal.core.users.user import User
from access_portal.orchestrator.users.use_cases import CreateUserCommand, UpdateUserCommand

from ..dependencies import get_container, get_current_actor

router = APIRouter(prefix="/users", tags=["users"])


class CreateUserBody(BaseModel):
    name: str
    email: str
    password: str
    default_department: str = Field("", alias="defaultDepartment")
    is_iam: bool = Field(False, alias="isIam")
    is_admin: bool = Field(False, alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)


class UpdateUserBody(BaseModel):
    name: Optional[str] = None
    default_department: Optional[str] = Field(None, alias="defaultDepartment")
    is_iam: Optional[bool] = Field(None, alias="isIam")
    is_admin: Optional[bool] = Field(None, alias="isAdmin")
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = ConfigDict(populate_by_name=True)


class ResetPasswordBody(BaseModel):
    password: str


class ResetPasswordResponse(BaseModel):
    message: str
    user_id: str = Field(alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class UserSchema(BaseModel):
    user_id: str = Field(alias="userId")
    name: str
    email: str
    default_department: str = Field(alias="defaultDepartment")
    is_iam: bool = Field(alias="isIam")
    is_admin: bool = Field(alias="isAdmin")
    is_active: bool = Field(alias="isActive")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, user: User) -> "UserSchema":
        return cls(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            default_department=user.default_department,
            is_iam=user.is_iam,
            is_admin=user.is_admin,
            is_active=user.is_active,
            created_at=user.created_at.isoformat(),
            updated_at=user.updated_at.isoformat(),
        )


@router.post("", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserBody,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> UserSchema:
    """Add a user to the directory."""
    user = container.users.create_user(actor, CreateUserCommand(
        name=body.name,
        email=body.email,
        default_department=body.default_department,
        is_iam=body.is_iam,
        is_admin=body.is_admin,
        password=body.password,
    ))
    return UserSchema.from_entity(user)


@router.get("", response_model=List[UserSchema])
def list_users(
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> List[UserSchema]:
    return [UserSchema.from_entity(u) for u in container.users.list_users(actor)]


@router.get("/assignees", response_model=List[UserSchema])
def list_assignees(
    _actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> List[UserSchema]:
    """Active IAM members a request can be assigned to."""
    return [UserSchema.from_entity(u) for u in container.users.list_assignees()]


@router.patch("/{user_id}", response_model=UserSchema)
def update_user(
    user_id: str,
    body: UpdateUserBody,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> UserSchema:
    """Edit a user's profile, roles or active flag."""
    user = container.users.update_user(actor, UpdateUserCommand(
        user_id=user_id,
        name=body.name,
        default_department=body.default_department,
        is_iam=body.is_iam,
        is_admin=body.is_admin,
        is_active=body.is_active,
    ))
    return UserSchema.from_entity(user)


@router.post("/{user_id}/password", response_model=ResetPasswordResponse)
def reset_password(
    user_id: str,
    body: ResetPasswordBody,
    actor: ActorIdentity = Depends(get_current_actor),
    container: Container = Depends(get_container),
) -> ResetPasswordResponse:
    """Set a new password for a user (admin only)."""
    user = container.users.reset_password(actor, user_id, body.password)
    return ResetPasswordResponse(message="Password reset successfully", user_id=user.user_id)
