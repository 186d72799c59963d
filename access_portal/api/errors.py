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

"""Mapping of domain errors to HTTP responses.

Error bodies have the shape ``{"detail": {"error": code, "message": text}}``;
validation failures add a ``fields`` mapping.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from access_portal.core.requests.exceptions import (
    OptimisticLockError,
    RequestAlreadyExistsError,
    RequestAuthorizationError,
    RequestDomainError,
    RequestNotFoundError,
    RequestPersistenceError,
    RequestValidationError,
)
from access_portal.core.users.exceptions import (
    InactiveUserError,
    InvalidUserError,
    UserAlreadyExistsError,
    UserDomainError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (RequestValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error"),
    (InvalidUserError, status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error"),
    (RequestAuthorizationError, status.HTTP_403_FORBIDDEN, "forbidden"),
    (InactiveUserError, status.HTTP_403_FORBIDDEN, "account_inactive"),
    (RequestNotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (UserNotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (RequestAlreadyExistsError, status.HTTP_409_CONFLICT, "conflict"),
    (UserAlreadyExistsError, status.HTTP_409_CONFLICT, "conflict"),
    (OptimisticLockError, status.HTTP_409_CONFLICT, "version_conflict"),
    (RequestPersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE, "storage_unavailable"),
)


def error_detail(code: str, message: str, fields: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Build the ``detail`` payload of an error response."""
    detail: Dict[str, Any] = {"error": code, "message": message}
    if fields:
        detail["fields"] = fields
    return detail


def domain_error_response(exc: Exception) -> JSONResponse:
    """Translate a domain exception into a JSON error response."""
    for error_type, status_code, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code, code = status.HTTP_400_BAD_REQUEST, "bad_request"

    fields = getattr(exc, "errors", None)
    if isinstance(exc, InvalidUserError):
        fields = {exc.field: exc.problem}
    message = getattr(exc, "message", str(exc))
    if status_code >= 500:
        logger.error("Request failed: %s", message)
    else:
        logger.info("Request rejected (%s): %s", code, message)
    return JSONResponse(status_code=status_code, content={"detail": error_detail(code, message, fields)})


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for the request and user domain exception trees."""

    async def _handle(_request: Request, exc: Exception) -> JSONResponse:
        return domain_error_response(exc)

    app.add_exception_handler(RequestDomainError, _handle)
    app.add_exception_handler(UserDomainError, _handle)
