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

"""FastAPI application for the access portal."""

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI

from access_portal import __version__
from access_portal.api import dependencies
from access_portal.api.auth import routes as auth_routes
from access_portal.api.auth.jwt_handler import JWTHandler
from access_portal.api.data import routes as data_routes
from access_portal.api.errors import register_exception_handlers
from access_portal.api.requests import routes as request_routes
from access_portal.api.users import routes as user_routes
from access_portal.config import PortalConfig
from access_portal.container import Container, build_container
from access_portal.logging_conf import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(
    container: Optional[Container] = None,
    jwt_handler: Optional[JWTHandler] = None,
) -> FastAPI:
    """Build the application and install its collaborators.

    Args:
        container: Prebuilt container; built from the environment when None.
        jwt_handler: Token handler; configured from the environment when None.
    """
    if container is None:
        config = PortalConfig.from_env()
        configure_logging(config.log_level)
        container = build_container(config)
    dependencies.install(container, jwt_handler or JWTHandler())

    app = FastAPI(title="Access Portal", version=__version__)
    api = APIRouter(prefix=API_PREFIX)
    api.include_router(auth_routes.router)
    api.include_router(request_routes.router)
    api.include_router(user_routes.router)
    api.include_router(data_routes.router)
    app.include_router(api)
    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    logger.info("Access portal API %s ready", __version__)
    return app


app = create_app()
