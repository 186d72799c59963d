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

"""Fixtures for HTTP-level tests of the portal API."""

import pytest
from fastapi.testclient import TestClient

from access_portal.api.auth.jwt_handler import JWTConfig, JWTHandler
from access_portal.main import create_app

JWT_SECRET = "test-secret-key-for-api-tests"


@pytest.fixture
def jwt_handler():
    return JWTHandler(JWTConfig(secret_key=JWT_SECRET))


@pytest.fixture
def client(portal, jwt_handler):
    """TestClient over the shared fakes with the standard directory."""
    return TestClient(create_app(container=portal, jwt_handler=jwt_handler))


@pytest.fixture
def login(client):
    """Return a function that signs in by email and yields auth headers."""

    def _login(email):
        response = client.post("/api/v1/auth/login", json={"email": email})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def employee_headers(login):
    return login("alice.johnson@TRIARQHealth.com")


@pytest.fixture
def other_employee_headers(login):
    return login("bob.smith@TRIARQHealth.com")


@pytest.fixture
def iam_headers(login):
    return login("pintal@TRIARQHealth.com")


@pytest.fixture
def admin_headers(login):
    return login("jon@TRIARQHealth.com")
