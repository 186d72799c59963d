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

"""Infrastructure layer for identifier generation.

Request ids are random six digit numbers; uniqueness against the store is
checked by the use case, which retries on collision.
"""

import secrets
import string
import time
import uuid

from access_portal.core.requests.exceptions import RequestDomainError
from access_portal.core.requests.repositories import RequestIdGenerator, UUIDGenerator
from access_portal.core.requests.value_objects import RequestId

MAX_REQUEST_NUMBER = 999999
_USER_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class RandomRequestIdGenerator(RequestIdGenerator):
    """Generates ``REQ-NNNNNN`` identifiers from a CSPRNG."""

    def generate(self) -> RequestId:
        """Generate a new RequestId.

        Returns:
            RequestId: A random identifier in range REQ-000001..REQ-999999.

        Raises:
            RequestDomainError: If RequestId generation fails.
        """
        try:
            return RequestId.from_number(secrets.randbelow(MAX_REQUEST_NUMBER) + 1)
        except ValueError:
            raise
        except Exception as exc:
            raise RequestDomainError(f"Failed to generate RequestId: {exc}") from exc


class UserIdGenerator:
    """Generates ``USR-<millis>-<suffix>`` user identifiers."""

    def generate(self) -> str:
        """Generate a new user id."""
        millis = int(time.time() * 1000)
        suffix = "".join(secrets.choice(_USER_SUFFIX_ALPHABET) for _ in range(9))
        return f"USR-{millis}-{suffix}"


class UUIDv4Generator(UUIDGenerator):
    """UUID v4 generator for event and audit entry identifiers."""

    def generate(self) -> uuid.UUID:
        """Generate a new UUID v4.

        Returns:
            uuid.UUID: A new UUID v4 object.
        """
        return uuid.uuid4()
