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

"""Unit tests for password_hasher module."""

import pytest

from access_portal.infra.password_hasher import hash_password, verify_password

PASSWORD = "Welcome-2026!"


@pytest.mark.unit
class TestPasswordHashing:
    """Tests for Argon2id hashing."""

    def test_hash_is_argon2id(self):
        hashed = hash_password(PASSWORD)

        assert hashed.startswith("$argon2id$")
        assert PASSWORD not in hashed

    def test_same_password_gets_fresh_salt(self):
        assert hash_password(PASSWORD) != hash_password(PASSWORD)

    def test_verify_round_trip(self):
        hashed = hash_password(PASSWORD)

        assert verify_password(PASSWORD, hashed) is True
        assert verify_password("welcome-2026!", hashed) is False

    @pytest.mark.parametrize("stored", ["[REDACTED]", "", "$argon2id$broken"])
    def test_unreadable_hash_never_matches(self, stored):
        """Redacted or corrupt hashes reject every password."""
        assert verify_password(PASSWORD, stored) is False
