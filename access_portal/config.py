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

"""Environment-driven portal configuration."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

from access_portal.core.requests.services import SLA_DAYS
from access_portal.orchestrator.users.use_cases import CreateUserCommand
from access_portal.orchestrator.users.use_cases.manage_users import DEFAULT_EMAIL_DOMAIN

logger = logging.getLogger(__name__)

DEFAULT_SEED_USERS = (
    {"name": "Jon", "email": "jon@TRIARQHealth.com", "is_iam": True, "is_admin": True},
    {"name": "Pintal", "email": "pintal@TRIARQHealth.com", "is_iam": True},
    {"name": "Ami", "email": "ami@TRIARQHealth.com", "is_iam": True},
    {"name": "Alice Johnson", "email": "alice.johnson@TRIARQHealth.com"},
    {"name": "Bob Smith", "email": "bob.smith@TRIARQHealth.com"},
)


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class PortalConfig:
    """Portal runtime settings.

    Attributes:
        log_level: Root logging level name.
        sla_days: Days after which an open request is over SLA.
        email_domain: Domain appended to bare mailbox names.
        seed_file: Optional YAML file listing the default users.
        seed_sample_requests: Load demo requests into an empty portal at startup.
    """

    log_level: str = "INFO"
    sla_days: int = SLA_DAYS
    email_domain: str = DEFAULT_EMAIL_DOMAIN
    seed_file: Optional[str] = None
    seed_sample_requests: bool = False

    @classmethod
    def from_env(cls) -> "PortalConfig":
        """Create configuration from environment variables.

        Raises:
            ConfigError: If PORTAL_SLA_DAYS is not a positive integer.
        """
        raw_sla = os.getenv("PORTAL_SLA_DAYS", str(SLA_DAYS))
        try:
            sla_days = int(raw_sla)
        except ValueError:
            raise ConfigError(f"PORTAL_SLA_DAYS must be an integer, got {raw_sla!r}") from None
        if sla_days < 1:
            raise ConfigError(f"PORTAL_SLA_DAYS must be positive, got {sla_days}")

        return cls(
            log_level=os.getenv("PORTAL_LOG_LEVEL", "INFO").upper(),
            sla_days=sla_days,
            email_domain=os.getenv("PORTAL_EMAIL_DOMAIN", DEFAULT_EMAIL_DOMAIN),
            seed_file=os.getenv("PORTAL_SEED_FILE") or None,
            seed_sample_requests=_env_flag("PORTAL_SEED_SAMPLE_REQUESTS"),
        )

    def seed_users(self) -> List[CreateUserCommand]:
        """Return the default users, from seed_file when configured."""
        if not self.seed_file:
            return [CreateUserCommand(**entry) for entry in DEFAULT_SEED_USERS]
        return load_seed_users(self.seed_file)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_seed_users(path: str) -> List[CreateUserCommand]:
    """Load default users from a YAML file.

    The file holds a top-level ``users`` list of mappings with ``name``,
    ``email`` and optional ``default_department``, ``is_iam``, ``is_admin``
    and ``password``.

    Raises:
        ConfigError: If the file is missing or malformed.
    """
    seed_path = Path(path)
    try:
        with seed_path.open("r", encoding="utf-8") as seed_file:
            content = yaml.safe_load(seed_file) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read seed file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in seed file {path}: {exc}") from exc

    entries = content.get("users") if isinstance(content, dict) else None
    if not isinstance(entries, list):
        raise ConfigError(f"Seed file {path} must contain a 'users' list")

    users = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry or "email" not in entry:
            raise ConfigError(f"Seed user entries need name and email: {entry!r}")
        users.append(CreateUserCommand(
            name=str(entry["name"]),
            email=str(entry["email"]),
            default_department=str(entry.get("default_department") or ""),
            is_iam=bool(entry.get("is_iam", False)),
            is_admin=bool(entry.get("is_admin", False)),
            password=str(entry["password"]) if entry.get("password") else None,
        ))
    logger.info("Loaded %d seed users from %s", len(users), path)
    return users
