"""Process settings, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from passpolicy.core.models import PolicyConfig
from passpolicy.core.settings import (
    load_common_passwords,
    load_policy,
    load_policy_file,
    value_to_boolean,
)
from passpolicy.core.validator import PolicyValidator
from passpolicy.errors import InvalidConfig


def _port(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise InvalidConfig(f"not a port number: {value!r}", field="PASSPOLICY_PORT") from exc


@dataclass(frozen=True)
class Settings:
    policy_file: str | None = None
    common_passwords_file: str | None = None
    log_level: str = "INFO"
    log_json: bool = True
    host: str = "127.0.0.1"
    port: int = 8765

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            policy_file=os.environ.get("PASSPOLICY_POLICY_FILE") or None,
            common_passwords_file=os.environ.get("PASSPOLICY_COMMON_PASSWORDS_FILE") or None,
            log_level=os.environ.get("PASSPOLICY_LOG_LEVEL", "INFO"),
            log_json=value_to_boolean(
                os.environ.get("PASSPOLICY_LOG_JSON", "1"), field="PASSPOLICY_LOG_JSON"
            ),
            host=os.environ.get("PASSPOLICY_HOST", "127.0.0.1"),
            port=_port(os.environ.get("PASSPOLICY_PORT", "8765")),
        )

    def load_policy(self) -> PolicyConfig:
        if self.policy_file:
            return load_policy_file(self.policy_file)
        return load_policy({})

    def build_validator(self) -> PolicyValidator:
        extra = (
            load_common_passwords(self.common_passwords_file)
            if self.common_passwords_file
            else None
        )
        return PolicyValidator(extra_common_passwords=extra)
