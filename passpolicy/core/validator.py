"""Password policy validator: pure, deterministic rule evaluation."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from passpolicy.core.constants import COMMON_PASSWORDS
from passpolicy.core.models import PolicyConfig, ValidationResult, ViolationCode
from passpolicy.core.rules import RuleSet, password_rules
from passpolicy.errors import InvalidConfig

_NON_NEGATIVE_FIELDS = (
    "minimum_character_length",
    "max_repeats",
    "max_sequence",
    "maximum_login_attempts",
)


def _coerce_config(config: PolicyConfig | Mapping[str, Any]) -> PolicyConfig:
    """Accept a PolicyConfig or a plain mapping; reject anything malformed."""
    if isinstance(config, Mapping):
        try:
            config = PolicyConfig.model_validate(dict(config))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or None
            raise InvalidConfig(first["msg"], field=field) from exc
    if not isinstance(config, PolicyConfig):
        raise InvalidConfig(
            f"expected PolicyConfig or mapping, got {type(config).__name__}"
        )
    # model_construct() skips field validation, so recheck the bounds here
    for name in _NON_NEGATIVE_FIELDS:
        value = getattr(config, name, None)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfig(f"must be an integer, got {value!r}", field=name)
        if value < 0:
            raise InvalidConfig(f"must not be negative, got {value}", field=name)
    return config


class PolicyValidator:
    """Checks candidate passwords against a policy.

    The validator holds no per-call state; a single instance can be shared
    across threads and requests.
    """

    def __init__(
        self,
        rules: RuleSet = password_rules,
        extra_common_passwords: Iterable[str] | None = None,
    ) -> None:
        self.rules = rules
        if extra_common_passwords:
            self.common_passwords = COMMON_PASSWORDS | frozenset(
                p.lower() for p in extra_common_passwords
            )
        else:
            self.common_passwords = COMMON_PASSWORDS

    def validate(
        self, config: PolicyConfig | Mapping[str, Any], candidate: str
    ) -> list[ViolationCode]:
        """Return the violated rules in evaluation order. Empty means the candidate passes."""
        config = _coerce_config(config)
        if not isinstance(candidate, str):
            raise TypeError(
                f"candidate must be a string, got {type(candidate).__name__}"
            )

        violations: list[ViolationCode] = []
        for rule in self.rules:
            if rule.applies(config) and rule.violated(
                config, candidate, self.common_passwords
            ):
                violations.append(rule.code)
        return violations

    def check(
        self, config: PolicyConfig | Mapping[str, Any], candidate: str
    ) -> ValidationResult:
        start = time.monotonic()
        violations = self.validate(config, candidate)
        duration_ms = (time.monotonic() - start) * 1000
        return ValidationResult(
            passed=len(violations) == 0,
            violations=violations,
            duration_ms=duration_ms,
        )


_default_validator = PolicyValidator()


def validate(
    config: PolicyConfig | Mapping[str, Any], candidate: str
) -> list[ViolationCode]:
    """Validate with the built-in rules and common-password list."""
    return _default_validator.validate(config, candidate)
