"""Turn loosely typed stored settings into a PolicyConfig."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from passpolicy.core.constants import (
    DEFAULT_CHARACTER_LENGTH,
    DEFAULT_LOGIN_ATTEMPTS,
    MAX_CHARACTER_LENGTH,
    MAX_LOGIN_ATTEMPTS,
    MIN_CHARACTER_LENGTH,
    MIN_LOGIN_ATTEMPTS,
)
from passpolicy.core.models import PolicyConfig
from passpolicy.errors import InvalidConfig


logger = logging.getLogger(__name__)

TRUE_VALUES = {"yes", "y", "true", "t", "on", "1"}
FALSE_VALUES = {"no", "n", "false", "f", "off", "0", ""}

BOOLEAN_FIELDS = (
    "disallow_common_passwords",
    "require_number_characters",
    "require_symbol_characters",
    "allow_login_suspension",
)
OPTIONAL_INT_FIELDS = ("max_repeats", "max_sequence")


def default_policy() -> dict[str, int]:
    return {
        "minimum_character_length": DEFAULT_CHARACTER_LENGTH,
        "maximum_login_attempts": DEFAULT_LOGIN_ATTEMPTS,
    }


def value_to_boolean(value: Any, field: str | None = None) -> bool:
    """Coerce a stored setting (bool, int, string or None) to a bool."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
    elif isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise InvalidConfig(f"not a boolean value: {value!r}", field=field)


def _to_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidConfig(f"not an integer value: {value!r}", field=field)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidConfig(f"not an integer value: {value!r}", field=field)


def _optional_threshold(value: Any, field: str) -> int | None:
    # Unchecked boxes in the settings form arrive as null, "" or false
    if value is None or value is False or value == "":
        return None
    number = _to_int(value, field)
    if number < 0:
        raise InvalidConfig(f"must not be negative, got {number}", field=field)
    return number


def _clamped(value: Any, field: str, default: int, low: int, high: int) -> int:
    if value is None or value == "":
        return default
    number = _to_int(value, field)
    clamped = min(max(number, low), high)
    if clamped != number:
        logger.warning(
            "clamped policy setting",
            extra={"field": field, "value": number, "clamped_to": clamped},
        )
    return clamped


def load_policy(raw: Mapping[str, Any] | None) -> PolicyConfig:
    """Build a PolicyConfig from stored settings.

    Missing keys fall back to the defaults, unknown keys are ignored.
    Raises InvalidConfig on values that cannot be coerced.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise InvalidConfig(f"policy settings must be a mapping, got {type(raw).__name__}")

    settings: dict[str, Any] = {
        "minimum_character_length": _clamped(
            raw.get("minimum_character_length"),
            "minimum_character_length",
            DEFAULT_CHARACTER_LENGTH,
            MIN_CHARACTER_LENGTH,
            MAX_CHARACTER_LENGTH,
        ),
        "maximum_login_attempts": _clamped(
            raw.get("maximum_login_attempts"),
            "maximum_login_attempts",
            DEFAULT_LOGIN_ATTEMPTS,
            MIN_LOGIN_ATTEMPTS,
            MAX_LOGIN_ATTEMPTS,
        ),
    }
    for name in OPTIONAL_INT_FIELDS:
        settings[name] = _optional_threshold(raw.get(name), name)
    for name in BOOLEAN_FIELDS:
        settings[name] = value_to_boolean(raw.get(name), field=name)

    return PolicyConfig(**settings)


def load_policy_file(path: str | Path) -> PolicyConfig:
    """Load a policy from a JSON object on disk."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfig(f"{path} is not valid JSON: {exc.msg}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfig(f"cannot read policy file {path}: {exc}") from exc
    return load_policy(raw)


def load_common_passwords(path: str | Path) -> frozenset[str]:
    """Read an extra common-password list: one per line, ``#`` starts a comment."""
    passwords: set[str] = set()
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                entry = line.strip()
                if not entry or entry.startswith("#"):
                    continue
                passwords.add(entry.lower())
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfig(f"cannot read common-password list {path}: {exc}") from exc
    return frozenset(passwords)
