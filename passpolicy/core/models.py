"""Pydantic models for passpolicy."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from passpolicy.core.constants import (
    DEFAULT_CHARACTER_LENGTH,
    DEFAULT_LOGIN_ATTEMPTS,
    MAX_CHARACTER_LENGTH,
)


class ViolationCode(str, Enum):
    """A single rule a candidate password failed."""

    TOO_SHORT = "TooShort"
    TOO_LONG = "TooLong"
    REPEATED_CHARACTERS = "RepeatedCharacters"
    SEQUENCE_DETECTED = "SequenceDetected"
    COMMON_PASSWORD = "CommonPassword"
    MISSING_DIGIT = "MissingDigit"
    MISSING_SYMBOL = "MissingSymbol"


class PolicyConfig(BaseModel):
    """Password policy for an account.

    ``max_repeats`` and ``max_sequence`` disable their rule when None.
    ``maximum_login_attempts`` and ``allow_login_suspension`` govern lockout
    elsewhere and are carried here because they live in the same record.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    minimum_character_length: int = Field(default=DEFAULT_CHARACTER_LENGTH, ge=0)
    max_repeats: int | None = Field(default=None, ge=0)
    max_sequence: int | None = Field(default=None, ge=0)
    disallow_common_passwords: bool = False
    require_number_characters: bool = False
    require_symbol_characters: bool = False
    maximum_login_attempts: int = Field(default=DEFAULT_LOGIN_ATTEMPTS, ge=0)
    allow_login_suspension: bool = False

    @property
    def maximum_character_length(self) -> int:
        return MAX_CHARACTER_LENGTH


class ValidationResult(BaseModel):
    """Result of checking one candidate against a policy."""

    passed: bool
    violations: list[ViolationCode] = Field(default_factory=list)
    duration_ms: float = 0.0
