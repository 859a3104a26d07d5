"""Rule table: the ordered password rules the validator walks."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby
from typing import AbstractSet, Callable

from passpolicy.core.constants import DIGITS, MAX_CHARACTER_LENGTH, SEQUENCES, SYMBOLS
from passpolicy.core.models import PolicyConfig, ViolationCode


@dataclass(frozen=True)
class PasswordRule:
    """A single password rule."""

    code: ViolationCode
    description: str
    applies: Callable[[PolicyConfig], bool]
    violated: Callable[[PolicyConfig, str, AbstractSet[str]], bool]


@dataclass(frozen=True)
class RuleSet:
    """Ordered collection of rules. Order is the emission order."""

    name: str
    rules: tuple[PasswordRule, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def has_repeated_run(candidate: str, max_repeats: int) -> bool:
    """True if any character repeats consecutively more than ``max_repeats`` times."""
    return any(
        sum(1 for _ in run) > max_repeats for _, run in groupby(candidate)
    )


def has_sequence_run(candidate: str, max_sequence: int) -> bool:
    """True if any window of ``max_sequence + 1`` characters lies inside a known sequence."""
    width = max_sequence + 1
    for start in range(len(candidate) - max_sequence):
        window = candidate[start : start + width]
        if any(window in sequence for sequence in SEQUENCES):
            return True
    return False


def _too_short(config: PolicyConfig, candidate: str, _common: AbstractSet[str]) -> bool:
    return len(candidate) < config.minimum_character_length


def _too_long(config: PolicyConfig, candidate: str, _common: AbstractSet[str]) -> bool:
    return len(candidate) > MAX_CHARACTER_LENGTH


def _repeated(config: PolicyConfig, candidate: str, _common: AbstractSet[str]) -> bool:
    return has_repeated_run(candidate, config.max_repeats)


def _sequence(config: PolicyConfig, candidate: str, _common: AbstractSet[str]) -> bool:
    return has_sequence_run(candidate, config.max_sequence)


def _is_common(config: PolicyConfig, candidate: str, common: AbstractSet[str]) -> bool:
    return candidate.lower() in common


def _no_digits(config: PolicyConfig, candidate: str, _common: AbstractSet[str]) -> bool:
    return not any(ch in DIGITS for ch in candidate)


def _no_symbols(config: PolicyConfig, candidate: str, _common: AbstractSet[str]) -> bool:
    return not any(ch in SYMBOLS for ch in candidate)


password_rules = RuleSet(
    name="password",
    rules=(
        PasswordRule(
            code=ViolationCode.TOO_SHORT,
            description="Candidate must reach the configured minimum length",
            applies=lambda c: True,
            violated=_too_short,
        ),
        PasswordRule(
            code=ViolationCode.TOO_LONG,
            description="Candidate must not exceed the fixed maximum length",
            applies=lambda c: True,
            violated=_too_long,
        ),
        PasswordRule(
            code=ViolationCode.REPEATED_CHARACTERS,
            description="No character may repeat consecutively more than max_repeats times",
            applies=lambda c: c.max_repeats is not None,
            violated=_repeated,
        ),
        PasswordRule(
            code=ViolationCode.SEQUENCE_DETECTED,
            description="No run longer than max_sequence from a keyboard or alphabet sequence",
            applies=lambda c: c.max_sequence is not None,
            violated=_sequence,
        ),
        PasswordRule(
            code=ViolationCode.COMMON_PASSWORD,
            description="Candidate must not be a commonly used password",
            applies=lambda c: c.disallow_common_passwords,
            violated=_is_common,
        ),
        PasswordRule(
            code=ViolationCode.MISSING_DIGIT,
            description="Candidate must contain a digit",
            applies=lambda c: c.require_number_characters,
            violated=_no_digits,
        ),
        PasswordRule(
            code=ViolationCode.MISSING_SYMBOL,
            description="Candidate must contain a symbol",
            applies=lambda c: c.require_symbol_characters,
            violated=_no_symbols,
        ),
    ),
)
