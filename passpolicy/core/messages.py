"""Presentation helpers: error keys, messages and the rule checklist."""

from __future__ import annotations

from collections.abc import Iterable

from passpolicy.core.constants import MAX_CHARACTER_LENGTH
from passpolicy.core.models import PolicyConfig, ViolationCode

ERROR_KEYS: dict[ViolationCode, str] = {
    ViolationCode.TOO_SHORT: "too_short",
    ViolationCode.TOO_LONG: "too_long",
    ViolationCode.REPEATED_CHARACTERS: "repeated",
    ViolationCode.SEQUENCE_DETECTED: "sequence",
    ViolationCode.COMMON_PASSWORD: "common",
    ViolationCode.MISSING_DIGIT: "no_digits",
    ViolationCode.MISSING_SYMBOL: "no_symbols",
}


def error_key(code: ViolationCode) -> str:
    return ERROR_KEYS[code]


def message_for(code: ViolationCode, config: PolicyConfig) -> str:
    """English sentence for a violation, with the relevant threshold filled in."""
    match code:
        case ViolationCode.TOO_SHORT:
            return f"Must be at least {config.minimum_character_length} characters long."
        case ViolationCode.TOO_LONG:
            return f"Can't exceed {MAX_CHARACTER_LENGTH} characters."
        case ViolationCode.REPEATED_CHARACTERS:
            return (
                f"Can't have the same character more than "
                f"{config.max_repeats} times in a row."
            )
        case ViolationCode.SEQUENCE_DETECTED:
            return (
                f"Can't include a run of more than {config.max_sequence} "
                f"characters from a keyboard row or the alphabet (e.g. abcdef)."
            )
        case ViolationCode.COMMON_PASSWORD:
            return "Can't use a common password (e.g. \"password\")."
        case ViolationCode.MISSING_DIGIT:
            return "Must include a number."
        case ViolationCode.MISSING_SYMBOL:
            return "Must include a symbol (e.g. ! @ # $ %)."
    raise ValueError(f"Unknown violation code: {code!r}")


def field_errors(
    attr: str, codes: Iterable[ViolationCode]
) -> dict[str, list[str]]:
    """Group violation codes under a form field as error keys, in emission order."""
    keys = [error_key(code) for code in codes]
    return {attr: keys} if keys else {}


def describe_policy(config: PolicyConfig) -> list[str]:
    """The rules a candidate must satisfy, in the order they are evaluated."""
    checklist = [
        f"At least {config.minimum_character_length} characters",
        f"No more than {MAX_CHARACTER_LENGTH} characters",
    ]
    if config.max_repeats is not None:
        checklist.append(
            f"No character repeated more than {config.max_repeats} times in a row"
        )
    if config.max_sequence is not None:
        checklist.append(
            f"No sequence of more than {config.max_sequence} characters (e.g. abcd, 1234, qwer)"
        )
    if config.disallow_common_passwords:
        checklist.append("Not a commonly used password")
    if config.require_number_characters:
        checklist.append("At least one number")
    if config.require_symbol_characters:
        checklist.append("At least one symbol")
    return checklist
