"""Policy limits, defaults and the static lookup tables."""

from __future__ import annotations

MIN_CHARACTER_LENGTH = 3
MAX_CHARACTER_LENGTH = 255
MIN_LOGIN_ATTEMPTS = 3
MAX_LOGIN_ATTEMPTS = 20

DEFAULT_CHARACTER_LENGTH = 8
DEFAULT_LOGIN_ATTEMPTS = 10

# Keyboard rows and the alphabet, forwards and backwards
_BASE_SEQUENCES = (
    "abcdefghijklmnopqrstuvwxyz",
    "`1234567890-=",
    "qwertyuiop[]\\",
    "asdfghjkl;'",
    "zxcvbnm,./",
)
SEQUENCES: tuple[str, ...] = _BASE_SEQUENCES + tuple(s[::-1] for s in _BASE_SEQUENCES)

# Fixed ASCII allowlist; backtick and tilde are deliberately absent
SYMBOLS = frozenset("!@#$%^&*()_+-=[]{}|;:'\"<>,.?/")

DIGITS = frozenset("0123456789")

# per https://en.wikipedia.org/wiki/Wikipedia:10,000_most_common_passwords
# Licensed under CC BY-SA 3.0: https://creativecommons.org/licenses/by-sa/3.0/legalcode
# Top 100 common passwords as at May 2023, excluding profanity
COMMON_PASSWORDS: frozenset[str] = frozenset(
    """
    123456 password 12345678 qwerty 123456789 12345 1234 111111 1234567
    dragon 123123 baseball abc123 football monkey letmein 696969 shadow
    master 666666 qwertyuiop 123321 mustang 1234567890 michael 654321
    superman 1qaz2wsx 7777777 121212 000000 qazwsx 123qwe killer trustno1
    jordan jennifer zxcvbnm asdfgh hunter buster soccer harley batman
    andrew tigger sunshine iloveyou 2000 charlie robert thomas hockey
    ranger daniel starwars klaster 112233 george computer michelle jessica
    pepper 1111 zxcvbn 555555 11111111 131313 freedom 777777 pass maggie
    159753 aaaaaa ginger princess joshua cheese amanda summer love ashley
    6969 nicole chelsea biteme matthew access yankees 987654321 dallas
    austin thunder taylor matrix
    """.split()
)
