"""Exceptions raised by passpolicy."""

from __future__ import annotations


class InvalidConfig(ValueError):
    """Raised when a policy configuration is structurally malformed.

    This is a caller error, not a validation outcome: a candidate that
    fails the policy is reported through violation codes instead.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)
