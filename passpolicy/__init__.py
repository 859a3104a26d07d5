"""passpolicy: password-policy rule evaluation."""

__version__ = "0.1.0"

from passpolicy.core.models import PolicyConfig, ValidationResult, ViolationCode
from passpolicy.core.settings import default_policy, load_policy
from passpolicy.core.validator import PolicyValidator, validate
from passpolicy.errors import InvalidConfig

__all__ = [
    "PolicyConfig",
    "PolicyValidator",
    "ValidationResult",
    "ViolationCode",
    "InvalidConfig",
    "default_policy",
    "load_policy",
    "validate",
]
