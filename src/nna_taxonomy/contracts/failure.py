"""Centralized failure policy for taxonomy contract violations.

Contracts fail fast and loud by default. All violations raise the same
exception type, allowing callers to handle data-integrity bugs uniformly.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """Failure policy for contract violations.
    
    FAIL_FAST (default): Raise immediately on contract violation
    WARN_ONLY: Report the violation as an advisory issue and continue
    """
    FAIL_FAST = "fail_fast"
    WARN_ONLY = "warn_only"


class ContractViolation(RuntimeError):
    """Raised when a taxonomy contract is violated.

    This indicates broken taxonomy data, not bad caller input. Unresolvable
    codes in an address are never a contract violation; they are handled by
    the converter's default and reject policies.

    Key distinction:
    - ValueError / ValidationError: invalid config or call pattern
    - ContractViolation: taxonomy data bug (e.g. numeric code collision)
    - Empty / unchanged return: address did not resolve
    """
    pass
