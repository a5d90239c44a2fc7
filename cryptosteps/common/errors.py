"""
Failure reasons and exceptions for cryptosteps.

Input contract violations are reported as data: demo results carry a
FailureReason and a readable message, and the CLI turns them into a tip
and a non-zero exit status. The exceptions below are only raised by the
convenience APIs that do not return result objects.
"""

from enum import Enum
from typing import Optional


class FailureReason(Enum):
    """Named reasons a demo run can be rejected."""

    NOT_PRIME = "not prime"
    PRIMES_NOT_DISTINCT = "primes must differ"
    NO_SUITABLE_EXPONENT = "no suitable public exponent"
    MESSAGE_TOO_LARGE = "message too large for modulus"
    TEXT_TOO_LONG = "text exceeds maximum length"
    MESSAGE_EMPTY = "message empty"
    MESSAGE_TOO_LONG = "message exceeds maximum length"
    VALUE_TOO_WIDE = "value exceeds fixed width"
    INVALID_HEX = "invalid hex input"


class CryptoStepsError(Exception):
    """Base exception for all cryptosteps errors."""

    def __init__(self, message: str, reason: Optional[FailureReason] = None) -> None:
        self.reason = reason
        super().__init__(message)


class DemoValidationError(CryptoStepsError):
    """Raised when inputs violate a demo's contract."""
    pass
