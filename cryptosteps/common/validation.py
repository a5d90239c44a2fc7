"""
Generic input validation helpers.

Validators return a ValidationResult instead of raising, so callers can
branch on the outcome and render the reason.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import FailureReason


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check."""
    valid: bool
    reason: Optional[FailureReason] = None
    message: str = ""

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(valid=True)

    @classmethod
    def fail(cls, reason: FailureReason, message: str) -> 'ValidationResult':
        return cls(valid=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.valid


def validate_non_empty_message(message: bytes) -> ValidationResult:
    if not message:
        return ValidationResult.fail(FailureReason.MESSAGE_EMPTY, "Message cannot be empty")
    return ValidationResult.ok()


def validate_message_length(message: bytes, max_length: int) -> ValidationResult:
    if len(message) > max_length:
        return ValidationResult.fail(
            FailureReason.MESSAGE_TOO_LONG,
            f"Message too long (max {max_length} bytes)",
        )
    return ValidationResult.ok()


def parse_hex_bytes(text: str) -> Optional[bytes]:
    """
    Parse a hex string such as 'de ad be ef' or '0xdeadbeef'.

    Returns None if the text is not valid hex.
    """
    cleaned = text.strip().lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]
    cleaned = "".join(cleaned.split())
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        return None
