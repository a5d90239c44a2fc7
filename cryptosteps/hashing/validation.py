"""Input validation for the SHA-256 demo."""

from ..common.validation import (
    ValidationResult, validate_message_length, validate_non_empty_message
)
from ..config import DEFAULT_CONFIG


def validate_message(message: bytes,
                     max_length: int = DEFAULT_CONFIG.max_hash_message_length) -> ValidationResult:
    """The demo hashes non-empty messages of at most max_length bytes."""
    check = validate_non_empty_message(message)
    if not check:
        return check
    return validate_message_length(message, max_length)
