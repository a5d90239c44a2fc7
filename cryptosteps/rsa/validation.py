"""Input validation for the RSA demos."""

from ..common.errors import FailureReason
from ..common.validation import ValidationResult
from ..config import DEFAULT_CONFIG, DemoConfig
from ..core_crypto.rsa_math import is_prime


def validate_fixed_width(p: int, q: int, message: int,
                         config: DemoConfig = DEFAULT_CONFIG) -> ValidationResult:
    """
    Check that inputs fit the fixed-width variant.

    p and q must each fit in half the width so that n = p*q fits in the
    full width; the message must be an unsigned value of the full width.
    """
    prime_limit = config.fixed_width_prime_limit
    for name, value in (('p', p), ('q', q)):
        if not 0 <= value < prime_limit:
            return ValidationResult.fail(
                FailureReason.VALUE_TOO_WIDE,
                f"{name} must be below 2^{config.fixed_width_bits // 2} "
                f"so that n fits in {config.fixed_width_bits} bits",
            )
    if not 0 <= message < config.fixed_width_limit:
        return ValidationResult.fail(
            FailureReason.VALUE_TOO_WIDE,
            f"Message must be an unsigned {config.fixed_width_bits}-bit integer",
        )
    return ValidationResult.ok()


def validate_primes(p: int, q: int) -> ValidationResult:
    """Validate that both numbers are prime and different."""
    for value in (p, q):
        if not is_prime(value):
            return ValidationResult.fail(
                FailureReason.NOT_PRIME,
                f"Both p and q must be prime numbers ({value} is not prime)",
            )
    if p == q:
        return ValidationResult.fail(
            FailureReason.PRIMES_NOT_DISTINCT,
            "p and q must be different primes",
        )
    return ValidationResult.ok()


def validate_message_size(message: int, n: int) -> ValidationResult:
    """Validate that 0 <= message < n."""
    if message < 0 or message >= n:
        return ValidationResult.fail(
            FailureReason.MESSAGE_TOO_LARGE,
            f"Message ({message}) must be smaller than modulus n ({n})",
        )
    return ValidationResult.ok()


def validate_text_length(text: str, max_length: int) -> ValidationResult:
    """Validate that text is non-empty and its UTF-8 form fits max_length bytes."""
    data = text.encode('utf-8')
    if not data:
        return ValidationResult.fail(FailureReason.MESSAGE_EMPTY, "Text cannot be empty")
    if len(data) > max_length:
        return ValidationResult.fail(
            FailureReason.TEXT_TOO_LONG,
            f"Text is too long ({len(data)} bytes). Maximum {max_length} bytes.",
        )
    return ValidationResult.ok()
