"""
RSA demo orchestration.

Runs a complete key generation -> encryption -> decryption -> verification
cycle and records every step. Two variants:

- Fixed-width: user supplied primes, every value fits in 64 bits, text is
  packed directly into one integer (at most 8 bytes).
- Arbitrary precision: primes are generated with Miller-Rabin, text is
  wrapped in PKCS#1 v1.5 style padding before encryption.

Validation failures are returned in the result (success=False plus a
FailureReason) instead of being raised.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..common.errors import FailureReason
from ..common.logging import get_logger
from ..common.output import format_bytes_as_hex, shorten
from ..common.steps import Step, StepLog
from ..common.validation import ValidationResult
from ..config import DEFAULT_CONFIG, DemoConfig
from ..core_crypto.rsa_math import bytes_to_int, gcd, int_to_bytes
from .encryption import decrypt, encrypt
from .keys import RSAKeyPair, generate_keypair, generate_large_keypair
from .text_encoding import (
    max_payload_length, number_to_text, pkcs1_pad, pkcs1_unpad, text_to_number
)
from .validation import (
    validate_fixed_width, validate_message_size, validate_primes, validate_text_length
)


logger = get_logger(__name__)

FIXED_WIDTH = "fixed-width"
ARBITRARY_PRECISION = "arbitrary-precision"

# Show the unreduced power m^e only while it stays readable
_EXPANDED_POWER_MAX_EXPONENT = 10
_EXPANDED_POWER_MAX_MESSAGE = 1000


@dataclass
class RsaDemoResult:
    """Everything one RSA demo run computed."""
    success: bool
    variant: str
    original_message: str
    is_text: bool = False
    error: Optional[FailureReason] = None
    error_message: str = ""
    message_number: int = 0
    key_pair: Optional[RSAKeyPair] = None
    ciphertext: int = 0
    decrypted_number: int = 0
    decrypted_text: Optional[str] = None
    public_pem: Optional[str] = None
    steps: List[Step] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        key_pair = None
        if self.key_pair is not None:
            key_pair = {
                'n': self.key_pair.modulus,
                'e': self.key_pair.public_exponent,
                'd': self.key_pair.private_exponent,
                'p': self.key_pair.p,
                'q': self.key_pair.q,
                'phi_n': self.key_pair.phi_n,
                'bits': self.key_pair.key_size,
            }
        return {
            'algorithm': 'rsa',
            'variant': self.variant,
            'success': self.success,
            'error': self.error.value if self.error else None,
            'error_message': self.error_message or None,
            'original_message': self.original_message,
            'is_text': self.is_text,
            'message_number': self.message_number,
            'key_pair': key_pair,
            'ciphertext': self.ciphertext,
            'decrypted_number': self.decrypted_number,
            'decrypted_text': self.decrypted_text,
            'public_pem': self.public_pem,
            'steps': [step.to_dict() for step in self.steps],
        }


def _failed(result: RsaDemoResult, check: ValidationResult, log: StepLog) -> RsaDemoResult:
    logger.info("RSA demo rejected: %s", check.message)
    result.success = False
    result.error = check.reason
    result.error_message = check.message
    result.steps = log.steps
    return result


def _num(value: int) -> str:
    return shorten(str(value))


def _narrate_key_generation(log: StepLog, key_pair: RSAKeyPair,
                            exponents, first_step: int = 1) -> None:
    p, q, phi_n = key_pair.p, key_pair.q, key_pair.phi_n
    n, e, d = key_pair.modulus, key_pair.public_exponent, key_pair.private_exponent
    step = first_step

    log.section("RSA Key Generation")
    if step == 1:
        log.add("Step 1 - Prime p", result=p)
        log.add("Step 2 - Prime q", result=q)
        step = 3
    log.add(f"Step {step} - Calculate n = p × q",
            f"n = {_num(p)} × {_num(q)}", n)
    log.add(f"Step {step + 1} - Calculate φ(n) = (p-1) × (q-1)",
            f"φ(n) = ({_num(p)}-1) × ({_num(q)}-1) = {_num(p - 1)} × {_num(q - 1)}", phi_n)

    tried = []
    for candidate in exponents:
        common = gcd(candidate, phi_n)
        mark = "✓" if common == 1 else "✗"
        tried.append(f"gcd({candidate}, φ(n)) = {common} {mark}")
        if candidate == e:
            break
    log.add(f"Step {step + 2} - Choose e",
            "first candidate with gcd(e, φ(n)) = 1", e, details=tried)

    check = (e * d) % phi_n
    log.add(f"Step {step + 3} - Calculate d = e⁻¹ mod φ(n)",
            f"{e} × d ≡ 1 (mod {_num(phi_n)})", d,
            details=[f"Verification: {e} × {_num(d)} mod {_num(phi_n)} = {check}"])

    log.add("Public Key (n, e)", result=f"({n}, {e})")
    log.add("Private Key (n, d)", result=f"({n}, {d})")


def _narrate_encryption(log: StepLog, message: int, ciphertext: int, key_pair: RSAKeyPair) -> None:
    n, e = key_pair.modulus, key_pair.public_exponent

    log.section("RSA Encryption")
    log.add("Message as number (m)", result=message)
    log.add("Public key (n)", result=n)
    log.add("Public key (e)", result=e)

    details = []
    if e <= _EXPANDED_POWER_MAX_EXPONENT and message < _EXPANDED_POWER_MAX_MESSAGE:
        power = message ** e
        details = [
            f"Step 1: {message}^{e} = {power}",
            f"Step 2: {power} mod {n} = {ciphertext}",
        ]
    log.add("Ciphertext (c)", f"c = m^e mod n = {_num(message)}^{e} mod {_num(n)}",
            ciphertext, details=details)


def _narrate_decryption(log: StepLog, ciphertext: int, decrypted: int, key_pair: RSAKeyPair) -> None:
    n, d = key_pair.modulus, key_pair.private_exponent

    log.section("RSA Decryption")
    log.add("Ciphertext (c)", result=ciphertext)
    log.add("Private key (n)", result=n)
    log.add("Private key (d)", result=d)
    log.add("Decrypted number (m)", f"m = c^d mod n = {_num(ciphertext)}^{_num(d)} mod {_num(n)}",
            decrypted, details=["(Using modular exponentiation by repeated squaring)"])


def _narrate_verification(log: StepLog, result: RsaDemoResult) -> None:
    log.section("Verification")
    if result.is_text:
        log.add("Original text", result=result.original_message)
        log.add("Original as number", result=result.message_number)
        log.add("Decrypted as number", result=result.decrypted_number)
        log.add("Decrypted back to text", result=result.decrypted_text)
    else:
        log.add("Original number", result=result.message_number)
        log.add("Decrypted number", result=result.decrypted_number)
    log.add("Match", f"Original: {_num(result.message_number)} == Decrypted: "
            f"{_num(result.decrypted_number)}", result.success)


def _run_fixed_width(message_number: int, text: Optional[str], p: int, q: int,
                     config: DemoConfig) -> RsaDemoResult:
    log = StepLog()
    result = RsaDemoResult(
        success=False,
        variant=FIXED_WIDTH,
        original_message=text if text is not None else str(message_number),
        is_text=text is not None,
        message_number=message_number,
    )

    check = validate_fixed_width(p, q, message_number, config)
    if not check:
        return _failed(result, check, log)

    check = validate_primes(p, q)
    if not check:
        return _failed(result, check, log)

    keygen = generate_keypair(p, q, config.public_exponents)
    if keygen.key_pair is None:
        return _failed(result, ValidationResult.fail(keygen.reason, keygen.message), log)
    key_pair = keygen.key_pair
    result.key_pair = key_pair

    _narrate_key_generation(log, key_pair, config.public_exponents)

    check = validate_message_size(message_number, key_pair.modulus)
    if not check:
        return _failed(result, check, log)

    ciphertext = encrypt(message_number, key_pair.public_key)
    decrypted = decrypt(ciphertext, key_pair.private_key)
    result.ciphertext = ciphertext
    result.decrypted_number = decrypted

    success = decrypted == message_number
    if text is not None:
        result.decrypted_text = number_to_text(decrypted, len(text.encode('utf-8')))
        success = success and result.decrypted_text == text
    result.success = success

    _narrate_encryption(log, message_number, ciphertext, key_pair)
    _narrate_decryption(log, ciphertext, decrypted, key_pair)
    _narrate_verification(log, result)

    result.steps = log.steps
    logger.debug("Fixed-width RSA demo finished, success=%s", success)
    return result


def run_rsa_demo(message: int, p: int, q: int,
                 config: DemoConfig = DEFAULT_CONFIG) -> RsaDemoResult:
    """
    Fixed-width RSA demo for a numeric message.

    Example:
        >>> result = run_rsa_demo(4, 3, 11)
        >>> result.ciphertext, result.decrypted_number, result.success
        (31, 4, True)
    """
    return _run_fixed_width(message, None, p, q, config)


def run_rsa_demo_text(text: str, p: int, q: int,
                      config: DemoConfig = DEFAULT_CONFIG) -> RsaDemoResult:
    """Fixed-width RSA demo for a short text (at most max_text_length bytes)."""
    check = validate_text_length(text, config.max_text_length)
    if not check:
        result = RsaDemoResult(success=False, variant=FIXED_WIDTH,
                               original_message=text, is_text=True)
        return _failed(result, check, StepLog())
    number = text_to_number(text, config.max_text_length)
    return _run_fixed_width(number, text, p, q, config)


def run_large_rsa_demo(prime_bits: Optional[int] = None, message: Optional[int] = None,
                       text: Optional[str] = None, export_pem: bool = False,
                       config: DemoConfig = DEFAULT_CONFIG,
                       rng: Optional[random.Random] = None) -> RsaDemoResult:
    """
    Arbitrary-precision RSA demo with generated primes.

    Exactly one of message and text must be given. Numbers are encrypted
    as-is (textbook RSA); text is PKCS#1 v1.5 padded first.

    Args:
        prime_bits: Size of each prime (default: config.default_prime_bits)
        message: Numeric message
        text: Text message
        export_pem: Also export the public key as PEM
        config: Demo configuration
        rng: Random source for primes, bases and padding

    Raises:
        ValueError: If both or neither of message and text are given, or
            prime_bits is outside the configured range
    """
    if (message is None) == (text is None):
        raise ValueError("Provide exactly one of message or text")
    if prime_bits is None:
        prime_bits = config.default_prime_bits
    if not config.min_prime_bits <= prime_bits <= config.max_prime_bits:
        raise ValueError(
            f"Prime size must be between {config.min_prime_bits} and {config.max_prime_bits} bits"
        )

    log = StepLog()
    is_text = text is not None
    result = RsaDemoResult(
        success=False,
        variant=ARBITRARY_PRECISION,
        original_message=text if is_text else str(message),
        is_text=is_text,
    )

    if is_text:
        data = text.encode('utf-8')
        if not data:
            return _failed(result, ValidationResult.fail(
                FailureReason.MESSAGE_EMPTY, "Text cannot be empty"), log)

    key_pair = generate_large_keypair(prime_bits, config, rng)
    result.key_pair = key_pair

    log.section("Prime Generation")
    for name, prime in (('p', key_pair.p), ('q', key_pair.q)):
        log.add(f"Generate prime {name}",
                f"random {prime_bits}-bit odd candidate, top bit set, "
                f"Miller-Rabin × {config.miller_rabin_rounds} rounds",
                prime)
    _narrate_key_generation(log, key_pair, config.public_exponents, first_step=3)

    if export_pem:
        result.public_pem = key_pair.to_public_pem()
        log.add("Public Key (PEM)", "SubjectPublicKeyInfo", "exported",
                details=result.public_pem.strip().splitlines())

    log.section("Message Encoding")
    if is_text:
        limit = max_payload_length(key_pair.key_bytes)
        if len(data) > limit:
            return _failed(result, ValidationResult.fail(
                FailureReason.TEXT_TOO_LONG,
                f"Text is too long ({len(data)} bytes). Maximum {limit} bytes for a "
                f"{key_pair.key_size}-bit key.",
            ), log)
        block = pkcs1_pad(data, key_pair.key_bytes, rng)
        number = bytes_to_int(block)
        log.add("Text as bytes", result=format_bytes_as_hex(data))
        log.add("PKCS#1 v1.5 padding", "00 || 02 || PS || 00 || M",
                shorten(format_bytes_as_hex(block), 72),
                details=[
                    f"Block size: {key_pair.key_bytes} bytes",
                    f"Random non-zero padding: {key_pair.key_bytes - 3 - len(data)} bytes",
                    f"Maximum message: {limit} bytes",
                ])
        log.add("Padded block as number (m)", result=number)
    else:
        number = message
        log.add("Message as number (m)", "textbook RSA, no padding", number)
    result.message_number = number

    check = validate_message_size(number, key_pair.modulus)
    if not check:
        return _failed(result, check, log)

    ciphertext = encrypt(number, key_pair.public_key)
    decrypted = decrypt(ciphertext, key_pair.private_key)
    result.ciphertext = ciphertext
    result.decrypted_number = decrypted

    _narrate_encryption(log, number, ciphertext, key_pair)
    _narrate_decryption(log, ciphertext, decrypted, key_pair)

    success = decrypted == number
    if is_text:
        payload = pkcs1_unpad(int_to_bytes(decrypted, key_pair.key_bytes))
        if payload is not None:
            result.decrypted_text = payload.decode('utf-8', errors='replace')
        log.add("Remove padding", "strip 00 || 02 || PS || 00",
                format_bytes_as_hex(payload) if payload is not None else "invalid padding")
        success = success and result.decrypted_text == text
    result.success = success

    _narrate_verification(log, result)
    result.steps = log.steps
    logger.debug("Arbitrary-precision RSA demo finished, success=%s", success)
    return result
