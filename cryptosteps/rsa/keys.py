"""
RSA key derivation.

Derives a key pair from two primes:
    n = p * q
    φ(n) = (p-1)(q-1)
    e = first candidate exponent with an inverse mod φ(n)
    d = e^(-1) mod φ(n)

The candidate list is tried in ascending order (first fit), so the
smallest usable exponent wins. Exhausting the list is reported through
KeyGenerationResult rather than raised.
"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa as rsa_backend

from ..common.errors import DemoValidationError, FailureReason
from ..common.logging import get_logger
from ..config import COMMON_PUBLIC_EXPONENTS, DEFAULT_CONFIG, DemoConfig
from ..core_crypto.rsa_math import generate_prime, mod_exp, mod_inverse


logger = get_logger(__name__)


@dataclass(frozen=True)
class RSAPublicKey:
    """RSA public key used for encryption."""
    n: int
    e: int


@dataclass(frozen=True)
class RSAPrivateKey:
    """RSA private key used for decryption."""
    n: int
    d: int


@dataclass(frozen=True)
class RSAKeyPair:
    """
    RSA key pair derived from two primes.

    p, q and φ(n) are kept so the demos can narrate the derivation and
    the key can be exported with its CRT parameters.

    Example:
        >>> keypair = RSAKeyPair.from_primes(3, 11)
        >>> keypair.public_key
        RSAPublicKey(n=33, e=3)
        >>> keypair.decrypt(keypair.encrypt(4))
        4
    """
    public_key: RSAPublicKey
    private_key: RSAPrivateKey
    p: int
    q: int
    phi_n: int

    @classmethod
    def from_primes(cls, p: int, q: int,
                    exponents: Iterable[int] = COMMON_PUBLIC_EXPONENTS) -> 'RSAKeyPair':
        """
        Derive a key pair, raising instead of returning a failure.

        Raises:
            DemoValidationError: If no candidate exponent is usable
        """
        result = generate_keypair(p, q, exponents)
        if result.key_pair is None:
            raise DemoValidationError(result.message, result.reason)
        return result.key_pair

    @property
    def modulus(self) -> int:
        return self.public_key.n

    @property
    def public_exponent(self) -> int:
        return self.public_key.e

    @property
    def private_exponent(self) -> int:
        return self.private_key.d

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self.public_key.n.bit_length()

    @property
    def key_bytes(self) -> int:
        """Modulus length in bytes."""
        return (self.key_size + 7) // 8

    def encrypt(self, message: int) -> int:
        return mod_exp(message, self.public_key.e, self.public_key.n)

    def decrypt(self, ciphertext: int) -> int:
        return mod_exp(ciphertext, self.private_key.d, self.private_key.n)

    def _public_numbers(self) -> rsa_backend.RSAPublicNumbers:
        return rsa_backend.RSAPublicNumbers(self.public_key.e, self.public_key.n)

    def to_public_pem(self) -> str:
        """Export the public key as a SubjectPublicKeyInfo PEM block."""
        public_key = self._public_numbers().public_key()
        return public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode('ascii')

    def to_private_pem(self) -> str:
        """
        Export the private key as an unencrypted PKCS#8 PEM block.

        The CRT parameters are derived with the toolkit's mod_inverse.
        Demo keys are far below any sane size, so the backend's key
        validation is skipped.
        """
        d = self.private_key.d
        numbers = rsa_backend.RSAPrivateNumbers(
            p=self.p,
            q=self.q,
            d=d,
            dmp1=d % (self.p - 1),
            dmq1=d % (self.q - 1),
            iqmp=mod_inverse(self.q, self.p),
            public_numbers=self._public_numbers(),
        )
        private_key = numbers.private_key(unsafe_skip_rsa_key_validation=True)
        return private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode('ascii')

    def __repr__(self) -> str:
        return f"RSAKeyPair(bits={self.key_size}, e={self.public_key.e})"


@dataclass(frozen=True)
class KeyGenerationResult:
    """Either a derived key pair or the reason derivation failed."""
    key_pair: Optional[RSAKeyPair] = None
    reason: Optional[FailureReason] = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.key_pair is not None


def find_exponent_pair(phi_n: int, exponents: Iterable[int] = COMMON_PUBLIC_EXPONENTS):
    """
    Find the first candidate e with an inverse modulo φ(n).

    Returns:
        Tuple (e, d), or None if every candidate fails
    """
    for e in exponents:
        d = mod_inverse(e, phi_n)
        if d is not None:
            return e, d
        logger.debug("e=%d shares a factor with φ(n)=%d, trying next candidate", e, phi_n)
    return None


def generate_keypair(p: int, q: int,
                     exponents: Iterable[int] = COMMON_PUBLIC_EXPONENTS) -> KeyGenerationResult:
    """
    Generate an RSA key pair from two primes.

    The primes are not checked here; callers validate them first.

    Args:
        p: First prime
        q: Second prime, different from p
        exponents: Candidate public exponents, tried in order

    Returns:
        KeyGenerationResult holding the key pair or the failure reason
    """
    n = p * q
    phi_n = (p - 1) * (q - 1)

    pair = find_exponent_pair(phi_n, exponents)
    if pair is None:
        logger.info("No candidate exponent is coprime with φ(n)=%d", phi_n)
        return KeyGenerationResult(
            reason=FailureReason.NO_SUITABLE_EXPONENT,
            message="Could not find suitable public exponent e for these primes",
        )

    e, d = pair
    return KeyGenerationResult(key_pair=RSAKeyPair(
        public_key=RSAPublicKey(n=n, e=e),
        private_key=RSAPrivateKey(n=n, d=d),
        p=p,
        q=q,
        phi_n=phi_n,
    ))


def generate_large_keypair(prime_bits: int, config: DemoConfig = DEFAULT_CONFIG,
                           rng: Optional[random.Random] = None) -> RSAKeyPair:
    """
    Generate an arbitrary-precision key pair from two random primes.

    Draws two distinct primes of prime_bits bits each (modulus of about
    2 * prime_bits bits) and derives the key with the exponent policy.
    If no candidate exponent fits, new primes are drawn.

    Raises:
        ValueError: If prime_bits < 3 (there is only one 2-bit prime)
    """
    if prime_bits < 3:
        raise ValueError("Prime bit length must be at least 3")

    while True:
        p = generate_prime(prime_bits, config.miller_rabin_rounds, rng)
        q = generate_prime(prime_bits, config.miller_rabin_rounds, rng)
        while p == q:
            q = generate_prime(prime_bits, config.miller_rabin_rounds, rng)

        result = generate_keypair(p, q, config.public_exponents)
        if result.key_pair is not None:
            logger.debug("Generated %d-bit key with e=%d",
                         result.key_pair.key_size, result.key_pair.public_exponent)
            return result.key_pair

        logger.debug("Discarding primes with no usable exponent, drawing again")
