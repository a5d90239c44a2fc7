"""
Modular Arithmetic Toolkit

Number theory primitives behind the RSA demos:
- Extended Euclidean Algorithm and modular inverse
- Modular exponentiation (square-and-multiply algorithm)
- Trial division primality test (fixed-width variant)
- Miller-Rabin primality testing and prime generation (arbitrary precision)

Note: This implementation avoids using Python's built-in pow(a, b, mod).
      All modular exponentiation uses the square-and-multiply algorithm.
"""

import math
import random
import secrets
from typing import Optional, Tuple

from ..common.logging import get_logger


logger = get_logger(__name__)

# Default number of Miller-Rabin rounds; false positive rate <= 4^-10
MILLER_RABIN_ROUNDS = 10

_SMALL_PRIMES = (5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Computes (base^exponent) mod modulus in O(log exponent) multiplications.

    Algorithm (right-to-left binary method):
    1. Start with result = 1
    2. For each bit of exponent (from LSB to MSB):
       - If bit is 1, multiply result by base (mod modulus)
       - Square the base (mod modulus)

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be positive)

    Returns:
        (base^exponent) mod modulus, always in [0, modulus)

    Raises:
        ValueError: If exponent < 0 or modulus <= 0
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if modulus == 1:
        return 0

    base = base % modulus
    result = 1

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1

    return result


# Alias
mod_pow = mod_exp


def gcd(a: int, b: int) -> int:
    """Greatest common divisor using the iterative Euclidean algorithm."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Finds integers x, y such that: a*x + b*y = gcd(a, b)

    Args:
        a: First integer
        b: Second integer

    Returns:
        Tuple (gcd, x, y) where a*x + b*y = gcd
    """
    if b == 0:
        return a, 1, 0

    g, x1, y1 = extended_gcd(b, a % b)
    return g, y1, x1 - (a // b) * y1


def mod_inverse(a: int, m: int) -> Optional[int]:
    """
    Modular multiplicative inverse using the Extended Euclidean Algorithm.

    Finds x in [0, m) such that (a * x) mod m = 1.

    Args:
        a: The number to find inverse of
        m: The modulus (must be positive)

    Returns:
        The inverse, or None if gcd(a, m) != 1
    """
    if m <= 0:
        raise ValueError("Modulus must be positive")
    if m == 1:
        return 0

    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        return None

    # x may come back negative; fold it into [0, m)
    return x % m


def is_prime(n: int) -> bool:
    """
    Deterministic primality test by trial division.

    Tries 2, then odd divisors up to isqrt(n). Used for user supplied
    primes in the fixed-width demo, where n fits in 64 bits.
    """
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False

    limit = math.isqrt(n)
    for divisor in range(3, limit + 1, 2):
        if n % divisor == 0:
            return False
    return True


def _decompose(n: int) -> Tuple[int, int]:
    """Write n-1 as 2^r * d with d odd; returns (r, d)."""
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2
    return r, d


def _is_witness(a: int, n: int, r: int, d: int) -> bool:
    """True if base a proves n composite."""
    x = mod_exp(a, d, n)
    if x == 1 or x == n - 1:
        return False

    for _ in range(r - 1):
        x = mod_exp(x, 2, n)
        if x == n - 1:
            return False
    return True


def is_probably_prime_miller_rabin(n: int, rounds: int = MILLER_RABIN_ROUNDS,
                                   rng: Optional[random.Random] = None) -> bool:
    """
    Miller-Rabin primality test.

    A probabilistic test that determines if n is probably prime.
    Probability of false positive: at most (1/4)^rounds

    Algorithm:
    1. Write n-1 as 2^r * d (factor out powers of 2)
    2. For each round, pick a random base a in [2, n-2]:
       - Compute x = a^d mod n
       - If x = 1 or x = n-1, the round passes
       - Square x up to r-1 times, looking for n-1
       - If never found, n is composite

    Args:
        n: Number to test for primality
        rounds: Number of random bases to try
        rng: Random source for the bases (defaults to a fresh SystemRandom)

    Returns:
        True if n is probably prime, False if definitely composite
    """
    if n < 2:
        return False
    if n == 2 or n == 3:
        return True
    if n % 2 == 0:
        return False

    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    if rng is None:
        rng = secrets.SystemRandom()

    r, d = _decompose(n)
    for _ in range(rounds):
        a = rng.randint(2, n - 2)
        if _is_witness(a, n, r, d):
            return False

    return True


def generate_prime(bits: int, rounds: int = MILLER_RABIN_ROUNDS,
                   rng: Optional[random.Random] = None) -> int:
    """
    Generate a random prime number of exactly the given bit length.

    Uses Miller-Rabin primality testing with the given number of rounds.

    Args:
        bits: Desired bit length of the prime
        rounds: Number of Miller-Rabin rounds per candidate
        rng: Random source (defaults to a fresh SystemRandom)

    Returns:
        A prime number with bit_length() == bits

    Raises:
        ValueError: If bits < 2
    """
    if bits < 2:
        raise ValueError("Bit length must be at least 2")

    if rng is None:
        rng = secrets.SystemRandom()

    attempts = 0
    while True:
        attempts += 1
        candidate = rng.getrandbits(bits)
        candidate |= (1 << (bits - 1))  # Set MSB
        candidate |= 1  # Set LSB (make odd)

        if is_probably_prime_miller_rabin(candidate, rounds, rng):
            logger.debug("Found %d-bit prime after %d candidates", bits, attempts)
            return candidate


def bytes_to_int(data: bytes) -> int:
    """Convert bytes to integer (big-endian)."""
    return int.from_bytes(data, byteorder='big')


def int_to_bytes(n: int, length: Optional[int] = None) -> bytes:
    """Convert integer to bytes (big-endian)."""
    if length is None:
        length = max(1, (n.bit_length() + 7) // 8)
    return n.to_bytes(length, byteorder='big')
