"""
Demo configuration.

All tunable limits live in one frozen dataclass. Call sites take a
DemoConfig argument and fall back to DEFAULT_CONFIG; use
DEFAULT_CONFIG.with_overrides(...) to change individual values.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple


# Common public exponents, ordered by preference: smaller exponents make
# encryption faster. 257 and 65537 are the Fermat primes F3 and F4.
COMMON_PUBLIC_EXPONENTS: Tuple[int, ...] = (3, 5, 7, 11, 13, 17, 257, 65537)


@dataclass(frozen=True)
class DemoConfig:
    """
    Limits and parameters shared by the demos.

    Attributes:
        max_text_length: Text bytes packed into one fixed-width integer
        fixed_width_bits: Width of the fixed-width RSA variant
        max_hash_message_length: Longest SHA-256 demo input, in bytes
        miller_rabin_rounds: Rounds per Miller-Rabin test
        public_exponents: Candidate e values, tried first-fit
        default_prime_bits: Prime size for the arbitrary-precision demo
        min_prime_bits: Smallest prime size accepted by that demo
        max_prime_bits: Largest prime size accepted by that demo
        detailed_rounds: SHA-256 rounds narrated in summary mode
    """
    max_text_length: int = 8
    fixed_width_bits: int = 64
    max_hash_message_length: int = 1000
    miller_rabin_rounds: int = 10
    public_exponents: Tuple[int, ...] = COMMON_PUBLIC_EXPONENTS
    default_prime_bits: int = 256
    min_prime_bits: int = 16
    max_prime_bits: int = 1024
    detailed_rounds: Tuple[int, ...] = field(
        default=(0, 1, 2, 3, 4, 5, 6, 7, 15, 23, 31, 39, 47, 55, 56, 57, 58, 59, 60, 61, 62, 63)
    )

    @property
    def fixed_width_limit(self) -> int:
        """Exclusive upper bound for fixed-width values."""
        return 1 << self.fixed_width_bits

    @property
    def fixed_width_prime_limit(self) -> int:
        """Exclusive bound on p and q so that n = p*q fits the fixed width."""
        return 1 << (self.fixed_width_bits // 2)

    def with_overrides(self, **kwargs) -> 'DemoConfig':
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)


DEFAULT_CONFIG = DemoConfig()
