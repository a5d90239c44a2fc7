"""
Unit tests for the modular arithmetic toolkit.

Tests:
- Modular exponentiation
- Extended GCD and modular inverse
- Trial division and Miller-Rabin primality
- Prime generation
"""

import random

import pytest

from cryptosteps.core_crypto.rsa_math import (
    bytes_to_int, extended_gcd, gcd, generate_prime, int_to_bytes, is_prime,
    is_probably_prime_miller_rabin, mod_exp, mod_inverse, mod_pow
)


def _ground_truth_is_prime(n):
    """Reference primality by checking every divisor."""
    if n < 2:
        return False
    return all(n % d != 0 for d in range(2, n))


PRIMES_BELOW_10000 = [n for n in range(10_000) if _ground_truth_is_prime(n)]


class TestModExp:
    """Unit tests for square-and-multiply exponentiation."""

    def test_known_answer(self):
        """2^3 mod 5 = 8 mod 5 = 3."""
        assert mod_exp(2, 3, 5) == 3

    def test_mod_pow_alias(self):
        assert mod_pow(2, 10, 1000) == 24

    @pytest.mark.parametrize("base,exp,mod,expected", [
        (2, 10, 1000, 24),
        (3, 7, 13, 3),
        (7, 0, 13, 1),
        (0, 5, 13, 0),
        (123456789, 65537, 4294967291 * 4294967279, pow(123456789, 65537, 4294967291 * 4294967279)),
    ])
    def test_known_values(self, base, exp, mod, expected):
        assert mod_exp(base, exp, mod) == expected

    def test_modulus_one_is_zero(self):
        assert mod_exp(5, 0, 1) == 0
        assert mod_exp(12345, 678, 1) == 0

    def test_result_below_modulus(self):
        """mod_exp(b, e, m) < m for m > 0."""
        rng = random.Random(2024)
        for _ in range(200):
            base = rng.randrange(0, 10**12)
            exp = rng.randrange(0, 10**6)
            mod = rng.randrange(1, 10**9)
            assert 0 <= mod_exp(base, exp, mod) < mod

    def test_large_values(self):
        """Arbitrary precision: values beyond 64 bits."""
        modulus = (1 << 127) - 1
        assert mod_exp(3, modulus - 1, modulus) == 1  # Fermat, 2^127-1 is prime

    def test_fermat_little_theorem(self):
        p = 101
        assert mod_exp(2, p - 1, p) == 1

    def test_negative_exponent_rejected(self):
        with pytest.raises(ValueError):
            mod_exp(2, -1, 5)

    def test_non_positive_modulus_rejected(self):
        with pytest.raises(ValueError):
            mod_exp(2, 3, 0)
        with pytest.raises(ValueError):
            mod_exp(2, 3, -7)


class TestExtendedGCD:
    """Unit tests for the extended Euclidean algorithm."""

    def test_base_case(self):
        assert extended_gcd(7, 0) == (7, 1, 0)

    def test_bezout_identity(self):
        """a*x + b*y == gcd(a, b) for many pairs."""
        rng = random.Random(99)
        for _ in range(300):
            a = rng.randrange(0, 10**9)
            b = rng.randrange(0, 10**9)
            g, x, y = extended_gcd(a, b)
            assert a * x + b * y == g
            assert g == gcd(a, b)

    def test_bezout_identity_large(self):
        """Holds for arbitrary-precision operands as well."""
        a = (1 << 200) + 12345
        b = (1 << 190) + 6789
        g, x, y = extended_gcd(a, b)
        assert a * x + b * y == g
        assert a % g == 0 and b % g == 0

    def test_gcd(self):
        assert gcd(48, 18) == 6
        assert gcd(17, 13) == 1
        assert gcd(0, 9) == 9


class TestModInverse:
    """Unit tests for the modular inverse."""

    def test_known_answer(self):
        """3 * 4 ≡ 1 (mod 11)."""
        assert mod_inverse(3, 11) == 4

    def test_rsa_exponent(self):
        """e=3, φ(n)=20 gives d=7."""
        assert mod_inverse(3, 20) == 7

    def test_inverse_property_for_coprime_pairs(self):
        rng = random.Random(7)
        checked = 0
        while checked < 200:
            m = rng.randrange(2, 10**6)
            a = rng.randrange(1, 10**6)
            if gcd(a, m) != 1:
                continue
            inv = mod_inverse(a, m)
            assert 0 <= inv < m
            assert (a * inv) % m == 1
            checked += 1

    def test_negative_intermediate_is_normalized(self):
        """extended_gcd returns a negative x here; the inverse is still in [0, m)."""
        _, x, _ = extended_gcd(17, 43)
        assert x < 0
        assert mod_inverse(17, 43) == 38

    def test_no_inverse_returns_none(self):
        assert mod_inverse(6, 9) is None
        assert mod_inverse(3, 12) is None
        assert mod_inverse(0, 7) is None

    def test_input_larger_than_modulus(self):
        assert mod_inverse(14, 11) == 4  # 14 ≡ 3 (mod 11)


class TestPrimality:
    """Unit tests for trial division and Miller-Rabin."""

    def test_small_known_values(self):
        for p in [2, 3, 5, 7, 11, 13]:
            assert is_prime(p), f"{p} should be prime"
        for c in [0, 1, 4, 6, 8, 9, 10]:
            assert not is_prime(c), f"{c} should not be prime"

    def test_trial_division_matches_ground_truth(self):
        """is_prime agrees with exhaustive division for all n < 10000."""
        expected = set(PRIMES_BELOW_10000)
        for n in range(10_000):
            assert is_prime(n) == (n in expected), n

    def test_negative_numbers_not_prime(self):
        assert not is_prime(-7)

    def test_large_fixed_width_primes(self):
        assert is_prime(4294967291)
        assert is_prime(4294967279)
        assert not is_prime(4294967291 * 3)

    def test_miller_rabin_matches_ground_truth(self):
        rng = random.Random(11)
        expected = set(PRIMES_BELOW_10000)
        for n in range(10_000):
            assert is_probably_prime_miller_rabin(n, rng=rng) == (n in expected), n

    def test_miller_rabin_carmichael_numbers(self):
        """Carmichael numbers fool Fermat tests but not Miller-Rabin."""
        rng = random.Random(3)
        for n in [561, 1105, 1729, 2465, 2821, 6601, 8911, 41041, 825265]:
            assert not is_probably_prime_miller_rabin(n, rng=rng)

    def test_miller_rabin_large_prime(self):
        assert is_probably_prime_miller_rabin((1 << 127) - 1)
        assert is_probably_prime_miller_rabin((1 << 89) - 1)

    def test_miller_rabin_large_composite(self):
        assert not is_probably_prime_miller_rabin(((1 << 61) - 1) * ((1 << 31) - 1))


class TestPrimeGeneration:
    """Unit tests for random prime generation."""

    @pytest.mark.parametrize("bits", [2, 3, 8, 16, 64, 128])
    def test_exact_bit_length(self, bits):
        rng = random.Random(bits)
        p = generate_prime(bits, rng=rng)
        assert p.bit_length() == bits
        assert is_probably_prime_miller_rabin(p)

    def test_generated_primes_are_odd(self):
        rng = random.Random(1)
        for _ in range(10):
            assert generate_prime(32, rng=rng) % 2 == 1

    def test_small_generated_primes_confirmed_by_trial_division(self):
        rng = random.Random(5)
        for _ in range(20):
            assert is_prime(generate_prime(20, rng=rng))

    def test_seeded_generation_is_reproducible(self):
        assert generate_prime(64, rng=random.Random(42)) == generate_prime(64, rng=random.Random(42))

    def test_default_random_source(self):
        assert generate_prime(64).bit_length() == 64

    def test_too_few_bits_rejected(self):
        with pytest.raises(ValueError):
            generate_prime(1)


class TestByteConversion:
    """Unit tests for big-endian integer conversion."""

    def test_round_trip(self):
        data = b"\x01\x02\x03"
        assert bytes_to_int(data) == 0x010203
        assert int_to_bytes(0x010203) == data

    def test_zero_is_one_byte(self):
        assert int_to_bytes(0) == b"\x00"

    def test_fixed_length_keeps_leading_zeros(self):
        assert int_to_bytes(2, 4) == b"\x00\x00\x00\x02"
