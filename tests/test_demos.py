"""
Tests for the narrated demos and their renderers.

Tests:
- Fixed-width RSA demo (numbers and text)
- Arbitrary-precision RSA demo
- SHA-256 demo
- Console and JSON rendering
"""

import io
import json
import random

import pytest
from rich.console import Console

from cryptosteps.common.errors import FailureReason
from cryptosteps.config import DEFAULT_CONFIG
from cryptosteps.hashing import run_sha256_demo, run_sha256_demo_text
from cryptosteps.report import render_json, render_result, tip_for
from cryptosteps.rsa import run_large_rsa_demo, run_rsa_demo, run_rsa_demo_text
from cryptosteps.rsa.demo import ARBITRARY_PRECISION, FIXED_WIDTH


def _titles(result):
    return [step.title for step in result.steps]


def _sections(result):
    return list(dict.fromkeys(step.section for step in result.steps))


def _render(result):
    console = Console(file=io.StringIO(), width=120)
    render_result(result, console)
    return console.file.getvalue()


class TestRsaDemo:
    """Fixed-width RSA demo with numeric messages."""

    def test_textbook_example(self):
        result = run_rsa_demo(4, 3, 11)
        assert result.success
        assert result.variant == FIXED_WIDTH
        assert result.error is None
        assert result.ciphertext == 31
        assert result.decrypted_number == 4
        assert result.key_pair.public_exponent == 3
        assert result.key_pair.private_exponent == 7

    def test_steps_cover_full_cycle(self):
        result = run_rsa_demo(4, 3, 11)
        assert _sections(result) == [
            "RSA Key Generation", "RSA Encryption", "RSA Decryption", "Verification",
        ]
        titles = _titles(result)
        assert titles[0] == "Step 1 - Prime p"
        assert "Step 3 - Calculate n = p × q" in titles
        assert "Public Key (n, e)" in titles
        assert titles[-1] == "Match"
        assert result.steps[-1].result == "True"

    def test_encryption_step_shows_expansion(self):
        """Small exponent and message: m^e is shown before reduction."""
        result = run_rsa_demo(4, 3, 11)
        step = next(s for s in result.steps
                    if s.section == "RSA Encryption" and s.title == "Ciphertext (c)")
        assert step.result == "31"
        assert "Step 1: 4^3 = 64" in step.details
        assert "Step 2: 64 mod 33 = 31" in step.details

    def test_exponent_choice_lists_rejected_candidates(self):
        result = run_rsa_demo(65, 61, 53)
        step = next(s for s in result.steps if s.title.endswith("Choose e"))
        assert step.result == "7"
        assert step.details == [
            "gcd(3, φ(n)) = 3 ✗", "gcd(5, φ(n)) = 5 ✗", "gcd(7, φ(n)) = 1 ✓",
        ]
        assert result.success

    def test_fixed_width_primes(self):
        result = run_rsa_demo(123456789, 4294967291, 4294967279)
        assert result.success
        assert result.key_pair.modulus < DEFAULT_CONFIG.fixed_width_limit

    @pytest.mark.parametrize("p,q", [(4, 7), (3, 6), (1, 11), (0, 5)])
    def test_not_prime(self, p, q):
        result = run_rsa_demo(2, p, q)
        assert not result.success
        assert result.error == FailureReason.NOT_PRIME
        assert "must be prime" in result.error_message
        assert result.steps == []

    def test_primes_not_distinct(self):
        result = run_rsa_demo(2, 5, 5)
        assert result.error == FailureReason.PRIMES_NOT_DISTINCT

    def test_prime_check_comes_first(self):
        result = run_rsa_demo(2, 4, 4)
        assert result.error == FailureReason.NOT_PRIME

    def test_message_too_large(self):
        """Key generation is still narrated before the message is rejected."""
        result = run_rsa_demo(100, 3, 11)
        assert not result.success
        assert result.error == FailureReason.MESSAGE_TOO_LARGE
        assert "must be smaller than modulus n (33)" in result.error_message
        assert result.key_pair is not None
        assert _sections(result) == ["RSA Key Generation"]

    def test_message_equal_to_modulus(self):
        assert run_rsa_demo(33, 3, 11).error == FailureReason.MESSAGE_TOO_LARGE

    def test_no_suitable_exponent(self):
        config = DEFAULT_CONFIG.with_overrides(public_exponents=(3,))
        result = run_rsa_demo(2, 7, 13, config=config)
        assert result.error == FailureReason.NO_SUITABLE_EXPONENT

    def test_value_too_wide(self):
        assert run_rsa_demo(4, 4294967311, 3).error == FailureReason.VALUE_TOO_WIDE
        assert run_rsa_demo(1 << 64, 3, 11).error == FailureReason.VALUE_TOO_WIDE
        assert run_rsa_demo(-1, 3, 11).error == FailureReason.VALUE_TOO_WIDE


class TestRsaTextDemo:
    """Fixed-width RSA demo with short texts."""

    def test_hi(self):
        result = run_rsa_demo_text("Hi", 251, 241)
        assert result.success
        assert result.is_text
        assert result.message_number == 18537
        assert result.decrypted_text == "Hi"

    @pytest.mark.parametrize("text", ["Hi", "RSA", "Test", "Hello", "12345678"])
    def test_large_primes(self, text):
        result = run_rsa_demo_text(text, 4294967291, 4294967279)
        assert result.success
        assert result.decrypted_text == text

    def test_verification_shows_text(self):
        result = run_rsa_demo_text("Hi", 251, 241)
        verification = [s for s in result.steps if s.section == "Verification"]
        assert [s.title for s in verification] == [
            "Original text", "Original as number", "Decrypted as number",
            "Decrypted back to text", "Match",
        ]

    def test_text_too_long(self):
        result = run_rsa_demo_text("TooLongText", 4294967291, 4294967279)
        assert result.error == FailureReason.TEXT_TOO_LONG

    def test_text_checked_before_primes(self):
        result = run_rsa_demo_text("TooLongText", 4, 6)
        assert result.error == FailureReason.TEXT_TOO_LONG

    def test_empty_text(self):
        assert run_rsa_demo_text("", 251, 241).error == FailureReason.MESSAGE_EMPTY

    def test_text_larger_than_modulus(self):
        result = run_rsa_demo_text("Hello", 251, 241)
        assert result.error == FailureReason.MESSAGE_TOO_LARGE


class TestLargeRsaDemo:
    """Arbitrary-precision demo with generated primes."""

    def test_numeric_message(self):
        result = run_large_rsa_demo(64, message=123456789, rng=random.Random(4))
        assert result.success
        assert result.variant == ARBITRARY_PRECISION
        assert result.decrypted_number == 123456789
        assert _sections(result)[0] == "Prime Generation"

    def test_text_message_is_padded(self):
        result = run_large_rsa_demo(128, text="hello", rng=random.Random(5))
        assert result.success
        assert result.decrypted_text == "hello"
        assert "PKCS#1 v1.5 padding" in _titles(result)
        assert "Remove padding" in _titles(result)
        # Padded block is much larger than the raw text
        assert result.message_number > int.from_bytes(b"hello", "big")

    def test_key_generation_continues_numbering(self):
        result = run_large_rsa_demo(64, message=5, rng=random.Random(6))
        titles = _titles(result)
        assert "Step 3 - Calculate n = p × q" in titles
        assert "Step 1 - Prime p" not in titles

    def test_pem_export(self):
        result = run_large_rsa_demo(64, message=5, export_pem=True, rng=random.Random(8))
        assert result.public_pem.startswith("-----BEGIN PUBLIC KEY-----")
        assert "Public Key (PEM)" in _titles(result)

    def test_no_pem_by_default(self):
        assert run_large_rsa_demo(64, message=5, rng=random.Random(8)).public_pem is None

    def test_text_too_long_for_key(self):
        result = run_large_rsa_demo(16, text="hi", rng=random.Random(9))
        assert result.error == FailureReason.TEXT_TOO_LONG

    def test_empty_text(self):
        result = run_large_rsa_demo(64, text="", rng=random.Random(9))
        assert result.error == FailureReason.MESSAGE_EMPTY

    def test_message_too_large(self):
        result = run_large_rsa_demo(64, message=1 << 300, rng=random.Random(10))
        assert result.error == FailureReason.MESSAGE_TOO_LARGE

    def test_exactly_one_message_kind(self):
        with pytest.raises(ValueError):
            run_large_rsa_demo(64)
        with pytest.raises(ValueError):
            run_large_rsa_demo(64, message=1, text="a")

    def test_prime_size_range(self):
        with pytest.raises(ValueError):
            run_large_rsa_demo(8, message=1)
        with pytest.raises(ValueError):
            run_large_rsa_demo(4096, message=1)


class TestSha256Demo:
    """Narrated SHA-256."""

    def test_abc(self):
        result = run_sha256_demo_text("abc")
        assert result.success
        assert result.hash == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        assert result.hash == result.reference_hash
        assert result.block_count == 1
        assert result.hash_words[0] == "0xba7816bf"

    def test_sections(self):
        result = run_sha256_demo_text("abc")
        assert _sections(result) == [
            "Initial Hash Values", "Message Preprocessing",
            "Compression Function (Block 1/1)", "Final Hash",
        ]

    def test_summary_rounds(self):
        result = run_sha256_demo_text("abc")
        rounds = [t for t in _titles(result) if t.startswith("Round ")]
        assert len(rounds) == len(DEFAULT_CONFIG.detailed_rounds)
        assert rounds[0] == "Round 1"
        assert rounds[-1] == "Round 64"

    def test_all_rounds(self):
        result = run_sha256_demo_text("abc", all_rounds=True)
        rounds = [t for t in _titles(result) if t.startswith("Round ")]
        assert len(rounds) == 64

    def test_multi_block_message(self):
        result = run_sha256_demo_text("a" * 100)
        assert result.success
        assert result.block_count == 2
        assert "Compression Function (Block 2/2)" in _sections(result)

    def test_padding_steps(self):
        result = run_sha256_demo_text("abc")
        steps = {s.title: s for s in result.steps}
        assert steps["Original length"].result == "3 bytes (24 bits)"
        assert steps["Number of 512-bit blocks"].result == "1"
        assert steps["Length field"].result == "0000000000000018"

    def test_raw_bytes(self):
        result = run_sha256_demo(b"\x00\xff")
        assert result.success
        assert result.original_message == "00ff"

    def test_empty_message(self):
        result = run_sha256_demo_text("")
        assert not result.success
        assert result.error == FailureReason.MESSAGE_EMPTY

    def test_message_too_long(self):
        assert run_sha256_demo(b"x" * 1001).error == FailureReason.MESSAGE_TOO_LONG

    def test_longest_message(self):
        assert run_sha256_demo(b"x" * 1000).success


class TestRendering:
    """Console and JSON output."""

    def test_rsa_console(self):
        output = _render(run_rsa_demo(4, 3, 11))
        assert "RSA Key Generation" in output
        assert "Ciphertext (c): 31" in output
        assert "RSA encryption/decryption successful!" in output
        assert "Mathematical Foundation" in output

    def test_rsa_text_console(self):
        output = _render(run_rsa_demo_text("Hi", 251, 241))
        assert "Text Encoding Explained" in output

    def test_error_console(self):
        output = _render(run_rsa_demo(2, 4, 7))
        assert "Error: Both p and q must be prime numbers (4 is not prime)" in output
        assert "Good small primes" in output

    def test_sha256_console(self):
        output = _render(run_sha256_demo_text("abc"))
        assert "H[0] = 0x6a09e667" in output
        assert "SHA-256 hash computation completed!" in output
        assert "SHA-256: ba7816bf" in output

    def test_unknown_result_type(self):
        with pytest.raises(TypeError):
            render_result(object(), Console(file=io.StringIO()))

    def test_rsa_json(self):
        data = json.loads(render_json(run_rsa_demo(4, 3, 11)))
        assert data["algorithm"] == "rsa"
        assert data["success"] is True
        assert data["ciphertext"] == 31
        assert data["key_pair"]["d"] == 7
        assert data["steps"][0]["section"] == "RSA Key Generation"

    def test_failure_json(self):
        data = json.loads(render_json(run_rsa_demo(2, 5, 5)))
        assert data["success"] is False
        assert data["error"] == FailureReason.PRIMES_NOT_DISTINCT.value
        assert data["key_pair"] is None

    def test_sha256_json(self):
        data = json.loads(render_json(run_sha256_demo_text("abc")))
        assert data["algorithm"] == "sha256"
        assert data["message_bytes"] == [97, 98, 99]
        assert data["hash"].startswith("ba7816bf")

    def test_large_numbers_keep_precision(self):
        result = run_large_rsa_demo(128, message=1 << 100, rng=random.Random(12))
        data = json.loads(render_json(result))
        assert data["key_pair"]["n"] == result.key_pair.modulus

    def test_tips(self):
        assert "primes" in tip_for(FailureReason.NOT_PRIME)
        assert tip_for(FailureReason.MESSAGE_TOO_LARGE, is_text=True) == \
            "Use larger primes or shorter text"
        assert tip_for(None) == ""
