"""
SHA-256 demo orchestration.

Hashes a short message with the from-scratch implementation and records
every intermediate value: initial hash words, padding layout, the message
schedule and per-round working variables of each block, and the final
digest. The digest is cross-checked against the cryptography library.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cryptography.hazmat.primitives import hashes

from ..common.errors import FailureReason
from ..common.logging import get_logger
from ..common.output import format_bytes_list, format_word
from ..common.steps import Step, StepLog
from ..config import DEFAULT_CONFIG, DemoConfig
from ..core_crypto.sha256 import (
    H_INITIAL, H_INITIAL_PRIMES, K, LENGTH_FIELD_SIZE, ProcessedMessage, RoundState,
    compress_block, message_schedule, preprocess_message, words_to_hex
)
from .validation import validate_message


logger = get_logger(__name__)

_SUBSCRIPTS = "₀₁₂₃₄₅₆₇"
_VARIABLES = "abcdefgh"


@dataclass
class Sha256DemoResult:
    """Everything one SHA-256 demo run computed."""
    success: bool
    original_message: str
    message_bytes: bytes
    error: Optional[FailureReason] = None
    error_message: str = ""
    hash: str = ""
    hash_words: List[str] = field(default_factory=list)
    reference_hash: str = ""
    block_count: int = 0
    steps: List[Step] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': 'sha256',
            'success': self.success,
            'error': self.error.value if self.error else None,
            'error_message': self.error_message or None,
            'original_message': self.original_message,
            'message_bytes': list(self.message_bytes),
            'hash': self.hash,
            'hash_words': list(self.hash_words),
            'reference_hash': self.reference_hash,
            'block_count': self.block_count,
            'steps': [step.to_dict() for step in self.steps],
        }


def reference_sha256_hex(data: bytes) -> str:
    """SHA-256 from the cryptography library, used as the reference."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(data)
    return digest.finalize().hex()


def _state_lines(state) -> List[str]:
    return [f"H[{i}] = {format_word(word)}" for i, word in enumerate(state)]


def _narrate_initial_values(log: StepLog) -> None:
    log.section("Initial Hash Values")
    log.add(
        "Initial hash values",
        "first 32 bits of the fractional parts of the square roots of the first 8 primes",
        words_to_hex(H_INITIAL),
        details=[
            f"H{_SUBSCRIPTS[i]} = {format_word(word)}  (√{prime})"
            for i, (word, prime) in enumerate(zip(H_INITIAL, H_INITIAL_PRIMES))
        ],
    )


def _narrate_preprocessing(log: StepLog, message: bytes, processed: ProcessedMessage) -> None:
    bit_length = processed.bit_length
    padded_bits = len(processed.padded) * 8
    zero_bytes = processed.zero_padding_length

    log.section("Message Preprocessing")
    log.add("Original bytes", result=format_bytes_list(message))
    log.add("Original length", result=f"{len(message)} bytes ({bit_length} bits)")
    log.add("Append '1' bit", "message || 0x80", f"{bit_length + 8} bits")
    log.add("Zero padding", "append 0x00 until length ≡ 448 (mod 512) bits",
            f"{zero_bytes * 8} bits ({zero_bytes} bytes)")
    log.add("Length field", f"{bit_length} as 64-bit big-endian integer",
            processed.padded[-LENGTH_FIELD_SIZE:].hex())
    log.add("Total padded length", "multiple of 512 bits",
            f"{padded_bits} bits ({len(processed.padded)} bytes)")
    log.add("Number of 512-bit blocks", f"{len(processed.padded)} / 64", len(processed.blocks))
    log.add("First block (16 × 32-bit words)", "4 bytes per word, big-endian",
            details=[f"W[{i:2}] = {format_word(word)}" for i, word in enumerate(processed.blocks[0])])


def _round_step(log: StepLog, state: RoundState, w: List[int]) -> None:
    t = state.t
    log.add(
        f"Round {t + 1}",
        f"T1 = h + Σ1(e) + Ch(e,f,g) + K[{t}] + W[{t}], T2 = Σ0(a) + Maj(a,b,c)",
        f"a={format_word(state.a)}, e={format_word(state.e)}",
        details=[
            f"K[{t}] = {format_word(K[t])}, W[{t}] = {format_word(w[t])}",
            f"T1 = {format_word(state.t1)}",
            f"T2 = {format_word(state.t2)}",
            "New values: " + ", ".join(
                f"{name}={format_word(getattr(state, name))}" for name in _VARIABLES
            ),
        ],
    )


def _narrate_block(log: StepLog, index: int, total: int, block, before, after,
                   trace: List[RoundState], rounds) -> None:
    log.section(f"Compression Function (Block {index + 1}/{total})")

    w = message_schedule(block)
    log.add(
        "Message schedule (W[0] to W[63])",
        "W[t] = σ1(W[t-2]) + W[t-7] + σ0(W[t-15]) + W[t-16]  (mod 2^32)",
        f"{len(w)} words",
        details=[
            f"W[{t:2}] = {format_word(word)} ({'from block' if t < 16 else 'computed'})"
            for t, word in enumerate(w)
        ],
    )
    log.add(
        "Initial working variables",
        "a..h = current hash state",
        details=[f"{name} = {format_word(word)}" for name, word in zip(_VARIABLES, before)],
    )

    for state in trace:
        if rounds is None or state.t in rounds:
            _round_step(log, state, w)

    final = trace[-1]
    working = [getattr(final, name) for name in _VARIABLES]
    log.add(
        "Final addition",
        "H[i] = H[i] + working variable (mod 2^32)",
        words_to_hex(after),
        details=[
            f"H[{i}] = {format_word(old)} + {format_word(var)} = {format_word(new)}"
            for i, (old, var, new) in enumerate(zip(before, working, after))
        ],
    )
    log.add(f"Hash after block {index + 1}", result=words_to_hex(after),
            details=_state_lines(after))


def run_sha256_demo(message: bytes, text: Optional[str] = None, all_rounds: bool = False,
                    config: DemoConfig = DEFAULT_CONFIG) -> Sha256DemoResult:
    """
    Hash a message and narrate every step.

    Args:
        message: Bytes to hash
        text: The text the bytes came from, if any (for display)
        all_rounds: Narrate all 64 rounds instead of config.detailed_rounds
        config: Demo configuration

    Returns:
        Sha256DemoResult; success is True when the digest matches the
        reference implementation
    """
    result = Sha256DemoResult(
        success=False,
        original_message=text if text is not None else message.hex(),
        message_bytes=bytes(message),
    )

    check = validate_message(message, config.max_hash_message_length)
    if not check:
        logger.info("SHA-256 demo rejected: %s", check.message)
        result.error = check.reason
        result.error_message = check.message
        return result

    log = StepLog()
    _narrate_initial_values(log)

    processed = preprocess_message(message)
    _narrate_preprocessing(log, message, processed)

    rounds = None if all_rounds else frozenset(config.detailed_rounds)
    state = H_INITIAL
    for index, block in enumerate(processed.blocks):
        trace: List[RoundState] = []
        new_state = compress_block(state, block, trace)
        _narrate_block(log, index, len(processed.blocks), block, state, new_state, trace, rounds)
        state = new_state

    digest = words_to_hex(state)
    reference = reference_sha256_hex(message)

    log.section("Final Hash")
    log.add("SHA-256", "H[0] || H[1] || ... || H[7]", digest, details=_state_lines(state))
    log.add("Reference check", "cryptography SHA-256 of the same bytes", reference,
            details=["✓ Match" if reference == digest else "✗ Mismatch"])

    result.success = reference == digest
    result.hash = digest
    result.hash_words = [format_word(word) for word in state]
    result.reference_hash = reference
    result.block_count = len(processed.blocks)
    result.steps = log.steps

    if not result.success:
        logger.warning("SHA-256 digest %s differs from reference %s", digest, reference)
    return result


def run_sha256_demo_text(text: str, all_rounds: bool = False,
                         config: DemoConfig = DEFAULT_CONFIG) -> Sha256DemoResult:
    """Hash the UTF-8 encoding of text and narrate every step."""
    return run_sha256_demo(text.encode('utf-8'), text=text, all_rounds=all_rounds, config=config)
