"""
SHA-256 Hash Implementation (From Scratch)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-4.
This implementation avoids using hashlib and builds the algorithm from scratch.

Components:
- Preprocessing: Pads message to multiple of 512 bits and splits it into
  blocks of sixteen 32-bit words
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds of compression function
- Output: 256-bit (32-byte) digest

The block-level functions are public so the demo can narrate every step;
compress_block() optionally records the working variables of each round.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple


# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL: Tuple[int, ...] = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19,
)

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K: Tuple[int, ...] = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2,
)

# Prime whose square root gives each initial hash word (for narration)
H_INITIAL_PRIMES: Tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19)

# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF

BLOCK_SIZE = 64  # bytes
WORDS_PER_BLOCK = 16
ROUNDS = 64
LENGTH_FIELD_SIZE = 8  # bytes


class RoundState(NamedTuple):
    """Working variables after one compression round."""
    t: int
    t1: int
    t2: int
    a: int
    b: int
    c: int
    d: int
    e: int
    f: int
    g: int
    h: int


@dataclass(frozen=True)
class ProcessedMessage:
    """Result of padding a message and splitting it into blocks."""
    padded: bytes
    blocks: Tuple[Tuple[int, ...], ...]
    original_length: int  # bytes

    @property
    def bit_length(self) -> int:
        return self.original_length * 8

    @property
    def zero_padding_length(self) -> int:
        """Number of 0x00 bytes inserted between 0x80 and the length field."""
        return len(self.padded) - self.original_length - 1 - LENGTH_FIELD_SIZE


def right_rotate(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return (x & y) ^ (~x & MASK_32 & z)


def maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return right_rotate(x, 7) ^ right_rotate(x, 18) ^ (x >> 3)


def sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return right_rotate(x, 17) ^ right_rotate(x, 19) ^ (x >> 10)


def big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in compression."""
    return right_rotate(x, 2) ^ right_rotate(x, 13) ^ right_rotate(x, 22)


def big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in compression."""
    return right_rotate(x, 6) ^ right_rotate(x, 11) ^ right_rotate(x, 25)


def pad_message(data: bytes) -> bytes:
    """
    Pad the message according to SHA-256 specification.

    Padding rules:
    1. Append bit '1' to message (0x80 byte)
    2. Append zeros until message length ≡ 448 (mod 512)
    3. Append original message length as 64-bit big-endian integer

    Args:
        data: The original message bytes (may be empty)

    Returns:
        Padded message as bytes (length is multiple of 64 bytes / 512 bits)
    """
    original_bit_length = len(data) * 8

    padded = bytes(data) + b'\x80'

    # We need: (current_length + padding_zeros) % 64 == 56
    padding_length = (56 - (len(padded) % BLOCK_SIZE)) % BLOCK_SIZE
    padded += b'\x00' * padding_length

    padded += original_bit_length.to_bytes(LENGTH_FIELD_SIZE, byteorder='big')

    return padded


def bytes_to_words(chunk: bytes) -> List[int]:
    """Convert a byte string into big-endian 32-bit words."""
    return [
        int.from_bytes(chunk[i:i + 4], byteorder='big')
        for i in range(0, len(chunk), 4)
    ]


def words_to_hex(words: Sequence[int]) -> str:
    """Render 32-bit words as concatenated zero-padded lowercase hex."""
    return ''.join(f"{word:08x}" for word in words)


def preprocess_message(data: bytes) -> ProcessedMessage:
    """
    Pad the message and group it into 512-bit blocks of 16 words.

    Total for any input, including the empty message.
    """
    padded = pad_message(data)
    words = bytes_to_words(padded)
    blocks = tuple(
        tuple(words[i:i + WORDS_PER_BLOCK])
        for i in range(0, len(words), WORDS_PER_BLOCK)
    )
    return ProcessedMessage(padded=padded, blocks=blocks, original_length=len(data))


def message_schedule(block: Sequence[int]) -> List[int]:
    """
    Expand 16 words into 64 words for the message schedule.

    For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    if len(block) != WORDS_PER_BLOCK:
        raise ValueError(f"Block must contain {WORDS_PER_BLOCK} words, got {len(block)}")

    w = list(block)
    for i in range(16, ROUNDS):
        s0 = sigma0(w[i - 15])
        s1 = sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def compress_block(state: Sequence[int], block: Sequence[int],
                   trace: Optional[List[RoundState]] = None) -> Tuple[int, ...]:
    """
    Perform 64 rounds of compression for one block.

    Args:
        state: Current hash state (8 32-bit words)
        block: One block of 16 32-bit words
        trace: If given, one RoundState is appended per round

    Returns:
        Updated hash state
    """
    w = message_schedule(block)

    a, b, c, d, e, f, g, h = state

    for i in range(ROUNDS):
        t1 = (h + big_sigma1(e) + ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (big_sigma0(a) + maj(a, b, c)) & MASK_32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

        if trace is not None:
            trace.append(RoundState(i, t1, t2, a, b, c, d, e, f, g, h))

    # Add compressed chunk to current hash value
    return tuple(
        (old + new) & MASK_32
        for old, new in zip(state, (a, b, c, d, e, f, g, h))
    )


def sha256_words(data: bytes) -> Tuple[int, ...]:
    """Compute the final SHA-256 state (8 words) of the input data."""
    processed = preprocess_message(data)

    state = H_INITIAL
    for block in processed.blocks:
        state = compress_block(state, block)

    return state


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: Input bytes to hash

    Returns:
        256-bit (32-byte) digest as bytes

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return b''.join(word.to_bytes(4, byteorder='big') for word in sha256_words(data))


def sha256_hex(data: bytes) -> str:
    """
    Compute SHA-256 hash and return as hexadecimal string.

    Returns:
        64-character lowercase hexadecimal string
    """
    return words_to_hex(sha256_words(data))


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """Compute SHA-256 hash of a string."""
    return sha256(text.encode(encoding))
