"""
Text <-> integer encodings for RSA.

RSA only operates on numbers, so text has to become one first.

Fixed-width variant: the UTF-8 bytes are packed big-endian into one
integer of at most 8 bytes ("Hi" -> (72 << 8) | 105 = 18537).

Arbitrary-precision variant: the bytes are wrapped in a PKCS#1 v1.5
style encryption block before packing:

    0x00 || 0x02 || PS (>= 8 random non-zero bytes) || 0x00 || M

which costs 11 bytes of the modulus.
"""

import random
import secrets
from typing import Optional

from ..config import DEFAULT_CONFIG

PKCS_OVERHEAD = 11
_MIN_PADDING = 8


def text_to_number(text: str, max_length: int = DEFAULT_CONFIG.max_text_length) -> Optional[int]:
    """
    Pack text into an integer, one byte per 8 bits, big-endian.

    Returns:
        The packed integer, or None if the text is empty or its UTF-8
        encoding is longer than max_length bytes
    """
    data = text.encode('utf-8')
    if not data or len(data) > max_length:
        return None

    number = 0
    for byte in data:
        number = (number << 8) | byte
    return number


def number_to_text(number: int, length: int) -> str:
    """
    Unpack the low `length` bytes of number back into text.

    Reverses text_to_number(); `length` is the byte length of the original
    text. Bytes that are not valid UTF-8 become U+FFFD.
    """
    data = bytearray()
    for _ in range(length):
        data.append(number & 0xFF)
        number >>= 8
    data.reverse()
    return bytes(data).decode('utf-8', errors='replace')


def max_payload_length(key_bytes: int, overhead: int = PKCS_OVERHEAD) -> int:
    """Largest message (in bytes) that fits a padded block of key_bytes."""
    return max(0, key_bytes - overhead)


def pkcs1_pad(data: bytes, key_bytes: int, rng: Optional[random.Random] = None) -> bytes:
    """
    Wrap data in a PKCS#1 v1.5 type 2 block of exactly key_bytes bytes.

    Raises:
        ValueError: If data does not fit
    """
    if len(data) > max_payload_length(key_bytes):
        raise ValueError(
            f"Data too long for key size ({len(data)} > {max_payload_length(key_bytes)} bytes)"
        )

    if rng is None:
        rng = secrets.SystemRandom()

    padding_length = key_bytes - 3 - len(data)
    padding = bytes(rng.randint(1, 255) for _ in range(padding_length))
    return b'\x00\x02' + padding + b'\x00' + data


def pkcs1_unpad(block: bytes) -> Optional[bytes]:
    """
    Strip a PKCS#1 v1.5 type 2 block.

    Returns:
        The payload, or None if the block is malformed
    """
    if len(block) < PKCS_OVERHEAD or block[0:2] != b'\x00\x02':
        return None

    separator = block.find(b'\x00', 2)
    if separator < 2 + _MIN_PADDING:
        return None
    return block[separator + 1:]
