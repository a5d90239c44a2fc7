"""
RSA encryption and decryption.

Each operation is a single modular exponentiation:
    c = m^e mod n
    m = c^d mod n

No bounds checking happens here: callers validate 0 <= m < n first
(see cryptosteps.rsa.validation).
"""

from ..core_crypto.rsa_math import mod_exp
from .keys import RSAPrivateKey, RSAPublicKey


def encrypt(message: int, public_key: RSAPublicKey) -> int:
    """Encrypt an integer message: c = m^e mod n."""
    return mod_exp(message, public_key.e, public_key.n)


def decrypt(ciphertext: int, private_key: RSAPrivateKey) -> int:
    """Decrypt an integer ciphertext: m = c^d mod n."""
    return mod_exp(ciphertext, private_key.d, private_key.n)
