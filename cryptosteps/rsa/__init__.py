# RSA Module
"""
RSA implementations including:
- Key derivation from two primes, generated large keys, PEM export - keys.py
- Encryption / decryption - encryption.py
- Text packing and PKCS#1 v1.5 style padding - text_encoding.py
- Input validation - validation.py
- Narrated demos (fixed-width and arbitrary precision) - demo.py
"""

from .keys import (
    RSAPublicKey,
    RSAPrivateKey,
    RSAKeyPair,
    KeyGenerationResult,
    find_exponent_pair,
    generate_keypair,
    generate_large_keypair,
)

from .encryption import encrypt, decrypt

from .text_encoding import (
    text_to_number,
    number_to_text,
    pkcs1_pad,
    pkcs1_unpad,
    max_payload_length,
)

from .demo import (
    RsaDemoResult,
    run_rsa_demo,
    run_rsa_demo_text,
    run_large_rsa_demo,
)

__all__ = [
    # Keys
    'RSAPublicKey',
    'RSAPrivateKey',
    'RSAKeyPair',
    'KeyGenerationResult',
    'find_exponent_pair',
    'generate_keypair',
    'generate_large_keypair',
    # Cipher
    'encrypt',
    'decrypt',
    # Text encoding
    'text_to_number',
    'number_to_text',
    'pkcs1_pad',
    'pkcs1_unpad',
    'max_payload_length',
    # Demos
    'RsaDemoResult',
    'run_rsa_demo',
    'run_rsa_demo_text',
    'run_large_rsa_demo',
]
