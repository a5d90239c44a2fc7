"""
cryptosteps - step-by-step demonstrations of textbook cryptography.

Modules:
- core_crypto: modular arithmetic toolkit and from-scratch SHA-256
- rsa: key derivation, encryption, text encoding and the RSA demos
- hashing: the narrated SHA-256 demo
- report: console and JSON renderers
"""

__version__ = "0.1.0"
