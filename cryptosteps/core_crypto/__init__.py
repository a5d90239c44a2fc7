# Core Cryptography Module
"""
Core numeric engines:
- Modular arithmetic toolkit (extended GCD, inverse, square-and-multiply,
  trial division, Miller-Rabin, prime generation) - rsa_math.py
- SHA-256 preprocessing and compression - sha256.py
"""
