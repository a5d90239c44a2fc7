# SHA-256 Demo Module
"""
Step-by-step SHA-256 demo built on cryptosteps.core_crypto.sha256:
- Input validation - validation.py
- Narrated preprocessing and compression - demo.py
"""

from .demo import (
    Sha256DemoResult,
    reference_sha256_hex,
    run_sha256_demo,
    run_sha256_demo_text,
)
from .validation import validate_message

__all__ = [
    'Sha256DemoResult',
    'reference_sha256_hex',
    'run_sha256_demo',
    'run_sha256_demo_text',
    'validate_message',
]
