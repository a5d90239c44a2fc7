# cryptosteps Test Suite
"""
Test suite including:
- Unit tests for the numeric cores (modular arithmetic, SHA-256)
- RSA key derivation, encryption and text encoding
- Demo results, renderers and the CLI
- Invalid input handling

Run with: pytest
"""
