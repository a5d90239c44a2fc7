"""Common output formatting utilities."""


def format_bytes_as_hex(data: bytes) -> str:
    """Format bytes as hex string (e.g. b'\\xab\\xcd' -> 'abcd')."""
    return data.hex()


def format_bytes_list(data: bytes) -> str:
    """Format bytes as a bracketed list of hex pairs: [61, 62, 63]."""
    return "[" + ", ".join(f"{b:02x}" for b in data) + "]"


def format_word(word: int) -> str:
    """Format a 32-bit word as 0x-prefixed, zero-padded hex."""
    return f"0x{word:08x}"


def shorten(value: str, limit: int = 48) -> str:
    """Abbreviate long numbers/strings for one-line display."""
    if len(value) <= limit:
        return value
    keep = (limit - 3) // 2
    return f"{value[:keep]}...{value[-keep:]} ({len(value)} digits)"
