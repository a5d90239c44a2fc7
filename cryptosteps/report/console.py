"""
Console renderer.

Prints a demo result's steps with rich: one rule per section, each step
as "title: result" with its formula and detail lines underneath. All
step text is escaped, since formulas such as "H[i]" would otherwise be
read as rich markup.
"""

from typing import Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from ..common.errors import FailureReason
from ..common.output import shorten
from ..common.steps import Step
from ..hashing.demo import Sha256DemoResult
from ..rsa.demo import RsaDemoResult


PRIME_TIP = "Good small primes: 3, 5, 7, 11, 13, 17, 19, 23, 29, 31"

TIPS = {
    FailureReason.NOT_PRIME: PRIME_TIP,
    FailureReason.PRIMES_NOT_DISTINCT: PRIME_TIP,
    FailureReason.NO_SUITABLE_EXPONENT: "Try another pair of primes, e.g. 61 and 53",
    FailureReason.VALUE_TOO_WIDE: "Keep p and q below 2^32 (e.g. 4294967291 and 4294967279)",
    FailureReason.TEXT_TOO_LONG: "Use a shorter text or larger primes",
    FailureReason.MESSAGE_EMPTY: "Provide at least one byte to process",
    FailureReason.MESSAGE_TOO_LONG: "Shorten the message",
    FailureReason.INVALID_HEX: "Use pairs of hex digits, e.g. 'de ad be ef'",
}

MATHEMATICAL_FOUNDATION = (
    "RSA works because of Euler's theorem: if gcd(m,n)=1, then m^φ(n) ≡ 1 (mod n)",
    "Since e×d ≡ 1 (mod φ(n)), we have: m^(e×d) ≡ m (mod n)",
)

TEXT_ENCODING_NOTE = (
    "RSA is a mathematical algorithm that ONLY works with numbers.",
    "Any text must be converted to a number first:",
    "1. Each character → byte value (H=72, i=105)",
    "2. Bytes combined into one number: (72 << 8) | 105 = 18537",
    "3. RSA encrypts the NUMBER: 18537^e mod n",
    "4. After decryption, convert the number back to text",
)


def tip_for(reason: Optional[FailureReason], is_text: bool = False) -> str:
    if reason is FailureReason.MESSAGE_TOO_LARGE:
        return "Use larger primes or shorter text" if is_text else \
            "Use larger primes or a smaller message"
    return TIPS.get(reason, "")


def render_step(step: Step, console: Console) -> None:
    result = shorten(step.result, 96)
    if result:
        console.print(f"  [bold]{escape(step.title)}[/bold]: {escape(result)}", soft_wrap=True)
    else:
        console.print(f"  [bold]{escape(step.title)}[/bold]")
    if step.formula:
        console.print(f"    [dim]{escape(step.formula)}[/dim]", soft_wrap=True)
    for line in step.details:
        console.print(f"    {escape(line)}", soft_wrap=True)


def render_steps(steps, console: Console) -> None:
    section = None
    for step in steps:
        if step.section != section:
            section = step.section
            console.print()
            console.print(Rule(escape(section or "")))
        render_step(step, console)


def render_error(message: str, tip: str, console: Console) -> None:
    console.print(f"\n[red]❌ Error: {escape(message)}[/red]")
    if tip:
        console.print(f"[yellow]💡 Tip: {escape(tip)}[/yellow]")


def render_rsa_result(result: RsaDemoResult, console: Console) -> None:
    if result.is_text:
        console.print("🔐 RSA Text Encryption Demo", style="bold")
        console.print(f"Text: \"{escape(result.original_message)}\"")
    else:
        console.print("🔐 RSA Encryption Algorithm Demo", style="bold")
        console.print(f"Message (m): {escape(result.original_message)}")
    console.print(f"Variant: {result.variant}")

    render_steps(result.steps, console)

    if result.error is not None:
        render_error(result.error_message, tip_for(result.error, result.is_text), console)
        return

    if result.success:
        console.print("\n[green]✅ RSA encryption/decryption successful![/green]")
    else:
        console.print("\n[red]❌ RSA encryption/decryption failed![/red]")

    console.print("\n📚 Mathematical Foundation:")
    for line in MATHEMATICAL_FOUNDATION:
        console.print(line)

    if result.is_text:
        console.print("\n💡 Text Encoding Explained:")
        for line in TEXT_ENCODING_NOTE:
            console.print(f"   {line}")


def render_sha256_result(result: Sha256DemoResult, console: Console) -> None:
    console.print("🔐 SHA-256 Hash Algorithm Demo", style="bold")
    console.print(f"Message: \"{escape(result.original_message)}\"", soft_wrap=True)
    console.print(f"Message length: {len(result.message_bytes)} bytes")

    if result.error is not None:
        render_error(result.error_message, tip_for(result.error), console)
        return

    render_steps(result.steps, console)

    if result.success:
        console.print("\n[green]✅ SHA-256 hash computation completed![/green]")
    else:
        console.print("\n[red]❌ SHA-256 digest does not match the reference![/red]")
    console.print(f"SHA-256: {result.hash}", soft_wrap=True)


def render_result(result: Union[RsaDemoResult, Sha256DemoResult],
                  console: Optional[Console] = None) -> None:
    """Render any demo result to the console."""
    if console is None:
        console = Console()
    if isinstance(result, RsaDemoResult):
        render_rsa_result(result, console)
    elif isinstance(result, Sha256DemoResult):
        render_sha256_result(result, console)
    else:
        raise TypeError(f"Cannot render {type(result).__name__}")
