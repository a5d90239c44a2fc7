"""
cryptosteps - Main Entry Point

Command-line interface for the step-by-step RSA and SHA-256 demos.
"""

from typing import Optional

import typer
from rich.console import Console

from .common.errors import FailureReason
from .common.logging import configure_logging
from .common.validation import parse_hex_bytes
from .config import DEFAULT_CONFIG
from .core_crypto.rsa_math import is_prime, is_probably_prime_miller_rabin
from .hashing.demo import Sha256DemoResult, run_sha256_demo, run_sha256_demo_text
from .report.console import render_result
from .report.structured import render_json
from .rsa.demo import run_large_rsa_demo, run_rsa_demo, run_rsa_demo_text


app = typer.Typer(
    name="cryptosteps",
    help="Step-by-step demonstrations of RSA and SHA-256",
    add_completion=False,
)
console = Console()
error_console = Console(stderr=True)

# Trial division is used up to this bound, Miller-Rabin above it
TRIAL_DIVISION_LIMIT = 1 << 40


@app.callback()
def main_options(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Step-by-step demonstrations of RSA and SHA-256."""
    configure_logging(verbose)
    ctx.obj = {'json': json_output}


def _emit(ctx: typer.Context, result) -> None:
    """Render a result and exit non-zero if the run failed."""
    if ctx.obj and ctx.obj.get('json'):
        typer.echo(render_json(result))
    else:
        render_result(result, console)
    if not result.success:
        raise typer.Exit(1)


@app.command()
def rsa(
    ctx: typer.Context,
    message: int = typer.Argument(..., min=0, help="Message as a non-negative integer"),
    p: int = typer.Option(..., "-p", min=0, help="First prime"),
    q: int = typer.Option(..., "-q", min=0, help="Second prime"),
):
    """Encrypt and decrypt a number with textbook RSA (64-bit values)."""
    _emit(ctx, run_rsa_demo(message, p, q))


@app.command("rsa-text")
def rsa_text(
    ctx: typer.Context,
    text: str = typer.Argument(..., help=f"Text of at most {DEFAULT_CONFIG.max_text_length} bytes"),
    p: int = typer.Option(..., "-p", min=0, help="First prime"),
    q: int = typer.Option(..., "-q", min=0, help="Second prime"),
):
    """Encrypt and decrypt a short text with textbook RSA (64-bit values)."""
    _emit(ctx, run_rsa_demo_text(text, p, q))


@app.command("rsa-big")
def rsa_big(
    ctx: typer.Context,
    bits: int = typer.Option(
        DEFAULT_CONFIG.default_prime_bits, "--bits", "-b",
        min=DEFAULT_CONFIG.min_prime_bits, max=DEFAULT_CONFIG.max_prime_bits,
        help="Bit length of each generated prime",
    ),
    message: Optional[int] = typer.Option(None, "--message", "-m", min=0, help="Numeric message"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Text message (PKCS#1 v1.5 padded)"),
    pem: bool = typer.Option(False, "--pem", help="Also export the public key as PEM"),
):
    """RSA with generated arbitrary-precision primes (Miller-Rabin)."""
    if (message is None) == (text is None):
        error_console.print("[red]Provide exactly one of --message or --text[/red]")
        raise typer.Exit(2)
    _emit(ctx, run_large_rsa_demo(bits, message=message, text=text, export_pem=pem))


@app.command()
def sha256(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Text to hash (UTF-8)"),
    hex_input: Optional[str] = typer.Option(None, "--hex", help="Bytes to hash, as hex"),
    all_rounds: bool = typer.Option(False, "--all-rounds", help="Show all 64 rounds per block"),
):
    """Hash a message with SHA-256, showing padding, schedule and rounds."""
    if (text is None) == (hex_input is None):
        error_console.print("[red]Provide either TEXT or --hex[/red]")
        raise typer.Exit(2)

    if hex_input is not None:
        data = parse_hex_bytes(hex_input)
        if data is None:
            result = Sha256DemoResult(
                success=False,
                original_message=hex_input,
                message_bytes=b"",
                error=FailureReason.INVALID_HEX,
                error_message=f"Not a valid hex string: {hex_input!r}",
            )
            _emit(ctx, result)
            return
        _emit(ctx, run_sha256_demo(data, all_rounds=all_rounds))
        return

    _emit(ctx, run_sha256_demo_text(text, all_rounds=all_rounds))


@app.command("is-prime")
def is_prime_command(
    n: int = typer.Argument(..., help="Number to test"),
):
    """Check whether a number is prime."""
    if n < TRIAL_DIVISION_LIMIT:
        prime = is_prime(n)
        method = "trial division"
    else:
        prime = is_probably_prime_miller_rabin(n, DEFAULT_CONFIG.miller_rabin_rounds)
        method = f"Miller-Rabin, {DEFAULT_CONFIG.miller_rabin_rounds} rounds"

    if prime:
        console.print(f"[green]{n} is prime[/green] ({method})", soft_wrap=True)
    else:
        console.print(f"[red]{n} is not prime[/red] ({method})", soft_wrap=True)
        raise typer.Exit(1)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
