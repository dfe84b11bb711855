"""Script signature CLI commands.

- sign: Hash a script and write the signature document
- verify: Check a script against a stored signature
"""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from scriptgate_core.cli.common import load_script
from scriptgate_core.config import get_settings
from scriptgate_core.exceptions import ScriptReadError, SignatureFormatError
from scriptgate_core.scripts import generate_signature, verify_signature
from scriptgate_core.types import Signature

signatures_app = typer.Typer(help="Sign and verify script content")


def load_signature(path: Path) -> Signature:
    """
    Load a signature document written by `sign`.

    Raises:
        SignatureFormatError: If the file is missing or not a signature
    """
    try:
        return Signature.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SignatureFormatError(path, e.strerror or str(e))
    except ValidationError as e:
        raise SignatureFormatError(path, f"{e.error_count()} validation error(s)")


@signatures_app.command("sign")
def sign(
    path: Path = typer.Argument(..., help="Script file to sign"),
    signed_by: Optional[str] = typer.Option(
        None, "--signed-by", "-s", help="Signer identity (default: SCRIPTGATE_DEFAULT_SIGNER)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write signature JSON to this file instead of stdout"
    ),
) -> None:
    """Generate a content signature for a script."""
    console = Console()
    try:
        content = load_script(path)
    except ScriptReadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    signature = generate_signature(content, signed_by or get_settings().default_signer)
    document = signature.model_dump_json(indent=2)

    if output is None:
        print(document)
        return

    output.write_text(document + "\n", encoding="utf-8")
    console.print(f"[green]Signature written to {output}[/green]")


@signatures_app.command("verify")
def verify(
    path: Path = typer.Argument(..., help="Script file to check"),
    signature_path: Path = typer.Argument(..., help="Signature JSON produced by sign"),
) -> None:
    """Verify a script against its signature (exit 0 = match, 1 = mismatch)."""
    console = Console()
    try:
        content = load_script(path)
        signature = load_signature(signature_path)
    except (ScriptReadError, SignatureFormatError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    if verify_signature(content, signature):
        console.print(f"[green]OK[/green] signed by {signature.signed_by} at {signature.timestamp.isoformat()}")
        return

    console.print("[red]MISMATCH[/red] content has changed since signing")
    raise typer.Exit(1)
