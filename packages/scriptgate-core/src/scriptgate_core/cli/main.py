"""Scriptgate CLI - static risk analysis and execution gating for scripts."""

import logging

import typer

from scriptgate_core.cli.scripts import scripts_app
from scriptgate_core.cli.signatures import signatures_app
from scriptgate_core.config import get_settings

app = typer.Typer(
    name="scriptgate",
    help="Static risk analysis and execution gating for automation scripts",
    no_args_is_help=True,
)

# Add command groups
app.add_typer(scripts_app, name="script")
app.add_typer(signatures_app, name="signature")


@app.callback()
def configure() -> None:
    """Configure logging from SCRIPTGATE_LOG_LEVEL."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
