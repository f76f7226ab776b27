"""Main entry point for the oktaflow CLI."""

from __future__ import annotations

import logging

try:
    import typer
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    import sys

    print("oktaflow CLI requires extras: pip install oktaflow[cli]")
    sys.exit(1)

from .commands import auth
from .constants import LOG_FORMAT

app = typer.Typer(
    name="oktaflow",
    help="oktaflow CLI - Sign in with MFA and fetch application assertions",
    no_args_is_help=True,
)

app.command()(auth.login)
app.command()(auth.assertion)


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from oktaflow import __version__

        typer.echo(f"oktaflow {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP exchanges and MFA polling."),
) -> None:
    """oktaflow CLI root callback."""
    _ = version
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format=LOG_FORMAT,
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def version() -> None:
    """Show the CLI version."""
    from oktaflow import __version__

    typer.echo(f"oktaflow {__version__}")


if __name__ == "__main__":
    app()
