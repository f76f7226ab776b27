"""CLI command modules."""

from __future__ import annotations

import os

import typer
from rich.console import Console

from oktaflow.config import USERNAME_ENV_VAR
from oktaflow.credentials import resolve_credential
from oktaflow.types import Credential, Factor

from ..constants import PASSCODE_PROMPT, PASSWORD_PROMPT, USERNAME_PROMPT

_console = Console(stderr=True)


def prompt_passcode(factor: Factor) -> str:
    """Ask the user for the passcode of an MFA factor."""
    return typer.prompt(PASSCODE_PROMPT.format(factor_type=factor.factor_type), hide_input=True)


def get_credential(username: str | None) -> Credential:
    """Resolve a credential from options and environment, prompting for what is missing."""
    credential = resolve_credential(username)
    if credential:
        return credential

    username = username or os.environ.get(USERNAME_ENV_VAR) or typer.prompt(USERNAME_PROMPT)
    password = typer.prompt(PASSWORD_PROMPT, hide_input=True)
    if not username or not password:
        _console.print("[red]A username and password are required.[/red]")
        raise typer.Exit(1)
    return Credential(username=username, password=password)
