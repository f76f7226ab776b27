"""Authentication commands for the oktaflow CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from oktaflow.client import OktaClient
from oktaflow.config import DEFAULT_MAX_WAIT_SECONDS, DEFAULT_MFA_TYPE, DEFAULT_POLL_INTERVAL_SECONDS
from oktaflow.exceptions import OktaFlowError
from oktaflow.types import RejectedPolicy

from . import get_credential, prompt_passcode

console = Console(stderr=True)

DomainOption = typer.Option(None, "--domain", "-d", envvar="OKTA_DOMAIN", help="Org domain, e.g. example.okta.com")
UsernameOption = typer.Option(None, "--username", "-u", help="Username (default: OKTA_USERNAME or prompt)")
MfaTypeOption = typer.Option(DEFAULT_MFA_TYPE, "--mfa-type", help="push, sms, call or token:software:totp")
MfaCodeOption = typer.Option(None, "--mfa-code", help="Passcode for code-based factors")
PollIntervalOption = typer.Option(DEFAULT_POLL_INTERVAL_SECONDS, "--poll-interval", help="Seconds between push polls")
MaxWaitOption = typer.Option(DEFAULT_MAX_WAIT_SECONDS, "--max-wait", help="Give up MFA verification after this many seconds")
FailOnRejectOption = typer.Option(False, "--fail-on-reject", help="Stop at the first rejected factor verification")


def _open_client(domain: str | None, poll_interval: float, max_wait: float, fail_on_reject: bool) -> OktaClient:
    try:
        return OktaClient(
            domain,
            prompt=prompt_passcode,
            poll_interval=poll_interval,
            max_wait=max_wait,
            on_rejected=RejectedPolicy.FAIL_FAST if fail_on_reject else RejectedPolicy.RETRY,
        )
    except OktaFlowError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def login(
    domain: str = DomainOption,
    username: str = UsernameOption,
    mfa_type: str = MfaTypeOption,
    mfa_code: str = MfaCodeOption,
    poll_interval: float = PollIntervalOption,
    max_wait: float = MaxWaitOption,
    fail_on_reject: bool = FailOnRejectOption,
) -> None:
    """Authenticate and print a session token."""
    client = _open_client(domain, poll_interval, max_wait, fail_on_reject)

    try:
        credential = get_credential(username)
        console.print(f"[dim]Authenticating against {client.domain}...[/dim]")
        token = client.authenticate(credential, mfa_type=mfa_type, mfa_code=mfa_code)
    except OktaFlowError as e:
        console.print(f"[red]Authentication failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        client.close()

    console.print("[green]Authenticated.[/green]")
    typer.echo(token)


def assertion(
    app_uri: str = typer.Argument(help="Application embed link to exchange the session token at"),
    domain: str = DomainOption,
    username: str = UsernameOption,
    mfa_type: str = MfaTypeOption,
    mfa_code: str = MfaCodeOption,
    field_name: str = typer.Option(None, "--field-name", help="Read the input with this name instead of the first"),
    poll_interval: float = PollIntervalOption,
    max_wait: float = MaxWaitOption,
    fail_on_reject: bool = FailOnRejectOption,
) -> None:
    """Authenticate, then print the application's assertion."""
    client = _open_client(domain, poll_interval, max_wait, fail_on_reject)

    try:
        credential = get_credential(username)
        console.print(f"[dim]Authenticating against {client.domain}...[/dim]")
        token = client.authenticate(credential, mfa_type=mfa_type, mfa_code=mfa_code)
        result = client.fetch_assertion(app_uri, token, field_name=field_name)
    except OktaFlowError as e:
        console.print(f"[red]Could not get assertion: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        client.close()

    typer.echo(result)
