"""Synchronous client composing authentication and assertion retrieval."""

from __future__ import annotations

from typing import Any

import httpx

from .assertion import AssertionFetcher
from .authenticator import Authenticator, PasscodePrompt, validate_verify_options
from .config import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_MFA_TYPE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    TransportConfig,
)
from .credentials import resolve_credential, resolve_domain
from .exceptions import ConfigurationError
from .types import Credential, RejectedPolicy


class OktaClient:
    """Client for one identity provider org.

    Example:
        >>> from oktaflow import Credential, OktaClient
        >>> with OktaClient("example.okta.com") as client:
        ...     token = client.authenticate(Credential("me", "secret"), mfa_type="push")
        ...     assertion = client.fetch_assertion("https://example.okta.com/home/app/123", token)

    Each client owns its HTTP connection pool and TLS settings; nothing is
    shared between clients and no token is kept between calls.
    """

    def __init__(
        self,
        domain: str | None = None,
        *,
        transport: TransportConfig | None = None,
        prompt: PasscodePrompt | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
        max_wait: float | None = DEFAULT_MAX_WAIT_SECONDS,
        on_rejected: RejectedPolicy = RejectedPolicy.RETRY,
    ) -> None:
        """Initialize the client.

        Args:
            domain: Org host name. If not provided, reads from the OKTA_DOMAIN
                environment variable.
            transport: Timeout, minimum TLS version and certificate verification.
            prompt: Called with the selected factor when a passcode is needed.
            poll_interval: Seconds between polls of a WAITING factor.
            max_attempts: Maximum verify calls per authentication (None for no cap).
            max_wait: Maximum seconds in the verify loop (None for no cap).
            on_rejected: Policy for REJECTED factor results.

        Raises:
            ConfigurationError: If no domain is provided or found in environment.
            ValueError: If the verify loop settings are out of range.
        """
        resolved = resolve_domain(domain)
        if not resolved:
            raise ConfigurationError("No domain provided. Pass domain or set the OKTA_DOMAIN environment variable.")

        validate_verify_options(poll_interval, max_attempts, max_wait)
        on_rejected = RejectedPolicy(on_rejected)

        self._domain = resolved
        self._transport = transport or TransportConfig()
        self._client = httpx.Client(
            timeout=self._transport.timeout,
            verify=self._transport.ssl_context(),
            follow_redirects=False,
        )
        self._authenticator = Authenticator(
            self._client,
            prompt=prompt,
            poll_interval=poll_interval,
            max_attempts=max_attempts,
            max_wait=max_wait,
            on_rejected=on_rejected,
        )
        self._fetcher = AssertionFetcher(self._client)

    @property
    def domain(self) -> str:
        return self._domain

    def authenticate(
        self,
        credential: Credential | None = None,
        mfa_type: str = DEFAULT_MFA_TYPE,
        mfa_code: str | None = None,
    ) -> str:
        """Authenticate and return a session token.

        Args:
            credential: Username and password. If not provided, reads from the
                OKTA_USERNAME and OKTA_PASSWORD environment variables.
            mfa_type: Factor type to verify if MFA is required.
            mfa_code: Passcode for code-based factors.

        Raises:
            ConfigurationError: If no credential is provided or found in environment.
        """
        credential = credential or resolve_credential()
        if credential is None:
            raise ConfigurationError(
                "No credential provided. Pass credential or set OKTA_USERNAME and OKTA_PASSWORD."
            )
        return self._authenticator.authenticate(self._domain, credential, mfa_type=mfa_type, mfa_code=mfa_code)

    def fetch_assertion(self, app_uri: str, session_token: str, field_name: str | None = None) -> str:
        """Exchange a session token for the application's assertion."""
        return self._fetcher.fetch_assertion(app_uri, session_token, field_name=field_name)

    def close(self) -> None:
        """Release the underlying HTTP client resources."""
        self._client.close()

    def __enter__(self) -> OktaClient:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        self.close()


def authenticate(
    domain: str,
    credential: Credential,
    mfa_type: str = DEFAULT_MFA_TYPE,
    mfa_code: str | None = None,
    **options: Any,
) -> str:
    """One-shot authentication with a throwaway client. ``options`` go to OktaClient."""
    with OktaClient(domain, **options) as client:
        return client.authenticate(credential, mfa_type=mfa_type, mfa_code=mfa_code)


def fetch_assertion(
    app_uri: str,
    session_token: str,
    field_name: str | None = None,
    *,
    transport: TransportConfig | None = None,
) -> str:
    """One-shot assertion fetch with a throwaway HTTP client."""
    transport = transport or TransportConfig()
    with httpx.Client(timeout=transport.timeout, verify=transport.ssl_context()) as http:
        return AssertionFetcher(http).fetch_assertion(app_uri, session_token, field_name=field_name)
