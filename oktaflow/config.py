"""Configuration helpers for oktaflow."""

from __future__ import annotations

import ssl
from dataclasses import dataclass
from typing import Union

AUTHN_PATH = "/api/v1/authn"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MFA_TYPE = "push"

# Verify loop bounds. The provider recommends polling push factors every few seconds.
DEFAULT_POLL_INTERVAL_SECONDS = 4.0
DEFAULT_MAX_ATTEMPTS = 60
DEFAULT_MAX_WAIT_SECONDS = 300.0

DOMAIN_ENV_VAR = "OKTA_DOMAIN"
USERNAME_ENV_VAR = "OKTA_USERNAME"
PASSWORD_ENV_VAR = "OKTA_PASSWORD"


@dataclass(frozen=True)
class TransportConfig:
    """Per-client transport settings.

    Each OktaClient builds its own SSL context from this, so the minimum TLS
    version never leaks into other clients or the rest of the process.
    """

    timeout: float = DEFAULT_TIMEOUT_SECONDS
    min_tls_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2
    verify: Union[bool, str] = True  # False, True, or a CA bundle path

    def ssl_context(self) -> ssl.SSLContext:
        if isinstance(self.verify, str):
            context = ssl.create_default_context(cafile=self.verify)
        else:
            context = ssl.create_default_context()
            if not self.verify:
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE
        context.minimum_version = self.min_tls_version
        return context


def sanitize_domain(domain: str) -> str:
    """Reduce ``https://example.okta.com/`` style input to a bare host name."""

    domain = domain.strip()
    for scheme in ("https://", "http://"):
        if domain.lower().startswith(scheme):
            domain = domain[len(scheme):]
    return domain.rstrip("/")


def build_authn_url(domain: str) -> str:
    """Build the primary authentication endpoint URL for an org domain."""

    return f"https://{sanitize_domain(domain)}{AUTHN_PATH}"


def _package_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("oktaflow")
    except PackageNotFoundError:
        return "0.1.0"


PACKAGE_VERSION = _package_version()
USER_AGENT = f"oktaflow/{PACKAGE_VERSION}"
