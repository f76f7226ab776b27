"""Credential and domain resolution for oktaflow.

Nothing is ever written to disk: values come from explicit arguments or the
environment, and are held only for the call that needs them.
"""

from __future__ import annotations

import os
from typing import Optional

from .config import DOMAIN_ENV_VAR, PASSWORD_ENV_VAR, USERNAME_ENV_VAR, sanitize_domain
from .types import Credential


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def resolve_domain(domain: Optional[str] = None) -> Optional[str]:
    """Resolve the org domain.

    Order: explicit parameter > OKTA_DOMAIN env var.
    Returns None if nothing is set (caller decides error behavior).
    """
    if _present(domain):
        return sanitize_domain(domain)

    env_domain = os.environ.get(DOMAIN_ENV_VAR)
    if _present(env_domain):
        return sanitize_domain(env_domain)

    return None


def resolve_credential(username: Optional[str] = None, password: Optional[str] = None) -> Optional[Credential]:
    """Resolve a credential, field by field.

    Order per field: explicit parameter > OKTA_USERNAME / OKTA_PASSWORD env var.
    Returns None unless both a username and a password are found.
    """
    if not _present(username):
        username = os.environ.get(USERNAME_ENV_VAR)
    if not password:
        password = os.environ.get(PASSWORD_ENV_VAR)

    if not _present(username) or not password:
        return None
    return Credential(username=username.strip(), password=password)
