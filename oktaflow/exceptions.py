"""Custom exceptions raised by oktaflow."""

from __future__ import annotations

from typing import Optional, Sequence


class OktaFlowError(Exception):
    """Base exception for all oktaflow failures."""


class ConfigurationError(OktaFlowError):
    """Raised when a domain or credential is missing from arguments and environment."""


class TransportError(OktaFlowError):
    """Raised when the identity provider cannot be reached or answers at the HTTP layer."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedResponseError(OktaFlowError):
    """Raised when a provider response does not match the expected schema."""


class RejectedError(OktaFlowError):
    """Raised when the provider explicitly denies the request.

    ``status`` is the upstream status string (``LOCKED_OUT``, ``Forbidden``, ...)
    exactly as the provider reported it.
    """

    def __init__(self, status: str, status_code: Optional[int] = None):
        super().__init__(f"Request rejected by identity provider: {status}")
        self.status = status
        self.status_code = status_code


class FactorRejectedError(RejectedError):
    """Raised when a factor verification is rejected and the policy is fail-fast."""


class NoSuitableFactorError(OktaFlowError):
    """Raised when none of the offered MFA factors matches the requested type."""

    def __init__(self, mfa_type: str, offered: Sequence[str] = ()):
        offered_text = ", ".join(offered) if offered else "none"
        super().__init__(f"No usable MFA factor of type {mfa_type!r} (offered: {offered_text})")
        self.mfa_type = mfa_type
        self.offered = tuple(offered)


class PasscodeRequiredError(OktaFlowError):
    """Raised when a factor needs a passcode and neither a code nor a prompt was given."""


class VerifyTimeoutError(OktaFlowError):
    """Raised when the factor verify loop exhausts its attempt or time budget."""

    def __init__(self, attempts: int, last_status: Optional[str] = None):
        message = f"MFA verification did not complete after {attempts} attempt(s)"
        if last_status:
            message += f" (last status: {last_status})"
        super().__init__(message)
        self.attempts = attempts
        self.last_status = last_status


class NoAssertionFieldError(OktaFlowError):
    """Raised when the application page carries no input field to read the assertion from."""
