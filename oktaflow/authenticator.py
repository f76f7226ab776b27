"""Primary authentication and MFA factor verification.

Drives the authn state machine: username/password login, factor selection,
and the verify loop that polls asynchronous factors until the provider hands
back a session token. Never prints; diagnostics go through ``logging``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

import httpx

from ._http import build_headers, parse_authn_response, parse_verify_response
from .config import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_MFA_TYPE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    USER_AGENT,
    build_authn_url,
)
from .exceptions import (
    FactorRejectedError,
    NoSuitableFactorError,
    PasscodeRequiredError,
    RejectedError,
    TransportError,
    VerifyTimeoutError,
)
from .types import (
    AuthFailed,
    AuthSuccess,
    Credential,
    Factor,
    FactorType,
    RejectedPolicy,
    VerifyChallenge,
    VerifyRejected,
    VerifySuccess,
    VerifyWaiting,
)

logger = logging.getLogger(__name__)

PasscodePrompt = Callable[[Factor], str]


def select_factor(factors: Iterable[Factor], mfa_type: str) -> Optional[Factor]:
    """Return the first supported factor matching ``mfa_type``, in provider order."""
    for factor in factors:
        if factor.kind is FactorType.UNSUPPORTED:
            logger.debug("Skipping unsupported factor type %s", factor.factor_type)
            continue
        if factor.matches(mfa_type):
            return factor
    return None


def validate_verify_options(poll_interval: float, max_attempts: Optional[int], max_wait: Optional[float]) -> None:
    """Raise ValueError for verify loop settings that could never poll."""
    if max_attempts is not None and max_attempts < 1:
        raise ValueError("max_attempts must be at least 1 or None")
    if max_wait is not None and max_wait <= 0:
        raise ValueError("max_wait must be positive or None")
    if poll_interval < 0:
        raise ValueError("poll_interval must not be negative")


class Authenticator:
    """Exchange a username/password (and MFA) for a session token.

    Example:
        >>> with httpx.Client() as http:
        ...     auth = Authenticator(http, prompt=lambda factor: input("Code: "))
        ...     token = auth.authenticate("example.okta.com", Credential("me", "secret"))
    """

    def __init__(
        self,
        client: httpx.Client,
        *,
        prompt: Optional[PasscodePrompt] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
        max_wait: Optional[float] = DEFAULT_MAX_WAIT_SECONDS,
        on_rejected: RejectedPolicy = RejectedPolicy.RETRY,
        user_agent: str = USER_AGENT,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize the authenticator.

        Args:
            client: HTTP client used for every request.
            prompt: Called with the selected factor when a passcode is needed
                and none was passed to ``authenticate``.
            poll_interval: Seconds to sleep after a WAITING result or a transport error.
            max_attempts: Maximum verify calls per authentication, or None for no cap.
            max_wait: Maximum seconds spent in the verify loop, or None for no cap.
            on_rejected: RETRY re-issues the verify call after a REJECTED
                factor result; FAIL_FAST raises FactorRejectedError.
            user_agent: User-Agent header sent with each request.
            sleep: Blocking sleep used between polls (default: time.sleep).
            clock: Clock used for ``max_wait`` (default: time.monotonic).
        """
        validate_verify_options(poll_interval, max_attempts, max_wait)

        self._client = client
        self._prompt = prompt
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts
        self._max_wait = max_wait
        self._on_rejected = RejectedPolicy(on_rejected)
        self._headers = build_headers(user_agent)
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic

    def authenticate(
        self,
        domain: str,
        credential: Credential,
        mfa_type: str = DEFAULT_MFA_TYPE,
        mfa_code: Optional[str] = None,
    ) -> str:
        """Authenticate against ``domain`` and return a session token.

        Args:
            domain: Org host name, e.g. ``example.okta.com``.
            credential: Username and password.
            mfa_type: Factor type to use if MFA is required (``push``,
                ``sms``, ``call`` or ``token:software:totp``).
            mfa_code: Passcode for code-based factors. If omitted the prompt
                is asked when needed.

        Raises:
            TransportError: If the authn endpoint cannot be reached.
            RejectedError: If the provider denies the login.
            NoSuitableFactorError: If no offered factor matches ``mfa_type``.
            VerifyTimeoutError: If the verify loop exhausts its budget.
        """
        url = build_authn_url(domain)
        logger.debug("Starting primary authentication at %s", url)

        try:
            response = self._client.post(
                url,
                headers=self._headers,
                json={"username": credential.username, "password": credential.password},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach {url}: {e}") from e

        result = parse_authn_response(response)

        if isinstance(result, AuthSuccess):
            logger.info("Primary authentication succeeded without MFA")
            return result.session_token

        if isinstance(result, AuthFailed):
            raise RejectedError(result.status)

        factor = select_factor(result.factors, mfa_type)
        if factor is None:
            raise NoSuitableFactorError(mfa_type, [f.factor_type for f in result.factors])

        return self._verify(factor, result.state_token, mfa_code)

    def _ask_passcode(self, factor: Factor) -> str:
        if self._prompt is None:
            raise PasscodeRequiredError(
                f"Factor {factor.factor_type} needs a passcode: pass mfa_code or configure a prompt"
            )
        return self._prompt(factor)

    def _attempts_exhausted(self, attempts: int) -> bool:
        return self._max_attempts is not None and attempts >= self._max_attempts

    def _time_exhausted(self, started: float) -> bool:
        return self._max_wait is not None and self._clock() - started >= self._max_wait

    def _wait_before_retry(self, attempts: int, started: float) -> bool:
        """Sleep one poll interval, unless the budget is already spent.

        The budget is checked before sleeping, never after, so every sleep is
        followed by one more verify call.
        """
        if self._attempts_exhausted(attempts) or self._time_exhausted(started):
            return False
        self._sleep(self._poll_interval)
        return True

    def _verify(self, factor: Factor, state_token: str, mfa_code: Optional[str]) -> str:
        passcode = mfa_code
        if passcode is None and factor.requires_passcode:
            passcode = self._ask_passcode(factor)

        logger.info("Verifying %s factor %s", factor.factor_type, factor.id)

        started = self._clock()
        attempts = 0
        last_status: Optional[str] = None
        slept = False

        while True:
            if self._attempts_exhausted(attempts):
                break
            if not slept and self._time_exhausted(started):
                break
            slept = False

            attempts += 1
            payload = {"factorId": factor.id, "stateToken": state_token}
            if passcode is not None:
                payload["passCode"] = passcode

            try:
                response = self._client.post(factor.verify_href, headers=self._headers, json=payload)
            except httpx.HTTPError as e:
                last_status = type(e).__name__
                logger.warning("Verify attempt %d for factor %s failed: %s", attempts, factor.id, e)
                if not self._wait_before_retry(attempts, started):
                    break
                slept = True
                continue

            result = parse_verify_response(response)

            if isinstance(result, VerifySuccess):
                logger.info("Factor %s verified after %d attempt(s)", factor.id, attempts)
                return result.session_token

            if isinstance(result, VerifyWaiting):
                last_status = "WAITING"
                logger.debug("Factor %s is waiting, polling again in %.1fs", factor.id, self._poll_interval)
                if not self._wait_before_retry(attempts, started):
                    break
                slept = True
                continue

            if isinstance(result, VerifyChallenge) and passcode is None and factor.sends_challenge:
                last_status = "CHALLENGE"
                logger.info("Code sent for factor %s", factor.id)
                passcode = self._ask_passcode(factor)
                continue

            # REJECTED and other failures retry immediately, without sleeping.
            if isinstance(result, VerifyRejected):
                last_status = result.status
                logger.error("Factor %s verification was rejected", factor.id)
                if self._on_rejected is RejectedPolicy.FAIL_FAST:
                    raise FactorRejectedError(result.status, status_code=response.status_code)
                continue

            last_status = "CHALLENGE" if isinstance(result, VerifyChallenge) else result.status
            logger.error("Verify attempt %d for factor %s failed: %s", attempts, factor.id, last_status)

        raise VerifyTimeoutError(attempts, last_status)
