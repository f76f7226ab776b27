"""Shared HTTP helpers: request headers and response decoding.

Responses are decoded here, once, into the typed results of ``oktaflow.types``.
Anything that does not fit the expected shape raises MalformedResponseError.
"""

from __future__ import annotations

from typing import Any

import httpx

from .exceptions import MalformedResponseError, RejectedError, TransportError
from .types import (
    AuthenticationResult,
    AuthFailed,
    AuthSuccess,
    Factor,
    FactorType,
    MFARequired,
    VerifyAttemptResult,
    VerifyChallenge,
    VerifyFailure,
    VerifyRejected,
    VerifySuccess,
    VerifyWaiting,
)


def build_headers(user_agent: str) -> dict[str, str]:
    """Build JSON request headers for the authentication API."""
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": user_agent,
    }


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        raise MalformedResponseError(f"Expected a JSON body (HTTP {response.status_code})") from None
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


def _require_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"Response is missing {key!r}")
    return value


def error_summary(response: httpx.Response) -> str:
    """Best description of a failed response: the provider's errorSummary, else the reason phrase."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("errorSummary"), str):
        return payload["errorSummary"]
    return response.reason_phrase or f"HTTP {response.status_code}"


def parse_factor(raw: Any) -> Factor:
    """Decode one entry of ``_embedded.factors``.

    Only factors the verify loop can drive must be complete. Unsupported
    entries are kept as-is (possibly without id or verify link) so that
    selection can skip them.
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError("Factor entry is not an object")

    factor_type = raw.get("factorType")
    factor_type = factor_type if isinstance(factor_type, str) else ""
    provider = raw.get("provider")
    provider = provider if isinstance(provider, str) else None
    links = raw.get("_links")
    verify = links.get("verify") if isinstance(links, dict) else None

    if FactorType.from_raw(factor_type) is FactorType.UNSUPPORTED:
        factor_id = raw.get("id")
        href = verify.get("href") if isinstance(verify, dict) else None
        return Factor(
            id=factor_id if isinstance(factor_id, str) else "",
            factor_type=factor_type,
            verify_href=href if isinstance(href, str) else "",
            provider=provider,
        )

    if not isinstance(verify, dict):
        raise MalformedResponseError(f"{factor_type} factor is missing '_links.verify'")
    return Factor(
        id=_require_str(raw, "id"),
        factor_type=factor_type,
        verify_href=_require_str(verify, "href"),
        provider=provider,
    )


def parse_authn_response(response: httpx.Response) -> AuthenticationResult:
    """Decode the primary authentication response.

    Raises:
        RejectedError: On 401/403, with the provider's error summary.
        TransportError: On any other HTTP error status.
        MalformedResponseError: If a 2xx body does not match the schema.
    """
    if response.status_code in (401, 403):
        raise RejectedError(error_summary(response), status_code=response.status_code)
    if response.status_code >= 400:
        raise TransportError(
            f"Primary authentication failed ({response.status_code}): {error_summary(response)}",
            status_code=response.status_code,
        )

    payload = _json_object(response)
    status = _require_str(payload, "status")

    if status == "SUCCESS":
        return AuthSuccess(session_token=_require_str(payload, "sessionToken"))

    if status == "MFA_REQUIRED":
        state_token = _require_str(payload, "stateToken")
        embedded = payload.get("_embedded")
        factors = embedded.get("factors") if isinstance(embedded, dict) else None
        if not isinstance(factors, list):
            raise MalformedResponseError("MFA_REQUIRED response is missing '_embedded.factors'")
        return MFARequired(state_token=state_token, factors=tuple(parse_factor(f) for f in factors))

    return AuthFailed(status=status)


def parse_verify_response(response: httpx.Response) -> VerifyAttemptResult:
    """Decode one factor verify response.

    HTTP errors are not raised: the verify loop treats them as a failed
    attempt and retries. A 2xx body that is not a JSON object raises
    MalformedResponseError.
    """
    if response.status_code >= 400:
        return VerifyFailure(status=f"{response.status_code} {error_summary(response)}")

    payload = _json_object(response)
    status = payload.get("status")
    factor_result = payload.get("factorResult")

    if status == "SUCCESS":
        return VerifySuccess(session_token=_require_str(payload, "sessionToken"))
    if factor_result == "WAITING":
        return VerifyWaiting()
    if factor_result == "REJECTED":
        return VerifyRejected(status=factor_result)
    if factor_result == "CHALLENGE":
        return VerifyChallenge()
    return VerifyFailure(status=str(factor_result or status or "UNKNOWN"))
