"""Response builders shared by the oktaflow tests."""

from __future__ import annotations

from typing import Any

import httpx

DOMAIN = "example.okta.com"
AUTHN_URL = f"https://{DOMAIN}/api/v1/authn"


def verify_href(factor_id: str) -> str:
    return f"https://{DOMAIN}/api/v1/authn/factors/{factor_id}/verify"


def factor_json(factor_id: str, factor_type: str, provider: str = "OKTA") -> dict[str, Any]:
    return {
        "id": factor_id,
        "factorType": factor_type,
        "provider": provider,
        "_links": {"verify": {"href": verify_href(factor_id)}},
    }


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def mfa_required(*factors: dict[str, Any]) -> httpx.Response:
    return json_response(
        {"status": "MFA_REQUIRED", "stateToken": "state-1", "_embedded": {"factors": list(factors)}}
    )


def verify_result(factor_result: str, status: str = "MFA_CHALLENGE") -> httpx.Response:
    return json_response({"status": status, "factorResult": factor_result})


def verify_success(token: str) -> httpx.Response:
    return json_response({"status": "SUCCESS", "sessionToken": token})
