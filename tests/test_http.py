"""Tests for response decoding at the HTTP boundary."""

import httpx
import pytest
from support import factor_json, json_response, mfa_required, verify_href

from oktaflow._http import build_headers, parse_authn_response, parse_factor, parse_verify_response
from oktaflow.exceptions import MalformedResponseError
from oktaflow.types import (
    AuthFailed,
    AuthSuccess,
    Factor,
    FactorType,
    MFARequired,
    VerifyChallenge,
    VerifyFailure,
    VerifyRejected,
    VerifySuccess,
    VerifyWaiting,
)


def test_build_headers():
    headers = build_headers("oktaflow/1.0")
    assert headers["Accept"] == "application/json"
    assert headers["Content-Type"] == "application/json"
    assert headers["User-Agent"] == "oktaflow/1.0"


class TestParseAuthnResponse:
    def test_success(self):
        result = parse_authn_response(json_response({"status": "SUCCESS", "sessionToken": "tok"}))
        assert result == AuthSuccess(session_token="tok")

    def test_mfa_required(self):
        result = parse_authn_response(mfa_required(factor_json("f1", "push"), factor_json("f2", "sms")))
        assert isinstance(result, MFARequired)
        assert result.state_token == "state-1"
        assert [f.id for f in result.factors] == ["f1", "f2"]
        assert result.factors[0] == Factor(id="f1", factor_type="push", verify_href=verify_href("f1"), provider="OKTA")

    def test_other_status(self):
        assert parse_authn_response(json_response({"status": "LOCKED_OUT"})) == AuthFailed(status="LOCKED_OUT")

    def test_missing_status(self):
        with pytest.raises(MalformedResponseError):
            parse_authn_response(json_response({"sessionToken": "tok"}))

    def test_json_array(self):
        with pytest.raises(MalformedResponseError):
            parse_authn_response(json_response(["SUCCESS"]))

    def test_tokens_hidden_from_repr(self):
        assert "tok" not in repr(AuthSuccess(session_token="tok"))


class TestParseFactor:
    def test_missing_verify_link(self):
        raw = factor_json("f1", "push")
        del raw["_links"]
        with pytest.raises(MalformedResponseError):
            parse_factor(raw)

    def test_supported_factor_missing_id(self):
        raw = factor_json("f1", "push")
        del raw["id"]
        with pytest.raises(MalformedResponseError):
            parse_factor(raw)

    def test_missing_factor_type_is_unsupported(self):
        raw = factor_json("f1", "push")
        del raw["factorType"]
        assert parse_factor(raw).kind is FactorType.UNSUPPORTED

    def test_unsupported_factor_without_links(self):
        factor = parse_factor({"id": "u1", "factorType": "webauthn"})
        assert factor == Factor(id="u1", factor_type="webauthn", verify_href="")
        assert factor.kind is FactorType.UNSUPPORTED

    def test_incomplete_unsupported_factor_does_not_hide_push(self):
        result = parse_authn_response(mfa_required({"factorType": "webauthn"}, factor_json("f1", "push")))
        assert [f.factor_type for f in result.factors] == ["webauthn", "push"]

    def test_unknown_type_is_unsupported(self):
        factor = parse_factor(factor_json("f1", "u2f"))
        assert factor.kind is FactorType.UNSUPPORTED

    def test_kinds(self):
        assert parse_factor(factor_json("f1", "token:software:totp")).requires_passcode
        assert parse_factor(factor_json("f1", "sms")).sends_challenge
        assert not parse_factor(factor_json("f1", "push")).requires_passcode


class TestParseVerifyResponse:
    def test_success(self):
        result = parse_verify_response(json_response({"status": "SUCCESS", "sessionToken": "tok"}))
        assert result == VerifySuccess(session_token="tok")

    @pytest.mark.parametrize(
        ("factor_result", "expected"),
        [("WAITING", VerifyWaiting()), ("CHALLENGE", VerifyChallenge()), ("REJECTED", VerifyRejected("REJECTED"))],
    )
    def test_factor_results(self, factor_result, expected):
        payload = {"status": "MFA_CHALLENGE", "factorResult": factor_result}
        assert parse_verify_response(json_response(payload)) == expected

    def test_unknown_factor_result(self):
        payload = {"status": "MFA_CHALLENGE", "factorResult": "TIMEOUT"}
        assert parse_verify_response(json_response(payload)) == VerifyFailure("TIMEOUT")

    def test_http_error_with_summary(self):
        response = json_response({"errorCode": "E0000068", "errorSummary": "Invalid Passcode/Answer"}, 403)
        assert parse_verify_response(response) == VerifyFailure("403 Invalid Passcode/Answer")

    def test_http_error_without_body(self):
        assert parse_verify_response(httpx.Response(502)) == VerifyFailure("502 Bad Gateway")

    def test_success_without_token(self):
        with pytest.raises(MalformedResponseError):
            parse_verify_response(json_response({"status": "SUCCESS"}))
