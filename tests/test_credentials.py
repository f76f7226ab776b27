"""Tests for credential and domain resolution."""

from oktaflow.credentials import resolve_credential, resolve_domain
from oktaflow.types import Credential


class TestResolveCredential:
    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("OKTA_USERNAME", "env-user")
        monkeypatch.setenv("OKTA_PASSWORD", "env-pass")
        assert resolve_credential("me", "secret") == Credential("me", "secret")

    def test_env_vars_used_when_no_params(self, monkeypatch):
        monkeypatch.setenv("OKTA_USERNAME", "env-user")
        monkeypatch.setenv("OKTA_PASSWORD", "env-pass")
        assert resolve_credential() == Credential("env-user", "env-pass")

    def test_fields_resolve_independently(self, monkeypatch):
        monkeypatch.setenv("OKTA_PASSWORD", "env-pass")
        assert resolve_credential("me") == Credential("me", "env-pass")

    def test_returns_none_without_password(self):
        assert resolve_credential("me") is None

    def test_returns_none_when_nothing_set(self):
        assert resolve_credential() is None

    def test_blank_username_falls_through(self, monkeypatch):
        monkeypatch.setenv("OKTA_USERNAME", "env-user")
        assert resolve_credential("  ", "secret") == Credential("env-user", "secret")

    def test_password_not_in_repr(self):
        assert "secret" not in repr(Credential("me", "secret"))


class TestResolveDomain:
    def test_explicit_param_wins(self, monkeypatch):
        monkeypatch.setenv("OKTA_DOMAIN", "env.okta.com")
        assert resolve_domain("example.okta.com") == "example.okta.com"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("OKTA_DOMAIN", "https://env.okta.com/")
        assert resolve_domain() == "env.okta.com"

    def test_returns_none_when_nothing_set(self):
        assert resolve_domain() is None
        assert resolve_domain("") is None
