"""Typed values exchanged with the authentication API.

Every HTTP round trip is decoded once into one of these frozen dataclasses;
the authenticator only branches on their types.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Credential:
    """Username and password for primary authentication."""

    username: str
    password: str = field(repr=False)


class FactorType(str, enum.Enum):
    """MFA factor types the verify loop knows how to drive."""

    PUSH = "push"
    SMS = "sms"
    CALL = "call"
    TOTP = "token:software:totp"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_raw(cls, raw: str) -> FactorType:
        for member in cls:
            if member is not cls.UNSUPPORTED and member.value == raw:
                return member
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class Factor:
    """An MFA factor offered by the provider for the pending login."""

    id: str
    factor_type: str
    verify_href: str
    provider: Optional[str] = None

    @property
    def kind(self) -> FactorType:
        return FactorType.from_raw(self.factor_type)

    @property
    def requires_passcode(self) -> bool:
        """True when the passcode must be known before the first verify call."""
        return self.kind is FactorType.TOTP

    @property
    def sends_challenge(self) -> bool:
        """True when the provider delivers a code out of band after the first verify call."""
        return self.kind in (FactorType.SMS, FactorType.CALL)

    def matches(self, mfa_type: str) -> bool:
        """Segment-prefix match: ``push`` matches only ``push``, ``token`` matches ``token:software:totp``."""
        return self.factor_type == mfa_type or self.factor_type.startswith(mfa_type + ":")


# Primary authentication results


@dataclass(frozen=True)
class AuthSuccess:
    session_token: str = field(repr=False)


@dataclass(frozen=True)
class MFARequired:
    state_token: str = field(repr=False)
    factors: Tuple[Factor, ...] = ()


@dataclass(frozen=True)
class AuthFailed:
    status: str


AuthenticationResult = Union[AuthSuccess, MFARequired, AuthFailed]


# Factor verification results


@dataclass(frozen=True)
class VerifySuccess:
    session_token: str = field(repr=False)


@dataclass(frozen=True)
class VerifyWaiting:
    pass


@dataclass(frozen=True)
class VerifyChallenge:
    pass


@dataclass(frozen=True)
class VerifyRejected:
    status: str


@dataclass(frozen=True)
class VerifyFailure:
    status: str


VerifyAttemptResult = Union[VerifySuccess, VerifyWaiting, VerifyChallenge, VerifyRejected, VerifyFailure]


class RejectedPolicy(str, enum.Enum):
    """What the verify loop does when the provider reports ``factorResult == REJECTED``."""

    RETRY = "retry"
    FAIL_FAST = "fail-fast"
