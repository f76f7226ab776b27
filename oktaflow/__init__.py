"""oktaflow - authenticate against an Okta-style authn API and fetch application assertions."""

from .assertion import AssertionFetcher
from .authenticator import Authenticator
from .client import OktaClient, authenticate, fetch_assertion
from .config import PACKAGE_VERSION, TransportConfig
from .exceptions import (
    ConfigurationError,
    FactorRejectedError,
    MalformedResponseError,
    NoAssertionFieldError,
    NoSuitableFactorError,
    OktaFlowError,
    PasscodeRequiredError,
    RejectedError,
    TransportError,
    VerifyTimeoutError,
)
from .types import Credential, Factor, FactorType, RejectedPolicy

__all__ = [
    "OktaClient",
    "Authenticator",
    "AssertionFetcher",
    "authenticate",
    "fetch_assertion",
    "TransportConfig",
    "Credential",
    "Factor",
    "FactorType",
    "RejectedPolicy",
    "OktaFlowError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
    "RejectedError",
    "FactorRejectedError",
    "NoSuitableFactorError",
    "PasscodeRequiredError",
    "VerifyTimeoutError",
    "NoAssertionFieldError",
]

__version__ = PACKAGE_VERSION
