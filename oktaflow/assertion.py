"""Exchange a session token for a federated application's assertion."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from .config import USER_AGENT
from .exceptions import NoAssertionFieldError, RejectedError, TransportError

logger = logging.getLogger(__name__)


def extract_assertion(html: str, field_name: Optional[str] = None) -> str:
    """Return the decoded ``value`` of the first ``<input>`` in ``html``.

    If ``field_name`` is given, only inputs with that ``name`` are considered.
    BeautifulSoup decodes HTML entities in attribute values exactly once.
    """
    soup = BeautifulSoup(html, "html.parser")
    attrs = {"name": field_name} if field_name else {}
    field = soup.find("input", attrs=attrs)
    if field is None:
        target = f"<input name={field_name!r}>" if field_name else "<input>"
        raise NoAssertionFieldError(f"Response contains no {target} element")

    value = field.get("value")
    if value is None:
        raise NoAssertionFieldError("Assertion input has no value attribute")
    return value


class AssertionFetcher:
    """Fetch an application's embed page with a session token and read its assertion."""

    def __init__(self, client: httpx.Client, *, user_agent: str = USER_AGENT) -> None:
        self._client = client
        self._headers = {"User-Agent": user_agent}

    def fetch_assertion(self, app_uri: str, session_token: str, field_name: Optional[str] = None) -> str:
        """GET ``app_uri`` with the session token and return the assertion string.

        Redirects are not followed; anything but a 200 is a rejection.

        Raises:
            TransportError: If the application cannot be reached.
            RejectedError: On a non-200 response, carrying its status description.
            NoAssertionFieldError: If the page has no suitable input field.
        """
        logger.debug("Fetching assertion from %s", app_uri)

        # Keep any query the embed link already carries.
        url = httpx.URL(app_uri).copy_merge_params({"sessionToken": session_token})

        try:
            response = self._client.get(url, headers=self._headers, follow_redirects=False)
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach {app_uri}: {e}") from e

        if response.status_code != 200:
            status = response.reason_phrase or f"HTTP {response.status_code}"
            logger.error("Assertion request returned %d %s", response.status_code, status)
            raise RejectedError(status, status_code=response.status_code)

        return extract_assertion(response.text, field_name)
