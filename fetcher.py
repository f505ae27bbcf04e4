"""HTTP GET helper that follows redirects by hand, up to a fixed bound."""

from __future__ import annotations

import logging
from urllib.parse import urljoin

import requests

import config

MAX_REDIRECTS = 20
REDIRECT_STATUSES: frozenset[int] = frozenset({301, 302, 303, 307, 308})

LOGGER = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a response cannot be followed to a terminal body."""


class TooManyRedirectsError(FetchError):
    """Raised when a URL redirects more than MAX_REDIRECTS times."""


def fetch(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> requests.Response:
    """GET url, following same- or cross-origin redirects.

    Redirects are counted, not cycle-checked: the 21st redirect fails even
    if the chain would eventually terminate. Relative Location values are
    resolved against the URL that produced them. Connection errors from
    requests propagate unchanged.
    """
    if timeout is None:
        timeout = config.REQUEST_TIMEOUT_SECONDS

    current = url
    redirects = 0
    while True:
        response = requests.get(
            current,
            headers=headers or {},
            timeout=timeout,
            allow_redirects=False,
        )
        if response.status_code not in REDIRECT_STATUSES:
            return response

        location = response.headers.get("Location")
        if not location:
            raise FetchError(f"Redirect without Location header from {current}")
        if redirects >= MAX_REDIRECTS:
            raise TooManyRedirectsError(f"Too many redirects (>{MAX_REDIRECTS}) starting at {url}")

        redirects += 1
        target = urljoin(current, location)
        LOGGER.debug("Redirect %s/%s: %s -> %s", redirects, MAX_REDIRECTS, current, target)
        current = target


def read_url(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> str:
    """Return the decoded body of the terminal response for url."""
    return fetch(url, headers=headers, timeout=timeout).text
