"""Citation lookup: dataset cache first, DOI content negotiation otherwise."""

from __future__ import annotations

import logging

import config
from fetcher import fetch
from store import DatasetStore

LOGGER = logging.getLogger(__name__)


class UnknownIdentifierError(RuntimeError):
    """Raised when a DOI is expected in the dataset but is not there."""


def cached_citation(doi: str, store: DatasetStore) -> str:
    """Return the stored MLA citation for doi, without network access."""
    if doi not in store:
        raise UnknownIdentifierError(f"DOI not in dataset: {doi}")
    return store.citation(doi)


def fetch_citation(doi: str) -> str:
    """Fetch an MLA citation for a DOI URL via content negotiation.

    Returns "" when the resolver answers with a non-2xx status, so its error
    page is never mistaken for a citation.
    """
    response = fetch(doi, headers={"Accept": config.MLA_ACCEPT_HEADER})
    if not response.ok:
        LOGGER.warning("Citation lookup failed for doi=%s: status=%s", doi, response.status_code)
        return ""
    return response.text.strip()


def resolve_citation(doi: str, store: DatasetStore) -> str:
    if doi in store:
        return store.citation(doi)
    return fetch_citation(doi)
