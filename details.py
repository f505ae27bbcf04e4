"""Title and abstract enrichment from Crossref XML."""

from __future__ import annotations

import html
import logging
import re
from urllib.parse import urlparse

import config
from fetcher import read_url
from metadata import cached_citation
from models import TitleFound, TitleNotFound, TitleResult
from store import DatasetStore

LOGGER = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>")
_ABSTRACT_OPEN = "<jats:abstract"
_ABSTRACT_CLOSE = "</jats:abstract>"
_CONTROL_WS_RE = re.compile(r"[^\S ]+")
_JATS_TAG_RE = re.compile(r"</?jats:[A-Za-z-]+[^>]*>")
_MULTI_WS_RE = re.compile(r"\s\s+")


class TitleNotFoundError(RuntimeError):
    """Raised when the cross-reference markup carries no <title> element."""


def crossref_url(doi: str) -> str:
    """Build the cross-reference lookup URL from a DOI URL's path."""
    return config.XREF_URL_TEMPLATE.format(doi=urlparse(doi).path.lstrip("/"))


def extract_title(markup: str) -> TitleResult:
    match = _TITLE_RE.search(markup)
    if match is None:
        return TitleNotFound()
    return TitleFound(html.unescape(match.group(1)).strip())


def extract_abstract(markup: str, fallback: str) -> str:
    """Return the flattened JATS abstract text, or fallback if there is none."""
    start = markup.find(_ABSTRACT_OPEN)
    if start < 0:
        return fallback

    body_start = markup.find(">", start) + 1
    body_end = markup.find(_ABSTRACT_CLOSE, body_start)
    if body_end < 0:
        body_end = len(markup)

    text = markup[body_start:body_end]
    text = _CONTROL_WS_RE.sub("", text)
    text = _JATS_TAG_RE.sub("", text)
    text = html.unescape(text)
    return _MULTI_WS_RE.sub(" ", text).strip()


def get_details(doi: str, store: DatasetStore) -> str:
    """Return "title\\ncitation\\nabstract" for a DOI already in the dataset.

    Raises TitleNotFoundError if the lookup markup has no title, and lets
    network errors propagate.
    """
    mla = cached_citation(doi, store)
    markup = read_url(crossref_url(doi))

    result = extract_title(markup)
    if isinstance(result, TitleNotFound):
        raise TitleNotFoundError(f"No <title> in cross-reference markup for {doi}")

    abstract = extract_abstract(markup, fallback=doi)
    if abstract == doi:
        LOGGER.info("No abstract for doi=%s; using DOI as abstract", doi)
    return "\n".join([result.title, mla, abstract])
