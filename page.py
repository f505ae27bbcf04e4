"""Regenerate the "next" and "history" regions of the reading-list page.

Only text strictly between a start marker and its end marker is replaced.
A region whose start or end marker is missing is left as-is.

History entries are rendered newest first. Each keeps its chronological
number, so the most recent paper carries the highest number:

    <!-- HIST_START -->
    3. <a href="https://doi.org/...">Third paper...</a>
    2. <a href="https://doi.org/...">Second paper...</a>
    1. <a href="https://doi.org/...">First paper...</a>
    <!-- HIST_END -->
"""

from __future__ import annotations

import html
import logging
from collections.abc import Sequence
from pathlib import Path

import config
from metadata import cached_citation
from models import MarkerPair
from store import DatasetStore, read_lines, read_text, write_text_atomic

LOGGER = logging.getLogger(__name__)


def render_entry(doi: str, citation: str) -> str:
    """Render a citation hyperlinked to its DOI."""
    return f'<a href="{html.escape(doi)}">{html.escape(citation, quote=False)}</a>'


def render_entries(dois: Sequence[str], store: DatasetStore, numbered: bool) -> list[str]:
    """Render dois (oldest first) as page lines, newest first.

    A DOI no longer in the dataset (pruned by a stopword after it was
    selected) is rendered with the DOI itself as the link text.
    """
    entries: list[str] = []
    for index, doi in enumerate(dois, start=1):
        number = f"{index}. " if numbered else ""
        if doi in store:
            citation = cached_citation(doi, store)
        else:
            LOGGER.warning("DOI not in dataset, rendering bare link: doi=%s", doi)
            citation = doi
        entries.insert(0, f"{number}{render_entry(doi, citation)}")
    return entries


def splice(document: str, entries: Sequence[str], markers: MarkerPair) -> str:
    """Replace the text between markers with one line per entry.

    The end marker must follow the start marker; otherwise the document is
    returned unchanged.
    """
    start = document.find(markers.start)
    end = -1 if start < 0 else document.find(markers.end, start + len(markers.start))
    if end < 0:
        LOGGER.warning("Markers %s / %s not found in order; region left unchanged", markers.start, markers.end)
        return document

    head = document[: start + len(markers.start)]
    tail = document[end:]
    return "\n".join([head, *entries, tail])


def update_web(
    dois: Sequence[str],
    document: str,
    markers: MarkerPair,
    numbered: bool,
    store: DatasetStore,
) -> str:
    return splice(document, render_entries(dois, store, numbered), markers)


def write_web(
    store: DatasetStore,
    webpage_path: str | Path | None = None,
    history_path: str | Path | None = None,
    next_path: str | Path | None = None,
) -> Path:
    """Rewrite the page's next and history regions from the data files."""
    webpage_path = Path(webpage_path or config.WEBPAGE_PATH)
    past = read_lines(history_path or config.HISTORY_PATH)
    nxt = read_text(next_path or config.NEXT_PATH).strip()
    previous = [doi for doi in past if doi != nxt]

    web = read_text(webpage_path)
    web = update_web([nxt] if nxt else [], web, config.NEXT_MARKERS, False, store)
    web = update_web(previous, web, config.HISTORY_MARKERS, True, store)
    write_text_atomic(webpage_path, web)

    LOGGER.info("Wrote %s: next=%s history=%s", webpage_path, nxt or "-", len(previous))
    return webpage_path
