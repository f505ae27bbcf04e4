"""Crawl source pages for DOIs and merge them into the dataset."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import config
from fetcher import read_url
from filters import extract_identifiers, matches_stopword
from metadata import resolve_citation
from store import DatasetStore, read_lines

LOGGER = logging.getLogger(__name__)


def find_papers(
    store: DatasetStore,
    sources: Iterable[str],
    stopwords: list[str],
    pattern: str | None = None,
) -> dict[str, int]:
    """Merge DOIs found on every source page into store, in memory.

    Per candidate DOI:
    - present, and its stored citation now matches a stopword -> removed
    - absent, citation resolves non-empty, no stopword match  -> added
    - anything else                                           -> unchanged

    After all sources, stored entries matching a stopword are pruned even if
    no source links to them any more. Running twice against unchanged
    inputs changes nothing the second time.
    """
    counts = {"sources": 0, "found": 0, "added": 0, "removed": 0, "skipped_empty": 0}

    for src in sources:
        page = read_url(src)
        found = extract_identifiers(page, pattern)
        counts["sources"] += 1
        counts["found"] += len(found)
        added_here = 0

        for doi in found:
            exists = doi in store
            meta = resolve_citation(doi, store)
            stop_match = matches_stopword(stopwords, meta)

            if stop_match and exists:
                store.remove(doi)
                counts["removed"] += 1
                LOGGER.info("Removed stopword match doi=%s", doi)
            elif not stop_match and not exists and meta:
                store.add(doi, meta)
                added_here += 1
            elif not exists and not meta:
                counts["skipped_empty"] += 1
                LOGGER.debug("No usable metadata for doi=%s, skipping", doi)

        counts["added"] += added_here
        LOGGER.info("Crawl source=%s found=%s added=%s", src, len(found), added_here)

    counts["removed"] += prune_stopwords(store, stopwords)
    return counts


def prune_stopwords(store: DatasetStore, stopwords: list[str]) -> int:
    """Drop every stored paper whose citation matches a stopword."""
    doomed = [doi for doi in store if matches_stopword(stopwords, store.citation(doi))]
    for doi in doomed:
        store.remove(doi)
        LOGGER.info("Pruned stopword match doi=%s", doi)
    return len(doomed)


def crawl(
    papers_path: str | Path | None = None,
    sources_path: str | Path | None = None,
    stopwords_path: str | Path | None = None,
) -> dict[str, int]:
    """Run one crawl and persist the dataset once, after every source.

    Any failure before the final save leaves the dataset file as it was.
    """
    store = DatasetStore.load(papers_path)
    sources = read_lines(sources_path or config.SOURCES_PATH)
    stopwords = read_lines(stopwords_path or config.STOPWORDS_PATH)
    LOGGER.info("Crawl start: sources=%s stopwords=%s papers=%s", len(sources), len(stopwords), len(store))

    counts = find_papers(store, sources, stopwords)
    store.save()

    LOGGER.info(
        "Crawl complete: sources=%s found=%s added=%s removed=%s skipped_empty=%s papers=%s",
        counts["sources"],
        counts["found"],
        counts["added"],
        counts["removed"],
        counts["skipped_empty"],
        len(store),
    )
    return counts
