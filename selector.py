"""Pick the next paper and record the selection."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from pathlib import Path

import config
from details import get_details
from metadata import UnknownIdentifierError
from models import Selection
from store import DatasetStore, append_line, read_lines, write_text_atomic

LOGGER = logging.getLogger(__name__)


class NoSelectableError(RuntimeError):
    """Raised when every paper in the dataset has already been selected."""


def selectable(store: DatasetStore, history: Iterable[str]) -> list[str]:
    """Dataset DOIs that are not in the history, in dataset order."""
    past = set(history)
    return [doi for doi in store if doi not in past]


def set_next(
    doi: str,
    store: DatasetStore,
    next_path: str | Path | None = None,
    history_path: str | Path | None = None,
    desc_path: str | Path | None = None,
) -> Selection:
    """Make doi the next paper.

    The detail blob is fetched before anything is written; if that fails,
    the next, history and description files are all left untouched.
    """
    doi = (doi or "").strip()
    if not doi:
        raise ValueError("Refusing to set an empty DOI as the next paper")
    if doi not in store:
        raise UnknownIdentifierError(f"DOI not in dataset: {doi}")

    detail = get_details(doi, store)

    write_text_atomic(next_path or config.NEXT_PATH, doi)
    append_line(history_path or config.HISTORY_PATH, doi)
    write_text_atomic(desc_path or config.NEXT_DESC_PATH, detail)

    LOGGER.info("Next paper set: doi=%s title=%s", doi, detail.split("\n", 1)[0])
    return Selection(doi=doi, detail=detail)


def choose_next(
    store: DatasetStore,
    history_path: str | Path | None = None,
    next_path: str | Path | None = None,
    desc_path: str | Path | None = None,
    rng: random.Random | None = None,
) -> Selection:
    """Choose an unread paper uniformly at random and set it as next."""
    history_path = history_path or config.HISTORY_PATH
    history = read_lines(history_path)
    pool = selectable(store, history)
    LOGGER.info("Selection pool: papers=%s history=%s selectable=%s", len(store), len(history), len(pool))

    if not pool:
        raise NoSelectableError(
            f"No unread papers left: all {len(store)} dataset entries are in {history_path}"
        )

    doi = (rng or random).choice(pool)
    return set_next(doi, store, next_path=next_path, history_path=history_path, desc_path=desc_path)
