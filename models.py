"""Shared typed models for the curator."""

from __future__ import annotations

from dataclasses import dataclass

# Single field of a dataset record: {"mla": "<citation>"}.
META_KEY = "mla"


@dataclass(frozen=True, slots=True)
class MarkerPair:
    """Start/end delimiters bounding a generated region of the page."""

    start: str
    end: str


@dataclass(frozen=True, slots=True)
class TitleFound:
    title: str


@dataclass(frozen=True, slots=True)
class TitleNotFound:
    pass


TitleResult = TitleFound | TitleNotFound


@dataclass(frozen=True, slots=True)
class Selection:
    """The next paper: its DOI and the rendered title/citation/abstract blob."""

    doi: str
    detail: str
