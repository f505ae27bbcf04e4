"""Persistent dataset store and plain-text file helpers.

Every write goes to a temporary file in the target's directory and is then
renamed into place, so an interrupted run never leaves a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import config
from models import META_KEY

LOGGER = logging.getLogger(__name__)


def write_text_atomic(path: str | Path, text: str) -> Path:
    """Atomically replace path with text. Creates parent dirs if needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp", prefix=f".{p.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        os.replace(tmp, p)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    return p


def read_text(path: str | Path) -> str:
    """Return file contents, or an empty string if the file is missing."""
    p = Path(path)
    if not p.exists():
        return ""
    return p.read_text(encoding="utf-8")


def read_lines(path: str | Path) -> list[str]:
    """Return the stripped, non-blank lines of a file (empty if missing)."""
    return [line.strip() for line in read_text(path).splitlines() if line.strip()]


def append_line(path: str | Path, line: str) -> Path:
    """Append one line to a newline-delimited file."""
    existing = read_text(path)
    if existing and not existing.endswith("\n"):
        existing += "\n"
    return write_text_atomic(path, f"{existing}{line}\n")


class DatasetStore:
    """In-memory DOI -> {"mla": citation} mapping backed by one JSON file.

    Loaded once per action, mutated in memory, and written back only when
    save() is called.
    """

    def __init__(self, papers: dict[str, dict[str, str]] | None = None, path: str | Path | None = None) -> None:
        self._papers: dict[str, dict[str, str]] = dict(papers or {})
        self.path = Path(path or config.PAPERS_PATH)

    @classmethod
    def load(cls, path: str | Path | None = None) -> DatasetStore:
        """Read the dataset file. Returns an empty store if it is missing."""
        p = Path(path or config.PAPERS_PATH)
        if not p.exists():
            LOGGER.info("Dataset %s not found; starting empty", p)
            return cls(path=p)

        payload = json.loads(p.read_text(encoding="utf-8") or "{}")
        if not isinstance(payload, dict):
            raise RuntimeError(f"Unexpected dataset shape in {p}: expected a JSON object")

        invalid = [
            doi
            for doi, record in payload.items()
            if not isinstance(record, dict) or not isinstance(record.get(META_KEY), str)
        ]
        if invalid:
            raise RuntimeError(
                f"Dataset {p} has {len(invalid)} record(s) without a string {META_KEY!r} "
                f"citation: {', '.join(invalid)}"
            )

        LOGGER.info("Loaded dataset %s: papers=%s", p, len(payload))
        return cls(payload, path=p)

    def save(self) -> Path:
        """Atomically write the whole dataset back to its file."""
        data = json.dumps(self._papers, indent=2, ensure_ascii=False)
        write_text_atomic(self.path, data + "\n")
        LOGGER.info("Saved dataset %s: papers=%s", self.path, len(self._papers))
        return self.path

    def citation(self, doi: str) -> str:
        return self._papers[doi][META_KEY]

    def add(self, doi: str, citation: str) -> None:
        self._papers[doi] = {META_KEY: citation}

    def remove(self, doi: str) -> None:
        del self._papers[doi]

    def keys(self) -> list[str]:
        return list(self._papers)

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {doi: dict(record) for doi, record in self._papers.items()}

    def __contains__(self, doi: object) -> bool:
        return doi in self._papers

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._papers))

    def __len__(self) -> int:
        return len(self._papers)
