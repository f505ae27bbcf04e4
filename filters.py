"""Identifier extraction and stopword filtering (no network calls)."""

from __future__ import annotations

import re
from collections.abc import Iterable

import config

_TRAILING_PUNCTUATION = ".,;:"


def extract_identifiers(text: str, pattern: str | None = None) -> list[str]:
    """Return the distinct identifiers matched in text.

    Sentence punctuation after a DOI in running text is not part of it, so
    "(see https://doi.org/10.1/abc)." yields ".../abc". Duplicates within one
    page are dropped; the first occurrence wins, so the result is stable for
    a given page.
    """
    regex = re.compile(pattern or config.DOI_PATTERN)
    matches = (_trim_trailing(match.group(0)) for match in regex.finditer(text))
    return list(dict.fromkeys(match for match in matches if match))


def _trim_trailing(identifier: str) -> str:
    """Strip trailing punctuation and unbalanced closing parentheses.

    DOIs such as 10.1016/S0140-6736(20)30183-5 keep their own parentheses.
    """
    while identifier:
        if identifier[-1] in _TRAILING_PUNCTUATION:
            identifier = identifier[:-1]
        elif identifier[-1] == ")" and identifier.count(")") > identifier.count("("):
            identifier = identifier[:-1]
        else:
            break
    return identifier


def matches_stopword(patterns: Iterable[str], subject: str) -> bool:
    """Return True if any stopword pattern matches anywhere in subject.

    Patterns are regular expressions, matched case-insensitively with
    multiline anchors.
    """
    return any(
        re.search(pattern, subject, flags=re.IGNORECASE | re.MULTILINE)
        for pattern in patterns
    )
