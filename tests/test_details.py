from unittest.mock import patch

import pytest

from details import (
    TitleNotFoundError,
    crossref_url,
    extract_abstract,
    extract_title,
    get_details,
)
from models import TitleFound, TitleNotFound
from store import DatasetStore

DOI = "https://doi.org/10.1145/3368089.3409692"

_XML = """<?xml version="1.0" encoding="UTF-8"?>
<crossref_result>
  <journal_article>
    <titles>
      <title>Fuzzing &amp; Friends: A Study</title>
    </titles>
    <jats:abstract xml:lang="en">
      <jats:p>We study <jats:italic>compiler fuzzing</jats:italic> at scale.</jats:p>
      <jats:p>Results are   promising.</jats:p>
    </jats:abstract>
  </journal_article>
</crossref_result>
"""


def test_crossref_url_uses_doi_path() -> None:
    url = crossref_url(DOI)

    assert url.startswith("https://api.crossref.org/works/10.1145/3368089.3409692")


def test_extract_title_found() -> None:
    assert extract_title(_XML) == TitleFound("Fuzzing & Friends: A Study")


def test_extract_title_not_found() -> None:
    assert extract_title("<titles></titles>") == TitleNotFound()


def test_extract_abstract_strips_jats_markup() -> None:
    assert extract_abstract(_XML, fallback=DOI) == (
        "We study compiler fuzzing at scale. Results are promising."
    )


def test_extract_abstract_falls_back_when_missing() -> None:
    assert extract_abstract("<title>T</title>", fallback=DOI) == DOI


def test_get_details_joins_title_citation_abstract() -> None:
    store = DatasetStore({DOI: {"mla": "Smith, J. \"Fuzzing.\" 2020."}})

    with patch("details.read_url", return_value=_XML) as mock_read:
        detail = get_details(DOI, store)

    assert mock_read.call_args.args[0] == crossref_url(DOI)
    assert detail.split("\n") == [
        "Fuzzing & Friends: A Study",
        "Smith, J. \"Fuzzing.\" 2020.",
        "We study compiler fuzzing at scale. Results are promising.",
    ]


def test_get_details_without_abstract_uses_doi() -> None:
    store = DatasetStore({DOI: {"mla": "Cite."}})

    with patch("details.read_url", return_value="<title>Only Title</title>"):
        assert get_details(DOI, store) == f"Only Title\nCite.\n{DOI}"


def test_get_details_missing_title_raises() -> None:
    store = DatasetStore({DOI: {"mla": "Cite."}})

    with patch("details.read_url", return_value="<html>no title</html>"), \
         pytest.raises(TitleNotFoundError):
        get_details(DOI, store)
