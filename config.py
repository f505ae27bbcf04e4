"""Environment-driven settings for the reading-list curator."""

from __future__ import annotations

import os

from dotenv import load_dotenv

from models import MarkerPair

# Settings below are read once at import, so a local .env is loaded first.
load_dotenv()

# ---------------------------------------------------------------------------
# Data files
# ---------------------------------------------------------------------------

SOURCES_PATH = os.getenv("SOURCES_PATH", "data/sources.txt")
STOPWORDS_PATH = os.getenv("STOPWORDS_PATH", "data/stopwords.txt")
PAPERS_PATH = os.getenv("PAPERS_PATH", "data/papers.json")
HISTORY_PATH = os.getenv("HISTORY_PATH", "data/past.txt")
NEXT_PATH = os.getenv("NEXT_PATH", "data/next.txt")
NEXT_DESC_PATH = os.getenv("NEXT_DESC_PATH", "data/desc.txt")
WEBPAGE_PATH = os.getenv("WEBPAGE_PATH", "index.html")

# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

# DOI URLs as they appear in links on source pages.
DOI_PATTERN = os.getenv(
    "DOI_PATTERN",
    r"https?://(?:dx\.)?doi\.org/10\.\d{4,9}/[-._;()/:A-Za-z0-9]+",
)
XREF_URL_TEMPLATE = os.getenv(
    "XREF_URL_TEMPLATE",
    "https://api.crossref.org/works/{doi}/transform/application/vnd.crossref.unixsd+xml",
)
MLA_ACCEPT_HEADER = "text/bibliography; style=mla"
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "20"))

# ---------------------------------------------------------------------------
# Page markers
# ---------------------------------------------------------------------------

NEXT_MARKERS = MarkerPair(start="<!-- NEXT_START -->", end="<!-- NEXT_END -->")
HISTORY_MARKERS = MarkerPair(start="<!-- HIST_START -->", end="<!-- HIST_END -->")
