"""CLI entrypoint for the journal-club reading-list curator.

Actions:
    python main.py fetch        crawl sources and update the dataset
    python main.py choose       randomly pick the next unread paper
    python main.py set <doi>    make <doi> the next paper
    python main.py web          regenerate the page's next/history regions
"""

from __future__ import annotations

import argparse
import logging
import os

from crawler import crawl
from page import write_web
from selector import choose_next, set_next
from store import DatasetStore

ACTION_FETCH = "fetch"
ACTION_CHOOSE = "choose"
ACTION_SET = "set"
ACTION_WEB = "web"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Curate the journal-club reading list")
    parser.add_argument(
        "action",
        nargs="?",
        default="",
        help=f"One of: {ACTION_FETCH}, {ACTION_CHOOSE}, {ACTION_SET}, {ACTION_WEB}",
    )
    parser.add_argument("param", nargs="?", default=None, help=f"DOI URL for '{ACTION_SET}'")
    return parser.parse_args(argv)


def run(action: str, param: str | None = None) -> bool:
    """Dispatch one action. Returns False if the action was not recognized."""
    if action == ACTION_FETCH:
        crawl()
    elif action == ACTION_CHOOSE:
        choose_next(DatasetStore.load())
    elif action == ACTION_SET and param:
        set_next(param, DatasetStore.load())
    elif action == ACTION_WEB:
        write_web(DatasetStore.load())
    else:
        logging.warning("Unknown action: %r", action)
        return False
    return True


def main(argv: list[str] | None = None) -> None:
    """Configure logging and execute the requested action."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = parse_args(argv)
    run(args.action, args.param)


if __name__ == "__main__":
    main()
