#!/usr/bin/env python3
"""Programmatic ticket creation example.

This demonstrates using the components directly, without the interactive form:

* load settings from `~/.config/lazyjira/config.yaml` (or `--config`)
* create a Jira ticket from a summary and description
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from lazyjira.config import DEFAULT_CONFIG_PATH, ConfigError, load_settings
from lazyjira.jira.client import SubmissionError
from lazyjira.jira.issue_service import submit_ticket
from lazyjira.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Jira ticket (programmatic example).")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--summary", required=True, help="Ticket summary")
    parser.add_argument("--description", default="", help="Ticket description")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging("INFO")

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 2

    try:
        result = submit_ticket(settings, summary=args.summary, description=args.description)
    except SubmissionError as e:
        print(f"Could not create the ticket: {e}")
        return 4

    print(f"{result.issue_key}: {result.issue_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
