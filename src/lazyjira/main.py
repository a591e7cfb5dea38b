"""CLI entrypoint: load settings, run the form, create the ticket."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from lazyjira import __version__
from lazyjira.config import AppSettings, ConfigError, load_settings
from lazyjira.form.render import THEME
from lazyjira.form.state import FormStatus
from lazyjira.form.terminal import run_form
from lazyjira.jira.client import SubmissionError
from lazyjira.jira.issue_service import submit_ticket
from lazyjira.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIG = 2
EXIT_CANCELLED = 3
EXIT_SUBMISSION_FAILED = 4

console = Console(theme=THEME, highlight=False)
error_console = Console(theme=THEME, stderr=True, highlight=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyjira",
        description="Create a Jira ticket from an interactive terminal form",
    )
    parser.add_argument("--version", action="version", version=f"lazyjira {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the YAML settings file (default: $LAZYJIRA_CONFIG or "
        "~/.config/lazyjira/config.yaml)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app = AppSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        error_console.print("[form.error]Configuration error (check your environment/.env):[/]")
        error_console.print(str(e), markup=False)
        return EXIT_CONFIG

    configure_logging(app.log_level, log_file=app.log_file)

    config_path: Path = args.config or app.config_path
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        logger.error("Could not load settings", extra={"kind": e.kind.value, "path": str(e.path)})
        error_console.print("[form.error]Configuration error:[/]", escape(str(e)))
        return EXIT_CONFIG

    summary = description = ""
    try:
        state = run_form()
        if state.status is not FormStatus.COMPLETED:
            logger.info("Ticket creation cancelled by operator")
            error_console.print("Cancelled: no ticket was created.")
            return EXIT_CANCELLED

        summary, description = state.values
        result = submit_ticket(
            settings,
            summary=summary,
            description=description,
            timeout=app.timeout_seconds,
        )

    except SubmissionError as e:
        logger.error(
            "Ticket submission failed",
            extra={"kind": e.kind.value, "status_code": e.status_code},
        )
        error_console.print("[form.error]Could not create the ticket:[/]", escape(str(e)))
        # Nothing is saved; show the input so it can be reused on a rerun.
        error_console.print("\nSummary:", summary, markup=False)
        error_console.print("Description:", description, sep="\n", markup=False)
        return EXIT_SUBMISSION_FAILED

    except Exception:
        logger.exception("Command failed")
        return EXIT_UNEXPECTED

    console.print(f"[form.status]{result.issue_key}[/]: {result.issue_url}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
