"""Ticket submission.

Builds the Jira ``fields`` payload from the settings and the collected text, then
makes exactly one create call. Failures are not retried and nothing is persisted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from lazyjira.config import JiraSettings
from lazyjira.jira.client import JiraClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    issue_key: str
    issue_url: str
    api_url: str


def build_issue_fields(settings: JiraSettings, *, summary: str, description: str) -> dict[str, Any]:
    """Custom fields first; the core fields always win on a name clash."""

    fields: dict[str, Any] = dict(settings.extra_fields)
    fields.update(
        {
            "project": {"key": settings.project_key},
            "summary": summary.strip(),
            "description": description,
            "issuetype": {"name": settings.create_issue.issue_type},
        }
    )
    return fields


def submit_ticket(
    settings: JiraSettings,
    *,
    summary: str,
    description: str,
    client: JiraClient | None = None,
    timeout: float = 30.0,
) -> SubmissionResult:
    """Create the ticket.

    Raises:
        SubmissionError: If Jira could not be reached or rejected the ticket.
    """

    owns_client = client is None
    if client is None:
        client = JiraClient(
            base_url=settings.service_url,
            username=settings.username,
            api_key=settings.credential,
            timeout=timeout,
        )

    fields = build_issue_fields(settings, summary=summary, description=description)
    logger.info(
        "Submitting ticket",
        extra={"project": settings.project_key, "custom_fields": sorted(settings.extra_fields)},
    )
    try:
        created = client.create_issue(fields)
    finally:
        if owns_client:
            client.close()

    return SubmissionResult(
        issue_key=created.key, issue_url=created.browse_url, api_url=created.api_url
    )
