"""Jira integration: REST client and ticket submission."""

from lazyjira.jira.client import (
    CreatedIssue,
    JiraClient,
    SubmissionError,
    SubmissionErrorKind,
)
from lazyjira.jira.issue_service import SubmissionResult, build_issue_fields, submit_ticket

__all__ = [
    "CreatedIssue",
    "JiraClient",
    "SubmissionError",
    "SubmissionErrorKind",
    "SubmissionResult",
    "build_issue_fields",
    "submit_ticket",
]
