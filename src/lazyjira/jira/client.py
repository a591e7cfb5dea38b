"""Jira REST client.

Only the single call lazyjira needs: create an issue. Wrapping `requests` here
keeps HTTP details out of the CLI and makes the transport easy to mock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import requests

from lazyjira import __version__

logger = logging.getLogger(__name__)


class SubmissionErrorKind(str, Enum):
    AUTH_FAILURE = "auth_failure"
    NETWORK_FAILURE = "network_failure"
    REMOTE_VALIDATION_FAILURE = "remote_validation_failure"
    UNEXPECTED_RESPONSE = "unexpected_response"


@dataclass(frozen=True, slots=True)
class SubmissionError(Exception):
    """Raised when Jira did not create the ticket."""

    kind: SubmissionErrorKind
    detail: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value} (HTTP {self.status_code}): {self.detail}"
        return f"{self.kind.value}: {self.detail}"


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    """Minimal issue metadata returned from Jira."""

    id: str
    key: str
    api_url: str
    browse_url: str


class JiraClient:
    """Small wrapper around the Jira REST API (v2) using basic auth."""

    def __init__(
        self,
        *,
        base_url: str,
        username: str,
        api_key: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Jira URL is required")
        if not username or not api_key:
            raise ValueError("Jira username and API key are required")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (username, api_key)
        self._session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": f"lazyjira/{__version__}",
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def create_issue(self, fields: dict[str, Any]) -> CreatedIssue:
        """Create an issue from a Jira ``fields`` mapping.

        Raises:
            SubmissionError: If the request fails or Jira rejects the issue.
        """

        url = f"{self._base_url}/rest/api/2/issue"
        try:
            resp = self._session.post(url, json={"fields": fields}, timeout=self._timeout)
        except requests.RequestException as e:
            raise SubmissionError(SubmissionErrorKind.NETWORK_FAILURE, str(e)) from e

        if resp.status_code in (401, 403):
            raise SubmissionError(
                SubmissionErrorKind.AUTH_FAILURE,
                "Jira rejected the credentials",
                status_code=resp.status_code,
            )
        if resp.status_code == 400:
            raise SubmissionError(
                SubmissionErrorKind.REMOTE_VALIDATION_FAILURE,
                _error_detail(resp),
                status_code=resp.status_code,
            )
        if not resp.ok:
            raise SubmissionError(
                SubmissionErrorKind.UNEXPECTED_RESPONSE,
                _error_detail(resp),
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise SubmissionError(
                SubmissionErrorKind.UNEXPECTED_RESPONSE,
                "response body is not JSON",
                status_code=resp.status_code,
            ) from e

        key = data.get("key") if isinstance(data, dict) else None
        if not isinstance(key, str) or not key:
            raise SubmissionError(
                SubmissionErrorKind.UNEXPECTED_RESPONSE,
                "response has no issue key",
                status_code=resp.status_code,
            )

        issue_id = data.get("id")
        api_url = data.get("self")
        created = CreatedIssue(
            id=str(issue_id) if issue_id is not None else "",
            key=key,
            api_url=api_url if isinstance(api_url, str) else f"{url}/{key}",
            browse_url=f"{self._base_url}/browse/{key}",
        )
        logger.info("Jira issue created", extra={"key": created.key, "url": created.browse_url})
        return created

    def close(self) -> None:
        self._session.close()


def _error_detail(resp: requests.Response) -> str:
    """Flatten Jira's ``errorMessages``/``errors`` body into one line."""

    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason or "no details"

    if not isinstance(body, dict):
        return str(body)

    parts: list[str] = []
    messages = body.get("errorMessages")
    if isinstance(messages, list):
        parts.extend(str(m) for m in messages if m)
    errors = body.get("errors")
    if isinstance(errors, dict):
        parts.extend(f"{field}: {message}" for field, message in errors.items())
    return "; ".join(parts) or "no details"
