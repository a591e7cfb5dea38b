"""Unit tests for ticket submission (mocked client)."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from lazyjira.config import CreateIssueConfig, JiraSettings
from lazyjira.jira import issue_service
from lazyjira.jira.client import CreatedIssue, JiraClient, SubmissionError, SubmissionErrorKind
from lazyjira.jira.issue_service import SubmissionResult, build_issue_fields, submit_ticket


def _created() -> CreatedIssue:
    return CreatedIssue(
        id="10001",
        key="OPS-7",
        api_url="https://jira.example.com/rest/api/2/issue/10001",
        browse_url="https://jira.example.com/browse/OPS-7",
    )


def test_build_issue_fields(jira_settings: JiraSettings) -> None:
    fields = build_issue_fields(
        jira_settings, summary="  Bug in login ", description="Steps: ..."
    )

    assert fields == {
        "customfield_10010": {"value": "Platform"},
        "project": {"key": "OPS"},
        "summary": "Bug in login",
        "description": "Steps: ...",
        "issuetype": {"name": "Bug"},
    }


def test_core_fields_win_over_custom_fields() -> None:
    settings = JiraSettings(
        jira_url="https://jira.example.com",
        username="me",
        api_key="k",
        create_issue=CreateIssueConfig(
            project="OPS",
            issue_type="Task",
            custom_fields={"summary": "overridden?", "priority": {"name": "High"}},
        ),
    )

    fields = build_issue_fields(settings, summary="Real", description="")

    assert fields["summary"] == "Real"
    assert fields["issuetype"] == {"name": "Task"}
    assert fields["priority"] == {"name": "High"}


def test_submit_ticket_uses_injected_client(jira_settings: JiraSettings) -> None:
    client = Mock(spec=JiraClient)
    client.create_issue.return_value = _created()

    result = submit_ticket(
        jira_settings, summary="Bug in login", description="Steps: ...", client=client
    )

    assert result == SubmissionResult(
        issue_key="OPS-7",
        issue_url="https://jira.example.com/browse/OPS-7",
        api_url="https://jira.example.com/rest/api/2/issue/10001",
    )
    client.create_issue.assert_called_once_with(
        build_issue_fields(jira_settings, summary="Bug in login", description="Steps: ...")
    )
    client.close.assert_not_called()


def test_submit_ticket_closes_its_own_client_on_failure(
    jira_settings: JiraSettings, monkeypatch: pytest.MonkeyPatch
) -> None:
    client = Mock(spec=JiraClient)
    client.create_issue.side_effect = SubmissionError(
        SubmissionErrorKind.AUTH_FAILURE, "Jira rejected the credentials", status_code=401
    )
    factory = Mock(return_value=client)
    monkeypatch.setattr(issue_service, "JiraClient", factory)

    with pytest.raises(SubmissionError):
        submit_ticket(jira_settings, summary="T", description="", timeout=3.0)

    factory.assert_called_once_with(
        base_url="https://jira.example.com",
        username="me@example.com",
        api_key="secret-key",
        timeout=3.0,
    )
    client.create_issue.assert_called_once()
    client.close.assert_called_once_with()
