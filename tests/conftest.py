"""Test configuration and fixtures."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from lazyjira.config import CreateIssueConfig, JiraSettings
from lazyjira.logging import JsonFormatter

CONFIG_YAML = """\
jira_url: https://jira.example.com/
username: me@example.com
api_key: secret-key
create_issue:
  project: OPS
  custom_fields:
    customfield_10010:
      value: Platform
    labels: [triage]
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own lazyjira environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("LAZYJIRA_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo `configure_logging` calls made by the code under test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Provide a valid settings file."""
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def jira_settings() -> JiraSettings:
    """Provide test Jira settings."""
    return JiraSettings(
        jira_url="https://jira.example.com",
        username="me@example.com",
        api_key="secret-key",
        create_issue=CreateIssueConfig(
            project="OPS",
            custom_fields={"customfield_10010": {"value": "Platform"}},
        ),
    )
