"""Configuration for lazyjira.

Two layers:
- `AppSettings`: runtime knobs from environment variables and a local `.env`.
- `JiraSettings`: the Jira connection and issue defaults, read from
  `~/.config/lazyjira/config.yaml`. Any key may also come from a
  `LAZYJIRA_*` environment variable (nested keys use `__`), but the file wins.

Example config file::

    jira_url: https://example.atlassian.net
    username: me@example.com
    api_key: xxxxx
    create_issue:
      project: OPS
      issue_type: Bug
      custom_fields:
        customfield_10010: {"value": "Platform"}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("~/.config/lazyjira/config.yaml")


class AppSettings(BaseSettings):
    """Runtime settings.

    Environment variables:
    - LAZYJIRA_CONFIG    (optional)
    - LOG_LEVEL          (optional)
    - LAZYJIRA_LOG_FILE  (optional)
    - LAZYJIRA_TIMEOUT   (optional)
    """

    config_path: Path = Field(
        default=DEFAULT_CONFIG_PATH,
        validation_alias="LAZYJIRA_CONFIG",
        description="Path to the YAML file holding the Jira connection settings",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    log_file: Path | None = Field(
        default=None,
        validation_alias="LAZYJIRA_LOG_FILE",
        description="Write logs to this file instead of stderr",
    )

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="LAZYJIRA_TIMEOUT",
        description="Timeout for the Jira API call",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )


class CreateIssueConfig(BaseModel):
    """Where and how new tickets are filed."""

    model_config = ConfigDict(frozen=True)

    project: str
    issue_type: str = "Bug"
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("project", "issue_type")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()


class JiraSettings(BaseSettings):
    """Immutable Jira connection settings."""

    jira_url: str
    username: str
    api_key: str
    create_issue: CreateIssueConfig

    model_config = SettingsConfigDict(
        env_prefix="LAZYJIRA_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings)

    @field_validator("jira_url")
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("jira_url must start with http:// or https://")
        return value

    @field_validator("username", "api_key")
    @classmethod
    def _credential_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @property
    def service_url(self) -> str:
        return self.jira_url

    @property
    def credential(self) -> str:
        return self.api_key

    @property
    def project_key(self) -> str:
        return self.create_issue.project

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.create_issue.custom_fields)


class ConfigErrorKind(str, Enum):
    MISSING_FILE = "missing_file"
    PARSE_ERROR = "parse_error"
    PERMISSION_DENIED = "permission_denied"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class ConfigError(Exception):
    """Raised when the Jira settings cannot be loaded."""

    kind: ConfigErrorKind
    path: Path
    detail: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.path}: {self.detail}"


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> JiraSettings:
    """Read and validate the Jira settings file."""

    path = path.expanduser()
    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(ConfigErrorKind.MISSING_FILE, path, "config file not found") from e
    except PermissionError as e:
        raise ConfigError(ConfigErrorKind.PERMISSION_DENIED, path, str(e)) from e
    except IsADirectoryError as e:
        raise ConfigError(ConfigErrorKind.MISSING_FILE, path, "path is a directory") from e

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise ConfigError(ConfigErrorKind.PARSE_ERROR, path, str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            ConfigErrorKind.PARSE_ERROR, path, "expected a mapping at the top level"
        )

    try:
        return JiraSettings(**{str(key): value for key, value in data.items()})
    except ValidationError as e:
        raise ConfigError(ConfigErrorKind.INVALID, path, str(e)) from e
