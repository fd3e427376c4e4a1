"""Configuration loading for weeports."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from weeports.logging import DEFAULT_LOG_DIR, DEFAULT_LOG_LEVEL

CONFIG_FILE_NAME = "weeports.yaml"

EXAMPLE_CONFIG = """\
gitlab:
  url: https://git.domain.com
  token: gitlab-secret-token
  username: gitlab-username
smtp:
  host: smtp.domain.com
  port: 587
  username: email-username
  password: email-password
recipient_email: recipient@domain.com
"""

_REQUIRED_FIELDS = [
    ("gitlab", "url"),
    ("gitlab", "token"),
    ("gitlab", "username"),
    ("smtp", "host"),
    ("smtp", "port"),
    ("smtp", "username"),
    ("smtp", "password"),
    ("recipient_email",),
]


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class GitLabConfig:
    """GitLab instance and the user the report is about."""

    url: str
    token: str
    username: str


@dataclass
class SMTPConfig:
    """Outgoing mail server."""

    host: str
    port: int
    username: str
    password: str


@dataclass
class ReportSettings:
    """Report window and filtering options."""

    lookback_weeks: int = 1
    deduplicate_due: bool = False


@dataclass
class LoggingConfig:
    """Log destination and verbosity."""

    dir: str = DEFAULT_LOG_DIR
    level: str = DEFAULT_LOG_LEVEL


@dataclass
class WeeportsConfig:
    """weeports configuration."""

    gitlab: GitLabConfig
    smtp: SMTPConfig
    recipient_email: str
    report: ReportSettings = field(default_factory=ReportSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WeeportsConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If required fields are missing or values are invalid.
        """
        missing = [".".join(path) for path in _REQUIRED_FIELDS if _lookup(data, path) in (None, "")]
        if missing:
            raise ConfigError(f"Missing required fields: {', '.join(missing)}")

        gitlab_data = data["gitlab"]
        smtp_data = data["smtp"]
        report_data = data.get("report") or {}
        logging_data = data.get("logging") or {}

        port = _positive_int(smtp_data["port"], "smtp.port")
        if port > 65535:
            raise ConfigError(f"smtp.port must be at most 65535, got {port}")

        lookback_weeks = _positive_int(
            report_data.get("lookback_weeks", 1), "report.lookback_weeks"
        )
        report = ReportSettings(
            lookback_weeks=lookback_weeks,
            deduplicate_due=bool(report_data.get("deduplicate_due", False)),
        )

        return cls(
            gitlab=GitLabConfig(
                url=str(gitlab_data["url"]),
                token=str(gitlab_data["token"]),
                username=str(gitlab_data["username"]),
            ),
            smtp=SMTPConfig(
                host=str(smtp_data["host"]),
                port=port,
                username=str(smtp_data["username"]),
                password=str(smtp_data["password"]),
            ),
            recipient_email=str(data["recipient_email"]),
            report=report,
            logging=LoggingConfig(
                dir=str(logging_data.get("dir", DEFAULT_LOG_DIR)),
                level=str(logging_data.get("level", DEFAULT_LOG_LEVEL)),
            ),
        )


def _lookup(data: dict[str, Any], path: tuple[str, ...]) -> Any:
    value: Any = data
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if number < 1:
        raise ConfigError(f"{name} must be positive, got {number}")
    return number


def default_config_path() -> Path:
    """Return ~/.config/weeports.yaml."""
    return Path.home() / ".config" / CONFIG_FILE_NAME


def load_config(config_path: Path | str | None = None) -> WeeportsConfig:
    """Load weeports configuration from a YAML file.

    JSON files are accepted too, JSON being a subset of YAML.

    Args:
        config_path: Path to the config file. Defaults to default_config_path().

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = default_config_path() if config_path is None else Path(config_path)

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}\n\n"
            f"Example configuration:\n\n{EXAMPLE_CONFIG}"
        )

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return WeeportsConfig.from_dict(data)
