"""Scan configuration and dashboard credentials."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .discovery import DEFAULT_EXCLUDE
from .errors import ConfigurationError
from .utils import read_config_file, read_json_file, write_text_file

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5001/api"
DEFAULT_CONFIG_PATH = Path.home() / ".owasp-scanner" / "config.json"

ENV_API_URL = "OWASP_SCANNER_API_URL"
ENV_TOKEN = "OWASP_SCANNER_TOKEN"
ENV_PROJECT_ID = "OWASP_SCANNER_PROJECT_ID"


@dataclass
class ScanConfig:
    """Per-scan options read from ``--config``."""

    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    rules: Dict[str, bool] = field(default_factory=dict)


def default_scan_config() -> ScanConfig:
    return ScanConfig()


def load_scan_config(path: "str | os.PathLike[str]") -> ScanConfig:
    """Load a JSON or YAML scan config.

    ``exclude`` replaces the default exclusion list when present; ``rules``
    maps rule ids to ``false`` to switch them off.
    """

    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        data = read_config_file(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error loading configuration {path}: {exc}") from exc

    if data is None:
        return default_scan_config()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {path} must be a mapping")

    config = default_scan_config()
    exclude = data.get("exclude")
    if exclude is not None:
        if not isinstance(exclude, list) or not all(isinstance(item, str) for item in exclude):
            raise ConfigurationError("'exclude' must be a list of strings")
        config.exclude = list(exclude)
    rules = data.get("rules")
    if rules is not None:
        if not isinstance(rules, dict):
            raise ConfigurationError("'rules' must map rule ids to true/false")
        config.rules = {str(rule_id): bool(enabled) for rule_id, enabled in rules.items()}
    return config


@dataclass
class SubmissionConfig:
    """Credentials used to send results to the dashboard."""

    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    project_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"apiUrl": self.api_url, "token": self.token, "projectId": self.project_id}


def load_submission_config(
    path: "str | os.PathLike[str] | None" = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[SubmissionConfig]:
    """Read dashboard credentials, with environment variables taking precedence.

    Returns ``None`` when neither the file nor the environment provides a
    token, since nothing could be submitted.
    """

    env = os.environ if environ is None else environ
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        data = read_json_file(config_path) or {}
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Failed to load configuration {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {config_path} must be a JSON object")

    config = SubmissionConfig(
        api_url=env.get(ENV_API_URL) or data.get("apiUrl") or DEFAULT_API_URL,
        token=env.get(ENV_TOKEN) or data.get("token"),
        project_id=env.get(ENV_PROJECT_ID) or data.get("projectId"),
    )
    if not config.token:
        logger.debug("No dashboard token in %s or environment", config_path)
        return None
    return config


def save_submission_config(
    config: SubmissionConfig,
    path: "str | os.PathLike[str] | None" = None,
) -> Path:
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        write_text_file(config_path, json.dumps(config.to_dict(), indent=2))
    except OSError as exc:
        raise ConfigurationError(f"Unable to save configuration to {config_path}: {exc}") from exc
    return config_path
