import json

import pytest

from owasp_scanner import config as config_module
from owasp_scanner.config import (
    DEFAULT_API_URL,
    SubmissionConfig,
    load_scan_config,
    load_submission_config,
    save_submission_config,
)
from owasp_scanner.discovery import DEFAULT_EXCLUDE
from owasp_scanner.errors import ConfigurationError


def test_yaml_scan_config(tmp_path):
    path = tmp_path / "scanner.yaml"
    path.write_text(
        """
exclude:
  - vendor/**
rules:
  A07:2021-001: false
  A01:2021-001: true
""".strip(),
        encoding="utf-8",
    )

    config = load_scan_config(path)

    assert config.exclude == ["vendor/**"]
    assert config.rules == {"A07:2021-001": False, "A01:2021-001": True}


def test_json_scan_config_keeps_default_exclusions(tmp_path):
    path = tmp_path / "scanner.json"
    path.write_text(json.dumps({"rules": {"A02:2021-001": False}}), encoding="utf-8")

    config = load_scan_config(path)

    assert config.exclude == list(DEFAULT_EXCLUDE)
    assert config.rules == {"A02:2021-001": False}


def test_missing_scan_config(tmp_path):
    with pytest.raises(ConfigurationError):
        load_scan_config(tmp_path / "absent.json")


def test_malformed_scan_config(tmp_path):
    path = tmp_path / "scanner.json"
    path.write_text("{broken", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_scan_config(path)


def test_scan_config_rejects_wrong_shapes(tmp_path):
    path = tmp_path / "scanner.yaml"
    path.write_text("exclude: vendor/**\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_scan_config(path)


def test_submission_config_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    save_submission_config(SubmissionConfig(api_url="http://dash/api", token="tok", project_id="p1"), path)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "apiUrl": "http://dash/api",
        "token": "tok",
        "projectId": "p1",
    }
    assert load_submission_config(path, environ={}) == SubmissionConfig("http://dash/api", "tok", "p1")


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"apiUrl": "http://file/api", "token": "file", "projectId": "p1"}), encoding="utf-8")

    config = load_submission_config(
        path,
        environ={"OWASP_SCANNER_TOKEN": "env-token", "OWASP_SCANNER_PROJECT_ID": "p2"},
    )

    assert config == SubmissionConfig("http://file/api", "env-token", "p2")


def test_submission_config_from_environment_only(tmp_path):
    config = load_submission_config(tmp_path / "absent.json", environ={"OWASP_SCANNER_TOKEN": "t"})

    assert config == SubmissionConfig(DEFAULT_API_URL, "t", None)


def test_submission_config_absent(tmp_path):
    assert load_submission_config(tmp_path / "absent.json", environ={}) is None


def test_default_path_is_used(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", path)

    save_submission_config(SubmissionConfig(token="tok"))

    assert load_submission_config(environ={}).token == "tok"
