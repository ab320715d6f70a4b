import json

import pytest

from owasp_scanner import cli
from owasp_scanner import config as config_module
from owasp_scanner.errors import SubmissionError

WEAK_PASSWORD = "if (password.length > 3) {\n  return true;\n}\n"


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "auth.js").write_text(WEAK_PASSWORD, encoding="utf-8")
    return root


@pytest.fixture
def no_dashboard(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "home" / "config.json")
    for name in ("OWASP_SCANNER_API_URL", "OWASP_SCANNER_TOKEN", "OWASP_SCANNER_PROJECT_ID"):
        monkeypatch.delenv(name, raising=False)


def test_cli_prints_json_report(project, capsys):
    exit_code = cli.main(["scan", str(project), "--output", "json", "--offline"])

    captured = capsys.readouterr()
    assert exit_code == 0
    data = json.loads(captured.out)
    assert data["summary"]["filesScanned"] == 1
    assert [item["ruleId"] for item in data["vulnerabilities"]] == ["A07:2021-001"]


def test_cli_fail_on_threshold(project, capsys):
    assert cli.main(["scan", str(project), "--offline", "--fail-on", "high"]) == 2
    assert cli.main(["scan", str(project), "--offline", "--fail-on", "critical"]) == 0
    assert "Weak Password Requirements" in capsys.readouterr().out


def test_cli_missing_path_exits_with_error(tmp_path, capsys):
    exit_code = cli.main(["scan", str(tmp_path / "missing"), "--offline"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Project path does not exist" in captured.err
    assert captured.out == ""


def test_cli_writes_output_file(project, tmp_path, capsys):
    output_path = tmp_path / "out" / "scan.html"

    exit_code = cli.main(["scan", str(project), "--output", "html", "--output-file", str(output_path), "--offline"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Scan Summary" in captured.out
    assert f"Report written to {output_path}" in captured.out
    assert "A07:2021-001" in output_path.read_text(encoding="utf-8")


def test_cli_falls_back_to_stdout_when_write_fails(project, tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    exit_code = cli.main(
        ["scan", str(project), "--output", "json", "--output-file", str(blocker / "scan.json"), "--offline"]
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Unable to write report" in captured.err
    assert json.loads(captured.out)["summary"]["vulnerabilitiesFound"] == 1


def test_cli_config_disables_rule(project, tmp_path, capsys):
    config_path = tmp_path / "scanner.yaml"
    config_path.write_text("rules:\n  A07:2021-001: false\n", encoding="utf-8")

    exit_code = cli.main(["scan", str(project), "--output", "json", "--config", str(config_path), "--offline"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["vulnerabilities"] == []


def test_cli_unreadable_config_exits_with_error(project, tmp_path, capsys):
    config_path = tmp_path / "scanner.json"
    config_path.write_text("{oops", encoding="utf-8")

    assert cli.main(["scan", str(project), "--config", str(config_path), "--offline"]) == 1
    assert "Error loading configuration" in capsys.readouterr().err


def test_cli_without_dashboard_config_still_succeeds(project, capsys, no_dashboard):
    exit_code = cli.main(["scan", str(project), "--output", "json"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Dashboard configuration not found." in captured.err
    assert json.loads(captured.out)["summary"]["vulnerabilitiesFound"] == 1


def test_cli_submits_results(project, capsys, monkeypatch, no_dashboard):
    sent = {}

    class FakeClient:
        def __init__(self, api_url, token=None, project_id=None):
            sent.update(api_url=api_url, token=token, project_id=project_id)

        def check_connection(self):
            return True

        def send_results(self, result):
            sent["findings"] = len(result.findings)
            return "scan-1"

    monkeypatch.setenv("OWASP_SCANNER_TOKEN", "tok")
    monkeypatch.setenv("OWASP_SCANNER_PROJECT_ID", "proj")
    monkeypatch.setattr(cli, "DashboardClient", FakeClient)

    exit_code = cli.main(["scan", str(project), "--output", "json"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert sent == {"api_url": config_module.DEFAULT_API_URL, "token": "tok", "project_id": "proj", "findings": 1}
    assert "Scan ID: scan-1" in captured.err


def test_cli_reports_submission_failure_once(project, capsys, monkeypatch, no_dashboard):
    class FakeClient:
        def __init__(self, api_url, token=None, project_id=None):
            pass

        def check_connection(self):
            return True

        def send_results(self, result):
            raise SubmissionError("API error 500: boom")

    monkeypatch.setenv("OWASP_SCANNER_TOKEN", "tok")
    monkeypatch.setenv("OWASP_SCANNER_PROJECT_ID", "proj")
    monkeypatch.setattr(cli, "DashboardClient", FakeClient)

    exit_code = cli.main(["scan", str(project), "--output", "json"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Failed to send results to dashboard" in captured.err
    assert captured.err.count("API error 500: boom") == 1
    assert json.loads(captured.out)["summary"]["vulnerabilitiesFound"] == 1


def test_cli_lists_rules(capsys):
    assert cli.main(["rules"]) == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 33

    assert cli.main(["rules", "--category", "A03"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 5
    assert all(line.startswith("A03:2021-") for line in lines)


def test_cli_init_keeps_existing_config(tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text("{}", encoding="utf-8")

    assert cli.main(["init", "--config", str(config_path)]) == 0
    assert "already exists" in capsys.readouterr().out
    assert config_path.read_text(encoding="utf-8") == "{}"


def test_cli_init_saves_selected_project(tmp_path, monkeypatch, capsys):
    config_path = tmp_path / "config.json"
    answers = iter(["http://dash/api", "me@example.com", "2"])

    class FakeClient:
        def __init__(self, api_url):
            self.api_url = api_url
            self.token = None

        def login(self, email, password):
            assert (email, password) == ("me@example.com", "secret")
            self.token = "jwt"

        def list_projects(self):
            return [{"_id": "p1", "name": "One"}, {"_id": "p2", "name": "Two"}]

    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt="": "secret")
    monkeypatch.setattr(cli, "DashboardClient", FakeClient)

    assert cli.main(["init", "--config", str(config_path)]) == 0
    assert json.loads(config_path.read_text(encoding="utf-8")) == {
        "apiUrl": "http://dash/api",
        "token": "jwt",
        "projectId": "p2",
    }


def test_cli_init_aborted_at_prompt(tmp_path, monkeypatch, capsys):
    config_path = tmp_path / "config.json"

    def closed_stdin(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_stdin)

    assert cli.main(["init", "--config", str(config_path)]) == 1
    assert "Initialization aborted" in capsys.readouterr().err
    assert not config_path.exists()


def test_cli_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("owasp-scanner ")
