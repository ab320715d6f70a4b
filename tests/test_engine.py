import logging

import pytest

from owasp_scanner import discovery
from owasp_scanner.cancel import CancelToken
from owasp_scanner.categories import INJECTION
from owasp_scanner.engine import filter_rules, run_scan
from owasp_scanner.errors import ConfigurationError, ScanCancelled
from owasp_scanner.rules import Rule, get_all_rules, get_rule_by_id
from owasp_scanner.severity import Severity


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_weak_password_check_yields_one_finding(tmp_path):
    write(tmp_path / "auth.js", "if (password.length > 3) {\n  return true;\n}\n")

    result = run_scan(tmp_path)

    assert result.summary.files_scanned == 1
    assert len(result.findings) == 1
    finding = result.findings[0]
    assert finding.rule_id == "A07:2021-001"
    assert finding.severity is Severity.HIGH
    assert finding.location == "auth.js:1"
    assert (finding.line, finding.column) == (1, 5)


def test_empty_directory(tmp_path):
    result = run_scan(tmp_path)

    assert result.summary.files_scanned == 0
    assert result.summary.vulnerabilities_found == 0
    assert result.findings == []


def test_missing_path_fails_before_scanning(tmp_path):
    with pytest.raises(ConfigurationError):
        run_scan(tmp_path / "nope")


def test_failing_check_does_not_hide_other_findings(tmp_path, caplog):
    def explode(path, content, lines, file_type):
        raise RuntimeError("check failed")

    failing = Rule(
        id="T-CHECK",
        title="Always fails",
        category=INJECTION,
        description="",
        severity=Severity.LOW,
        file_types=frozenset({"python"}),
        check=explode,
    )
    write(tmp_path / "broken.py", "print('hello')\n")
    write(tmp_path / "crypto.js", "const h = crypto.createHash('md5');\n")

    with caplog.at_level(logging.WARNING):
        result = run_scan(tmp_path, rules=[failing, get_rule_by_id("A02:2021-001")])

    assert [finding.rule_id for finding in result.findings] == ["A02:2021-001"]
    assert result.findings[0].location == "crypto.js:1"
    assert result.summary.files_scanned == 2
    assert "T-CHECK" in caplog.text


def test_worker_pool_output_matches_sequential(tmp_path):
    for index in range(20):
        write(tmp_path / f"pkg{index % 3}" / f"mod{index:02d}.js", f"eval(input{index});\nmd5(x);\n")

    sequential = run_scan(tmp_path, workers=1)
    pooled = run_scan(tmp_path, workers=8)

    assert sequential.summary.files_scanned == pooled.summary.files_scanned == 20
    assert [finding.to_dict() for finding in pooled.findings] == [
        finding.to_dict() for finding in sequential.findings
    ]
    locations = [finding.location for finding in pooled.findings]
    assert locations[0].startswith("pkg0/mod00.js")


def test_exclusions_are_applied(tmp_path):
    write(tmp_path / "vendor" / "lib.js", "eval(x);\n")
    write(tmp_path / "app.js", "const x = 1;\n")

    result = run_scan(tmp_path, exclusions=["vendor/**"])

    assert result.summary.files_scanned == 1
    assert result.findings == []


def test_cancelled_scan_raises(tmp_path):
    write(tmp_path / "app.js", "eval(x);\n")
    token = CancelToken()
    token.cancel()

    with pytest.raises(ScanCancelled):
        run_scan(tmp_path, cancel=token)


def test_cancelled_scan_best_effort_returns_partial_result(tmp_path):
    write(tmp_path / "app.js", "eval(x);\n")
    token = CancelToken()
    token.cancel()

    result = run_scan(tmp_path, cancel=token, best_effort=True)

    assert result.summary.files_scanned == 0
    assert result.findings == []


def test_timeout_cancels_scan(tmp_path):
    write(tmp_path / "app.js", "eval(x);\n")

    with pytest.raises(ScanCancelled):
        run_scan(tmp_path, cancel=CancelToken(timeout=0), workers=1)


def test_invalid_worker_count(tmp_path):
    with pytest.raises(ValueError):
        run_scan(tmp_path, workers=0)


def test_filter_rules_disables_listed_ids():
    rules = filter_rules(get_all_rules(), {"A07:2021-001": False, "A01:2021-001": True})

    ids = [rule.id for rule in rules]
    assert "A07:2021-001" not in ids
    assert "A01:2021-001" in ids
    assert len(ids) == len(get_all_rules()) - 1


def test_unreadable_file_is_skipped_and_not_counted(tmp_path, monkeypatch, caplog):
    write(tmp_path / "crypto.js", "const h = crypto.createHash('md5');\n")
    write(tmp_path / "locked.js", "const h = crypto.createHash('md5');\n")
    real_read = discovery.read_text_file

    def read_text_file(path):
        if path.name == "locked.js":
            raise PermissionError("denied")
        return real_read(path)

    monkeypatch.setattr(discovery, "read_text_file", read_text_file)

    with caplog.at_level(logging.WARNING):
        result = run_scan(tmp_path, rules=[get_rule_by_id("A02:2021-001")], workers=1)

    assert result.summary.files_scanned == 1
    assert [finding.location for finding in result.findings] == ["crypto.js:1"]
    assert "Skipping file" in caplog.text
    assert "locked.js" in caplog.text
