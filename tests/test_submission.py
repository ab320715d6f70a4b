import json

import pytest
import requests

from owasp_scanner.categories import INJECTION
from owasp_scanner.errors import SubmissionError
from owasp_scanner.result import Finding, ScanResult, Summary
from owasp_scanner.severity import Severity
from owasp_scanner.submission import DashboardClient, build_scan_payload


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self.text = "" if body is None else (body if isinstance(body, str) else json.dumps(body))

    def json(self):
        return json.loads(self.text)


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.headers = {}
        self.calls = []
        self.responses = list(responses or [])
        self.error = error

    def request(self, method, url, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "headers": dict(self.headers)})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)

    def get(self, url, timeout=None):
        return self.request("GET", url, timeout=timeout)


def make_result():
    finding = Finding(
        rule_id="A03:2021-001",
        category="A03:2021 – Injection",
        title="SQL Injection",
        description="Query built from input.",
        severity=Severity.CRITICAL,
        line=7,
        column=9,
        snippet="db.query(sql)",
        remediation="Use parameters.",
        location="src/db.js:7",
    )
    summary = Summary(project_path="/p", timestamp="t", files_scanned=3, vulnerabilities_found=1)
    return ScanResult(summary=summary, findings=[finding])


def test_payload_shape_and_category_normalization():
    payload = build_scan_payload(make_result(), "proj-1", "1.2.3")

    assert payload["projectId"] == "proj-1"
    assert payload["scannerVersion"] == "1.2.3"
    assert payload["summary"] == {"totalFiles": 3, "filesScanned": 3, "vulnerabilitiesFound": 1}
    vulnerability = payload["vulnerabilities"][0]
    assert vulnerability["category"] == INJECTION
    assert vulnerability["severity"] == "critical"
    assert vulnerability["location"] == "src/db.js:7"
    assert set(vulnerability) == {
        "ruleId",
        "category",
        "title",
        "description",
        "severity",
        "location",
        "line",
        "column",
        "snippet",
        "remediation",
    }


def test_send_results_posts_to_scans_with_auth_header():
    session = FakeSession([FakeResponse(201, {"_id": "scan-42"})])
    client = DashboardClient("http://dash/api/", token="tok", project_id="proj-1", session=session)

    scan_id = client.send_results(make_result())

    assert scan_id == "scan-42"
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://dash/api/scans"
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["json"]["projectId"] == "proj-1"


def test_send_results_accepts_plain_id():
    session = FakeSession([FakeResponse(200, {"id": 7})])
    client = DashboardClient("http://dash/api", token="tok", session=session)

    assert client.send_results(make_result(), project_id="p") == "7"


def test_send_results_requires_project_id():
    client = DashboardClient("http://dash/api", token="tok", session=FakeSession())

    with pytest.raises(SubmissionError):
        client.send_results(make_result())


def test_api_error_message_is_surfaced():
    session = FakeSession([FakeResponse(401, {"message": "Token is not valid"}, reason="Unauthorized")])
    client = DashboardClient("http://dash/api", token="bad", project_id="p", session=session)

    with pytest.raises(SubmissionError, match="401: Token is not valid"):
        client.send_results(make_result())


def test_network_failure_raises_submission_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    client = DashboardClient("http://dash/api", token="tok", project_id="p", session=session)

    with pytest.raises(SubmissionError, match="No response received"):
        client.send_results(make_result())


def test_login_stores_token_on_session():
    session = FakeSession([FakeResponse(200, {"token": "fresh"}), FakeResponse(200, [{"_id": "a", "name": "A"}])])
    client = DashboardClient("http://dash/api", session=session)
    assert "Authorization" not in session.headers

    client.login("me@example.com", "secret")
    projects = client.list_projects()

    assert client.token == "fresh"
    assert session.calls[0]["json"] == {"email": "me@example.com", "password": "secret"}
    assert session.calls[1]["headers"]["Authorization"] == "Bearer fresh"
    assert projects == [{"_id": "a", "name": "A"}]


def test_check_connection():
    ok = DashboardClient("http://dash/api", token="t", session=FakeSession([FakeResponse(200, {})]))
    denied = DashboardClient("http://dash/api", token="t", session=FakeSession([FakeResponse(401, {})]))
    offline = DashboardClient("http://dash/api", token="t", session=FakeSession(error=requests.Timeout("slow")))

    assert ok.check_connection() is True
    assert denied.check_connection() is False
    assert offline.check_connection() is False
