"""HTTP client for sending scan results to the dashboard."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from . import __version__
from .categories import normalize_category
from .errors import SubmissionError
from .result import ScanResult

logger = logging.getLogger(__name__)

USER_AGENT = "owasp-scanner-cli"


def build_scan_payload(result: ScanResult, project_id: str, scanner_version: str = __version__) -> Dict[str, Any]:
    """Shape ``result`` into the body the dashboard's ``POST /scans`` expects."""

    summary = result.summary
    return {
        "projectId": project_id,
        "scannerVersion": scanner_version,
        "summary": {
            "totalFiles": summary.files_scanned,
            "filesScanned": summary.files_scanned,
            "vulnerabilitiesFound": summary.vulnerabilities_found,
        },
        "vulnerabilities": [
            {
                "ruleId": finding.rule_id,
                "category": normalize_category(finding.category),
                "title": finding.title,
                "description": finding.description,
                "severity": finding.severity.value,
                "location": finding.location,
                "line": finding.line,
                "column": finding.column,
                "snippet": finding.snippet,
                "remediation": finding.remediation,
            }
            for finding in result.findings
        ],
    }


class DashboardClient:
    """Thin wrapper over a :class:`requests.Session` bound to one dashboard.

    The session carries the JSON headers and, once known, the bearer token,
    so every call made through the client is authenticated the same way.
    """

    def __init__(
        self,
        api_url: str,
        token: Optional[str] = None,
        project_id: Optional[str] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.project_id = project_id
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            }
        )
        self.token: Optional[str] = None
        if token:
            self.set_token(token)

    def set_token(self, token: str) -> None:
        self.token = token
        self.session.headers["Authorization"] = f"Bearer {token}"

    def _url(self, path: str) -> str:
        return f"{self.api_url}{path}"

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SubmissionError(f"No response received from API server: {exc}") from exc

        if response.status_code >= 400:
            detail = _safe_json(response.text) or response.reason
            raise SubmissionError(f"API error {response.status_code}: {detail}")

        if not response.text:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise SubmissionError(f"API returned invalid JSON from {path}") from exc

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/login", {"email": email, "password": password})
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise SubmissionError("Login failed: no token in response")
        self.set_token(token)
        return data

    def list_projects(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/projects")
        return data if isinstance(data, list) else []

    def create_project(self, name: str, description: str = "") -> Dict[str, Any]:
        return self._request("POST", "/projects", {"name": name, "description": description})

    def check_connection(self) -> bool:
        try:
            response = self.session.get(self._url("/auth/profile"), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Dashboard connection check failed: %s", exc)
            return False
        return response.status_code == 200

    def send_results(
        self,
        result: ScanResult,
        project_id: Optional[str] = None,
        scanner_version: str = __version__,
    ) -> str:
        """Post ``result`` and return the scan id the dashboard assigned."""

        project_id = project_id or self.project_id
        if not project_id:
            raise SubmissionError("Project ID is required")
        payload = build_scan_payload(result, project_id, scanner_version)
        data = self._request("POST", "/scans", payload)
        scan_id = None
        if isinstance(data, dict):
            scan_id = data.get("_id") or data.get("id")
        if not scan_id:
            raise SubmissionError("Dashboard response did not include a scan id")
        return str(scan_id)


def project_id_of(project: Dict[str, Any]) -> str:
    return str(project.get("_id") or project.get("id") or "")


def _safe_json(text: str) -> str:
    # Pull the dashboard's "message" out of a JSON error body, else return the raw text.
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return text
    if isinstance(data, dict):
        return str(data.get("message") or data.get("detail") or data)
    return str(data)
