"""Core result data structures for the scanner."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

from .severity import SEVERITY_ORDER, Severity

if TYPE_CHECKING:  # pragma: no cover
    from .discovery import FileRecord


@dataclass(frozen=True)
class Finding:
    """Capture a single rule match at one location."""

    rule_id: str
    category: str
    title: str
    description: str
    severity: Severity
    line: int
    column: int
    snippet: str = ""
    remediation: str = ""
    location: str = ""

    def with_location(self, relative_path: str) -> "Finding":
        return replace(self, location=f"{relative_path}:{self.line}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "location": self.location,
            "line": self.line,
            "column": self.column,
            "snippet": self.snippet,
            "remediation": self.remediation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            rule_id=data["ruleId"],
            category=data.get("category", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            severity=Severity.parse(data["severity"]),
            line=int(data.get("line", 1)),
            column=int(data.get("column", 1)),
            snippet=data.get("snippet", ""),
            remediation=data.get("remediation", ""),
            location=data.get("location", ""),
        )


@dataclass
class Summary:
    """Top-level counters for one scan."""

    project_path: str
    timestamp: str = ""
    files_scanned: int = 0
    vulnerabilities_found: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectPath": self.project_path,
            "timestamp": self.timestamp,
            "filesScanned": self.files_scanned,
            "vulnerabilitiesFound": self.vulnerabilities_found,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Summary":
        return cls(
            project_path=data.get("projectPath", ""),
            timestamp=data.get("timestamp", ""),
            files_scanned=int(data.get("filesScanned", 0)),
            vulnerabilities_found=int(data.get("vulnerabilitiesFound", 0)),
        )


@dataclass
class ScanResult:
    """Bundle scan summary and findings list."""

    summary: Summary
    findings: List[Finding] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "vulnerabilities": [finding.to_dict() for finding in self.findings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanResult":
        return cls(
            summary=Summary.from_dict(data.get("summary", {})),
            findings=[Finding.from_dict(item) for item in data.get("vulnerabilities", [])],
        )

    def severity_counts(self) -> List[Tuple[Severity, int]]:
        """Return severity/count pairs ordered for reporting."""

        counts = {severity: 0 for severity in SEVERITY_ORDER}
        for finding in self.findings:
            counts[finding.severity] += 1
        return [(severity, counts[severity]) for severity in SEVERITY_ORDER]

    def max_severity(self) -> Optional[Severity]:
        if not self.findings:
            return None
        return max((finding.severity for finding in self.findings), key=lambda severity: severity.rank)

    def exit_code(self, fail_on: Optional[Severity] = None) -> int:
        """Return 2 when a finding reaches ``fail_on``, otherwise 0."""

        if fail_on is None:
            return 0
        worst = self.max_severity()
        if worst is not None and worst.rank >= fail_on.rank:
            return 2
        return 0


class Aggregator:
    """Collect per-file findings into one :class:`ScanResult`.

    ``add_file`` may be called from several worker threads. Files are
    committed keyed by relative path and ordered by that path when the
    result is finished, so the output does not depend on completion order.
    """

    def __init__(self, project_path: str) -> None:
        self._project_path = project_path
        self._lock = threading.Lock()
        self._per_file: Dict[str, List[Finding]] = {}
        self._files_scanned = 0
        self._finished = False

    @property
    def files_scanned(self) -> int:
        return self._files_scanned

    def add_file(self, file: "FileRecord", findings: Iterable[Finding]) -> None:
        located = [finding.with_location(file.relative_path) for finding in findings]
        with self._lock:
            if self._finished:
                raise RuntimeError("Aggregator already finished")
            self._files_scanned += 1
            self._per_file.setdefault(file.relative_path, []).extend(located)

    def finish(self) -> ScanResult:
        with self._lock:
            self._finished = True
            findings: List[Finding] = []
            for relative_path in sorted(self._per_file):
                findings.extend(self._per_file[relative_path])
            summary = Summary(
                project_path=self._project_path,
                timestamp=datetime.now(timezone.utc).isoformat(),
                files_scanned=self._files_scanned,
                vulnerabilities_found=len(findings),
            )
        return ScanResult(summary=summary, findings=findings)
