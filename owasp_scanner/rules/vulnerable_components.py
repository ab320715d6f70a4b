"""Rules for vulnerable and outdated components (A06:2021).

Dependency versions are not looked up against any advisory database; the
manifest check only points at the dedicated tool for each ecosystem.
"""

from __future__ import annotations

import json
from pathlib import PurePath
from typing import Dict, List, Tuple

from owasp_scanner.categories import VULNERABLE_COMPONENTS
from owasp_scanner.result import Finding
from owasp_scanner.severity import Severity

from .base import Rule

MANIFEST_RULE_ID = "A06:2021-001"

# Manifest name -> (tools to suggest, ecosystem label)
MANIFEST_TOOLS: Dict[str, Tuple[str, str]] = {
    "package.json": ("npm audit, Snyk, or OWASP Dependency Check", "Node.js"),
    "requirements.txt": ("safety, Snyk, or OWASP Dependency Check", "Python"),
    "pom.xml": ("OWASP Dependency Check or Snyk", "Java"),
}


def _manifest_finding(
    title: str,
    description: str,
    severity: Severity,
    snippet: str,
    remediation: str,
) -> Finding:
    return Finding(
        rule_id=MANIFEST_RULE_ID,
        category=VULNERABLE_COMPONENTS,
        title=title,
        description=description,
        severity=severity,
        line=1,
        column=1,
        snippet=snippet,
        remediation=remediation,
    )


def check_dependency_manifest(path: str, content: str, lines: List[str], file_type: str) -> List[Finding]:
    """Flag known dependency manifests so they get a dedicated dependency scan."""

    name = PurePath(path).name
    if name not in MANIFEST_TOOLS:
        return []
    tools, ecosystem = MANIFEST_TOOLS[name]

    if name == "package.json":
        try:
            json.loads(content)
        except ValueError:
            return [
                _manifest_finding(
                    title="Invalid package.json",
                    description="The package.json file contains invalid JSON and could not be parsed.",
                    severity=Severity.MEDIUM,
                    snippet=name,
                    remediation="Fix the JSON syntax in the package.json file.",
                )
            ]

    return [
        _manifest_finding(
            title="Dependency Scanning Required",
            description=f"Found {name} file. Dependencies should be scanned with a dedicated tool like {tools}.",
            severity=Severity.INFO,
            snippet=name,
            remediation=(
                f"Use a dedicated dependency scanning tool to check for vulnerabilities in {ecosystem} dependencies."
            ),
        )
    ]


RULES = [
    Rule(
        id=MANIFEST_RULE_ID,
        title="Outdated Package Manager Files",
        category=VULNERABLE_COMPONENTS,
        description="Package manager files that may contain outdated or vulnerable dependencies.",
        severity=Severity.HIGH,
        file_types=frozenset({"json", "txt", "xml", "gradle", "properties"}),
        check=check_dependency_manifest,
        remediation=(
            "Regularly update dependencies and use automated tools to scan for vulnerabilities in "
            "dependencies. Remove unused dependencies. Subscribe to security advisories for components you use."
        ),
    ),
    Rule(
        id="A06:2021-002",
        title="Vulnerable JavaScript Libraries",
        category=VULNERABLE_COMPONENTS,
        description="Direct inclusion of potentially vulnerable JavaScript libraries.",
        severity=Severity.HIGH,
        file_types=frozenset({"html", "php", "jsp", "aspx"}),
        patterns=(
            # jQuery < 3.0.0
            r"<script[^>]*src=['\"`][^'\"`]*jquery-1\.[0-9.]+\.min\.js['\"`]",
            r"<script[^>]*src=['\"`][^'\"`]*jquery-2\.[0-9.]+\.min\.js['\"`]",
            # Bootstrap < 4.0.0
            r"<script[^>]*src=['\"`][^'\"`]*bootstrap-3\.[0-9.]+\.min\.js['\"`]",
            # AngularJS < 1.6.0
            r"<script[^>]*src=['\"`][^'\"`]*angular-1\.[0-5]\.[0-9.]+\.min\.js['\"`]",
            # Moment.js < 2.19.3
            r"<script[^>]*src=['\"`][^'\"`]*moment-2\.(?:0|1[0-8]|19\.[0-2])\.min\.js['\"`]",
        ),
        remediation=(
            "Update to the latest versions of JavaScript libraries. Consider using package managers instead "
            "of direct CDN links to make updates easier. Implement Subresource Integrity (SRI) checks for "
            "third-party resources."
        ),
    ),
]
