"""Rules for security misconfiguration (A05:2021)."""

from __future__ import annotations

from owasp_scanner.categories import SECURITY_MISCONFIGURATION
from owasp_scanner.severity import Severity

from .base import Rule

RULES = [
    Rule(
        id="A05:2021-001",
        title="Default or Weak Credentials",
        category=SECURITY_MISCONFIGURATION,
        description="Use of default, weak, or hardcoded credentials in configuration files.",
        severity=Severity.CRITICAL,
        file_types=frozenset({"javascript", "typescript", "json", "yaml", "xml", "properties", "config"}),
        patterns=(
            r"username['\"`]?\s*[:=]\s*['\"`](?:admin|root|user|test|guest)['\"`]",
            r"password['\"`]?\s*[:=]\s*['\"`](?:admin|root|password|123456|test|guest)['\"`]",
            r"\buser['\"`]?\s*[:=]\s*['\"`](?:admin|root|user|test|guest)['\"`]",
            r"\bpass['\"`]?\s*[:=]\s*['\"`](?:admin|root|password|123456|test|guest)['\"`]",
        ),
        remediation=(
            "Use strong, unique credentials for all environments. Store credentials in environment variables "
            "or a secure vault, not in configuration files. Implement proper secrets management."
        ),
    ),
    Rule(
        id="A05:2021-002",
        title="Verbose Error Messages",
        category=SECURITY_MISCONFIGURATION,
        description="Detailed error messages that could reveal sensitive information about the application.",
        severity=Severity.MEDIUM,
        file_types=frozenset({"javascript", "typescript", "php", "python", "java"}),
        patterns=(
            r"res\.send\(\s*err\s*\)",
            r"res\.send\(\s*error\s*\)",
            r"res\.json\(\s*err\s*\)",
            r"res\.json\(\s*error\s*\)",
            r"console\.error\(\s*err\s*\)",
            r"console\.log\(\s*err\s*\)",
            r"print\(\s*e\s*\)",
            r"print\(\s*exception\s*\)",
            r"printStackTrace\(\)",
        ),
        remediation=(
            "Implement proper error handling that does not expose sensitive details to users. Log detailed "
            "errors server-side but return generic error messages to clients. Use a production mode that "
            "limits error details in responses."
        ),
    ),
]
