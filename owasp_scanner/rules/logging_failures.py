"""Rules for security logging and monitoring failures (A09:2021).

Most patterns rely on a negative lookahead for ``log`` within the body that
follows the match, so a handler that logs anything is not reported.
"""

from __future__ import annotations

from owasp_scanner.categories import LOGGING_FAILURES
from owasp_scanner.severity import Severity

from .base import Rule

SERVER_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java", "ruby"})

SENSITIVE_FIELDS = ("password", "token", "secret", "creditCard", "ssn")
LOG_CALLS = (r"log\(", r"logger\.\w+\(", r"console\.\w+\(")

RULES = [
    Rule(
        id="A09:2021-001",
        title="Insufficient Logging",
        category=LOGGING_FAILURES,
        description=(
            "Lack of logging for security-relevant events such as authentication, access control, or input "
            "validation failures."
        ),
        severity=Severity.MEDIUM,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"function\s+(?:login|authenticate|signIn)\s*\([^)]*\)\s*\{(?![^}]*log)",
            r"def\s+(?:login|authenticate|sign_in)\s*\([^)]*\)\s*:(?![^:]*log)",
            r"catch\s*\([^)]*\)\s*\{(?![^}]*log)",
            r"except\s+(?:Exception|\w+Error)\s+as\s+\w+\s*:(?![^:]*log)",
            r"function\s+(?:authorize|checkPermission)\s*\([^)]*\)\s*\{(?![^}]*log)",
            r"def\s+(?:authorize|check_permission)\s*\([^)]*\)\s*:(?![^:]*log)",
        ),
        remediation=(
            "Implement comprehensive logging for security-relevant events, including authentication successes "
            "and failures, authorization failures, input validation failures, and other security exceptions. "
            "Include relevant details like user IDs, timestamps, and affected resources in log entries."
        ),
    ),
    Rule(
        id="A09:2021-002",
        title="Sensitive Data in Logs",
        category=LOGGING_FAILURES,
        description="Logging of sensitive data such as passwords, session tokens, or personal information.",
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=tuple(f"{call}[^)]*{field}" for call in LOG_CALLS for field in SENSITIVE_FIELDS),
        remediation=(
            "Implement data sanitization for log entries to remove or mask sensitive information. Use logging "
            "frameworks that support redaction of sensitive fields. Review logs to ensure they do not contain "
            "sensitive data. Consider using specialized security logging libraries."
        ),
    ),
    Rule(
        id="A09:2021-003",
        title="Missing Audit Trails",
        category=LOGGING_FAILURES,
        description="Lack of audit logging for critical operations or data modifications.",
        severity=Severity.MEDIUM,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"update\([^)]*\)(?![^;]*log)",
            r"delete\([^)]*\)(?![^;]*log)",
            r"remove\([^)]*\)(?![^;]*log)",
            r"save\([^)]*\)(?![^;]*log)",
            r"create\([^)]*\)(?![^;]*log)",
            r"function\s+admin\w*\([^)]*\)\s*\{(?![^}]*log)",
            r"def\s+admin\w*\([^)]*\)\s*:(?![^:]*log)",
        ),
        remediation=(
            "Implement audit logging for all critical operations, especially those that modify data or affect "
            "system security. Include details about who performed the action, what was changed, and when the "
            "change occurred. Consider using an audit logging framework or library."
        ),
    ),
]
