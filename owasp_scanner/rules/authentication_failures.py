"""Rules for identification and authentication failures (A07:2021)."""

from __future__ import annotations

from owasp_scanner.categories import AUTHENTICATION_FAILURES
from owasp_scanner.severity import Severity

from .base import Rule

AUTH_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java", "ruby"})

RULES = [
    Rule(
        id="A07:2021-001",
        title="Weak Password Requirements",
        category=AUTHENTICATION_FAILURES,
        description="Insufficient password complexity or validation requirements.",
        severity=Severity.HIGH,
        file_types=AUTH_LANGUAGES,
        patterns=(
            # ">= 1..7" or "> 0..6": a minimum below eight characters
            r"password\.length\s*(?:>=\s*[1-7]|>\s*[0-6])(?!\d)",
            r"len\(password\)\s*(?:>=\s*[1-7]|>\s*[0-6])(?!\d)",
            r"validatePassword\(\s*password\s*\)\s*\{\s*return\s*password\.length",
        ),
        remediation=(
            "Implement strong password policies that require a minimum length of 8 characters, a mix of "
            "character types, and check against common passwords. Consider using a password strength library "
            "or NIST guidelines for password requirements."
        ),
    ),
    Rule(
        id="A07:2021-002",
        title="Missing Multi-Factor Authentication",
        category=AUTHENTICATION_FAILURES,
        description="Lack of multi-factor authentication for sensitive operations or admin access.",
        severity=Severity.MEDIUM,
        file_types=AUTH_LANGUAGES,
        patterns=(
            r"function\s+login\(",
            r"function\s+signIn\(",
            r"function\s+authenticate\(",
            r"def\s+login\(",
            r"def\s+sign_in\(",
            r"def\s+authenticate\(",
            r"public\s+(?:static\s+)?\w+\s+login\(",
        ),
        remediation=(
            "Implement multi-factor authentication for all authentication flows, especially for "
            "administrative access and sensitive operations. Use time-based one-time passwords (TOTP), SMS "
            "codes, email verification, or hardware tokens as additional factors."
        ),
    ),
    Rule(
        id="A07:2021-003",
        title="Insecure Session Management",
        category=AUTHENTICATION_FAILURES,
        description="Improper session handling that could lead to session fixation or hijacking.",
        severity=Severity.HIGH,
        file_types=AUTH_LANGUAGES,
        patterns=(
            r"req\.session\.user\s*=",
            r"req\.session\.userId\s*=",
            r"req\.session\.authenticated\s*=\s*true",
            r"session\[['\"`]user['\"`]\]\s*=",
            r"session\[['\"`]user_id['\"`]\]\s*=",
            r"session\[['\"`]authenticated['\"`]\]\s*=\s*true",
            r"cookie\(['\"`]\w+['\"`]",
            r"Set-Cookie:\s*\w+",
        ),
        remediation=(
            "Regenerate session IDs after authentication. Set secure, HttpOnly, and SameSite flags on "
            "cookies. Implement proper session timeout and invalidation mechanisms. Consider using a session "
            "management library that follows security best practices."
        ),
    ),
]
