"""Rules for broken access control (A01:2021)."""

from __future__ import annotations

from owasp_scanner.categories import BROKEN_ACCESS_CONTROL
from owasp_scanner.severity import Severity

from .base import Rule

WEB_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java"})

RULES = [
    Rule(
        id="A01:2021-001",
        title="Missing Access Control Checks",
        category=BROKEN_ACCESS_CONTROL,
        description=(
            "Endpoints or functions that lack proper authorization checks, allowing unauthorized "
            "access to protected resources."
        ),
        severity=Severity.HIGH,
        file_types=WEB_LANGUAGES,
        patterns=(
            # Express routes with the handler as the second argument, i.e. no middleware
            r"app\.(?:get|post|put|delete|patch)\(['\"`][^'\"`,]+['\"`]\s*,\s*(?:async\s*)?(?:function|\([^)]*\)\s*=>)",
            r"router\.(?:get|post|put|delete|patch)\(['\"`][^'\"`,]+['\"`]\s*,\s*(?:async\s*)?(?:function|\([^)]*\)\s*=>)",
            r"exports\.\w+\s*=\s*(?:async\s*)?(?:function|\([^)]*\)\s*=>)",
            r"module\.exports\.\w+\s*=\s*(?:async\s*)?(?:function|\([^)]*\)\s*=>)",
        ),
        remediation=(
            "Implement proper access control checks for all sensitive operations. Use middleware for "
            "authentication and authorization in web frameworks. Implement role-based access control "
            "(RBAC) or attribute-based access control (ABAC) systems."
        ),
    ),
    Rule(
        id="A01:2021-002",
        title="Insecure Direct Object References (IDOR)",
        category=BROKEN_ACCESS_CONTROL,
        description=(
            "Direct references to objects without proper access control checks, allowing attackers to "
            "manipulate references to access unauthorized data."
        ),
        severity=Severity.HIGH,
        file_types=WEB_LANGUAGES,
        patterns=(
            r"findById\(\s*req\.params\.id\s*\)",
            r"findOne\(\s*\{\s*['\"`]?_?id['\"`]?\s*:\s*req\.params\.id\s*\}\s*\)",
            r"findOne\(\s*\{\s*['\"`]?_?id['\"`]?\s*:\s*req\.query\.id\s*\}\s*\)",
            r"findByPk\(\s*req\.params\.id\s*\)",
            r"where\(\s*['\"`]?id['\"`]?\s*=\s*\?\s*['\"`]?,\s*\[\s*req\.params\.id\s*\]\s*\)",
            r"SELECT.+?WHERE.+?id\s*=\s*\$_GET\[.+?\]",
            r"SELECT.+?WHERE.+?id\s*=\s*\$_POST\[.+?\]",
            r"SELECT.+?WHERE.+?id\s*=\s*\$_REQUEST\[.+?\]",
        ),
        remediation=(
            "Implement access control checks that verify the user has permission to access the requested "
            "object. Use indirect references or access control lists. Validate that the authenticated user "
            "has permission to access or modify the requested resource."
        ),
    ),
    Rule(
        id="A01:2021-003",
        title="Cross-Origin Resource Sharing (CORS) Misconfiguration",
        category=BROKEN_ACCESS_CONTROL,
        description=(
            "Overly permissive CORS configurations that allow unauthorized domains to access sensitive "
            "resources."
        ),
        severity=Severity.MEDIUM,
        file_types=WEB_LANGUAGES,
        patterns=(
            r"Access-Control-Allow-Origin\s*:\s*['\"`]\*['\"`]",
            r"res\.header\(['\"`]Access-Control-Allow-Origin['\"`]\s*,\s*['\"`]\*['\"`]\)",
            r"res\.setHeader\(['\"`]Access-Control-Allow-Origin['\"`]\s*,\s*['\"`]\*['\"`]\)",
            r"res\.set\(['\"`]Access-Control-Allow-Origin['\"`]\s*,\s*['\"`]\*['\"`]\)",
            r"response\.setHeader\(['\"`]Access-Control-Allow-Origin['\"`]\s*,\s*['\"`]\*['\"`]\)",
            r"headers\[['\"`]Access-Control-Allow-Origin['\"`]\]\s*=\s*['\"`]\*['\"`]",
            # Reflected origin without an allow-list
            r"Access-Control-Allow-Origin\s*:\s*req\.headers\.origin",
            r"res\.header\(['\"`]Access-Control-Allow-Origin['\"`]\s*,\s*req\.headers\.origin\)",
            r"res\.setHeader\(['\"`]Access-Control-Allow-Origin['\"`]\s*,\s*req\.headers\.origin\)",
        ),
        remediation=(
            "Restrict CORS access to trusted domains only. Do not use wildcard (*) in production "
            "environments. Implement a whitelist of allowed origins and validate incoming Origin headers "
            "against this list. Ensure that Access-Control-Allow-Credentials is not used with wildcard origins."
        ),
    ),
    Rule(
        id="A01:2021-004",
        title="Missing Function Level Access Control",
        category=BROKEN_ACCESS_CONTROL,
        description="Application functions that do not properly check if the user is authorized to access them.",
        severity=Severity.HIGH,
        file_types=WEB_LANGUAGES,
        patterns=(
            r"function\s+admin\w*\(",
            r"def\s+admin\w*\(",
            r"public\s+(?:static\s+)?\w+\s+admin\w*\(",
            r"\.(?:delete|remove|update|edit|create|add)\w*\(",
        ),
        remediation=(
            "Implement consistent access control checks at the function or method level. Use decorators, "
            "annotations, or middleware to enforce authorization. Implement role-based access control and "
            "verify user permissions before executing sensitive operations."
        ),
    ),
    Rule(
        id="A01:2021-005",
        title="JWT Without Signature Verification",
        category=BROKEN_ACCESS_CONTROL,
        description=(
            "JWT tokens that are accepted without proper signature verification, allowing attackers to "
            "forge tokens."
        ),
        severity=Severity.CRITICAL,
        file_types=WEB_LANGUAGES,
        patterns=(
            r"jwt\.decode\(",
            r"jwtDecode\(",
            r"JSON\.parse\(Buffer\.from\([^,]+\.split\(['\"`]\.['\"`,]\)\[1\]",
            r"JSON\.parse\(atob\([^,]+\.split\(['\"`]\.['\"`,]\)\[1\]",
            r"JSON\.parse\(new Buffer\([^,]+\.split\(['\"`]\.['\"`,]\)\[1\]",
        ),
        remediation=(
            "Always verify JWT signatures before trusting the contents. Use jwt.verify() instead of "
            "jwt.decode(). Implement proper key management for JWT signing keys. Consider using short-lived "
            "tokens and implementing token revocation mechanisms."
        ),
    ),
]
