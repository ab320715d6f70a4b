"""Rules for insecure design (A04:2021)."""

from __future__ import annotations

from owasp_scanner.categories import INSECURE_DESIGN
from owasp_scanner.severity import Severity

from .base import Rule

WEB_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java"})

RULES = [
    Rule(
        id="A04:2021-001",
        title="Missing Rate Limiting",
        category=INSECURE_DESIGN,
        description="Lack of rate limiting on authentication endpoints, allowing brute force attacks.",
        severity=Severity.MEDIUM,
        file_types=WEB_LANGUAGES,
        patterns=(
            r"app\.(?:post|put)\(['\"`]/(?:login|signin|auth)['\"`]",
            r"router\.(?:post|put)\(['\"`]/(?:login|signin|auth)['\"`]",
            r"app\.route\(['\"`]/(?:login|signin|auth)['\"`]\)\.post",
        ),
        remediation=(
            "Implement rate limiting on authentication endpoints. Use libraries like express-rate-limit for "
            "Node.js, django-ratelimit for Python, or similar solutions for other frameworks."
        ),
    ),
    Rule(
        id="A04:2021-002",
        title="Lack of Input Validation",
        category=INSECURE_DESIGN,
        description="Endpoints that process user input without proper validation.",
        severity=Severity.HIGH,
        file_types=WEB_LANGUAGES,
        line_by_line=True,
        patterns=(
            r"req\.body\.[\w.]+",
            r"req\.params\.[\w.]+",
            r"req\.query\.[\w.]+",
            r"request\.form\[['\"`]\w+['\"`]\]",
            r"request\.args\.get\(",
            r"\$_POST\[['\"`]\w+['\"`]\]",
            r"\$_GET\[['\"`]\w+['\"`]\]",
        ),
        remediation=(
            "Implement proper input validation using validation libraries like Joi, Yup, or class-validator "
            "for JavaScript/TypeScript, or similar libraries for other languages. Validate input data against "
            "a schema before processing."
        ),
    ),
]
