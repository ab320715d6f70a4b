"""Canonical OWASP Top Ten 2021 categories and free-form category cleanup."""

from __future__ import annotations

import re
from typing import Optional, Tuple

BROKEN_ACCESS_CONTROL = "A01:2021 - Broken Access Control"
CRYPTOGRAPHIC_FAILURES = "A02:2021 - Cryptographic Failures"
INJECTION = "A03:2021 - Injection"
INSECURE_DESIGN = "A04:2021 - Insecure Design"
SECURITY_MISCONFIGURATION = "A05:2021 - Security Misconfiguration"
VULNERABLE_COMPONENTS = "A06:2021 - Vulnerable and Outdated Components"
AUTHENTICATION_FAILURES = "A07:2021 - Identification and Authentication Failures"
INTEGRITY_FAILURES = "A08:2021 - Software and Data Integrity Failures"
LOGGING_FAILURES = "A09:2021 - Security Logging and Monitoring Failures"
SSRF = "A10:2021 - Server-Side Request Forgery"

CANONICAL_CATEGORIES: Tuple[str, ...] = (
    BROKEN_ACCESS_CONTROL,
    CRYPTOGRAPHIC_FAILURES,
    INJECTION,
    INSECURE_DESIGN,
    SECURITY_MISCONFIGURATION,
    VULNERABLE_COMPONENTS,
    AUTHENTICATION_FAILURES,
    INTEGRITY_FAILURES,
    LOGGING_FAILURES,
    SSRF,
)

CODE_SEPARATOR = re.compile(r"\s*[-–]\s*")
WHITESPACE = re.compile(r"\s+")


def category_code(category: str) -> str:
    """Return the leading code token, e.g. ``A03:2021`` for ``A03:2021 - Injection``."""

    return CODE_SEPARATOR.split(category, maxsplit=1)[0].strip()


def normalize_category(raw: Optional[str]) -> str:
    """Coerce a category string to its canonical form when its code is known.

    Unknown codes fall through with en-dashes turned into hyphens and
    whitespace collapsed; such values are not guaranteed to be canonical.
    """

    if not raw:
        return ""
    code = category_code(raw)
    if code:
        for canonical in CANONICAL_CATEGORIES:
            if canonical.startswith(code):
                return canonical
    return WHITESPACE.sub(" ", raw.replace("–", "-")).strip()


def is_canonical(category: str) -> bool:
    return category in CANONICAL_CATEGORIES
