"""Rules for software and data integrity failures (A08:2021)."""

from __future__ import annotations

from owasp_scanner.categories import INTEGRITY_FAILURES
from owasp_scanner.severity import Severity

from .base import Rule

SERVER_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java", "ruby"})
MARKUP_TYPES = frozenset({"html", "php", "jsp", "aspx"})

RULES = [
    Rule(
        id="A08:2021-001",
        title="Insecure Deserialization",
        category=INTEGRITY_FAILURES,
        description="Unsafe deserialization of user-supplied data that could lead to remote code execution.",
        severity=Severity.CRITICAL,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"JSON\.parse\(",
            r"\beval\(",
            r"\bunserialize\(",
            r"\bdeserialize\(",
            r"pickle\.loads\(",
            r"yaml\.load\(",
            r"ObjectInputStream\(",
            r"readObject\(",
            r"readUnshared\(",
            r"Marshal\.load\(",
            r"YAML\.load\(",
        ),
        remediation=(
            "Avoid deserializing data from untrusted sources. If deserialization is necessary, implement "
            "integrity checks like digital signatures or use safer alternatives like JSON with schema "
            "validation. For specific languages, use secure deserialization libraries that limit object creation."
        ),
    ),
    Rule(
        id="A08:2021-002",
        title="Missing Subresource Integrity",
        category=INTEGRITY_FAILURES,
        description="External scripts or stylesheets loaded without Subresource Integrity (SRI) checks.",
        severity=Severity.MEDIUM,
        file_types=MARKUP_TYPES,
        patterns=(
            r"<script(?![^>]*\bintegrity=)[^>]*src=['\"`]https?://[^'\"`]+['\"`][^>]*>",
            r"<link(?![^>]*\bintegrity=)[^>]*href=['\"`]https?://[^'\"`]+\.css['\"`][^>]*>",
        ),
        remediation=(
            "Add integrity and crossorigin attributes to script and link tags that load external resources. "
            "Generate SRI hashes using tools like srihash.org or the SRI Hash Generator plugin. Consider "
            "hosting critical scripts locally when possible."
        ),
    ),
    Rule(
        id="A08:2021-003",
        title="Unsigned Code or Updates",
        category=INTEGRITY_FAILURES,
        description="Code or updates that are not cryptographically signed, allowing potential tampering.",
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"download\(['\"`]https?://[^'\"`]+['\"`]\)",
            r"fetch\(['\"`]https?://[^'\"`]+['\"`]\)",
            r"wget\(['\"`]https?://[^'\"`]+['\"`]\)",
            r"require\(['\"`]https?://[^'\"`]+['\"`]\)",
            r"import\(['\"`]https?://[^'\"`]+['\"`]\)",
            r"\bload\(['\"`]https?://[^'\"`]+['\"`]\)",
        ),
        remediation=(
            "Implement code signing for all deployable artifacts. Verify signatures before executing "
            "downloaded code. Use package managers that support signature verification. Implement secure "
            "update mechanisms that validate the integrity of updates before applying them."
        ),
    ),
]
