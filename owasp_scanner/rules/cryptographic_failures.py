"""Rules for cryptographic failures (A02:2021)."""

from __future__ import annotations

from owasp_scanner.categories import CRYPTOGRAPHIC_FAILURES
from owasp_scanner.severity import Severity

from .base import Rule

SERVER_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java", "go", "ruby"})

RULES = [
    Rule(
        id="A02:2021-001",
        title="Weak Cryptographic Algorithms",
        category=CRYPTOGRAPHIC_FAILURES,
        description="Use of cryptographically weak algorithms that may be susceptible to attacks.",
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=(
            # MD5
            r"createHash\(['\"`]md5['\"`]\)",
            r"MD5\(",
            r"md5\(",
            r"Digest::MD5",
            # SHA1
            r"createHash\(['\"`]sha1['\"`]\)",
            r"SHA1\(",
            r"sha1\(",
            r"Digest::SHA1",
            # RC4
            r"createCipheriv\(['\"`]rc4['\"`]",
            r"RC4\(",
            # DES and 3DES
            r"createCipheriv\(['\"`]des['\"`]",
            r"createCipheriv\(['\"`]des-cbc['\"`]",
            r"DES\(",
            r"createCipheriv\(['\"`]des3['\"`]",
            r"createCipheriv\(['\"`]des-ede3['\"`]",
            r"TripleDES\(",
        ),
        remediation=(
            "Use strong, modern cryptographic algorithms. Replace MD5 and SHA1 with SHA-256 or SHA-3. "
            "Replace DES and 3DES with AES-256. Replace RC4 with ChaCha20-Poly1305 or AES-GCM."
        ),
    ),
    Rule(
        id="A02:2021-002",
        title="Hardcoded Secrets",
        category=CRYPTOGRAPHIC_FAILURES,
        description="Hardcoded credentials, API keys, or cryptographic keys in source code.",
        severity=Severity.CRITICAL,
        file_types=SERVER_LANGUAGES | {"c", "cpp", "csharp"},
        patterns=(
            r"api[_-]?key['\"`]?\s*[:=]\s*['\"`][A-Za-z0-9]{16,}['\"`]",
            r"apikey['\"`]?\s*[:=]\s*['\"`][A-Za-z0-9]{16,}['\"`]",
            r"api[_-]?secret['\"`]?\s*[:=]\s*['\"`][A-Za-z0-9]{16,}['\"`]",
            r"aws[_-]?access[_-]?key[_-]?id['\"`]?\s*[:=]\s*['\"`][A-Z0-9]{20}['\"`]",
            r"aws[_-]?secret[_-]?access[_-]?key['\"`]?\s*[:=]\s*['\"`][A-Za-z0-9/+]{40}['\"`]",
            r"password['\"`]?\s*[:=]\s*['\"`][^'\"`]{8,}['\"`]",
            r"passwd['\"`]?\s*[:=]\s*['\"`][^'\"`]{8,}['\"`]",
            r"pwd['\"`]?\s*[:=]\s*['\"`][^'\"`]{8,}['\"`]",
            r"jwt[_-]?secret['\"`]?\s*[:=]\s*['\"`][^'\"`]{8,}['\"`]",
            r"secret[_-]?key['\"`]?\s*[:=]\s*['\"`][^'\"`]{8,}['\"`]",
        ),
        remediation=(
            "Store secrets in environment variables, a secure vault, or a secrets management service. "
            "Never hardcode credentials in source code. Use configuration files that are not checked into "
            "version control or use environment-specific configuration."
        ),
    ),
    Rule(
        id="A02:2021-003",
        title="Insufficient Key Length",
        category=CRYPTOGRAPHIC_FAILURES,
        description=(
            "Use of cryptographic keys with insufficient length, making them vulnerable to brute force attacks."
        ),
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"generateKeyPair\(['\"`]rsa['\"`]\s*,\s*\{\s*modulusLength:\s*(?:512|1024)\s*",
            r"RSA\.generate\((?:512|1024)\)",
            r"generateKeyPair\(['\"`]dsa['\"`]\s*,\s*\{\s*modulusLength:\s*(?:512|1024)\s*",
            r"DSA\.generate\((?:512|1024)\)",
            r"generateKeyPair\(['\"`]ec['\"`]\s*,\s*\{\s*namedCurve:\s*['\"`](?:secp112r1|secp128r1)['\"`]\s*",
            r"EC\.generate\(['\"`](?:secp112r1|secp128r1)['\"`]\)",
        ),
        remediation=(
            "Use appropriate key lengths for cryptographic algorithms: at least 2048 bits for RSA and DSA, "
            "and 256 bits for ECC. Follow NIST guidelines for key management and cryptographic algorithm "
            "selection."
        ),
    ),
    Rule(
        id="A02:2021-004",
        title="Insecure Random Number Generation",
        category=CRYPTOGRAPHIC_FAILURES,
        description="Use of non-cryptographically secure random number generators for security-sensitive operations.",
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"Math\.random\(\)",
            r"java\.util\.Random",
            # PHP and Ruby
            r"\brand\(",
            r"mt_rand\(",
            r"array_rand\(",
            r"Random\.rand\(",
            # Python
            r"random\.random\(",
            r"random\.randint\(",
            r"random\.choice\(",
        ),
        remediation=(
            "Use cryptographically secure random number generators: crypto.randomBytes() in Node.js, "
            "java.security.SecureRandom in Java, the secrets module in Python, SecureRandom in Ruby, and "
            "random_bytes() in PHP."
        ),
    ),
    Rule(
        id="A02:2021-005",
        title="Missing TLS Configuration",
        category=CRYPTOGRAPHIC_FAILURES,
        description="Applications that do not enforce TLS or use insecure TLS configurations.",
        severity=Severity.HIGH,
        file_types=frozenset({"javascript", "typescript", "php", "python", "java", "ruby", "html"}),
        patterns=(
            r"http://[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}",
            r"http://localhost",
            r"http://127\.0\.0\.1",
            r"rejectUnauthorized:\s*false",
            r"NODE_TLS_REJECT_UNAUTHORIZED\s*=\s*['\"`]?0['\"`]?",
            r"verify=False",
            r"VERIFY_NONE",
            r"ssl_verify=False",
            r"<form[^>]*action=['\"`]http://",
        ),
        remediation=(
            "Always use HTTPS for production environments. Configure TLS properly with modern protocols "
            "(TLS 1.2+) and strong cipher suites. Enable HSTS headers. Never disable certificate validation "
            "in production code."
        ),
    ),
]
