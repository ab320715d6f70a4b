"""Rules for injection flaws (A03:2021)."""

from __future__ import annotations

from owasp_scanner.categories import INJECTION
from owasp_scanner.severity import Severity

from .base import Rule

RULES = [
    Rule(
        id="A03:2021-001",
        title="SQL Injection",
        category=INJECTION,
        description=(
            "SQL injection occurs when untrusted data is sent to an interpreter as part of a command or query."
        ),
        severity=Severity.HIGH,
        file_types=frozenset({"javascript", "typescript", "php", "python", "ruby", "java"}),
        patterns=(
            # Template literals in Node.js drivers
            r"db\.query\(\s*['\"`]\s*SELECT.+?\$\{.+?\}",
            r"db\.query\(\s*['\"`]\s*INSERT.+?\$\{.+?\}",
            r"db\.query\(\s*['\"`]\s*UPDATE.+?\$\{.+?\}",
            r"db\.query\(\s*['\"`]\s*DELETE.+?\$\{.+?\}",
            r"connection\.query\(\s*['\"`]\s*SELECT.+?\$\{.+?\}",
            r"connection\.query\(\s*['\"`]\s*INSERT.+?\$\{.+?\}",
            r"connection\.query\(\s*['\"`]\s*UPDATE.+?\$\{.+?\}",
            r"connection\.query\(\s*['\"`]\s*DELETE.+?\$\{.+?\}",
            # PHP
            r"mysql_query\(\s*['\"`]\s*SELECT.+?\$",
            r"mysqli_query\(\s*['\"`]\s*SELECT.+?\$",
            # Python
            r"cursor\.execute\(\s*['\"`]\s*SELECT.+?%s",
            r"cursor\.execute\(\s*['\"`]\s*SELECT.+?\{.+?\}",
            r"cursor\.execute\(\s*f['\"`]\s*SELECT",
        ),
        remediation=(
            "Use parameterized queries or prepared statements instead of building SQL queries with string "
            "concatenation. Use an ORM or query builder that handles parameter sanitization automatically."
        ),
    ),
    Rule(
        id="A03:2021-002",
        title="NoSQL Injection",
        category=INJECTION,
        description="NoSQL injection occurs when untrusted data is sent to a NoSQL database in an unsafe manner.",
        severity=Severity.HIGH,
        file_types=frozenset({"javascript", "typescript", "python"}),
        patterns=(
            r"find\(\s*\{\s*['\"`].+?['\"`]\s*:\s*\$\{.+?\}",
            r"findOne\(\s*\{\s*['\"`].+?['\"`]\s*:\s*\$\{.+?\}",
            r"updateOne\(\s*\{\s*['\"`].+?['\"`]\s*:\s*\$\{.+?\}",
            r"updateMany\(\s*\{\s*['\"`].+?['\"`]\s*:\s*\$\{.+?\}",
            r"deleteOne\(\s*\{\s*['\"`].+?['\"`]\s*:\s*\$\{.+?\}",
            r"deleteMany\(\s*\{\s*['\"`].+?['\"`]\s*:\s*\$\{.+?\}",
            r"\{\s*\$where\s*:\s*['\"`]",
        ),
        remediation=(
            "Use parameterized queries with MongoDB's query operators. Validate and sanitize user input "
            "before using it in database queries. Use MongoDB's aggregation framework for complex queries "
            "instead of $where operator."
        ),
    ),
    Rule(
        id="A03:2021-003",
        title="Command Injection",
        category=INJECTION,
        description="Command injection occurs when untrusted data is sent to a system shell.",
        severity=Severity.CRITICAL,
        file_types=frozenset({"javascript", "typescript", "php", "python", "ruby", "java"}),
        patterns=(
            r"exec\(\s*['\"`].+?\$\{.+?\}",
            r"execSync\(\s*['\"`].+?\$\{.+?\}",
            r"spawn\(\s*['\"`].+?\$\{.+?\}",
            r"spawnSync\(\s*['\"`].+?\$\{.+?\}",
            r"child_process\.exec\(",
            # PHP
            r"shell_exec\(\s*\$",
            r"exec\(\s*\$",
            r"system\(\s*\$",
            r"passthru\(\s*\$",
            # Python
            r"os\.system\(\s*['\"`].+?\{.+?\}",
            r"os\.system\(\s*f['\"`]",
            r"subprocess\.call\(\s*['\"`].+?\{.+?\}",
            r"subprocess\.call\(\s*f['\"`]",
            r"subprocess\.Popen\(\s*['\"`].+?\{.+?\}",
            r"subprocess\.Popen\(\s*f['\"`]",
        ),
        remediation=(
            "Avoid using system commands when possible. If necessary, use libraries that handle command "
            "arguments properly without string concatenation. Validate and sanitize user input before using "
            "it in system commands."
        ),
    ),
    Rule(
        id="A03:2021-004",
        title="Cross-Site Scripting (XSS)",
        category=INJECTION,
        description="XSS occurs when untrusted data is included in a web page without proper validation or escaping.",
        severity=Severity.HIGH,
        file_types=frozenset({"javascript", "typescript", "html", "php"}),
        patterns=(
            r"innerHTML\s*=\s*['\"`].+?\$\{.+?\}",
            r"outerHTML\s*=\s*['\"`].+?\$\{.+?\}",
            r"document\.write\(\s*['\"`].+?\$\{.+?\}",
            r"element\.insertAdjacentHTML\(",
            r"dangerouslySetInnerHTML\s*=\s*\{\{\s*__html:\s*",
            r"\[innerHTML\]\s*=\s*['\"`]",
            # PHP echoing request data
            r"echo\s+\$_GET",
            r"echo\s+\$_POST",
            r"echo\s+\$_REQUEST",
            r"print\s+\$_GET",
            r"print\s+\$_POST",
            r"print\s+\$_REQUEST",
        ),
        remediation=(
            "Use context-specific output encoding when including dynamic data in HTML, JavaScript, CSS, or "
            "URLs. Use modern frameworks that automatically escape output. For React, avoid "
            "dangerouslySetInnerHTML. For user-generated HTML content, use a library like DOMPurify to "
            "sanitize the HTML."
        ),
    ),
    Rule(
        id="A03:2021-005",
        title="XML Injection (XXE)",
        category=INJECTION,
        description=(
            "XML External Entity (XXE) injection occurs when XML parsers process external entity references "
            "in untrusted XML data."
        ),
        severity=Severity.HIGH,
        file_types=frozenset({"javascript", "typescript", "java", "php", "python"}),
        patterns=(
            r"libxmljs\.parseXml\(",
            r"(?<!new )DOMParser\(\)",
            r"new\s+DOMParser\(\)",
            r"DocumentBuilderFactory\.newInstance\(\)",
            r"SAXParserFactory\.newInstance\(\)",
            r"XMLInputFactory\.newInstance\(\)",
            r"simplexml_load_",
            r"(?<!new )DOMDocument\(\)",
            r"new\s+DOMDocument\(\)",
            r"etree\.parse\(",
            r"minidom\.parse\(",
            r"sax\.parse\(",
        ),
        remediation=(
            "Configure XML parsers to disable external entity processing and DTD processing. Use JSON instead "
            "of XML when possible. If XML is required, validate and sanitize XML input before processing."
        ),
    ),
]
