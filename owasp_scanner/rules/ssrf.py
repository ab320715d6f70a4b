"""Rules for server-side request forgery (A10:2021)."""

from __future__ import annotations

from owasp_scanner.categories import SSRF
from owasp_scanner.severity import Severity

from .base import Rule

SERVER_LANGUAGES = frozenset({"javascript", "typescript", "php", "python", "java", "ruby"})

# Node.js HTTP client calls that take the URL as their first argument
HTTP_CLIENT_CALLS = (
    r"https?\.get\(",
    r"https?\.request\(",
    r"axios\.get\(",
    r"axios\.post\(",
    r"fetch\(",
    r"got\(",
    r"superagent\.get\(",
)
USER_INPUT = r"\s*(?:req|request)\.(?:body|query|params)"

RULES = [
    Rule(
        id="A10:2021-001",
        title="Unvalidated URL in Server-Side Request",
        category=SSRF,
        description="Server-side requests using user-supplied URLs without proper validation.",
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=tuple(call + USER_INPUT for call in HTTP_CLIENT_CALLS)
        + (
            r"curl_exec\(\s*\$(?:_GET|_POST|_REQUEST)",
            r"file_get_contents\(\s*\$(?:_GET|_POST|_REQUEST)",
            r"requests\.(?:get|post|put|delete)\(\s*(?:request\.(?:args|form|json))",
            r"urllib\.(?:urlopen|Request)\(\s*(?:request\.(?:args|form|json))",
            r"Net::HTTP\.(?:get|post)\(\s*params",
            r"\bopen\(\s*params",
        ),
        remediation=(
            "Implement strict URL validation for all server-side requests. Use allowlists for domains, IP "
            "ranges, and URL schemes. Disable redirects or validate the redirect target. Consider using a URL "
            "parsing library to validate URLs properly."
        ),
    ),
    Rule(
        id="A10:2021-002",
        title="Server-Side Request to Internal Resources",
        category=SSRF,
        description="Server-side requests that could be manipulated to access internal resources.",
        severity=Severity.CRITICAL,
        file_types=SERVER_LANGUAGES,
        # String concatenation first, then template literals
        patterns=tuple(call + r"['\"`][^'\"`]*['\"`]\s*\+\s*" for call in HTTP_CLIENT_CALLS)
        + tuple(call + r"`[^`]*\$\{" for call in HTTP_CLIENT_CALLS),
        remediation=(
            "Use a URL parser to extract and validate components of the URL. Implement network-level "
            "protections like firewall rules to prevent outbound requests to internal resources. Consider "
            "using a proxy service for external requests that can enforce security policies."
        ),
    ),
    Rule(
        id="A10:2021-003",
        title="XML/Document Parsers with External Entity Resolution",
        category=SSRF,
        description="XML parsers with external entity resolution enabled, which can lead to SSRF via XXE.",
        severity=Severity.HIGH,
        file_types=SERVER_LANGUAGES,
        patterns=(
            r"libxmljs\.parseXml\(",
            r"xml2js\.parseString\(",
            r"DocumentBuilderFactory\.newInstance\(\)",
            r"SAXParserFactory\.newInstance\(\)",
            r"XMLInputFactory\.newInstance\(\)",
            r"TransformerFactory\.newInstance\(\)",
            r"SAXBuilder\(",
            r"simplexml_load_",
            r"DOMDocument\(\)",
            r"etree\.parse\(",
            r"minidom\.parse\(",
            r"sax\.parse\(",
            r"xmlrpc\.client\(",
        ),
        remediation=(
            "Disable external entity resolution in XML parsers. Set the appropriate flags for your XML parser "
            "to prevent XXE attacks. For example, set FEATURE_SECURE_PROCESSING to true in Java, or use "
            "defusedxml in Python. Consider using JSON instead of XML when possible."
        ),
    ),
]
