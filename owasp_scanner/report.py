"""Render a :class:`ScanResult` as text, JSON or HTML."""

from __future__ import annotations

import json
import logging
import sys
from html import escape
from pathlib import Path
from typing import Dict, List, Optional

from colorama import Back, Fore, Style

from .errors import RenderError
from .result import Finding, ScanResult
from .severity import Severity
from .utils import write_text_file

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("text", "json", "html")

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.CRITICAL: Back.RED + Fore.WHITE,
    Severity.HIGH: Fore.RED,
    Severity.MEDIUM: Fore.YELLOW,
    Severity.LOW: Fore.BLUE,
    Severity.INFO: Style.DIM + Fore.WHITE,
}


def _paint(text: str, style: str, color: bool) -> str:
    if not color:
        return text
    return f"{style}{text}{Style.RESET_ALL}"


def format_summary_table(result: ScanResult) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("Scan Summary")
    lines.append("=" * 40)
    lines.append(f"Project   : {result.summary.project_path}")
    lines.append(f"Files     : {result.summary.files_scanned}")
    lines.append(f"Findings  : {result.summary.vulnerabilities_found}")
    lines.append("")
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in result.severity_counts():
        lines.append(f"{severity.value:<10} | {count:>5}")
    lines.append("-" * len(header))
    return "\n".join(lines)


def format_finding(finding: Finding, detailed: bool = False, color: bool = True) -> str:
    label = _paint(finding.severity.value.upper(), SEVERITY_COLORS[finding.severity], color)
    lines = [
        f"{_paint(finding.title, Style.BRIGHT, color)} [{label}]",
        f"{_paint('Category:', Fore.CYAN, color)} {finding.category}",
        f"{_paint('Location:', Fore.CYAN, color)} {finding.location}",
    ]
    if detailed:
        lines.append(f"{_paint('Description:', Fore.CYAN, color)} {finding.description}")
        lines.append(f"{_paint('Remediation:', Fore.CYAN, color)} {finding.remediation}")
        if finding.snippet:
            lines.append(_paint("Code Snippet:", Fore.CYAN, color))
            lines.append(_paint(finding.snippet, Style.DIM, color))
    return "\n".join(lines)


def render_text(result: ScanResult, detailed: bool = False, color: bool = True) -> str:
    blocks = [format_summary_table(result)]
    if not result.findings:
        blocks.append(_paint("No vulnerabilities found.", Fore.GREEN, color))
    for finding in result.findings:
        blocks.append(format_finding(finding, detailed=detailed, color=color))
    return "\n\n".join(blocks) + "\n"


def render_json(result: ScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


HTML_STYLE = """
        body { font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6;
               max-width: 1200px; margin: 0 auto; padding: 20px; background: #f5f5f5; }
        .container { background: white; padding: 20px; border-radius: 8px; }
        .summary { background: #f8f9fa; padding: 15px; border-radius: 4px; margin-bottom: 20px; }
        table { width: 100%; border-collapse: collapse; margin-top: 20px; }
        th, td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; vertical-align: top; }
        th { background: #f8f9fa; }
        .critical, .high { color: #dc3545; }
        .medium { color: #b8860b; }
        .low { color: #28a745; }
        .info { color: #666; }
        .timestamp { color: #666; font-size: 0.9em; }
"""


def _html_row(finding: Finding) -> str:
    severity = finding.severity.value
    return (
        "            <tr>\n"
        f"                <td>{escape(finding.rule_id)}</td>\n"
        f'                <td class="{severity}">{escape(severity)}</td>\n'
        f"                <td>{escape(finding.location)}</td>\n"
        f"                <td><strong>{escape(finding.title)}</strong><br>{escape(finding.description)}</td>\n"
        "            </tr>"
    )


def render_html(result: ScanResult) -> str:
    """Build a self-contained HTML document; every interpolated string is escaped."""

    summary = result.summary
    if result.findings:
        rows = "\n".join(_html_row(finding) for finding in result.findings)
        findings_html = (
            "<table>\n"
            "            <thead>\n"
            "            <tr><th>Rule ID</th><th>Severity</th><th>Location</th><th>Description</th></tr>\n"
            "            </thead>\n"
            "            <tbody>\n"
            f"{rows}\n"
            "            </tbody>\n"
            "        </table>"
        )
    else:
        findings_html = "<p>No vulnerabilities detected.</p>"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>OWASP Top 10 Scan Results</title>
    <style>{HTML_STYLE}    </style>
</head>
<body>
    <div class="container">
        <h1>OWASP Top 10 Scan Results</h1>
        <div class="timestamp">Generated on: {escape(summary.timestamp)}</div>
        <div class="summary">
            <h2>Scan Summary</h2>
            <p><strong>Project Path:</strong> {escape(summary.project_path)}</p>
            <p><strong>Files Scanned:</strong> {summary.files_scanned}</p>
            <p><strong>Vulnerabilities Found:</strong> {summary.vulnerabilities_found}</p>
        </div>
        <h2>Detected Vulnerabilities</h2>
        {findings_html}
    </div>
</body>
</html>
"""


def render(result: ScanResult, fmt: str, detailed: bool = False, color: bool = True) -> str:
    if fmt == "json":
        return render_json(result)
    if fmt == "html":
        return render_html(result)
    if fmt == "text":
        return render_text(result, detailed=detailed, color=color)
    raise ValueError(f"Unsupported report format: {fmt}")


def write_report(text: str, output_path: Optional[str] = None) -> None:
    """Write ``text`` to ``output_path``, or to stdout when no path is given."""

    if output_path is None:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
        return
    try:
        write_text_file(Path(output_path), text)
    except OSError as exc:
        raise RenderError(f"Unable to write report to {output_path}: {exc}") from exc
    logger.info("Report written to %s", output_path)
