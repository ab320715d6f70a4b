"""Command-line entry point for the OWASP Top Ten scanner."""

from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path
from typing import List, Optional

from colorama import just_fix_windows_console

from . import __version__
from .cancel import CancelToken
from .categories import normalize_category
from .config import (
    DEFAULT_API_URL,
    DEFAULT_CONFIG_PATH,
    SubmissionConfig,
    default_scan_config,
    load_scan_config,
    load_submission_config,
    save_submission_config,
)
from .engine import filter_rules, run_scan
from .errors import ConfigurationError, RenderError, ScanCancelled, SubmissionError
from .logs import setup_logging
from .report import SUPPORTED_FORMATS, format_summary_table, render, write_report
from .result import ScanResult
from .rules import get_all_rules, get_rules_by_category
from .severity import SEVERITY_ORDER, Severity
from .submission import DashboardClient, project_id_of

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="owasp-scanner",
        description="Scan a project for OWASP Top Ten vulnerabilities",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan a project for OWASP Top Ten vulnerabilities.")
    scan.add_argument("path", help="Path to the project to scan.")
    scan.add_argument(
        "--output",
        "-o",
        choices=SUPPORTED_FORMATS,
        default="text",
        help="Report format (defaults to text).",
    )
    scan.add_argument(
        "--output-file",
        "-f",
        dest="output_file",
        default=None,
        help="Path to write the report to instead of stdout.",
    )
    scan.add_argument("--config", "-c", default=None, help="JSON or YAML scan configuration file.")
    scan.add_argument(
        "--offline",
        action="store_true",
        help="Do not send results to the dashboard.",
    )
    scan.add_argument(
        "--detailed",
        action="store_true",
        help="Include description, remediation and snippet in the text report.",
    )
    scan.add_argument("--workers", type=int, default=None, help="Number of analysis threads.")
    scan.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Cancel the scan after this many seconds.",
    )
    scan.add_argument(
        "--best-effort",
        action="store_true",
        help="On timeout, report the files analyzed so far instead of failing.",
    )
    scan.add_argument(
        "--fail-on",
        choices=[severity.value for severity in SEVERITY_ORDER],
        default=None,
        help="Exit with status 2 when a finding is at or above this severity.",
    )
    scan.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    scan.add_argument("--no-color", action="store_true", help="Disable colored text output.")

    init = subparsers.add_parser("init", help="Configure dashboard credentials interactively.")
    init.add_argument("--force", action="store_true", help="Overwrite an existing configuration.")
    init.add_argument(
        "--config",
        default=None,
        help=f"Where to write the configuration (defaults to {DEFAULT_CONFIG_PATH}).",
    )
    init.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")

    rules = subparsers.add_parser("rules", help="List the rules in the catalog.")
    rules.add_argument("--category", default=None, help="Only list one category, e.g. A03 or A03:2021.")
    rules.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    return parser


def _error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _submit(result: ScanResult) -> None:
    try:
        config = load_submission_config()
    except ConfigurationError as exc:
        _error(str(exc))
        return
    if config is None:
        print("Dashboard configuration not found.", file=sys.stderr)
        print("Run `owasp-scanner init` to configure dashboard integration.", file=sys.stderr)
        return

    client = DashboardClient(config.api_url, token=config.token, project_id=config.project_id)
    if not client.check_connection():
        _error("Failed to connect to dashboard. Please check your configuration.")
        return
    try:
        scan_id = client.send_results(result)
    except SubmissionError as exc:
        _error(f"Failed to send results to dashboard: {exc}")
        return
    print(f"Scan results sent to dashboard. Scan ID: {scan_id}", file=sys.stderr)


def command_scan(args: argparse.Namespace) -> int:
    try:
        config = load_scan_config(args.config) if args.config else default_scan_config()
        rules = filter_rules(get_all_rules(), config.rules)
        cancel = CancelToken(timeout=args.timeout)
        result = run_scan(
            args.path,
            rules=rules,
            exclusions=config.exclude,
            workers=args.workers,
            cancel=cancel,
            best_effort=args.best_effort,
        )
    except (ConfigurationError, ScanCancelled, ValueError) as exc:
        _error(str(exc))
        return 1

    color = not args.no_color and args.output_file is None and sys.stdout.isatty()
    text = render(result, args.output, detailed=args.detailed, color=color)
    if args.output_file:
        try:
            write_report(text, args.output_file)
            print(format_summary_table(result))
            print(f"\nReport written to {args.output_file}")
        except RenderError as exc:
            _error(str(exc))
            write_report(text)
    else:
        write_report(text)

    if not args.offline:
        _submit(result)

    fail_on = Severity.parse(args.fail_on) if args.fail_on else None
    return result.exit_code(fail_on)


def _prompt(label: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    answer = input(f"{label}{suffix}: ").strip()
    return answer or default


def _choose_project(client: DashboardClient) -> str:
    projects = client.list_projects()
    if not projects:
        print("No projects found. Creating a new project...")
        name = _prompt("Project name")
        description = _prompt("Project description (optional)")
        project = client.create_project(name, description)
        print(f"Project created: {project.get('name', name)} ({project_id_of(project)})")
        return project_id_of(project)

    print("Available projects:")
    for index, project in enumerate(projects, start=1):
        print(f"{index}. {project.get('name', '')} ({project_id_of(project)})")
    choice = _prompt(f"Select project (1-{len(projects)})")
    if not choice.isdigit() or not 1 <= int(choice) <= len(projects):
        raise SubmissionError("Invalid project selection")
    selected = projects[int(choice) - 1]
    print(f"Selected project: {selected.get('name', '')} ({project_id_of(selected)})")
    return project_id_of(selected)


def command_init(args: argparse.Namespace) -> int:
    config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
    if config_path.exists() and not args.force:
        print("Configuration file already exists.")
        print("Use --force to overwrite.")
        return 0

    print("OWASP Scanner Dashboard Configuration")
    print("=" * 37)
    try:
        api_url = _prompt("Dashboard API URL", DEFAULT_API_URL)
        email = _prompt("Email")
        password = getpass.getpass("Password: ")
        client = DashboardClient(api_url)
        print("Logging in...")
        client.login(email, password)
        print("Fetching projects...")
        project_id = _choose_project(client)
        saved = save_submission_config(
            SubmissionConfig(api_url=client.api_url, token=client.token, project_id=project_id),
            config_path,
        )
    except (SubmissionError, ConfigurationError) as exc:
        _error(f"Failed to initialize configuration: {exc}")
        return 1
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        _error("Initialization aborted")
        return 1
    print(f"Configuration saved to {saved}")
    return 0


def command_rules(args: argparse.Namespace) -> int:
    if args.category:
        rules = get_rules_by_category(normalize_category(args.category))
        if not rules:
            _error(f"Unknown category: {args.category}")
            return 1
    else:
        rules = get_all_rules()
    for rule in rules:
        print(f"{rule.id:<14} {rule.severity.value:<9} {rule.title}")
    return 0


COMMANDS = {
    "scan": command_scan,
    "init": command_init,
    "rules": command_rules,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    just_fix_windows_console()
    return COMMANDS[args.command](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
