"""Drive a full scan: discovery, analysis on a worker pool, aggregation."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Mapping, Optional, Sequence

from .analyzer import analyze
from .cancel import CancelToken
from .discovery import DEFAULT_EXCLUDE, FileRecord, discover, resolve_root
from .errors import DiscoveryError, ScanCancelled
from .result import Aggregator, ScanResult
from .rules import Rule, get_all_rules

logger = logging.getLogger(__name__)


def default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


def filter_rules(rules: Sequence[Rule], enabled: Mapping[str, bool]) -> List[Rule]:
    """Drop the rules switched off in ``enabled``; ids not listed stay on."""

    return [rule for rule in rules if enabled.get(rule.id, True)]


def _scan_file(
    file: FileRecord,
    rules: Sequence[Rule],
    aggregator: Aggregator,
    cancel: Optional[CancelToken],
) -> None:
    if cancel is not None:
        cancel.raise_if_cancelled()
    try:
        findings = analyze(file, rules)
    except DiscoveryError as exc:
        logger.warning("Skipping file: %s", exc)
        return
    aggregator.add_file(file, findings)


def _run_pool(
    files: Sequence[FileRecord],
    rules: Sequence[Rule],
    aggregator: Aggregator,
    cancel: Optional[CancelToken],
    workers: int,
) -> None:
    if workers == 1:
        for file in files:
            _scan_file(file, rules, aggregator, cancel)
        return

    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(_scan_file, file, rules, aggregator, cancel) for file in files]
        for future in as_completed(futures):
            future.result()
    except BaseException:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    executor.shutdown(wait=True)


def run_scan(
    path: "str | os.PathLike[str]",
    rules: Optional[Sequence[Rule]] = None,
    exclusions: Optional[Sequence[str]] = None,
    workers: Optional[int] = None,
    cancel: Optional[CancelToken] = None,
    best_effort: bool = False,
) -> ScanResult:
    """Scan ``path`` and return the aggregated result.

    ``rules`` defaults to the full catalog and ``exclusions`` to
    :data:`DEFAULT_EXCLUDE`. When ``cancel`` fires the scan raises
    :class:`ScanCancelled`, unless ``best_effort`` is set, in which case the
    files analyzed so far are returned.
    """

    root = resolve_root(path)
    active_rules = list(get_all_rules() if rules is None else rules)
    exclude = tuple(DEFAULT_EXCLUDE if exclusions is None else exclusions)
    pool_size = default_workers() if workers is None else workers
    if pool_size < 1:
        raise ValueError("workers must be at least 1")

    aggregator = Aggregator(str(path))
    logger.info("Loaded %d rules", len(active_rules))
    try:
        files = list(discover(root, exclude, cancel))
        logger.info("Found %d files to scan under %s", len(files), root)
        _run_pool(files, active_rules, aggregator, cancel, pool_size)
    except ScanCancelled:
        if not best_effort:
            raise
        logger.warning(
            "Scan cancelled, returning partial results for %d files",
            aggregator.files_scanned,
        )

    result = aggregator.finish()
    logger.info(
        "Scan completed: %d findings in %d files",
        result.summary.vulnerabilities_found,
        result.summary.files_scanned,
    )
    return result
