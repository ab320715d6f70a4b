"""Apply catalog rules to one file."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .discovery import FileRecord
from .errors import RuleApplicationError
from .result import Finding
from .rules import FileContext, Rule

logger = logging.getLogger(__name__)


def analyze(file: FileRecord, rules: Sequence[Rule]) -> List[Finding]:
    """Return the findings of every rule that applies to ``file``.

    A rule that raises (including a malformed pattern) is logged and
    skipped; the remaining rules still run. Findings carry no location,
    the aggregator fills it in from the relative path.
    """

    content = file.read_content()
    if not content:
        return []
    context = FileContext.from_text(str(file.absolute_path), content, file.file_type)

    findings: List[Finding] = []
    for rule in rules:
        if not rule.applies_to(file.file_type):
            continue
        try:
            findings.extend(rule.apply(context))
        except Exception as exc:
            logger.warning("%s", RuleApplicationError(rule.id, file.relative_path, exc))
    return findings
