"""Rule model shared by every category module."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, FrozenSet, Iterator, List, Optional, Pattern, Tuple, Union

from owasp_scanner.result import Finding
from owasp_scanner.severity import Severity

CheckFn = Callable[[str, str, List[str], str], List[Finding]]


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> Pattern[str]:
    return re.compile(pattern)


@dataclass(frozen=True)
class FileContext:
    """Bundle the inputs every matcher sees for one file."""

    path: str
    content: str
    lines: List[str]
    file_type: str

    @classmethod
    def from_text(cls, path: str, content: str, file_type: str) -> "FileContext":
        return cls(path=path, content=content, lines=content.split("\n"), file_type=file_type)


@dataclass(frozen=True)
class Match:
    line: int
    column: int
    snippet: str


@dataclass(frozen=True)
class PatternMatcher:
    """Regex patterns applied to the whole file or to each line."""

    patterns: Tuple[str, ...]
    line_by_line: bool = False

    def find(self, context: FileContext) -> Iterator[Match]:
        for pattern in self.patterns:
            regex = compile_pattern(pattern)
            if self.line_by_line:
                yield from self._find_in_lines(regex, context.lines)
            else:
                yield from self._find_in_content(regex, context)

    def _find_in_lines(self, regex: Pattern[str], lines: List[str]) -> Iterator[Match]:
        for index, line in enumerate(lines):
            found = regex.search(line)
            if found:
                yield Match(line=index + 1, column=found.start() + 1, snippet=line.strip())

    def _find_in_content(self, regex: Pattern[str], context: FileContext) -> Iterator[Match]:
        content = context.content
        for found in regex.finditer(content):
            start = found.start()
            line_number = content.count("\n", 0, start) + 1
            # rfind is -1 on the first line, which makes the column start + 1.
            column = start - content.rfind("\n", 0, start)
            yield Match(line=line_number, column=column, snippet=context.lines[line_number - 1].strip())


@dataclass(frozen=True)
class CallbackMatcher:
    """Custom check that builds its own findings."""

    check: CheckFn

    def run(self, context: FileContext) -> List[Finding]:
        return list(self.check(context.path, context.content, context.lines, context.file_type) or [])


Matcher = Union[PatternMatcher, CallbackMatcher]


@dataclass(frozen=True)
class Rule:
    """A named heuristic for one OWASP Top Ten category."""

    id: str
    title: str
    category: str
    description: str
    severity: Severity
    remediation: str = ""
    file_types: FrozenSet[str] = field(default_factory=frozenset)
    patterns: Tuple[str, ...] = ()
    line_by_line: bool = False
    check: Optional[CheckFn] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_types", frozenset(self.file_types))
        object.__setattr__(self, "patterns", tuple(self.patterns))
        object.__setattr__(self, "severity", Severity.parse(self.severity))
        if not self.patterns and self.check is None:
            raise ValueError(f"Rule {self.id} needs patterns or a check")

    @property
    def matchers(self) -> Tuple[Matcher, ...]:
        matchers: List[Matcher] = []
        if self.patterns:
            matchers.append(PatternMatcher(self.patterns, self.line_by_line))
        if self.check is not None:
            matchers.append(CallbackMatcher(self.check))
        return tuple(matchers)

    def applies_to(self, file_type: str) -> bool:
        return not self.file_types or file_type in self.file_types

    def apply(self, context: FileContext) -> List[Finding]:
        findings: List[Finding] = []
        for matcher in self.matchers:
            if isinstance(matcher, PatternMatcher):
                findings.extend(self._build_finding(match) for match in matcher.find(context))
            else:
                findings.extend(matcher.run(context))
        return findings

    def _build_finding(self, match: Match) -> Finding:
        return Finding(
            rule_id=self.id,
            category=self.category,
            title=self.title,
            description=self.description,
            severity=self.severity,
            line=match.line,
            column=match.column,
            snippet=match.snippet,
            remediation=self.remediation,
        )

