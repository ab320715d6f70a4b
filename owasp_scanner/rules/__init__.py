"""Rule registry for the scanner.

The catalog is the concatenation of the ten category modules in A01..A10
order, built once at import time.
"""

from __future__ import annotations

from typing import List, Optional

from . import (
    authentication_failures,
    broken_access_control,
    cryptographic_failures,
    injection,
    insecure_design,
    integrity_failures,
    logging_failures,
    security_misconfiguration,
    ssrf,
    vulnerable_components,
)
from .base import CallbackMatcher, FileContext, PatternMatcher, Rule

CATEGORY_MODULES = (
    broken_access_control,
    cryptographic_failures,
    injection,
    insecure_design,
    security_misconfiguration,
    vulnerable_components,
    authentication_failures,
    integrity_failures,
    logging_failures,
    ssrf,
)

_CATALOG: List[Rule] = [rule for module in CATEGORY_MODULES for rule in module.RULES]


def get_all_rules() -> List[Rule]:
    return list(_CATALOG)


def get_rules_by_category(category: str) -> List[Rule]:
    """Return the rules whose category string equals ``category`` exactly."""

    return [rule for rule in _CATALOG if rule.category == category]


def get_rule_by_id(rule_id: str) -> Optional[Rule]:
    for rule in _CATALOG:
        if rule.id == rule_id:
            return rule
    return None


__all__ = [
    "CallbackMatcher",
    "FileContext",
    "PatternMatcher",
    "Rule",
    "get_all_rules",
    "get_rule_by_id",
    "get_rules_by_category",
]
