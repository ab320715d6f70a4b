import pytest

from owasp_scanner.categories import CANONICAL_CATEGORIES, INJECTION
from owasp_scanner.rules import Rule, get_all_rules, get_rule_by_id, get_rules_by_category
from owasp_scanner.severity import Severity


def test_catalog_is_ordered_by_category():
    rules = get_all_rules()
    assert len(rules) == 33
    codes = [rule.id.split(":")[0] for rule in rules]
    assert codes == sorted(codes)
    assert rules[0].id == "A01:2021-001"
    assert rules[-1].id == "A10:2021-003"


def test_rule_ids_are_unique_and_categories_canonical():
    rules = get_all_rules()
    assert len({rule.id for rule in rules}) == len(rules)
    for rule in rules:
        assert rule.category in CANONICAL_CATEGORIES
        assert rule.id.startswith(rule.category.split(" ")[0])
        assert isinstance(rule.severity, Severity)


def test_get_all_rules_returns_a_copy():
    rules = get_all_rules()
    rules.clear()
    assert get_all_rules()


def test_lookup_by_category_and_id():
    injection = get_rules_by_category(INJECTION)
    assert [rule.id for rule in injection] == [f"A03:2021-00{index}" for index in range(1, 6)]
    assert get_rules_by_category("A11:2021 - Unknown") == []

    rule = get_rule_by_id("A07:2021-001")
    assert rule is not None
    assert rule.severity is Severity.HIGH
    assert get_rule_by_id("A99:2021-001") is None


def test_manifest_rule_is_a_callback_rule():
    rule = get_rule_by_id("A06:2021-001")
    assert rule.check is not None
    assert rule.patterns == ()


def test_rule_requires_patterns_or_check():
    with pytest.raises(ValueError):
        Rule(
            id="X-1",
            title="Empty",
            category=INJECTION,
            description="",
            severity="low",
        )


def test_rule_coerces_severity_and_file_types():
    rule = Rule(
        id="X-2",
        title="Coerced",
        category=INJECTION,
        description="",
        severity="HIGH",
        file_types=["python"],
        patterns=["foo"],
    )
    assert rule.severity is Severity.HIGH
    assert rule.file_types == frozenset({"python"})
    assert rule.patterns == ("foo",)
    assert rule.applies_to("python")
    assert not rule.applies_to("javascript")


def test_every_catalog_pattern_compiles():
    import re

    for rule in get_all_rules():
        for pattern in rule.patterns:
            re.compile(pattern)
