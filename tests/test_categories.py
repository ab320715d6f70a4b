import pytest

from owasp_scanner.categories import (
    CANONICAL_CATEGORIES,
    INJECTION,
    SSRF,
    category_code,
    is_canonical,
    normalize_category,
)


def test_canonical_set_has_ten_entries():
    assert len(CANONICAL_CATEGORIES) == 10
    assert [category_code(category) for category in CANONICAL_CATEGORIES] == [
        f"A{index:02d}:2021" for index in range(1, 11)
    ]


def test_normalize_maps_en_dash_to_canonical():
    assert normalize_category("A03:2021 – Injection") == INJECTION


def test_normalize_ignores_free_text_after_known_code():
    assert normalize_category("A10:2021 - SSRF via user URL") == SSRF


def test_normalize_cleans_unknown_category():
    assert normalize_category("Custom  –   category ") == "Custom - category"


def test_normalize_empty_values():
    assert normalize_category("") == ""
    assert normalize_category(None) == ""


@pytest.mark.parametrize(
    "raw",
    [
        INJECTION,
        "A03:2021 – Injection",
        "  A07:2021   -   whatever",
        "Custom  –   category ",
        "no separator here",
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize_category(raw)
    assert normalize_category(once) == once


def test_is_canonical():
    assert is_canonical(INJECTION)
    assert not is_canonical("A03:2021 – Injection")
