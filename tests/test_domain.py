from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from ledger_brain.domain.categories import (
    DEFAULT_CATEGORIES,
    get_all_categories,
    match_category,
)
from ledger_brain.domain.currency import normalize_currency
from ledger_brain.domain.timefmt import current_iso_datetime, format_duration, normalize_datetime
from ledger_brain.models import ParsedTransaction, ValidationResult


def test_get_all_categories_defaults() -> None:
    assert get_all_categories() == list(DEFAULT_CATEGORIES)


def test_get_all_categories_custom_first_and_deduplicated() -> None:
    categories = get_all_categories([
        "Kids",
        {"name": "Pets", "is_active": True},
        {"name": "Archived", "is_active": False},
        {"name": "Groceries"},
        "Kids",
        "  ",
    ])

    assert categories[:3] == ["Kids", "Pets", "Groceries"]
    assert "Archived" not in categories
    assert categories.count("Groceries") == 1
    assert categories.count("Kids") == 1
    assert len(categories) == len(DEFAULT_CATEGORIES) + 2


def test_match_category() -> None:
    allowed = get_all_categories(["Coffee Runs"])

    assert match_category("Coffee Runs", allowed) == "Coffee Runs"
    assert match_category("health", allowed) == "Health"
    assert match_category("Food Dining", allowed) == "Food & Dining"
    assert match_category("Quantum Widgets", allowed) == "Other"
    assert match_category(None, allowed) == "Other"
    assert match_category("Health", []) == "Other"


@pytest.mark.parametrize(
    ("code", "expected"),
    [("usd", "USD"), (" aed ", "AED"), ("XYZ", "SAR"), (None, "SAR"), ("", "SAR")],
)
def test_normalize_currency(code: str | None, expected: str) -> None:
    assert normalize_currency(code) == expected


def test_normalize_currency_custom_default() -> None:
    assert normalize_currency("???", default="USD") == "USD"


def test_normalize_datetime() -> None:
    fallback = "2026-01-01T00:00:00"
    assert normalize_datetime("2026-01-04T13:52:00", fallback) == "2026-01-04T13:52:00"
    assert normalize_datetime("2026-01-04", fallback) == "2026-01-04T00:00:00"
    assert normalize_datetime("2026-01-04T13:52:00.456Z", fallback) == "2026-01-04T13:52:00"
    assert normalize_datetime("2026-01-04T16:52:00+03:00", fallback) == "2026-01-04T13:52:00"
    assert normalize_datetime("yesterday", fallback) == fallback
    assert normalize_datetime(None, fallback) == fallback
    assert normalize_datetime(12345, fallback) == fallback


def test_current_iso_datetime() -> None:
    now = datetime(2026, 1, 4, 16, 52, 7, 999000, tzinfo=timezone(timedelta(hours=3)))
    assert current_iso_datetime(now) == "2026-01-04T13:52:07"
    assert len(current_iso_datetime()) == 19


def test_format_duration() -> None:
    assert format_duration(0) == "0 ms"
    assert format_duration(0.25) == "250.0 ms"
    assert format_duration(2.5) == "2.50 s"
    assert format_duration(90) == "1.50 min"


def test_validation_result_is_frozen() -> None:
    res = ValidationResult(is_valid=True, confidence="high", suggested_category="Other")
    with pytest.raises(ValidationError):
        res.is_valid = False  # type: ignore[misc]


def test_parsed_transaction_requires_positive_amount() -> None:
    with pytest.raises(ValidationError):
        ParsedTransaction(amount=0, currency="SAR", direction="out", category="Other", raw_text="x")


def test_validation_result_serializes_camel_case() -> None:
    res = ValidationResult(is_valid=False, reason="nope", confidence="low")
    assert res.model_dump(by_alias=True) == {
        "isValid": False,
        "reason": "nope",
        "confidence": "low",
        "suggestedCategory": None,
    }


@pytest.mark.parametrize("name", [7, None, ["Food & Dining"], {"name": "Health"}, "   "])
def test_match_category_non_text_names(name: object) -> None:
    assert match_category(name, list(DEFAULT_CATEGORIES)) == "Other"
