from collections.abc import Iterable, Mapping
from typing import Any

from rapidfuzz import fuzz, process

DEFAULT_CATEGORY = "Other"

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Bills & Utilities",
    "Groceries",
    "Health",
    "Transfer",
    "Entertainment",
    "Income",
    "Travel",
    "Education",
    "Advertising",
    "Subscription",
    DEFAULT_CATEGORY,
)


def _custom_name(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry.strip() or None
    if isinstance(entry, Mapping):
        if entry.get("is_active") is False:
            return None
        name = entry.get("name")
        if isinstance(name, str):
            return name.strip() or None
    return None


def get_all_categories(custom_categories: Iterable[Any] | None = None) -> list[str]:
    """Active custom categories first, then the defaults, without duplicates."""
    combined: list[str] = []
    seen = set()
    for entry in custom_categories or []:
        name = _custom_name(entry)
        if name and name not in seen:
            combined.append(name)
            seen.add(name)
    for name in DEFAULT_CATEGORIES:
        if name not in seen:
            combined.append(name)
            seen.add(name)
    return combined


def match_category(
    name: object,
    allowed: list[str],
    threshold: float = 85.0,
) -> str:
    if not isinstance(name, str) or not name.strip() or not allowed:
        return DEFAULT_CATEGORY

    candidate = name.strip()
    if candidate in allowed:
        return candidate

    lowered = candidate.lower()
    for category in allowed:
        if category.lower() == lowered:
            return category

    result = process.extractOne(candidate, allowed, scorer=fuzz.token_sort_ratio)
    if result:
        match, score, _ = result
        if score >= threshold:
            return match

    return DEFAULT_CATEGORY
