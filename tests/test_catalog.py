import pytest

from sharkshop.catalog import (
    NO_CATEGORIES_MESSAGE,
    ensure_active_category,
    normalize_category_name,
)
from sharkshop.errors import InvalidCategory


@pytest.mark.parametrize(
    "raw",
    ["Snacks", "  SNACKS ", "snacks", "Pre Workout\t", "\n  Protein Bars  ", "", "ÉNERGIE", None],
)
def test_normalization_is_idempotent(raw):
    once = normalize_category_name(raw)
    assert normalize_category_name(once) == once
    assert once == once.strip().lower()


def test_active_category_passes_and_returns_normalized_name(store, make_category):
    make_category("Snacks")
    assert ensure_active_category(store, "  SNACKS ") == "snacks"


def test_missing_category_lists_active_names(store, make_category):
    make_category("Snacks")
    make_category("Protein")
    make_category("Retired", is_active=False)

    with pytest.raises(InvalidCategory) as excinfo:
        ensure_active_category(store, "Vitamins")

    error = excinfo.value
    assert error.extra["availableCategories"] == ["protein", "snacks"]
    assert error.extra["received"] == "Vitamins"
    assert error.field == "category"


def test_inactive_category_is_rejected(store, make_category):
    make_category("Retired", is_active=False)

    with pytest.raises(InvalidCategory) as excinfo:
        ensure_active_category(store, "retired")

    assert excinfo.value.extra["availableCategories"] == []
    assert excinfo.value.message == NO_CATEGORIES_MESSAGE


def test_empty_catalog_uses_distinct_message(store):
    with pytest.raises(InvalidCategory) as excinfo:
        ensure_active_category(store, "anything")

    assert excinfo.value.message == NO_CATEGORIES_MESSAGE
