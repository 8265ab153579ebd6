import pytest

from sharkshop.errors import ValidationFailed
from sharkshop.validators import (
    parse_bool,
    parse_price,
    parse_string_list,
    validate_admin_update,
    validate_product_update,
)


@pytest.mark.parametrize("raw, expected", [("2.5", 2.5), (10, 10.0), (" 3 ", 3.0)])
def test_parse_price_accepts_positive_numbers(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize("raw", [True, None, "", "1e999", "-0.01"])
def test_parse_price_rejects_everything_else(raw):
    with pytest.raises(ValidationFailed):
        parse_price(raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("", []),
        ("Vanilla", ["Vanilla"]),
        ('["Vanilla", "Chocolate"]', ["Vanilla", "Chocolate"]),
        ("Vanilla, Chocolate, Vanilla", ["Vanilla", "Chocolate"]),
        (["  Mint ", ""], ["Mint"]),
    ],
)
def test_parse_string_list(raw, expected):
    assert parse_string_list(raw) == expected


@pytest.mark.parametrize("raw, expected", [(True, True), ("false", False), ("1", True), (0, False)])
def test_parse_bool(raw, expected):
    assert parse_bool(raw, "isActive") is expected


def test_product_update_only_keeps_known_fields():
    update = validate_product_update({"name": " Bar ", "productId": "hijack", "_id": "x", "weight": "1kg"})
    assert update == {"name": "Bar", "weight": "1kg"}


def test_admin_update_ignores_blank_password():
    assert validate_admin_update({"password": "  ", "name": " Ann "}) == {"name": "Ann"}
    assert validate_admin_update({"password": "new"}) == {"password": "new"}
