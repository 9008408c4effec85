from decimal import Decimal

from storefront.payments.amounts import format_amount, to_minor_units


def test_to_minor_units_decimal():
    assert to_minor_units(Decimal("109.97")) == 10997


def test_to_minor_units_float_has_no_binary_artifacts():
    # 29.99 * 100 en float vaut 2998.9999...
    assert to_minor_units(29.99) == 2999
    assert to_minor_units(0.1 + 0.2) == 30


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(Decimal("0.005")) == 1
    assert to_minor_units(Decimal("109.975")) == 10998
    assert to_minor_units(Decimal("0.004")) == 0


def test_to_minor_units_int_and_str():
    assert to_minor_units(12) == 1200
    assert to_minor_units("49.99") == 4999


def test_format_amount():
    assert format_amount(Decimal("109.97")) == "€109.97"
    assert format_amount(5, "usd") == "USD 5.00"
