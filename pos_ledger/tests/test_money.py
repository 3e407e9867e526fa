import math

import pytest

from pos_ledger.core.config import Settings
from pos_ledger.core.money import MAX_MINOR_UNITS, MoneyNormalizer, RoundingPolicy, as_minor_units, round_half_up


@pytest.mark.parametrize("value", [0, 0.2, 1, 1.5, 99.99, 12345.678, 7])
def test_floor_policy_matches_floor_on_non_negative(value):
    assert MoneyNormalizer().normalize(value) == math.floor(value)


@pytest.mark.parametrize("value", [-0.01, -1, -250.5])
def test_negative_amounts_clamp_to_zero(value):
    assert MoneyNormalizer(RoundingPolicy.FLOOR).normalize(value) == 0
    assert MoneyNormalizer(RoundingPolicy.NEAREST).normalize(value) == 0


def test_nearest_policy_rounds_halves_up():
    normalizer = MoneyNormalizer(RoundingPolicy.NEAREST)
    assert normalizer.normalize(2.5) == 3
    assert normalizer.normalize(2.49) == 2
    assert normalizer.normalize(0.5) == 1


def test_policy_accepts_config_string():
    assert MoneyNormalizer("nearest").policy is RoundingPolicy.NEAREST


def test_line_amount_uses_exact_decimal_product():
    # float math gives 28.999999999999996 here
    assert 0.29 * 100 < 29
    assert MoneyNormalizer().line_amount(100, 0.29) == 29


def test_line_amount_floors_fractional_quantities():
    assert MoneyNormalizer().line_amount(15000, 1.333) == 19995
    assert MoneyNormalizer(RoundingPolicy.NEAREST).line_amount(3, 0.5) == 2


def test_non_finite_values_are_rejected():
    with pytest.raises(ValueError):
        MoneyNormalizer().normalize(float("nan"))
    with pytest.raises(ValueError):
        MoneyNormalizer().normalize(float("inf"))


def test_round_half_up_is_away_from_zero():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.4) == 0
    assert round_half_up(-0.5) == -1


def test_settings_select_rounding_policy(monkeypatch):
    monkeypatch.setenv("MONEY_ROUNDING", "nearest")
    assert Settings().money_rounding is RoundingPolicy.NEAREST
    monkeypatch.delenv("MONEY_ROUNDING")
    assert Settings().money_rounding is RoundingPolicy.FLOOR


@pytest.mark.parametrize("value, expected", [(0, 0), (50, 50), (50.0, 50), (-3.0, -3), (MAX_MINOR_UNITS, MAX_MINOR_UNITS)])
def test_as_minor_units_keeps_whole_amounts(value, expected):
    assert as_minor_units(value) == expected


@pytest.mark.parametrize("value", [0.5, -0.5, 10.01, MAX_MINOR_UNITS + 1, 1e30, float("nan"), "5", None, True])
def test_as_minor_units_rejects_what_it_cannot_store_exactly(value):
    with pytest.raises(ValueError):
        as_minor_units(value)
