"""Tests for numeric parsing, formatting and configuration."""

import pytest

from pricing.config import CartConfig
from pricing.utils.numbers import format_value, normalize_price, number_format


class TestNormalizePrice:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("12.5", 12.5),
            ("12abc", 12.0),
            (" 3.25", 3.25),
            (".5", 0.5),
            ("", 0.0),
            ("abc", 0.0),
            (None, 0.0),
            (7, 7.0),
            (2.5, 2.5),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_price(value) == pytest.approx(expected)


class TestNumberFormat:
    def test_thousands_and_decimals(self):
        assert number_format(1234567.891, 2) == "1,234,567.89"

    def test_custom_separators(self):
        assert number_format(1234.5, 2, ",", ".") == "1.234,50"

    def test_no_decimals(self):
        assert number_format(1234.5, 0) == "1,235"

    def test_rounds_half_up(self):
        assert number_format(2.675, 2) == "2.68"

    def test_negative_zero(self):
        assert number_format(-0.001, 2) == "0.00"

    def test_empty_thousands_separator(self):
        assert number_format(1234.5, 1, ".", "") == "1234.5"


class TestFormatValue:
    def test_formatting_requires_flag_and_config(self):
        config = CartConfig(format_numbers=True, decimals=2)
        assert format_value(10, True, config) == "10.00"
        assert format_value(10, False, config) == 10

    def test_config_off_returns_raw_value(self):
        assert format_value(10.5, True, CartConfig()) == 10.5


class TestCartConfig:
    def test_defaults(self):
        config = CartConfig()
        assert config.format_numbers is False
        assert config.decimals == 0
        assert config.dec_point == "."
        assert config.thousands_sep == ","

    def test_config_is_immutable(self):
        config = CartConfig()
        with pytest.raises(Exception):
            config.decimals = 3

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CART_FORMAT_NUMBERS", "true")
        monkeypatch.setenv("CART_DECIMALS", "2")
        monkeypatch.setenv("CART_DEC_POINT", ",")
        monkeypatch.setenv("CART_THOUSANDS_SEP", ".")
        config = CartConfig.from_env()
        assert config == CartConfig(format_numbers=True, decimals=2, dec_point=",", thousands_sep=".")

    def test_from_env_keeps_defaults(self, monkeypatch):
        for name in ("CART_FORMAT_NUMBERS", "CART_DECIMALS", "CART_DEC_POINT", "CART_THOUSANDS_SEP"):
            monkeypatch.delenv(name, raising=False)
        assert CartConfig.from_env() == CartConfig()
