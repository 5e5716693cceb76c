"""
显示格式化单元测试
"""

import pytest

from meow_clicker.core.display import (
    format_amount,
    format_duration,
    format_multiplier,
    format_rate,
    normalize_rendered,
)


class TestFormatAmount:

    @pytest.mark.parametrize("value, expected", [
        (0, '0'),
        (42.9, '42'),
        (999.99, '999'),
        (1000, '1.0k'),
        (1500, '1.5k'),
        (2_000_000, '2.00M'),
        (3_250_000_000, '3.25B'),
    ])
    def test_format_amount(self, value, expected):
        assert format_amount(value) == expected


class TestOtherFormats:

    def test_format_multiplier(self):
        assert format_multiplier(1) == '1.00×'
        assert format_multiplier(7.5) == '7.50×'

    def test_format_rate(self):
        assert format_rate(3.5) == '3.5'
        assert format_rate(0) == '0.0'

    @pytest.mark.parametrize("seconds, expected", [
        (0, '0s'),
        (45, '45s'),
        (200, '3m 20s'),
        (7500, '2h 5m'),
    ])
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected


class TestNormalizeRendered:

    def test_keeps_digits_units_and_point(self):
        assert normalize_rendered('1.5k meows') == '1.5k'
        assert normalize_rendered('2.00M') == '2.00M'
        assert normalize_rendered('3.25B') == '3.25B'

    def test_strips_noise(self):
        assert normalize_rendered(' 1,234 ') == '1234'

    def test_empty(self):
        assert normalize_rendered('') == ''
        assert normalize_rendered(None) == ''
