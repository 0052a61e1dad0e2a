"""
Unit tests for try_parse_price

Users type prices in whatever locale they are used to; the last '.' or ','
is the decimal separator and results are rounded half away from zero.
"""

from decimal import Decimal

import pytest

from src.service.catalog.domain.price_parser import try_parse_price


pytestmark = pytest.mark.unit


class TestTryParsePrice:
    @pytest.mark.parametrize(
        'raw',
        ['1.234,56', '1,234.56', '1234.56', '1234,56', '1 234,56', '1\u00a0234,56'],
    )
    def test_grouped_and_plain_inputs_agree(self, raw: str):
        assert try_parse_price(raw) == Decimal('1234.56')

    def test_integer_gets_two_decimals(self):
        result = try_parse_price('50')

        assert result == Decimal('50.00')
        assert str(result) == '50.00'

    def test_single_fraction_digit_is_padded(self):
        assert str(try_parse_price('12.3')) == '12.30'

    def test_rounds_half_away_from_zero(self):
        assert try_parse_price('1.005') == Decimal('1.01')
        assert try_parse_price('2,675') == Decimal('2.68')

    def test_single_separator_with_three_digits_is_a_decimal_point(self):
        # Accepted ambiguity: not read as one thousand two hundred thirty-four
        assert try_parse_price('1.234') == Decimal('1.23')

    def test_trailing_separator(self):
        assert try_parse_price('12,') == Decimal('12.00')

    def test_multiple_grouping_marks(self):
        assert try_parse_price('1.234.567,8') == Decimal('1234567.80')

    def test_negative_value_is_parsed(self):
        # Rejecting negatives is the entity's job
        assert try_parse_price('-3,50') == Decimal('-3.50')

    @pytest.mark.parametrize('raw', [None, '', '   ', '\t\n'])
    def test_blank_input_is_rejected(self, raw):
        assert try_parse_price(raw) is None

    @pytest.mark.parametrize('raw', ['abc', '12abc', '1,5abc', 'NaN', 'Infinity', '1e5', '--1'])
    def test_garbage_is_rejected(self, raw: str):
        assert try_parse_price(raw) is None
