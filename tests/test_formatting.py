import pytest
from decimal import Decimal

from invoicer.utils.formatting import (
    format_currency,
    format_currency_with_symbol,
    get_currency_options,
    parse_currency,
)


class TestFormatting:

    @pytest.mark.parametrize("amount,expected", [
        (1234.5, "1,234.5"),
        (1000000, "1,000,000"),
        (Decimal('0.125'), "0.13"),
        ("2*3", "6"),
        (None, "0"),
        (-0.001, "0"),
        (-1500.25, "-1,500.25"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_format_currency_with_code(self):
        assert format_currency(517.5, 'GHS') == "GHS 517.5"

    def test_format_currency_with_symbol(self):
        assert format_currency_with_symbol(1234.5, 'usd') == "$ 1,234.50"
        assert format_currency_with_symbol(10, 'XOF') == "XOF 10.00"

    def test_currency_options_are_copies(self):
        options = get_currency_options()
        assert [o['value'] for o in options] == ['USD', 'EUR', 'GBP', 'GHS', 'NGN', 'KES']
        options[0]['symbol'] = 'changed'
        assert get_currency_options()[0]['symbol'] == '$'

    @pytest.mark.parametrize("text,expected", [
        ("$1,234.50", Decimal('1234.50')),
        ("GHS 12", Decimal('12')),
        ("-€5", Decimal('-5')),
        ("", Decimal('0')),
        (None, Decimal('0')),
    ])
    def test_parse_currency(self, text, expected):
        assert parse_currency(text) == expected
