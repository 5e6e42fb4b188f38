import unittest
from decimal import Decimal

from invoicer.utils.validation import (
    validate_exchange_rate,
    validate_non_negative,
    validate_percentage,
)


class TestExchangeRateValidation(unittest.TestCase):
    """Test exchange rate validation utility"""

    def test_valid_rate(self):
        is_valid, errors = validate_exchange_rate(15.25)
        self.assertTrue(is_valid)
        self.assertEqual(len(errors), 0)

    def test_string_rate(self):
        is_valid, errors = validate_exchange_rate("12.5")
        self.assertTrue(is_valid)

    def test_not_a_number(self):
        """Test non-numeric rates fail validation"""
        for rate in (None, "abc", True, float('nan'), float('inf')):
            is_valid, errors = validate_exchange_rate(rate)
            self.assertFalse(is_valid)
            self.assertIn('Exchange rate must be a valid number', errors)

    def test_zero_and_negative(self):
        for rate in (0, -1, "-0.5"):
            is_valid, errors = validate_exchange_rate(rate)
            self.assertFalse(is_valid)
            self.assertIn('Exchange rate must be greater than 0', errors)

    def test_too_high(self):
        is_valid, errors = validate_exchange_rate(1000001)
        self.assertFalse(is_valid)
        self.assertIn('Exchange rate seems too high', errors)

    def test_custom_ceiling(self):
        is_valid, _ = validate_exchange_rate(500, max_rate=Decimal('100'))
        self.assertFalse(is_valid)
        is_valid, _ = validate_exchange_rate(100, max_rate=Decimal('100'))
        self.assertTrue(is_valid)


class TestAmountValidation(unittest.TestCase):
    """Test percentage and amount validation"""

    def test_percentage_bounds(self):
        self.assertTrue(validate_percentage(0, 'Discount')[0])
        self.assertTrue(validate_percentage(100, 'Discount')[0])
        is_valid, errors = validate_percentage(100.5, 'VAT')
        self.assertFalse(is_valid)
        self.assertEqual(errors, ['VAT must be between 0 and 100'])

    def test_percentage_not_a_number(self):
        is_valid, errors = validate_percentage('ten', 'Discount')
        self.assertFalse(is_valid)
        self.assertEqual(errors, ['Discount must be a valid number'])

    def test_non_negative(self):
        self.assertTrue(validate_non_negative(0, 'Quantity')[0])
        is_valid, errors = validate_non_negative(-3, 'Quantity')
        self.assertFalse(is_valid)
        self.assertEqual(errors, ['Quantity cannot be negative'])


if __name__ == '__main__':
    unittest.main()
