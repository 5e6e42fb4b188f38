"""
Exchange-rate resolution for invoices.

The rate used by the calculator is resolved here, before calculation, from a
manual override or an injected ExchangeRateSource. Sources are passed in
explicitly so tests and callers can substitute their own.
"""
import logging
from decimal import Decimal
from typing import Dict, Optional, Protocol, Tuple

from invoicer.config import Config
from invoicer.utils.expression import ZERO, finite_result, numeric_value
from invoicer.utils.validation import validate_exchange_rate

logger = logging.getLogger(__name__)

RATE_TYPES = ('buying', 'selling', 'mid')


class ExchangeRateSource(Protocol):
    """Port for anything that can quote a currency pair."""

    def get_rate(self, from_currency: str, to_currency: str, rate_type: str = 'mid') -> Optional[Decimal]:
        """Return the latest rate for the pair, or None when unknown."""


class StaticExchangeRateSource:
    """In-memory rate table keyed by (from, to, rate_type)."""

    def __init__(self, rates: Optional[Dict[Tuple[str, str, str], Decimal]] = None):
        self._rates: Dict[Tuple[str, str, str], Decimal] = {}
        for (from_currency, to_currency, rate_type), rate in (rates or {}).items():
            self.set_rate(from_currency, to_currency, rate, rate_type)

    def set_rate(self, from_currency: str, to_currency: str, rate, rate_type: str = 'mid') -> None:
        if rate_type not in RATE_TYPES:
            raise ValueError(f"Unknown rate type '{rate_type}'")
        key = (from_currency.upper(), to_currency.upper(), rate_type)
        self._rates[key] = numeric_value(rate)

    def get_rate(self, from_currency: str, to_currency: str, rate_type: str = 'mid') -> Optional[Decimal]:
        return self._rates.get((from_currency.upper(), to_currency.upper(), rate_type))


class ExchangeRateService:
    def __init__(self, source: Optional[ExchangeRateSource] = None, config=Config):
        self.source = source
        self.config = config

    def resolve(
        self,
        from_currency: Optional[str] = None,
        to_currency: Optional[str] = None,
        manual_rate=None,
        rate_type: str = 'mid',
    ) -> Decimal:
        """
        Pick the rate for an invoice.

        A positive manual rate always wins. Otherwise the configured source is
        asked; unknown pairs or source failures fall back to the default rate.
        """
        manual = numeric_value(manual_rate)
        if manual > 0:
            return manual

        from_currency = (from_currency or self.config.DEFAULT_SOURCE_CURRENCY).upper()
        to_currency = (to_currency or self.config.DEFAULT_TARGET_CURRENCY).upper()
        if from_currency == to_currency:
            return Decimal("1")

        if self.source is not None:
            try:
                rate = self.source.get_rate(from_currency, to_currency, rate_type)
            except Exception as e:
                logger.warning(f"Failed to fetch exchange rate {from_currency}->{to_currency}: {e}")
                rate = None
            if rate is not None:
                is_valid, errors = validate_exchange_rate(rate, self.config.MAX_EXCHANGE_RATE)
                if is_valid:
                    return numeric_value(rate)
                logger.warning(f"Ignoring exchange rate {rate} for {from_currency}->{to_currency}: {errors[0]}")

        logger.info(f"No exchange rate for {from_currency}->{to_currency}, using default")
        return self.config.DEFAULT_EXCHANGE_RATE

    @staticmethod
    @finite_result
    def convert_amount(amount, exchange_rate, from_currency: str, to_currency: str) -> Decimal:
        if from_currency.upper() == to_currency.upper():
            return numeric_value(amount)
        return numeric_value(amount) * numeric_value(exchange_rate)

    @staticmethod
    @finite_result
    def calculate_rate_from_amounts(from_amount, to_amount) -> Decimal:
        from_amount = numeric_value(from_amount)
        if from_amount <= 0:
            return ZERO
        return numeric_value(to_amount) / from_amount
