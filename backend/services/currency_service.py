"""Currency conversion for aggregating multi-currency portfolios."""

from decimal import Decimal
from typing import Callable, Mapping

from services.exceptions import CurrencyConversionError

# Units of each currency per one USD, e.g. {"USD": 1, "CNY": 7.2, "HKD": 7.8}.
ExchangeRates = Mapping[str, Decimal]

CurrencyConverter = Callable[[Decimal, str, str, ExchangeRates], Decimal]


def convert_value(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    rates: ExchangeRates,
) -> Decimal:
    """Convert an amount between currencies using a USD-based rate table.

    Currency codes are matched case-insensitively, in both the arguments
    and the rate table keys.

    Raises:
        CurrencyConversionError: If either rate is missing or zero.
    """
    if from_currency.upper() == to_currency.upper():
        return amount

    normalized = {code.strip().upper(): rate for code, rate in rates.items()}
    rate_from = normalized.get(from_currency.upper())
    rate_to = normalized.get(to_currency.upper())
    if not rate_from or not rate_to:
        raise CurrencyConversionError(from_currency, to_currency)

    return amount / Decimal(str(rate_from)) * Decimal(str(rate_to))
