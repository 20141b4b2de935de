"""Typed exceptions raised inside the valuation engine.

These are recoverable data-quality conditions. The engine catches them at
the point of use and reports them as diagnostics instead of propagating.
Unparseable dates raise ``utils.dates.MalformedDateError``.
"""


class ValuationError(Exception):
    """Base exception for valuation data problems."""

    pass


class CurrencyConversionError(ValuationError):
    """No usable exchange rate for a currency pair."""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(f"No exchange rate for {from_currency} -> {to_currency}")
