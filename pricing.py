"""Price aggregation and currency display.

All catalog prices are quoted in EUR. Conversion happens only at display
time so every figure in a :class:`PriceQuote` stays in the base currency.
"""

from decimal import ROUND_HALF_UP, Decimal
from math import ceil, floor
from typing import Dict, List

from booking_schemas import BreakdownLine, Currency, PriceQuote, SelectedServices

CURRENCIES: List[Currency] = [
    Currency(code="EUR", symbol="€", rate=1.0),
    Currency(code="USD", symbol="$", rate=1.08),
    Currency(code="GBP", symbol="£", rate=0.85),
    Currency(code="CHF", symbol="CHF", rate=0.95),
]

SERVICE_PRICES: Dict[str, float] = {
    "airport_transfer": 250,
    "catering": 350,
    "concierge": 200,
    "hotel_booking": 150,
}

SERVICE_LABELS = {
    "airport_transfer": "Airport Transfer",
    "catering": "Premium Catering",
    "concierge": "Concierge Service",
    "hotel_booking": "Hotel Booking",
}

# Display range around the estimate.
RANGE_LOW_FACTOR = Decimal("0.9")
RANGE_HIGH_FACTOR = Decimal("1.1")


def get_currency(code: str) -> Currency:
    for currency in CURRENCIES:
        if currency.code == code.upper():
            return currency
    raise LookupError(f"Unsupported currency: {code}")


def service_cost(services: SelectedServices) -> float:
    return float(sum(SERVICE_PRICES[name] for name in services.selected()))


def total(base_price: float, services: SelectedServices, currency: Currency) -> PriceQuote:
    extras = service_cost(services)
    grand_total = base_price + extras
    # range bounds use exact decimal arithmetic
    exact = Decimal(str(grand_total))

    breakdown = [BreakdownLine(label="Base Price", amount=base_price)]
    breakdown += [
        BreakdownLine(label=SERVICE_LABELS[name], amount=SERVICE_PRICES[name])
        for name in services.selected()
    ]

    return PriceQuote(
        base_price=base_price,
        service_cost=extras,
        total=grand_total,
        min=floor(exact * RANGE_LOW_FACTOR),
        max=ceil(exact * RANGE_HIGH_FACTOR),
        breakdown=breakdown,
        currency=currency,
    )


def convert(amount: float, currency: Currency) -> float:
    return amount * currency.rate


def format_price(amount: float, currency: Currency) -> str:
    """Convert a base-currency amount and format it with no decimals, e.g. ``£8,798``."""
    converted = Decimal(str(convert(amount, currency))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if converted < 0 else ""
    digits = f"{abs(converted):,.0f}"
    # alphabetic symbols are separated from the figure, as in "CHF 9,500"
    separator = " " if currency.symbol.isalpha() else ""
    return f"{sign}{currency.symbol}{separator}{digits}"


def format_price_range(low: float, high: float, currency: Currency) -> str:
    return f"{format_price(low, currency)} - {format_price(high, currency)}"


def display_total(quote: PriceQuote) -> str:
    return format_price(quote.total, quote.currency)


def display_range(quote: PriceQuote) -> str:
    return format_price_range(quote.min, quote.max, quote.currency)
