"""pt-BR presentation helpers shared by the report generators."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_brl(value: Decimal) -> str:
    """Format as Brazilian Real: ``Decimal("-1234.5")`` -> ``"-R$ 1.234,50"``."""
    cents = to_cents(value)
    digits = f"{abs(cents):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if cents < 0 else ""
    return f"{sign}R$ {digits}"


def format_pct(value: Decimal) -> str:
    """Percentage with two decimal places, e.g. ``"12.35%"``."""
    return f"{to_cents(value):.2f}%"
