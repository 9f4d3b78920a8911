"""Monthly capital-gains rules for Brazilian equities.

Stock sales below the monthly threshold are exempt. Above it, net monthly
profit is taxed at a flat rate. Never hardcode these in computation functions.
"""

from decimal import Decimal

# Exemption applies while total monthly sales stay strictly below this amount
EXEMPTION_THRESHOLD = Decimal("20000")

# Flat rate on net monthly profit for common stock operations
TAX_RATE = Decimal("0.15")

# Month names as rendered by pt-BR locales ("março de 2025")
MONTH_NAMES_PT: tuple[str, ...] = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def month_label(year: int, month: int) -> str:
    """Long pt-BR month label, e.g. ``month_label(2025, 3) == "março de 2025"``."""
    return f"{MONTH_NAMES_PT[month - 1]} de {year}"
