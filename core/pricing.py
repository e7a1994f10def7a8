# core/pricing.py
import math
import os

CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")

# Size choices offered for clothing on the detail view.
SIZES = {
    "S": "Small (S)",
    "M": "Medium (M)",
    "L": "Large (L)",
    "XL": "Extra Large (XL)",
}


def is_clothing(item) -> bool:
    return "clothing" in (item.category or "")


def compute_price(item) -> float:
    """
    Display price for anything carrying a raw `price` and a `category`
    (a CatalogItem or a CartLine).

    Categories are matched by substring, first match wins:
      - clothing:    200 + (price mod 100)
      - electronics: 20000 + price * 100
      - jewelery:    5000 + price * 200
      - otherwise:   1000 + price * 50
    No rounding happens here; see format_price.
    """
    base = item.price
    category = item.category or ""

    if "clothing" in category:
        # fmod keeps the fractional part and the sign of the raw price
        return 200 + math.fmod(base, 100)

    if "electronics" in category:
        return 20000 + base * 100

    if "jewelery" in category:
        return 5000 + base * 200

    return 1000 + base * 50


def format_price(value: float, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol} {value:.0f}"
