# core/browse.py
from typing import Iterable, List

from .models import CatalogItem
from .pricing import compute_price

ALL_CATEGORIES = "all"
SORT_LOW_TO_HIGH = "low"
SORT_HIGH_TO_LOW = "high"


def list_categories(products: Iterable[CatalogItem]) -> List[str]:
    """
    "all" followed by every distinct category, in the order first seen.
    """
    seen: List[str] = [ALL_CATEGORIES]
    for p in products:
        if p.category not in seen:
            seen.append(p.category)
    return seen


def filter_products(
    products: Iterable[CatalogItem],
    search: str = "",
    category: str = ALL_CATEGORIES,
    sort: str = "",
) -> List[CatalogItem]:
    """
    Apply the product grid controls:
      - search: case-insensitive substring of the title
      - category: exact match, unless "all"
      - sort: "low" / "high" by display price; anything else keeps catalog order
    """
    needle = (search or "").lower()
    category = category or ALL_CATEGORIES

    out = [p for p in products if needle in p.title.lower()]
    if category != ALL_CATEGORIES:
        out = [p for p in out if p.category == category]

    if sort == SORT_LOW_TO_HIGH:
        out.sort(key=compute_price)
    elif sort == SORT_HIGH_TO_LOW:
        out.sort(key=compute_price, reverse=True)

    return out
