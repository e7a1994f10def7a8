# core/models.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CatalogItem:
    """
    A product record as served by the catalog. Read-only for the storefront;
    `price` is the raw source value, before any display markup.
    """
    id: int
    title: str
    category: str
    price: float
    image: str = ""
    description: str = ""


@dataclass
class CartLine:
    """
    One entry in the cart, keyed by the catalog item id.
    `size` is only ever set for clothing, and only when the line is created.
    """
    id: int
    title: str
    category: str
    price: float
    image: str = ""
    qty: int = 1
    size: Optional[str] = None

    @classmethod
    def from_item(cls, item: CatalogItem, **extra_fields) -> "CartLine":
        return cls(
            id=item.id,
            title=item.title,
            category=item.category,
            price=item.price,
            image=item.image,
            qty=1,
            size=extra_fields.get("size") or None,
        )
