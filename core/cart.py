# core/cart.py
from typing import Iterator, List, Optional, Tuple

from .logger import get_logger
from .models import CartLine, CatalogItem
from .pricing import compute_price

logger = get_logger(__name__)


class CartStore:
    """
    In-memory cart for a single session.

    Lines are kept in first-add order and there is never more than one line
    per catalog item id. Every operation is safe to call with an id that is
    not in the cart.
    """

    def __init__(self):
        self._lines: List[CartLine] = []

    def _find(self, item_id: int) -> Optional[CartLine]:
        for line in self._lines:
            if line.id == item_id:
                return line
        return None

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(tuple(self._lines))

    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, item_id: int) -> Optional[CartLine]:
        return self._find(item_id)

    def add_to_cart(self, item: CatalogItem, **extra_fields) -> CartLine:
        """
        Add one unit of `item`. A repeat add only bumps the quantity; the
        fields recorded on first insertion (size included) never change.
        """
        line = self._find(item.id)
        if line is not None:
            line.qty += 1
            logger.debug("Cart: id=%s qty -> %d", item.id, line.qty)
            return line

        line = CartLine.from_item(item, **extra_fields)
        self._lines.append(line)
        logger.debug("Cart: added id=%s (size=%s)", item.id, line.size)
        return line

    def update_qty(self, item_id: int, qty: int) -> None:
        # qty is taken as given, zero and negative included
        line = self._find(item_id)
        if line is None:
            logger.debug("Cart: update_qty for missing id=%s ignored", item_id)
            return
        line.qty = qty
        logger.debug("Cart: id=%s qty set to %s", item_id, qty)

    def remove_from_cart(self, item_id: int) -> None:
        before = len(self._lines)
        self._lines = [line for line in self._lines if line.id != item_id]
        if len(self._lines) != before:
            logger.debug("Cart: removed id=%s", item_id)

    def compute_total(self) -> float:
        return sum(compute_price(line) * line.qty for line in self._lines)

    def clear(self) -> None:
        self._lines = []
