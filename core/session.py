# core/session.py
import os
from typing import List, Optional, Tuple

from .browse import ALL_CATEGORIES, filter_products, list_categories
from .cart import CartStore
from .checkout import OrderReceipt, PaymentDetails, ShippingDetails, ValidationResult, place_order
from .logger import get_logger
from .models import CatalogItem
from .pricing import SIZES, is_clothing

logger = get_logger(__name__)

SIZE_REQUIRED = "please select a size"
UNKNOWN_SIZE = "unknown size"

STOREFRONT_THEME = os.getenv("STOREFRONT_THEME", "light").strip().lower()


class StorefrontSession:
    """
    Everything one shopper's visit owns: the cart, the theme toggle and the
    catalog gateway it reads from. Views receive the session explicitly
    instead of reaching for shared globals; the cart lives exactly as long
    as the session.
    """

    def __init__(self, gateway, dark: Optional[bool] = None):
        self.gateway = gateway
        self.cart = CartStore()
        self.dark = (STOREFRONT_THEME == "dark") if dark is None else dark
        self._products: Optional[List[CatalogItem]] = None

    @property
    def theme(self) -> str:
        return "dark" if self.dark else "light"

    def toggle_theme(self) -> bool:
        self.dark = not self.dark
        return self.dark

    def products(self, refresh: bool = False) -> Optional[List[CatalogItem]]:
        # A failed fetch is not cached, so the next call tries again.
        if self._products is None or refresh:
            self._products = self.gateway.list_products()
        return self._products

    def categories(self) -> Optional[List[str]]:
        products = self.products()
        if products is None:
            return None
        return list_categories(products)

    def browse(
        self,
        search: str = "",
        category: str = ALL_CATEGORIES,
        sort: str = "",
    ) -> Optional[List[CatalogItem]]:
        products = self.products()
        if products is None:
            return None
        return filter_products(products, search=search, category=category, sort=sort)

    def product(self, item_id: int) -> Optional[CatalogItem]:
        return self.gateway.get_product(item_id)

    def add_product(self, item: CatalogItem, size: str = "") -> Optional[str]:
        """
        Add from the detail view. Clothing needs a size; anything else
        ignores one. Returns an error message, or None when the item was added.
        """
        if is_clothing(item):
            if not size:
                return SIZE_REQUIRED
            size = size.strip().upper()
            if size not in SIZES:
                return UNKNOWN_SIZE
            self.cart.add_to_cart(item, size=size)
        else:
            self.cart.add_to_cart(item)
        return None

    def checkout(
        self, shipping: ShippingDetails, payment: PaymentDetails
    ) -> Tuple[ValidationResult, Optional[OrderReceipt]]:
        return place_order(shipping, payment, self.cart)

    def close(self) -> None:
        logger.debug("Closing session with %d cart lines", len(self.cart))
        self.cart.clear()
        self._products = None
