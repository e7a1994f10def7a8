from pathlib import Path
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .cart import CartStore
from .checkout import OrderReceipt
from .models import CatalogItem
from .pricing import SIZES, compute_price, format_price, is_clothing

# Resolve template directory relative to this file
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["price"] = format_price

THEMES = {
    "light": {
        "page_bg": "#f5f5f5",
        "card_bg": "#ffffff",
        "card_border": "#e0e0e0",
        "text_primary": "#202124",
        "text_secondary": "#555",
        "text_muted": "#999",
        "link_color": "#1a73e8",
    },
    "dark": {
        "page_bg": "#121212",
        "card_bg": "#1E1E1E",
        "card_border": "#333333",
        "text_primary": "#F1F1F1",
        "text_secondary": "#BBBBBB",
        "text_muted": "#777777",
        "link_color": "#8AB4F8",
    },
}


def _product_row(p: CatalogItem) -> dict:
    return {
        "id": p.id,
        "title": p.title,
        "category": p.category,
        "image": p.image,
        "display_price": compute_price(p),
    }


def _cart_rows(cart: CartStore) -> List[dict]:
    rows = []
    for line in cart:
        unit = compute_price(line)
        rows.append(
            {
                "id": line.id,
                "title": line.title,
                "size": line.size,
                "qty": line.qty,
                "image": line.image,
                "unit_price": unit,
                "subtotal": unit * line.qty,
            }
        )
    return rows


def render_products(products: Iterable[CatalogItem], heading: str = "Products") -> str:
    template = env.get_template("products.txt")
    return template.render(
        heading=heading,
        products=[_product_row(p) for p in products],
    )


def render_product_detail(item: CatalogItem) -> str:
    template = env.get_template("product_detail.txt")
    return template.render(
        item=_product_row(item),
        description=item.description,
        sizes=SIZES if is_clothing(item) else None,
    )


def render_cart(cart: CartStore) -> str:
    template = env.get_template("cart.txt")
    return template.render(
        count=len(cart),
        lines=_cart_rows(cart),
        total=cart.compute_total(),
    )


def render_cart_html(cart: CartStore, theme: Optional[str] = "light") -> str:
    if theme not in THEMES:
        theme = "light"
    template = env.get_template("cart.html")
    return template.render(
        title=f"Cart ({len(cart)})",
        lines=_cart_rows(cart),
        total=cart.compute_total(),
        colors=THEMES[theme],
    )


def render_receipt(receipt: OrderReceipt) -> str:
    template = env.get_template("receipt.txt")
    return template.render(receipt=receipt, method=receipt.method.value)
