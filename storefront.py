"""Storefront command-line client.

Commands:
  storefront products [--search S] [--category C] [--sort low|high]
  storefront categories
  storefront product <id>
  storefront shop                    interactive session with a cart
"""

import argparse
import cmd
import shlex
from pathlib import Path
from typing import List, Optional

from catalog import CATALOG_SOURCE, get_gateway
from core.browse import ALL_CATEGORIES, SORT_HIGH_TO_LOW, SORT_LOW_TO_HIGH
from core.checkout import CardDetails, PaymentDetails, PaymentMethod, ShippingDetails
from core.logger import get_logger, set_level
from core.render import (
    render_cart,
    render_cart_html,
    render_product_detail,
    render_products,
    render_receipt,
)
from core.session import StorefrontSession

logger = get_logger(__name__)

NO_DATA = "Catalog unavailable; try again later."


def _sentence(text: str) -> str:
    return text[:1].upper() + text[1:]


def _parse_id(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def cmd_products(session: StorefrontSession, args: argparse.Namespace) -> int:
    products = session.browse(search=args.search, category=args.category, sort=args.sort)
    if products is None:
        print(NO_DATA)
        return 1
    print(render_products(products))
    return 0


def cmd_categories(session: StorefrontSession, args: argparse.Namespace) -> int:
    categories = session.categories()
    if categories is None:
        print(NO_DATA)
        return 1
    for c in categories:
        print(c)
    return 0


def cmd_product(session: StorefrontSession, args: argparse.Namespace) -> int:
    item = session.product(args.id)
    if item is None:
        print(f"Product {args.id} not found.")
        return 1
    print(render_product_detail(item))
    return 0


class ShopShell(cmd.Cmd):
    """Browse, fill a cart and check out, all against one session."""

    intro = "Storefront. Type 'help' for commands, 'quit' to leave."

    def __init__(self, session: StorefrontSession, stdin=None, stdout=None):
        super().__init__(stdin=stdin, stdout=stdout)
        self.session = session
        if stdin is not None:
            self.use_rawinput = False
        self._refresh_prompt()

    def _say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _ask(self, label: str) -> str:
        self.stdout.write(f"{label}: ")
        self.stdout.flush()
        line = self.stdin.readline()
        return line.rstrip("\r\n") if line else ""

    def _refresh_prompt(self) -> None:
        self.prompt = f"[cart {len(self.session.cart)} | {self.session.theme}] > "

    def postcmd(self, stop, line):
        self._refresh_prompt()
        return stop

    def emptyline(self):
        return False

    def do_list(self, arg):
        """list [search] [--category C] [--sort low|high]"""
        parser = argparse.ArgumentParser(prog="list", add_help=False)
        parser.add_argument("search", nargs="*")
        parser.add_argument("--category", default=ALL_CATEGORIES)
        parser.add_argument("--sort", choices=[SORT_LOW_TO_HIGH, SORT_HIGH_TO_LOW], default="")
        try:
            opts = parser.parse_args(shlex.split(arg))
        except SystemExit:
            self._say("usage: list [search] [--category C] [--sort low|high]")
            return
        products = self.session.browse(
            search=" ".join(opts.search), category=opts.category, sort=opts.sort
        )
        if products is None:
            self._say(NO_DATA)
            return
        self._say(render_products(products))

    def do_categories(self, arg):
        """categories: list the catalog categories"""
        categories = self.session.categories()
        if categories is None:
            self._say(NO_DATA)
            return
        self._say("\n".join(categories))

    def do_view(self, arg):
        """view ID: show one product"""
        item_id = _parse_id(arg.strip())
        if item_id is None:
            self._say("usage: view ID")
            return
        item = self.session.product(item_id)
        if item is None:
            self._say(f"Product {item_id} not found.")
            return
        self._say(render_product_detail(item))

    def do_add(self, arg):
        """add ID [SIZE]: add a product; clothing needs a size (S, M, L, XL)"""
        parts = arg.split()
        item_id = _parse_id(parts[0]) if parts else None
        if item_id is None:
            self._say("usage: add ID [SIZE]")
            return
        item = self.session.product(item_id)
        if item is None:
            self._say(f"Product {item_id} not found.")
            return
        error = self.session.add_product(item, size=parts[1] if len(parts) > 1 else "")
        if error:
            self._say(_sentence(error))
            return
        self._say(f"Added ✓ {item.title}")

    def do_cart(self, arg):
        """cart: show cart lines and total"""
        self._say(render_cart(self.session.cart))

    def do_qty(self, arg):
        """qty ID N: set the quantity of a cart line"""
        parts = arg.split()
        item_id = _parse_id(parts[0]) if len(parts) == 2 else None
        qty = _parse_id(parts[1]) if len(parts) == 2 else None
        if item_id is None or qty is None:
            self._say("usage: qty ID N")
            return
        self.session.cart.update_qty(item_id, qty)
        self._say(render_cart(self.session.cart))

    def do_remove(self, arg):
        """remove ID: drop a line from the cart"""
        item_id = _parse_id(arg.strip())
        if item_id is None:
            self._say("usage: remove ID")
            return
        self.session.cart.remove_from_cart(item_id)
        self._say(render_cart(self.session.cart))

    def do_theme(self, arg):
        """theme: toggle dark mode"""
        self.session.toggle_theme()
        self._say(f"{self.session.theme.capitalize()} mode")

    def do_html(self, arg):
        """html PATH: write the cart as an HTML page in the current theme"""
        path = arg.strip()
        if not path:
            self._say("usage: html PATH")
            return
        try:
            Path(path).write_text(
                render_cart_html(self.session.cart, self.session.theme), encoding="utf-8"
            )
        except OSError as e:
            logger.error("Failed to write cart HTML to %s: %s", path, e)
            self._say(f"Could not write {path}: {e}")
            return
        self._say(f"Wrote {path}")

    def do_checkout(self, arg):
        """checkout: enter shipping and payment details and place the order"""
        shipping = ShippingDetails(
            name=self._ask("Name"),
            email=self._ask("Email"),
            address=self._ask("Address"),
        )
        raw_method = self._ask("Payment method (cod/upi/card)").strip().lower() or "cod"
        try:
            method = PaymentMethod(raw_method)
        except ValueError:
            self._say(f"Unknown payment method '{raw_method}'.")
            return

        payment = PaymentDetails(method=method)
        if method == PaymentMethod.UPI:
            payment.upi = self._ask("UPI ID (example@upi)")
        elif method == PaymentMethod.CARD:
            payment.card = CardDetails(
                number=self._ask("Card number"),
                expiry=self._ask("Expiry (MM/YY)"),
                cvv=self._ask("CVV"),
            )

        result, receipt = self.session.checkout(shipping, payment)
        if not result.ok:
            self._say(_sentence(result.message))
            return
        self._say(render_receipt(receipt))

    def do_quit(self, arg):
        """quit: leave the shop"""
        return True

    do_EOF = do_quit


def cmd_shop(session: StorefrontSession, args: argparse.Namespace) -> int:
    ShopShell(session).cmdloop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront", description="Storefront client")
    parser.add_argument(
        "--source",
        default=CATALOG_SOURCE,
        help="catalog gateway to read from (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="override LOG_LEVEL for this run",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_products = sub.add_parser("products", help="list products")
    p_products.add_argument("--search", default="")
    p_products.add_argument("--category", default=ALL_CATEGORIES)
    p_products.add_argument("--sort", choices=[SORT_LOW_TO_HIGH, SORT_HIGH_TO_LOW], default="")
    p_products.set_defaults(func=cmd_products)

    p_categories = sub.add_parser("categories", help="list categories")
    p_categories.set_defaults(func=cmd_categories)

    p_product = sub.add_parser("product", help="show one product")
    p_product.add_argument("id", type=int)
    p_product.set_defaults(func=cmd_product)

    p_shop = sub.add_parser("shop", help="interactive shopping session")
    p_shop.set_defaults(func=cmd_shop)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_level(args.log_level)
    try:
        gateway = get_gateway(args.source)
    except KeyError as e:
        logger.error("%s", e)
        print(e.args[0])
        return 1

    session = StorefrontSession(gateway)
    try:
        return args.func(session, args)
    finally:
        session.close()


def run(argv: Optional[List[str]] = None) -> int:
    try:
        return main(argv)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logger.exception("Fatal storefront error: %s", e)
        return 2


if __name__ == "__main__":
    raise SystemExit(run())
