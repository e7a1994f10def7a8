# core/checkout.py
import datetime
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import pytz

from .logger import get_logger
from .models import CartLine
from .pricing import compute_price

logger = get_logger(__name__)

INCOMPLETE_SHIPPING = "incomplete shipping details"
INVALID_EMAIL = "invalid email"
EMPTY_CART = "empty cart"
INVALID_UPI = "invalid UPI id"
INVALID_CARD = "invalid card details"

PAY_ON_DELIVERY = "order placed, pay on delivery"
PAYMENT_SUCCESSFUL = "payment successful, order placed"

UPI_MIN_LENGTH = 5
CARD_NUMBER_MIN_LENGTH = 12
CVV_MIN_LENGTH = 3


class PaymentMethod(str, Enum):
    COD = "cod"
    UPI = "upi"
    CARD = "card"


@dataclass
class ShippingDetails:
    name: str = ""
    email: str = ""
    address: str = ""


@dataclass
class CardDetails:
    number: str = ""
    expiry: str = ""
    cvv: str = ""


@dataclass
class PaymentDetails:
    method: PaymentMethod = PaymentMethod.COD
    upi: str = ""
    card: CardDetails = field(default_factory=CardDetails)

    def __post_init__(self):
        self.method = PaymentMethod(self.method)


@dataclass
class ValidationResult:
    ok: bool
    error: Optional[str] = None
    message: str = ""

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(ok=False, error=error, message=error)


@dataclass
class ReceiptLine:
    id: int
    title: str
    qty: int
    unit_price: float
    size: Optional[str] = None

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.qty


@dataclass
class OrderReceipt:
    customer: ShippingDetails
    method: PaymentMethod
    lines: List[ReceiptLine]
    total: float
    placed_at: str
    message: str


def validate_order(
    shipping: ShippingDetails,
    payment: PaymentDetails,
    cart: Iterable[CartLine],
) -> ValidationResult:
    """
    Check a proposed order against the current cart contents.

    Rules are checked in a fixed order and the first one that fails is the
    only error reported:
      1. name, email and address are all filled in
      2. email contains "@"
      3. the cart is not empty
      4. UPI payments carry an id of at least 5 characters
      5. card payments carry a 12+ digit number, an expiry and a 3+ digit cvv
    """
    if not shipping.name or not shipping.email or not shipping.address:
        return ValidationResult.failure(INCOMPLETE_SHIPPING)

    if "@" not in shipping.email:
        return ValidationResult.failure(INVALID_EMAIL)

    if not any(True for _ in cart):
        return ValidationResult.failure(EMPTY_CART)

    method = payment.method
    if method == PaymentMethod.UPI and len(payment.upi or "") < UPI_MIN_LENGTH:
        return ValidationResult.failure(INVALID_UPI)

    if method == PaymentMethod.CARD:
        card = payment.card or CardDetails()
        if (
            len(card.number or "") < CARD_NUMBER_MIN_LENGTH
            or not card.expiry
            or len(card.cvv or "") < CVV_MIN_LENGTH
        ):
            return ValidationResult.failure(INVALID_CARD)

    if method == PaymentMethod.COD:
        return ValidationResult(ok=True, message=PAY_ON_DELIVERY)
    return ValidationResult(ok=True, message=PAYMENT_SUCCESSFUL)


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


def place_order(
    shipping: ShippingDetails,
    payment: PaymentDetails,
    cart: Iterable[CartLine],
) -> Tuple[ValidationResult, Optional[OrderReceipt]]:
    """
    Validate and, when the order passes, snapshot it into a receipt.
    Nothing is charged or stored; the cart is not modified.
    """
    lines = list(cart)
    result = validate_order(shipping, payment, lines)
    if not result.ok:
        logger.info("Order rejected: %s", result.error)
        return result, None

    method = PaymentMethod(payment.method)
    receipt_lines = [
        ReceiptLine(
            id=line.id,
            title=line.title,
            qty=line.qty,
            unit_price=compute_price(line),
            size=line.size,
        )
        for line in lines
    ]
    receipt = OrderReceipt(
        customer=replace(shipping),
        method=method,
        lines=receipt_lines,
        total=sum(rl.subtotal for rl in receipt_lines),
        placed_at=now_utc_iso(),
        message=result.message,
    )
    logger.info(
        "Order placed: %d lines, total %.2f, method=%s",
        len(receipt_lines), receipt.total, method.value,
    )
    return result, receipt
