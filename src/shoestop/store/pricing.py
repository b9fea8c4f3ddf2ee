"""Order pricing.

Shipping fee and discount come from the ``SHOP`` settings and default to
zero. Totals are computed once at checkout.
"""

from decimal import ROUND_HALF_EVEN, Decimal
from typing import NamedTuple

from shoestop.core.conf import get_money_setting


class OrderTotals(NamedTuple):
    """Money fields stored on an order."""

    subtotal: Decimal
    shipping_fee: Decimal
    discount: Decimal
    total: Decimal


def round_money(amount: Decimal, places: int = 2) -> Decimal:
    """Round to specified decimal places using banker's rounding."""
    quantize_str = "0." + "0" * places
    return amount.quantize(Decimal(quantize_str), rounding=ROUND_HALF_EVEN)


def line_subtotal(lines) -> Decimal:
    """Sum of qty x price over objects with ``qty`` and ``price``."""
    return round_money(sum((Decimal(line.price) * line.qty for line in lines), Decimal("0")))


def shipping_fee_for(subtotal: Decimal) -> Decimal:
    return round_money(get_money_setting("SHIPPING_FEE"))


def discount_for(subtotal: Decimal) -> Decimal:
    """Discount never exceeds the subtotal."""
    return round_money(min(get_money_setting("DISCOUNT"), subtotal))


def calculate_order_totals(lines) -> OrderTotals:
    subtotal = line_subtotal(lines)
    shipping_fee = shipping_fee_for(subtotal)
    discount = discount_for(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        discount=discount,
        total=subtotal + shipping_fee - discount,
    )
