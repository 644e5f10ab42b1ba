"""Order line pricing.

``subtotal = quantity * unit_price``, ``tax = subtotal * TAX_RATE`` rounded
half-up to cents, ``total = subtotal + tax``.  Order amounts are the exact
sums of the (already rounded) line amounts, so ``order.total`` always equals
the sum of ``line.total``.

Every amount must fit a ``Decimal(18, 2)`` column; larger results raise
``AmountOutOfRange``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, NamedTuple

from modules.orders.constants import MAX_AMOUNT, MONEY_QUANTUM, TAX_RATE
from modules.orders.exceptions import AmountOutOfRange


class LineAmounts(NamedTuple):
    subtotal: Decimal
    tax: Decimal
    total: Decimal


ZERO_AMOUNTS = LineAmounts(Decimal("0.00"), Decimal("0.00"), Decimal("0.00"))


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def _check_limit(amount: Decimal) -> Decimal:
    if amount > MAX_AMOUNT:
        raise AmountOutOfRange(amount)
    return amount


def price_line(quantity: Decimal, unit_price: Decimal) -> LineAmounts:
    """Compute the monetary fields of a single order line.

    Raises:
        AmountOutOfRange: the line total does not fit ``Decimal(18, 2)``.
    """
    # Checked before quantizing: oversized values cannot be quantized.
    subtotal = quantize_money(_check_limit(quantity * unit_price))
    tax = quantize_money(subtotal * TAX_RATE)
    return LineAmounts(subtotal=subtotal, tax=tax, total=_check_limit(subtotal + tax))


def sum_amounts(amounts: Iterable[LineAmounts]) -> LineAmounts:
    """Add line amounts field by field.

    Raises:
        AmountOutOfRange: the order total does not fit ``Decimal(18, 2)``.
    """
    result = ZERO_AMOUNTS
    for line in amounts:
        result = LineAmounts(
            subtotal=result.subtotal + line.subtotal,
            tax=result.tax + line.tax,
            total=_check_limit(result.total + line.total),
        )
    return result
