import math
from decimal import ROUND_HALF_UP, Decimal

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567: last three digits, then pairs
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency_inr(amount) -> str:
    """
    Render an amount the way the en-IN locale shows rupees, e.g. ₹12,34,567.50.

    None, NaN, infinities and anything that is not a number come out as ₹0.00.
    """
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value):
        value = 0.0

    rounded = Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    whole, fraction = f"{abs(rounded):.2f}".split(".")
    return f"{sign}{RUPEE}{_group_indian(whole)}.{fraction}"
