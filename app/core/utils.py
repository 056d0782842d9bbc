from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP, getcontext
from typing import Dict, List, Sequence

getcontext().prec = 28
CENTS = Decimal("0.01")
EPSILON = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    # floats go through str() so 0.1 stays 0.1
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _distribute(shares: List[Decimal], amount: Decimal) -> List[Decimal]:
    """
    Hand out whatever `shares` is short of `amount` one cent at a time,
    starting from the first share.
    """
    steps = int(((amount - sum(shares, ZERO)) / CENTS).to_integral_value(rounding=ROUND_DOWN))
    for i in range(steps):
        shares[i % len(shares)] += CENTS
    return shares


def split_equally(amount: Decimal, member_ids: Sequence[int]) -> Dict[int, Decimal]:
    """
    Equal shares rounded down to the cent, leftover cents go to the
    first members in the given order. Shares always sum to `amount`.
    """
    if not member_ids:
        return {}

    amount = qround(to_decimal(amount))
    base = (amount / len(member_ids)).quantize(CENTS, rounding=ROUND_DOWN)
    shares = _distribute([base] * len(member_ids), amount)

    return dict(zip(member_ids, shares))


def split_by_percentage(amount: Decimal, percentages: Dict[int, Decimal]) -> Dict[int, Decimal]:
    """
    Shares proportional to `percentages` (which must total 100).
    Rounding leftovers are handed out like in split_equally.
    """
    amount = qround(to_decimal(amount))
    member_ids = list(percentages)
    shares = [
        (amount * to_decimal(percentages[m]) / HUNDRED).quantize(CENTS, rounding=ROUND_DOWN)
        for m in member_ids
    ]
    shares = _distribute(shares, amount)

    return dict(zip(member_ids, shares))
