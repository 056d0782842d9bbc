from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping

from app.core.errors import ImbalancedInputError
from app.core.utils import EPSILON, ZERO, qround, to_decimal


@dataclass(frozen=True)
class Transfer:
    from_member: int
    to_member: int
    amount: Decimal


def plan_settlements(balances: Mapping[int, Decimal]) -> List[Transfer]:
    """
    Standard greedy algorithm to minimize number of transactions.

    The largest debtor pays the largest creditor as much as both can
    absorb, then both lists are re-sorted and the next pair is matched.
    Equal amounts keep the insertion order of `balances`, so the same
    input always produces the same plan.
    """
    net = {uid: to_decimal(bal) for uid, bal in balances.items()}

    total = sum(net.values(), ZERO)
    if abs(total) > EPSILON:
        raise ImbalancedInputError(total)

    net = {uid: qround(bal) for uid, bal in net.items()}
    order = {uid: i for i, uid in enumerate(net)}

    creditors = [[uid, bal] for uid, bal in net.items() if bal > EPSILON]
    debtors = [[uid, -bal] for uid, bal in net.items() if bal < -EPSILON]
    # within epsilon of zero, only planned if others are left unmatched
    small = [[uid, bal] for uid, bal in net.items() if bal != ZERO and abs(bal) <= EPSILON]

    def by_size(entry):
        return (-entry[1], order[entry[0]])

    def outstanding(parties):
        return sum((p[1] for p in parties), ZERO)

    transfers: List[Transfer] = []

    while True:
        creditors = [c for c in creditors if c[1] > ZERO]
        debtors = [d for d in debtors if d[1] > ZERO]

        if not debtors and outstanding(creditors) > EPSILON:
            debtors = [[uid, -bal] for uid, bal in small if bal < ZERO]
            small = []
        elif not creditors and outstanding(debtors) > EPSILON:
            creditors = [[uid, bal] for uid, bal in small if bal > ZERO]
            small = []

        if not creditors or not debtors:
            break

        creditors.sort(key=by_size)
        debtors.sort(key=by_size)

        creditor, debtor = creditors[0], debtors[0]
        pay_amt = min(creditor[1], debtor[1])

        transfers.append(Transfer(from_member=debtor[0], to_member=creditor[0], amount=pay_amt))

        creditor[1] -= pay_amt
        debtor[1] -= pay_amt

    return transfers


def apply_transfers(balances: Mapping[int, Decimal], transfers: List[Transfer]) -> Dict[int, Decimal]:
    """Balances as they would be once every transfer has been paid."""
    after = {uid: to_decimal(bal) for uid, bal in balances.items()}

    for t in transfers:
        after[t.from_member] = after.get(t.from_member, ZERO) + t.amount
        after[t.to_member] = after.get(t.to_member, ZERO) - t.amount

    return {uid: qround(bal) for uid, bal in after.items()}


def is_settled(balances: Mapping[int, Decimal], tolerance: Decimal = EPSILON) -> bool:
    return all(abs(to_decimal(bal)) <= tolerance for bal in balances.values())
