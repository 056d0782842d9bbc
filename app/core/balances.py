from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable

from app.core.errors import DataIntegrityError
from app.core.utils import CENTS, ZERO, qround, to_decimal


@dataclass(frozen=True)
class ExpenseEntry:
    id: int
    paid_by: int
    amount: Decimal


@dataclass(frozen=True)
class SplitEntry:
    expense_id: int
    member_id: int
    amount: Decimal


@dataclass
class MemberTotals:
    paid: Decimal = field(default=ZERO)
    owed: Decimal = field(default=ZERO)

    @property
    def net(self) -> Decimal:
        return qround(self.paid - self.owed)


def member_totals(expenses: Iterable, splits: Iterable) -> Dict[int, MemberTotals]:
    """
    Sum what every member paid and owes across a group's history.

    `expenses` need `id`, `paid_by` and `amount`; `splits` need
    `expense_id`, `member_id` and `amount`. ORM rows work as-is.
    Members are keyed in order of first appearance, payers first.
    """
    totals: Dict[int, MemberTotals] = {}
    expense_amounts: Dict[int, Decimal] = {}
    split_sums: Dict[int, Decimal] = {}

    for exp in expenses:
        amount = to_decimal(exp.amount)
        if amount <= 0:
            raise DataIntegrityError(
                f"Expense {exp.id} has non-positive amount {amount}", exp.id
            )
        expense_amounts[exp.id] = amount
        split_sums[exp.id] = ZERO
        totals.setdefault(exp.paid_by, MemberTotals()).paid += amount

    for s in splits:
        amount = to_decimal(s.amount)
        if s.expense_id not in expense_amounts:
            raise DataIntegrityError(
                f"Split for member {s.member_id} references unknown expense {s.expense_id}",
                s.expense_id,
            )
        if amount <= 0:
            raise DataIntegrityError(
                f"Split for member {s.member_id} on expense {s.expense_id} "
                f"has non-positive amount {amount}",
                s.expense_id,
            )
        split_sums[s.expense_id] += amount
        totals.setdefault(s.member_id, MemberTotals()).owed += amount

    for expense_id, amount in expense_amounts.items():
        if abs(split_sums[expense_id] - amount) > CENTS:
            raise DataIntegrityError(
                f"Splits of expense {expense_id} sum to {split_sums[expense_id]}, "
                f"expected {amount}",
                expense_id,
            )

    return totals


def compute_balances(expenses: Iterable, splits: Iterable) -> Dict[int, Decimal]:
    """
    Net balance per member: positive means the member is owed money,
    negative means they owe. Rounded to cents.
    """
    return {
        member_id: t.net
        for member_id, t in member_totals(expenses, splits).items()
    }
