"""
Tests for the balance engine.

Expenses and splits are plain value objects here; the engine only
needs attribute access, so ORM rows behave the same way.
"""

import random
from decimal import Decimal

import pytest

from app.core.balances import ExpenseEntry, SplitEntry, compute_balances, member_totals
from app.core.errors import DataIntegrityError
from app.core.utils import split_equally


def D(value: str) -> Decimal:
    return Decimal(value)


class TestComputeBalances:

    def test_even_three_way_split(self):
        """Payer is credited the full amount and debited their own share."""
        expenses = [ExpenseEntry(id=1, paid_by="A", amount=D("90"))]
        splits = [
            SplitEntry(expense_id=1, member_id="A", amount=D("30")),
            SplitEntry(expense_id=1, member_id="B", amount=D("30")),
            SplitEntry(expense_id=1, member_id="C", amount=D("30")),
        ]

        assert compute_balances(expenses, splits) == {
            "A": D("60.00"),
            "B": D("-30.00"),
            "C": D("-30.00"),
        }

    def test_members_keyed_in_first_appearance_order(self):
        expenses = [
            ExpenseEntry(id=1, paid_by=3, amount=D("10")),
            ExpenseEntry(id=2, paid_by=1, amount=D("10")),
        ]
        splits = [
            SplitEntry(expense_id=1, member_id=2, amount=D("10")),
            SplitEntry(expense_id=2, member_id=4, amount=D("10")),
        ]

        assert list(compute_balances(expenses, splits)) == [3, 1, 2, 4]

    def test_result_is_rounded_to_cents(self):
        expenses = [ExpenseEntry(id=1, paid_by=1, amount=D("10.005"))]
        splits = [SplitEntry(expense_id=1, member_id=2, amount=D("10.005"))]

        balances = compute_balances(expenses, splits)

        assert balances[1] == D("10.01")
        assert balances[1].as_tuple().exponent == -2

    def test_accepts_floats(self):
        expenses = [ExpenseEntry(id=1, paid_by=1, amount=0.3)]
        splits = [
            SplitEntry(expense_id=1, member_id=1, amount=0.1),
            SplitEntry(expense_id=1, member_id=2, amount=0.2),
        ]

        assert compute_balances(expenses, splits) == {1: D("0.20"), 2: D("-0.20")}

    def test_empty_history(self):
        assert compute_balances([], []) == {}

    def test_one_cent_rounding_drift_is_tolerated(self):
        expenses = [ExpenseEntry(id=1, paid_by=1, amount=D("100.00"))]
        splits = [
            SplitEntry(expense_id=1, member_id=1, amount=D("33.33")),
            SplitEntry(expense_id=1, member_id=2, amount=D("33.33")),
            SplitEntry(expense_id=1, member_id=3, amount=D("33.33")),
        ]

        balances = compute_balances(expenses, splits)

        assert balances == {1: D("66.67"), 2: D("-33.33"), 3: D("-33.33")}

    def test_splits_not_matching_amount_raise(self):
        expenses = [ExpenseEntry(id=7, paid_by=1, amount=D("50"))]
        splits = [SplitEntry(expense_id=7, member_id=2, amount=D("49.98"))]

        with pytest.raises(DataIntegrityError) as exc:
            compute_balances(expenses, splits)

        assert exc.value.expense_id == 7

    def test_expense_without_splits_raises(self):
        expenses = [ExpenseEntry(id=1, paid_by=1, amount=D("5"))]

        with pytest.raises(DataIntegrityError):
            compute_balances(expenses, [])

    def test_split_for_unknown_expense_raises(self):
        expenses = [ExpenseEntry(id=1, paid_by=1, amount=D("5"))]
        splits = [
            SplitEntry(expense_id=1, member_id=1, amount=D("5")),
            SplitEntry(expense_id=2, member_id=2, amount=D("5")),
        ]

        with pytest.raises(DataIntegrityError):
            compute_balances(expenses, splits)

    @pytest.mark.parametrize("amount", [D("0"), D("-5")])
    def test_non_positive_amounts_raise(self, amount):
        with pytest.raises(DataIntegrityError):
            compute_balances(
                [ExpenseEntry(id=1, paid_by=1, amount=amount)],
                [SplitEntry(expense_id=1, member_id=2, amount=amount)],
            )

    def test_balances_sum_to_zero_for_random_histories(self):
        rng = random.Random(20241019)
        members = list(range(1, 9))

        for _ in range(50):
            expenses, splits = [], []
            for expense_id in range(1, rng.randint(1, 15) + 1):
                amount = Decimal(rng.randint(1, 100000)) / 100
                payer = rng.choice(members)
                sharing = rng.sample(members, rng.randint(1, len(members)))
                expenses.append(ExpenseEntry(id=expense_id, paid_by=payer, amount=amount))
                splits.extend(
                    SplitEntry(expense_id=expense_id, member_id=m, amount=share)
                    for m, share in split_equally(amount, sharing).items()
                )

            balances = compute_balances(expenses, splits)

            assert abs(sum(balances.values())) <= D("0.01")


class TestMemberTotals:

    def test_paid_owed_and_net(self):
        expenses = [
            ExpenseEntry(id=1, paid_by=1, amount=D("90")),
            ExpenseEntry(id=2, paid_by=2, amount=D("30")),
        ]
        splits = [
            SplitEntry(expense_id=1, member_id=1, amount=D("45")),
            SplitEntry(expense_id=1, member_id=2, amount=D("45")),
            SplitEntry(expense_id=2, member_id=1, amount=D("30")),
        ]

        totals = member_totals(expenses, splits)

        assert totals[1].paid == D("90")
        assert totals[1].owed == D("75")
        assert totals[1].net == D("15.00")
        assert totals[2].net == D("-15.00")
