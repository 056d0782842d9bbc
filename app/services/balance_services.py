from decimal import Decimal
from typing import Dict, List, Tuple

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.balances import ExpenseEntry, SplitEntry, compute_balances, member_totals
from app.core.settlements import is_settled, plan_settlements
from app.core.utils import ZERO, qround
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit
from app.models.group import Group
from app.models.group_member import GroupMember
from app.models.settlement import COMPLETED, Settlement

logger = structlog.get_logger(__name__)


def settlement_entries(settlements: List[Settlement]) -> Tuple[list, list]:
    """
    A completed payment from A to B of x behaves like an expense of x
    paid by A whose only split belongs to B. Ids are negative so they
    never collide with real expenses.
    """
    expenses = []
    splits = []

    for s in settlements:
        entry_id = -s.id
        expenses.append(ExpenseEntry(id=entry_id, paid_by=s.from_member, amount=s.amount))
        splits.append(SplitEntry(expense_id=entry_id, member_id=s.to_member, amount=s.amount))

    return expenses, splits


async def load_ledger(db: AsyncSession, group_id: int) -> Tuple[list, list]:
    """
    Expenses and splits of a group, completed settlements folded in.
    Ordering is fixed so balances come out in the same insertion order
    on every call.
    """
    q_exp = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at, Expense.id)
    )
    expenses = list((await db.scalars(q_exp)).all())

    q_split = (
        select(ExpenseSplit)
        .join(Expense, Expense.id == ExpenseSplit.expense_id)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at, Expense.id, ExpenseSplit.id)
    )
    splits = list((await db.scalars(q_split)).all())

    q_settled = (
        select(Settlement)
        .where(Settlement.group_id == group_id, Settlement.status == COMPLETED)
        .order_by(Settlement.completed_at, Settlement.id)
    )
    settled = (await db.scalars(q_settled)).all()

    paid_expenses, paid_splits = settlement_entries(settled)

    return expenses + paid_expenses, splits + paid_splits


async def get_group_net_balances(db: AsyncSession, group_id: int) -> Dict[int, Decimal]:
    """
    Returns:
        {
            member_id: net_balance (Decimal)
        }

    net_balance = total_paid - total_owed
    """
    expenses, splits = await load_ledger(db, group_id)
    return compute_balances(expenses, splits)


async def get_group_balances(db: AsyncSession, group_id: int):
    net = await get_group_net_balances(db, group_id)
    transfers = plan_settlements(net)

    return {
        "net": net,
        "settlements": transfers,
        "is_settled": is_settled(net),
    }


async def is_member_settled(db: AsyncSession, group_id: int, member_id: int) -> bool:
    net = await get_group_net_balances(db, group_id)
    return is_settled({member_id: net.get(member_id, ZERO)})


async def get_group_summary(db: AsyncSession, group: Group):
    expenses, splits = await load_ledger(db, group.id)

    real_expenses = [e for e in expenses if e.id > 0]
    real_splits = [s for s in splits if s.expense_id > 0]
    totals = member_totals(real_expenses, real_splits)
    net = compute_balances(expenses, splits)

    q_members = select(GroupMember.id, GroupMember.name).where(GroupMember.group_id == group.id)
    names = {row.id: row.name for row in await db.execute(q_members)}

    total_expenses = sum((e.amount for e in real_expenses), ZERO)
    total_settled = sum((e.amount for e in expenses if e.id < 0), ZERO)

    members = [
        {
            "member_id": member_id,
            "name": names.get(member_id),
            "total_paid": qround(t.paid),
            "total_owed": qround(t.owed),
            "net": net.get(member_id, ZERO),
        }
        for member_id, t in totals.items()
    ]

    return {
        "group_id": group.id,
        "currency": group.currency,
        "total_expenses": qround(total_expenses),
        "total_settled": qround(total_settled),
        "members": members,
    }
