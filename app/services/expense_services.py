from app.core.dependencies import ensure_active_group_member, fetch_active_member_ids
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit
from app.models.group import Group
from app.schemas.expense import ExpenseCreate
from app.core.utils import HUNDRED, qround, split_by_percentage, split_equally
from decimal import Decimal
from fastapi import HTTPException
import structlog

logger = structlog.get_logger(__name__)


def resolve_split_amounts(data: ExpenseCreate, group_member_ids: list[int]) -> dict[int, Decimal]:
    """
    Turn the requested strategy into a member_id -> amount mapping that
    sums exactly to the expense amount.
    """
    amount = qround(Decimal(data.amount))
    member_ids = [s.member_id for s in data.splits]

    if len(member_ids) != len(set(member_ids)):
        raise HTTPException(400, "Duplicate members found in splits")

    if data.strategy == "equal":
        return split_equally(amount, member_ids or group_member_ids)

    if not data.splits:
        raise HTTPException(400, f"Splits are required for the '{data.strategy}' strategy")

    if data.strategy == "percentage":
        if any(s.percentage is None for s in data.splits):
            raise HTTPException(400, "Every split needs a percentage")

        total_pct = sum(Decimal(s.percentage) for s in data.splits)
        if total_pct != HUNDRED:
            raise HTTPException(400, f"Split percentages ({total_pct}) must add up to 100")

        return split_by_percentage(amount, {s.member_id: Decimal(s.percentage) for s in data.splits})

    if any(s.amount is None for s in data.splits):
        raise HTTPException(400, "Every split needs an amount")

    total_split = sum(Decimal(s.amount) for s in data.splits)
    if total_split != amount:
        raise HTTPException(
            400,
            f"Split total ({total_split}) must equal expense amount ({amount})"
        )

    return {s.member_id: qround(Decimal(s.amount)) for s in data.splits}


async def create_expense(db: AsyncSession, group: Group, data: ExpenseCreate):
    await ensure_active_group_member(db, data.paid_by, group.id)

    currency = data.currency or group.currency
    if currency != group.currency:
        raise HTTPException(
            400,
            f"Expense currency {currency} does not match group currency {group.currency}"
        )

    # -----------------------------------
    # 1. Resolve split amounts
    # -----------------------------------
    group_member_ids = await fetch_active_member_ids(db, group.id)
    shares = resolve_split_amounts(data, group_member_ids)

    if not shares:
        raise HTTPException(400, "Expense must be split between at least one member")

    if any(share <= 0 for share in shares.values()):
        raise HTTPException(
            400,
            f"Amount {data.amount} is too small to give every member a positive share"
        )

    # -----------------------------------
    # 2. Validate ALL split members are group members
    # -----------------------------------
    unknown = set(shares) - set(group_member_ids)
    if unknown:
        raise HTTPException(
            400,
            "One or more members in splits are not members of the group"
        )

    # -----------------------------------
    # 3. Create expense with its splits
    # -----------------------------------
    expense = Expense(
        group_id=group.id,
        paid_by=data.paid_by,
        amount=qround(Decimal(data.amount)),
        currency=currency,
        title=data.title,
        strategy=data.strategy,
        splits=[
            ExpenseSplit(member_id=member_id, amount=share)
            for member_id, share in shares.items()
        ]
    )

    db.add(expense)
    await db.commit()
    await db.refresh(expense)

    logger.info(
        "expense_created",
        group_id=group.id,
        expense_id=expense.id,
        amount=str(expense.amount),
        strategy=data.strategy,
        splits=len(shares),
    )
    return expense


async def get_expenses_by_group(db: AsyncSession, group_id: int):
    q = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
    )

    res = await db.execute(q)
    return res.scalars().all()


async def get_expense_by_id(db: AsyncSession, expense_id: int):
    expense = await db.get(Expense, expense_id)

    if not expense:
        raise HTTPException(404, "Expense not found")

    return expense
