from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.sql import func
from fastapi import HTTPException
import structlog
from app.core.settlements import plan_settlements
from app.models.settlement import COMPLETED, PENDING, Settlement
from app.services.balance_services import get_group_net_balances
from app.core.dependencies import lock_group

logger = structlog.get_logger(__name__)

async def settle_group(db: AsyncSession, group_id: int):
    await lock_group(db, group_id)

    q = select(Settlement.id).where(
        Settlement.group_id == group_id,
        Settlement.status == PENDING
    )
    if await db.scalar(q.limit(1)):
        raise HTTPException(409, "Group already has pending settlements")

    net = await get_group_net_balances(db, group_id)
    transfers = plan_settlements(net)

    settlements = [
        Settlement(
            group_id=group_id,
            from_member=t.from_member,
            to_member=t.to_member,
            amount=t.amount,
            status=PENDING
        )
        for t in transfers
    ]

    db.add_all(settlements)
    await db.commit()

    for s in settlements:
        await db.refresh(s)

    logger.info("group_settlements_planned", group_id=group_id, members=len(net), transfers=len(settlements))
    return settlements

async def get_settlement_history(db: AsyncSession, group_id: int, status: str | None = None):
    q = select(Settlement).where(Settlement.group_id == group_id)

    if status:
        q = q.where(Settlement.status == status)

    q = q.order_by(Settlement.created_at.desc(), Settlement.id.desc())

    result = await db.execute(q)
    return result.scalars().all()

async def complete_settlement(db: AsyncSession, settlement_id: int):
    settlement = await db.get(Settlement, settlement_id)

    if not settlement:
        raise HTTPException(404, "Settlement entry not found")

    if settlement.status == COMPLETED:
        raise HTTPException(409, "Settlement is already completed")

    settlement.status = COMPLETED
    settlement.completed_at = func.now()

    await db.commit()
    await db.refresh(settlement)

    logger.info("settlement_completed", group_id=settlement.group_id, settlement_id=settlement.id, amount=str(settlement.amount))
    return settlement
