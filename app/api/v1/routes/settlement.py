from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db, get_group_or_404
from app.models.group import Group
from app.schemas.settlements import SettlementOut, SettlementStatus
from app.services.settlement_service import complete_settlement, get_settlement_history, settle_group

router = APIRouter()


@router.post("/groups/{group_id}/settle", response_model=list[SettlementOut], status_code=201)
async def settle(group: Group = Depends(get_group_or_404), db: AsyncSession = Depends(get_db)):
    return await settle_group(db, group.id)


@router.get("/groups/{group_id}/settlements", response_model=list[SettlementOut])
async def settlement_history(
    status: SettlementStatus | None = None,
    group: Group = Depends(get_group_or_404),
    db: AsyncSession = Depends(get_db),
):
    return await get_settlement_history(db, group.id, status)


@router.post("/settlements/{settlement_id}/complete", response_model=SettlementOut)
async def mark_completed(settlement_id: int, db: AsyncSession = Depends(get_db)):
    return await complete_settlement(db, settlement_id)
