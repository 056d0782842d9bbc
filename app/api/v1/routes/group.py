from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db, get_group_or_404
from app.models.group import Group
from app.services.group_services import create_group, add_member, get_group, list_groups, remove_member
from app.services.balance_services import get_group_balances, get_group_summary
from app.schemas.group import GroupCreate, GroupDetailOut, GroupMemberCreate, GroupMemberOut, GroupOut
from app.schemas.balances import GroupBalanceOut, GroupSummaryOut

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(data: GroupCreate, db: AsyncSession = Depends(get_db)):
    return await create_group(db, data)

@router.get("/", response_model=list[GroupOut])
async def all_groups(db: AsyncSession = Depends(get_db)):
    return await list_groups(db)

@router.get("/{group_id}", response_model=GroupDetailOut)
async def fetch_group(group_id: int, db: AsyncSession = Depends(get_db)):
    return await get_group(db, group_id)

@router.post("/{group_id}/members", response_model=GroupMemberOut, status_code=201)
async def add_member_to_group(
    data: GroupMemberCreate,
    group: Group = Depends(get_group_or_404),
    db: AsyncSession = Depends(get_db),
):
    return await add_member(db, group.id, data)

@router.delete("/{group_id}/members/{member_id}", response_model=GroupMemberOut)
async def leave_group(
    member_id: int,
    group: Group = Depends(get_group_or_404),
    db: AsyncSession = Depends(get_db),
):
    return await remove_member(db, group.id, member_id)

@router.get("/{group_id}/balances", response_model=GroupBalanceOut)
async def group_balances(group: Group = Depends(get_group_or_404), db: AsyncSession = Depends(get_db)):
    return await get_group_balances(db, group.id)

@router.get("/{group_id}/summary", response_model=GroupSummaryOut)
async def group_summary(group: Group = Depends(get_group_or_404), db: AsyncSession = Depends(get_db)):
    return await get_group_summary(db, group)
