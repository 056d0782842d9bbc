from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.db.session import async_session
from app.models.group import Group
from app.models.group_member import GroupMember

async def get_db():
    async with async_session() as session:
        yield session

async def get_group_or_404(group_id: int, db: AsyncSession = Depends(get_db)) -> Group:
    group = await db.get(Group, group_id)

    if not group:
        raise HTTPException(404, "Group does not exist")

    return group

async def ensure_active_group_member(db: AsyncSession, member_id: int, group_id: int) -> GroupMember:
    q_member = select(GroupMember).where(
        GroupMember.id == member_id,
        GroupMember.group_id == group_id,
        GroupMember.is_active == True,
    )

    res_member = await db.execute(q_member)
    member = res_member.scalar_one_or_none()

    if not member:
        raise HTTPException(400, f"Member {member_id} is not an active member of this group")

    return member

async def fetch_active_member_ids(db: AsyncSession, group_id: int) -> list[int]:
    q = (
        select(GroupMember.id)
        .where(GroupMember.group_id == group_id, GroupMember.is_active == True)
        .order_by(GroupMember.id)
    )
    res = await db.execute(q)
    return list(res.scalars().all())

def group_lock_query(group_id: int):
    return select(Group.id).where(Group.id == group_id).with_for_update()

async def lock_group(db: AsyncSession, group_id: int):
    # held until commit; serializes settle requests for one group
    await db.execute(group_lock_query(group_id))
