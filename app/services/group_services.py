import structlog
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import func
from app.models.group import Group
from app.models.group_member import GroupMember
from app.schemas.group import GroupCreate, GroupMemberCreate
from app.services.balance_services import is_member_settled

logger = structlog.get_logger(__name__)

async def create_group(db: AsyncSession, data: GroupCreate):
    existing = await db.scalar(select(Group).where(Group.name == data.name))
    if existing:
        raise HTTPException(409, "A group with this name already exists")

    group = Group(name=data.name, currency=data.currency)
    db.add(group)
    await db.commit()
    await db.refresh(group)

    logger.info("group_created", group_id=group.id, currency=group.currency)
    return group

async def get_group(db: AsyncSession, group_id: int):
    q = (
        select(Group)
        .options(selectinload(Group.members))
        .where(Group.id == group_id)
    )
    group = await db.scalar(q)

    if not group:
        raise HTTPException(404, "Group does not exist")

    return group

async def list_groups(db: AsyncSession):
    q = select(Group).order_by(Group.created_at.desc(), Group.id.desc())
    result = await db.execute(q)
    return result.scalars().all()

async def add_member(db: AsyncSession, group_id: int, data: GroupMemberCreate):
    if data.email:
        q = select(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.email == data.email
        )
        if await db.scalar(q):
            raise HTTPException(409, "A member with this email is already in the group")

    member = GroupMember(
        group_id=group_id,
        name=data.name,
        email=data.email,
        is_active=True
    )
    db.add(member)
    await db.commit()
    await db.refresh(member)

    logger.info("member_added", group_id=group_id, member_id=member.id)
    return member

async def remove_member(db: AsyncSession, group_id: int, member_id: int):
    q = select(GroupMember).where(
        GroupMember.id == member_id,
        GroupMember.group_id == group_id,
        GroupMember.is_active == True
    )
    member = await db.scalar(q)

    if not member:
        raise HTTPException(404, "Member not found in this group")

    if not await is_member_settled(db, group_id, member_id):
        raise HTTPException(409, "Member still has an outstanding balance in this group")

    member.is_active = False
    member.left_at = func.now()

    await db.commit()
    await db.refresh(member)

    logger.info("member_left", group_id=group_id, member_id=member_id)
    return member
