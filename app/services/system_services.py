from app.db.session import engine
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.group import Group
from app.models.group_member import GroupMember
from app.models.expense import Expense
from app.models.settlement import PENDING, Settlement

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message":"Database is connected"}
    except Exception as e:
        return {"db": False, "error": str(e)}
    
async def system_health():
    return {
        "status": "ok"
    }

async def system_metrics(db: AsyncSession):
    groups_q = select(func.count(Group.id))
    members_q = select(func.count(GroupMember.id)).where(
        GroupMember.is_active == True
    )
    expenses_q = select(func.count(Expense.id))
    pending_q = select(func.count(Settlement.id)).where(
        Settlement.status == PENDING
    )

    groups_res = await db.execute(groups_q)
    members_res = await db.execute(members_q)
    expenses_res = await db.execute(expenses_q)
    pending_res = await db.execute(pending_q)

    return {
        "groups": groups_res.scalar(),
        "members": members_res.scalar(),
        "expenses": expenses_res.scalar(),
        "pending_settlements": pending_res.scalar()
    }
