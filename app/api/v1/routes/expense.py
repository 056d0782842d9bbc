from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.dependencies import get_db, get_group_or_404
from app.models.group import Group
from app.schemas.expense import ExpenseCreate, ExpenseOut
from app.services.expense_services import create_expense, get_expense_by_id, get_expenses_by_group

router = APIRouter()

@router.post("/groups/{group_id}/expenses", response_model=ExpenseOut, status_code=201)
async def add_expense(
    data: ExpenseCreate,
    group: Group = Depends(get_group_or_404),
    db: AsyncSession = Depends(get_db),
):
    return await create_expense(db, group, data)

@router.get("/groups/{group_id}/expenses", response_model=list[ExpenseOut])
async def all_expenses(group: Group = Depends(get_group_or_404), db: AsyncSession = Depends(get_db)):
    return await get_expenses_by_group(db, group.id)

@router.get("/expenses/{expense_id}", response_model=ExpenseOut)
async def fetch(expense_id: int, db: AsyncSession = Depends(get_db)):
    return await get_expense_by_id(db, expense_id)
