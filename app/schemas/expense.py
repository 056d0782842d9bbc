from pydantic import BaseModel, Field, condecimal
from datetime import datetime
from decimal import Decimal
from typing import List, Literal

Money = condecimal(gt=0, max_digits=12, decimal_places=2)

class SplitInput(BaseModel):
    member_id: int
    amount: Money | None = None
    percentage: condecimal(gt=0, le=100, max_digits=5, decimal_places=2) | None = None

class ExpenseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    amount: Money
    currency: str | None = Field(default=None, pattern=r"^[A-Z]{3}$")
    paid_by: int
    strategy: Literal["equal", "percentage", "exact"] = "equal"
    splits: List[SplitInput] = []

class SplitOut(BaseModel):
    member_id: int
    amount: Decimal

    class Config:
        from_attributes = True

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    title: str
    amount: Decimal
    currency: str
    paid_by: int
    strategy: str
    created_at: datetime | None = None
    splits: List[SplitOut]

    class Config:
        from_attributes = True
