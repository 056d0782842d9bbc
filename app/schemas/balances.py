from pydantic import BaseModel
from decimal import Decimal
from typing import List

class ProposedSettlement(BaseModel):
    from_member: int
    to_member: int
    amount: Decimal

    class Config:
        from_attributes = True

class GroupBalanceOut(BaseModel):
    net: dict[int, Decimal]
    settlements: List[ProposedSettlement]
    is_settled: bool

class MemberSummary(BaseModel):
    member_id: int
    name: str | None
    total_paid: Decimal
    total_owed: Decimal
    net: Decimal

class GroupSummaryOut(BaseModel):
    group_id: int
    currency: str
    total_expenses: Decimal
    total_settled: Decimal
    members: List[MemberSummary]
