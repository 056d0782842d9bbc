from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Literal

SettlementStatus = Literal["pending", "completed"]

class SettlementOut(BaseModel):
    id: int
    group_id: int
    from_member: int
    to_member: int
    amount: Decimal
    status: SettlementStatus
    created_at: datetime | None = None
    completed_at: datetime | None = None

    class Config:
        from_attributes = True
