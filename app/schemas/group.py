from pydantic import BaseModel, Field, EmailStr
from datetime import datetime
from typing import List

class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    currency: str = Field(default="USD", pattern=r"^[A-Z]{3}$")

class GroupOut(BaseModel):
    id: int
    name: str
    currency: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class GroupMemberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr | None = None

class GroupMemberOut(BaseModel):
    id: int
    group_id: int
    name: str
    email: str | None = None
    is_active: bool
    joined_at: datetime | None = None

    class Config:
        from_attributes = True

class GroupDetailOut(GroupOut):
    members: List[GroupMemberOut]
