from sqlalchemy import Column, Integer, Numeric, ForeignKey, UniqueConstraint
from app.db.session import Base

class ExpenseSplit(Base):
    __tablename__ = "expense_splits"
    __table_args__ = (
        UniqueConstraint("expense_id", "member_id", name="uq_expense_split_member"),
    )

    id = Column(Integer, primary_key=True)
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("group_members.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
