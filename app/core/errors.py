from decimal import Decimal


class LedgerError(Exception):
    """Base class for errors raised by the balance and settlement core."""


class DataIntegrityError(LedgerError):
    """Stored expenses and splits disagree with each other."""

    def __init__(self, message: str, expense_id=None):
        super().__init__(message)
        self.expense_id = expense_id


class ImbalancedInputError(LedgerError):
    """Balances handed to the planner do not sum to zero."""

    def __init__(self, total: Decimal):
        super().__init__(f"Balances sum to {total}, expected 0")
        self.total = total
