"""
Data Models Package

This package contains all Pydantic models used by the household ledger.
All data flowing through the system must conform to these schemas.
"""

from src.models.finance import (
    Goal,
    GoalInput,
    GoalType,
    Loan,
    LoanInput,
    SpecialPayment,
    SpecialPaymentType,
    Transaction,
    TransactionInput,
    TransactionType,
    UserFinance,
    new_record_id,
)

__all__ = [
    "Goal",
    "GoalInput",
    "GoalType",
    "Loan",
    "LoanInput",
    "SpecialPayment",
    "SpecialPaymentType",
    "Transaction",
    "TransactionInput",
    "TransactionType",
    "UserFinance",
    "new_record_id",
]
