"""
Core Data Models for the Household Ledger

These models define the strict schemas for every record the ledger keeps.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Serialize to the single JSON blob the ledger is persisted as

DESIGN DECISION: Stored JSON uses camelCase keys (bankBalance, totalAmount, ...).
Python code uses snake_case attributes. Both names are accepted on input.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


def new_record_id() -> str:
    """Fresh opaque identifier for a ledger record."""
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction relative to the bank balance."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class GoalType(str, Enum):
    """
    Savings goal horizon.

    SHORT goals are meant for about a year, LONG goals for two to three years.
    """
    SHORT = "SHORT"
    LONG = "LONG"


class SpecialPaymentType(str, Enum):
    """
    Kind of obligation to a named person.

    MONTHLY payments have no ceiling (total_amount is not meaningful).
    FIXED payments are a known amount that is paid down to zero.
    """
    MONTHLY = "MONTHLY"
    FIXED = "FIXED"


class LedgerModel(BaseModel):
    """Shared config: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# RECORDS
# =============================================================================

class Transaction(LedgerModel):
    """
    A single income or expense entry.

    Immutable once created; the only lifecycle change is deletion.
    """

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Unique transaction ID"
    )
    date: datetime = Field(
        default_factory=utc_now,
        description="When the transaction was recorded"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount; the type decides the sign"
    )
    type: TransactionType
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
    )
    note: Optional[str] = Field(
        default=None,
        max_length=500,
    )

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this transaction on the bank balance."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount


class Loan(LedgerModel):
    """A loan being repaid in installments."""

    id: str = Field(default_factory=new_record_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    total_amount: Decimal = Field(..., ge=0)
    remaining_amount: Decimal = Field(..., ge=0)
    installment_amount: Decimal = Field(..., ge=0)
    next_payment_date: date


class Goal(LedgerModel):
    """
    A savings target.

    current_amount may exceed target_amount; progress is only clamped for display.
    target_amount may be zero on stored goals; GoalInput requires it to be positive.
    """

    id: str = Field(default_factory=new_record_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    target_amount: Decimal = Field(..., ge=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    deadline: date
    type: GoalType = GoalType.SHORT


class SpecialPayment(LedgerModel):
    """
    A tracked debt or recurring obligation to a specific person.

    paid_amount is allowed to exceed total_amount (overpayment).
    """

    id: str = Field(default_factory=new_record_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    type: SpecialPaymentType


class UserFinance(LedgerModel):
    """
    The ledger root.

    This is the single unit of persistence: the whole structure is
    serialized and deserialized as one value. Transactions are kept
    newest-first.
    """

    bank_balance: Decimal = Field(
        ...,
        description="Signed balance; may go negative"
    )
    transactions: list[Transaction] = Field(default_factory=list)
    loans: list[Loan] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    special_payments: list[SpecialPayment] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'UserFinance':
        """Record ids must be unique within each collection."""
        for name in ("transactions", "loans", "goals", "special_payments"):
            ids = [record.id for record in getattr(self, name)]
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate ids in {name}")
        return self

    def to_json(self) -> str:
        """Serialize with the stored (camelCase) field names."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: str) -> 'UserFinance':
        return cls.model_validate_json(payload)


# =============================================================================
# INPUT MODELS - record fields minus id, validated before reaching the ledger
# =============================================================================

class TransactionInput(LedgerModel):
    """What the user enters to record a transaction."""

    amount: Decimal = Field(..., gt=0)
    type: TransactionType
    category: str = Field(..., min_length=1, max_length=100)
    note: Optional[str] = Field(default=None, max_length=500)


class LoanInput(LedgerModel):
    """
    What the user enters to track a new loan.

    DESIGN DECISION: remaining_amount may not exceed total_amount at entry.
    """

    name: str = Field(..., min_length=1, max_length=200)
    total_amount: Decimal = Field(..., gt=0)
    remaining_amount: Decimal = Field(..., ge=0)
    installment_amount: Decimal = Field(..., ge=0)
    next_payment_date: date

    @model_validator(mode='after')
    def validate_remaining(self) -> 'LoanInput':
        if self.remaining_amount > self.total_amount:
            raise ValueError("Remaining amount cannot exceed total amount")
        return self


class GoalInput(LedgerModel):
    """What the user enters to create a savings goal."""

    name: str = Field(..., min_length=1, max_length=200)
    target_amount: Decimal = Field(..., gt=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    deadline: date
    type: GoalType = GoalType.SHORT
