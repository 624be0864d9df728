"""
Ledger Operations

Every mutation of the ledger is a pure transformation: it takes a
UserFinance snapshot and returns a new one. The input snapshot is
never modified, so a caller holding an old snapshot keeps a
consistent view.

INVARIANT: bank_balance == starting balance + sum of signed amounts of
the transactions still present. Adding and deleting a transaction apply
and reverse exactly the same signed amount.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from src.ledger.exceptions import InvalidAmountError
from src.models.finance import (
    Goal,
    GoalInput,
    Loan,
    LoanInput,
    SpecialPayment,
    Transaction,
    TransactionType,
    UserFinance,
    new_record_id,
    utc_now,
)


SPECIAL_PAYMENT_CATEGORY = "special payment"

AmountLike = Union[Decimal, int, float, str]

# Keeps balance arithmetic exact within the default 28-digit decimal context
MAX_AMOUNT = Decimal("1e15")


def coerce_amount(amount: AmountLike) -> Decimal:
    """
    Convert user-supplied amount to a positive Decimal.

    Raises:
        InvalidAmountError: for non-numeric, NaN/infinite, zero, negative
            or larger than MAX_AMOUNT values
    """
    if isinstance(amount, bool) or amount is None:
        raise InvalidAmountError(amount)
    try:
        # str() first so floats keep their printed value (0.1 -> Decimal("0.1"))
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(amount)
    if not value.is_finite() or value <= 0 or value > MAX_AMOUNT:
        raise InvalidAmountError(amount)
    return value


def add_transaction(
    snapshot: UserFinance,
    amount: AmountLike,
    transaction_type: Union[TransactionType, str],
    category: str,
    note: Optional[str] = None,
    record_id: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> UserFinance:
    """
    Prepend a new transaction and adjust the balance.

    INCOME adds the amount to bank_balance, EXPENSE subtracts it.
    """
    value = coerce_amount(amount)
    transaction = Transaction(
        id=record_id or new_record_id(),
        date=timestamp or utc_now(),
        amount=value,
        type=TransactionType(transaction_type),
        category=category,
        note=note or None,
    )
    return snapshot.model_copy(
        update={
            "transactions": [transaction, *snapshot.transactions],
            "bank_balance": snapshot.bank_balance + transaction.signed_amount,
        }
    )


def delete_transaction(snapshot: UserFinance, transaction_id: str) -> UserFinance:
    """
    Remove a transaction and reverse its balance effect.

    Unknown ids are a no-op: the same snapshot is returned.
    """
    target = find_transaction(snapshot, transaction_id)
    if target is None:
        return snapshot

    return snapshot.model_copy(
        update={
            "transactions": [t for t in snapshot.transactions if t.id != transaction_id],
            "bank_balance": snapshot.bank_balance - target.signed_amount,
        }
    )


def add_loan(
    snapshot: UserFinance,
    loan: LoanInput,
    record_id: Optional[str] = None,
) -> UserFinance:
    """Append a loan. Loans never touch the balance."""
    new_loan = Loan(id=record_id or new_record_id(), **loan.model_dump())
    return snapshot.model_copy(update={"loans": [*snapshot.loans, new_loan]})


def add_goal(
    snapshot: UserFinance,
    goal: GoalInput,
    record_id: Optional[str] = None,
) -> UserFinance:
    """Append a savings goal. Goals never touch the balance."""
    new_goal = Goal(id=record_id or new_record_id(), **goal.model_dump())
    return snapshot.model_copy(update={"goals": [*snapshot.goals, new_goal]})


def apply_special_payment(
    snapshot: UserFinance,
    payment_id: str,
    amount: AmountLike,
    record_id: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> UserFinance:
    """
    Pay an amount towards a special payment.

    Increases paid_amount, debits the balance and records a matching
    EXPENSE transaction. Overpayment is allowed.

    Unknown payment ids are a no-op, same as delete_transaction:
    nothing is debited and no transaction is recorded.
    """
    value = coerce_amount(amount)
    payment = find_special_payment(snapshot, payment_id)
    if payment is None:
        return snapshot

    updated_payment = payment.model_copy(
        update={"paid_amount": payment.paid_amount + value}
    )
    transaction = Transaction(
        id=record_id or new_record_id(),
        date=timestamp or utc_now(),
        amount=value,
        type=TransactionType.EXPENSE,
        category=SPECIAL_PAYMENT_CATEGORY,
        note=f"Paid to {payment.name}",
    )
    return snapshot.model_copy(
        update={
            "special_payments": [
                updated_payment if p.id == payment_id else p
                for p in snapshot.special_payments
            ],
            "transactions": [transaction, *snapshot.transactions],
            "bank_balance": snapshot.bank_balance - value,
        }
    )


def find_transaction(snapshot: UserFinance, transaction_id: str) -> Optional[Transaction]:
    return next((t for t in snapshot.transactions if t.id == transaction_id), None)


def find_special_payment(snapshot: UserFinance, payment_id: str) -> Optional[SpecialPayment]:
    return next((p for p in snapshot.special_payments if p.id == payment_id), None)
