"""
Derived Metrics

Totals and progress percentages computed from a ledger snapshot.

These are views, never stored: every call recomputes from the raw
ledger fields. Money totals are Decimal; percentages are float.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from src.ledger.exceptions import MetricUnavailableError
from src.models.finance import (
    Goal,
    GoalType,
    Loan,
    SpecialPayment,
    SpecialPaymentType,
    Transaction,
    TransactionType,
    UserFinance,
)


HUNDRED = Decimal("100")
RECENT_TRANSACTIONS_LIMIT = 5


class FinancialSummary(BaseModel):
    """Headline numbers for the dashboard and the advisory report."""

    bank_balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    total_outstanding_debt: Decimal
    total_monthly_installments: Decimal
    goal_count: int = Field(ge=0)


# =============================================================================
# TOTALS
# =============================================================================

def _sum(values) -> Decimal:
    return sum(values, Decimal("0"))


def total_income(snapshot: UserFinance) -> Decimal:
    return _sum(
        t.amount for t in snapshot.transactions if t.type == TransactionType.INCOME
    )


def total_expense(snapshot: UserFinance) -> Decimal:
    return _sum(
        t.amount for t in snapshot.transactions if t.type == TransactionType.EXPENSE
    )


def total_outstanding_debt(snapshot: UserFinance) -> Decimal:
    """Sum of what is still owed across all loans."""
    return _sum(loan.remaining_amount for loan in snapshot.loans)


def total_monthly_installments(snapshot: UserFinance) -> Decimal:
    """Sum of installment (EMI) amounts across all loans."""
    return _sum(loan.installment_amount for loan in snapshot.loans)


def summarize(snapshot: UserFinance) -> FinancialSummary:
    return FinancialSummary(
        bank_balance=snapshot.bank_balance,
        total_income=total_income(snapshot),
        total_expense=total_expense(snapshot),
        total_outstanding_debt=total_outstanding_debt(snapshot),
        total_monthly_installments=total_monthly_installments(snapshot),
        goal_count=len(snapshot.goals),
    )


# =============================================================================
# PROGRESS
# =============================================================================

def clamp_percent(value: float) -> float:
    """Clamp a raw percentage to [0, 100] for display."""
    return max(0.0, min(100.0, value))


def goal_progress(goal: Goal) -> Optional[float]:
    """
    current / target * 100, unclamped.

    Returns None when target_amount is zero.
    """
    if goal.target_amount == 0:
        return None
    return float(goal.current_amount / goal.target_amount * HUNDRED)


def loan_payoff_progress(loan: Loan) -> Optional[float]:
    """
    Share of the loan already repaid, (1 - remaining / total) * 100, unclamped.

    Returns None when total_amount is zero.
    """
    if loan.total_amount == 0:
        return None
    return float((1 - loan.remaining_amount / loan.total_amount) * HUNDRED)


def _require_fixed(payment: SpecialPayment) -> None:
    if payment.type != SpecialPaymentType.FIXED:
        raise MetricUnavailableError(
            f"Special payment {payment.id!r} is {payment.type.value}; "
            "progress and remaining balance are only defined for FIXED payments"
        )


def special_payment_remaining(payment: SpecialPayment) -> Decimal:
    """
    total - paid for a FIXED payment. Negative when overpaid.

    Raises:
        MetricUnavailableError: for MONTHLY payments
    """
    _require_fixed(payment)
    return payment.total_amount - payment.paid_amount


def special_payment_progress(payment: SpecialPayment) -> Optional[float]:
    """
    paid / total * 100 for a FIXED payment, unclamped.

    Returns None when total_amount is zero.

    Raises:
        MetricUnavailableError: for MONTHLY payments
    """
    _require_fixed(payment)
    if payment.total_amount == 0:
        return None
    return float(payment.paid_amount / payment.total_amount * HUNDRED)


def is_settled(payment: SpecialPayment) -> bool:
    """A FIXED payment is settled once nothing remains. MONTHLY never settles."""
    if payment.type != SpecialPaymentType.FIXED:
        return False
    return special_payment_remaining(payment) <= 0


# =============================================================================
# VIEWS
# =============================================================================

def recent_transactions(
    snapshot: UserFinance,
    limit: int = RECENT_TRANSACTIONS_LIMIT,
) -> list[Transaction]:
    """Newest transactions first."""
    return snapshot.transactions[:max(limit, 0)]


def goals_by_type(snapshot: UserFinance, goal_type: GoalType) -> list[Goal]:
    return [g for g in snapshot.goals if g.type == goal_type]
