"""
Ledger Package

Pure ledger operations, derived metrics, and the store that owns
the current snapshot.
"""

from src.ledger.exceptions import (
    InvalidAmountError,
    LedgerError,
    MetricUnavailableError,
)
from src.ledger.metrics import (
    FinancialSummary,
    clamp_percent,
    goal_progress,
    goals_by_type,
    is_settled,
    loan_payoff_progress,
    recent_transactions,
    special_payment_progress,
    special_payment_remaining,
    summarize,
    total_expense,
    total_income,
    total_monthly_installments,
    total_outstanding_debt,
)
from src.ledger.store import (
    LedgerStore,
    MutationResult,
    default_snapshot,
)

__all__ = [
    # Exceptions
    "InvalidAmountError",
    "LedgerError",
    "MetricUnavailableError",
    # Metrics
    "FinancialSummary",
    "clamp_percent",
    "goal_progress",
    "goals_by_type",
    "is_settled",
    "loan_payoff_progress",
    "recent_transactions",
    "special_payment_progress",
    "special_payment_remaining",
    "summarize",
    "total_expense",
    "total_income",
    "total_monthly_installments",
    "total_outstanding_debt",
    # Store
    "LedgerStore",
    "MutationResult",
    "default_snapshot",
]
