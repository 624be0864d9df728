"""
Ledger Store

The single owner of the current UserFinance snapshot.

DESIGN DECISION: The store is an explicit object constructed once at
startup. It exposes the only sanctioned mutations, and persists the
snapshot as an explicit step after every mutation that changed it.

GUARANTEES:
- Mutations are serialized behind one lock; no partial update is observable
- The in-memory snapshot is authoritative for the session, even if a save fails
- A failed save is reported as a warning on the result, never raised
"""

import threading
from decimal import Decimal
from typing import Optional, Union

import structlog
from pydantic import BaseModel

from src.ledger import operations
from src.ledger.operations import AmountLike
from src.models.finance import (
    GoalInput,
    LoanInput,
    SpecialPayment,
    SpecialPaymentType,
    Transaction,
    TransactionInput,
    TransactionType,
    UserFinance,
    new_record_id,
)
from src.services.storage import SnapshotStorageInterface


logger = structlog.get_logger(__name__)

SAVE_FAILED_WARNING = (
    "Your change was applied but could not be saved to disk. "
    "It will be lost when the app closes unless a later save succeeds."
)


def default_snapshot() -> UserFinance:
    """Starting ledger used when nothing usable is stored."""
    return UserFinance(
        bank_balance=Decimal("500000"),
        transactions=[
            Transaction(
                id="1",
                amount=Decimal("45000"),
                type=TransactionType.INCOME,
                category="salary",
                note="January salary",
            ),
        ],
        loans=[],
        goals=[],
        special_payments=[
            SpecialPayment(id="sp1", name="Father's account", type=SpecialPaymentType.MONTHLY),
            SpecialPayment(
                id="sp2", name="Toma", total_amount=Decimal("120000"),
                type=SpecialPaymentType.FIXED,
            ),
            SpecialPayment(
                id="sp3", name="Uncle", total_amount=Decimal("70000"),
                type=SpecialPaymentType.FIXED,
            ),
            SpecialPayment(
                id="sp4", name="Overdue installments", total_amount=Decimal("100000"),
                type=SpecialPaymentType.FIXED,
            ),
        ],
    )


class MutationResult(BaseModel):
    """
    Outcome of a ledger mutation, returned for re-render.

    changed is False for no-ops (unknown ids); nothing is saved then.
    """
    snapshot: UserFinance
    changed: bool
    saved: bool
    record_id: Optional[str] = None
    warning: Optional[str] = None


class LedgerStore:
    """
    Holds the canonical ledger snapshot.

    Usage:
        store = LedgerStore(JsonFileSnapshotStorage())
        store.initialize()
        result = store.add_transaction(45000, TransactionType.INCOME, "salary")
    """

    def __init__(self, storage: SnapshotStorageInterface):
        self._storage = storage
        self._snapshot: Optional[UserFinance] = None
        self._lock = threading.RLock()

    @property
    def snapshot(self) -> UserFinance:
        """Current snapshot (initializes the store on first access)."""
        with self._lock:
            if self._snapshot is None:
                self.initialize()
            return self._snapshot

    @property
    def is_initialized(self) -> bool:
        return self._snapshot is not None

    def initialize(self) -> UserFinance:
        """
        Load the stored snapshot once.

        Falls back to default_snapshot() when nothing usable is stored.
        Calling again after initialization returns the current snapshot
        without touching storage.
        """
        with self._lock:
            if self._snapshot is not None:
                return self._snapshot

            loaded = self._storage.load()
            if loaded is None:
                logger.info("ledger_seeded_with_defaults")
                self._snapshot = default_snapshot()
            else:
                logger.info(
                    "ledger_loaded",
                    bank_balance=str(loaded.bank_balance),
                    transactions=len(loaded.transactions),
                    loans=len(loaded.loans),
                    goals=len(loaded.goals),
                    special_payments=len(loaded.special_payments),
                )
                self._snapshot = loaded
            return self._snapshot

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_transaction(
        self,
        amount: AmountLike,
        transaction_type: Union[TransactionType, str],
        category: str,
        note: Optional[str] = None,
    ) -> MutationResult:
        """
        Record an income or expense and adjust the balance.

        Raises:
            InvalidAmountError: if amount is not a positive number
            pydantic.ValidationError: if category is empty
            ValueError: if transaction_type is not INCOME or EXPENSE
        """
        record_id = new_record_id()
        with self._lock:
            updated = operations.add_transaction(
                self.snapshot,
                amount,
                transaction_type,
                category,
                note=note,
                record_id=record_id,
            )
            added = updated.transactions[0]
            logger.info(
                "transaction_added",
                transaction_id=record_id,
                type=added.type.value,
                amount=str(added.amount),
                category=added.category,
                bank_balance=str(updated.bank_balance),
            )
            return self._commit(updated, record_id)

    def add_transaction_entry(self, entry: TransactionInput) -> MutationResult:
        """Same as add_transaction, from an already-validated form entry."""
        return self.add_transaction(
            entry.amount, entry.type, entry.category, note=entry.note
        )

    def delete_transaction(self, transaction_id: str) -> MutationResult:
        """Remove a transaction and reverse its balance effect. Unknown ids are a no-op."""
        with self._lock:
            current = self.snapshot
            updated = operations.delete_transaction(current, transaction_id)
            if updated is current:
                logger.info("transaction_delete_ignored", transaction_id=transaction_id)
                return self._unchanged()
            logger.info(
                "transaction_deleted",
                transaction_id=transaction_id,
                bank_balance=str(updated.bank_balance),
            )
            return self._commit(updated, transaction_id)

    def add_loan(self, loan: LoanInput) -> MutationResult:
        record_id = new_record_id()
        with self._lock:
            updated = operations.add_loan(self.snapshot, loan, record_id=record_id)
            logger.info(
                "loan_added",
                loan_id=record_id,
                total_amount=str(loan.total_amount),
                remaining_amount=str(loan.remaining_amount),
            )
            return self._commit(updated, record_id)

    def add_goal(self, goal: GoalInput) -> MutationResult:
        record_id = new_record_id()
        with self._lock:
            updated = operations.add_goal(self.snapshot, goal, record_id=record_id)
            logger.info(
                "goal_added",
                goal_id=record_id,
                goal_type=goal.type.value,
                target_amount=str(goal.target_amount),
            )
            return self._commit(updated, record_id)

    def apply_special_payment(self, payment_id: str, amount: AmountLike) -> MutationResult:
        """
        Pay towards a special payment; records an EXPENSE and debits the balance.

        Unknown payment ids are a no-op (nothing debited, nothing recorded).

        Raises:
            InvalidAmountError: if amount is not a positive number
        """
        record_id = new_record_id()
        with self._lock:
            current = self.snapshot
            updated = operations.apply_special_payment(
                current, payment_id, amount, record_id=record_id
            )
            if updated is current:
                logger.warning("special_payment_not_found", payment_id=payment_id)
                return self._unchanged()
            logger.info(
                "special_payment_applied",
                payment_id=payment_id,
                transaction_id=record_id,
                amount=str(updated.transactions[0].amount),
                bank_balance=str(updated.bank_balance),
            )
            return self._commit(updated, record_id)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _commit(self, updated: UserFinance, record_id: Optional[str]) -> MutationResult:
        # Caller holds the lock. Memory first: it stays authoritative if the save fails.
        self._snapshot = updated
        saved = self._save(updated)
        return MutationResult(
            snapshot=updated,
            changed=True,
            saved=saved,
            record_id=record_id,
            warning=None if saved else SAVE_FAILED_WARNING,
        )

    def _unchanged(self) -> MutationResult:
        return MutationResult(snapshot=self._snapshot, changed=False, saved=False)

    def _save(self, snapshot: UserFinance) -> bool:
        try:
            saved = self._storage.save(snapshot)
        except Exception as e:
            logger.error("ledger_save_raised", error=str(e), error_type=type(e).__name__)
            return False
        if not saved:
            logger.warning("ledger_save_failed")
        return saved
