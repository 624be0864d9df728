"""
Tests for the Household Ledger

Test strategy:
1. Unit tests for individual components (models, operations, metrics)
2. Store and storage tests with in-memory or temp-dir backends
3. No real API calls in tests (use fakes)
"""

import json
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

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


class TestTransactionModel:
    """Tests for the Transaction record."""

    def test_transaction_creation(self):
        """Test Transaction gets an id and timestamp by default."""
        t = Transaction(
            amount=Decimal("45000"),
            type=TransactionType.INCOME,
            category="salary",
        )
        assert t.id
        assert t.date is not None
        assert t.note is None

    def test_transaction_rejects_non_positive_amount(self):
        """Amounts must be strictly positive; the type carries the sign."""
        with pytest.raises(ValidationError):
            Transaction(amount=Decimal("0"), type=TransactionType.EXPENSE, category="food")
        with pytest.raises(ValidationError):
            Transaction(amount=Decimal("-10"), type=TransactionType.EXPENSE, category="food")

    def test_signed_amount(self):
        income = Transaction(amount=Decimal("100"), type=TransactionType.INCOME, category="x")
        expense = Transaction(amount=Decimal("100"), type=TransactionType.EXPENSE, category="x")
        assert income.signed_amount == Decimal("100")
        assert expense.signed_amount == Decimal("-100")

    def test_category_strips_whitespace(self):
        t = Transaction(amount=Decimal("1"), type="EXPENSE", category="  rent  ")
        assert t.category == "rent"
        assert t.type == TransactionType.EXPENSE


class TestInputModels:
    """Tests for the form-level input models."""

    def test_transaction_input_requires_positive_amount(self):
        with pytest.raises(ValidationError):
            TransactionInput(amount=Decimal("0"), type=TransactionType.INCOME, category="salary")

    def test_transaction_input_requires_category(self):
        with pytest.raises(ValidationError):
            TransactionInput(amount=Decimal("10"), type=TransactionType.INCOME, category="   ")

    def test_loan_input_remaining_cannot_exceed_total(self):
        with pytest.raises(ValueError, match="Remaining amount cannot exceed total amount"):
            LoanInput(
                name="Bike loan",
                total_amount=Decimal("100000"),
                remaining_amount=Decimal("150000"),
                installment_amount=Decimal("5000"),
                next_payment_date=date(2026, 11, 1),
            )

    def test_loan_input_accepts_fully_paid(self):
        loan = LoanInput(
            name="Bike loan",
            total_amount=Decimal("100000"),
            remaining_amount=Decimal("0"),
            installment_amount=Decimal("5000"),
            next_payment_date=date(2026, 11, 1),
        )
        assert loan.remaining_amount == Decimal("0")

    def test_goal_input_requires_positive_target(self):
        with pytest.raises(ValidationError):
            GoalInput(name="Laptop", target_amount=Decimal("0"), deadline=date(2027, 1, 1))

    def test_goal_input_allows_current_above_target(self):
        goal = GoalInput(
            name="Laptop",
            target_amount=Decimal("80000"),
            current_amount=Decimal("90000"),
            deadline=date(2027, 1, 1),
            type=GoalType.LONG,
        )
        assert goal.current_amount > goal.target_amount


class TestUserFinance:
    """Tests for the ledger root model."""

    def test_defaults_are_empty_collections(self):
        snapshot = UserFinance(bank_balance=Decimal("0"))
        assert snapshot.transactions == []
        assert snapshot.loans == []
        assert snapshot.goals == []
        assert snapshot.special_payments == []

    def test_stored_goal_with_zero_target_loads(self):
        payload = json.dumps({
            "bankBalance": "100",
            "goals": [
                {"id": "g1", "name": "Someday", "targetAmount": "0", "currentAmount": "0",
                 "deadline": "2027-01-01", "type": "LONG"},
            ],
        })
        snapshot = UserFinance.from_json(payload)
        assert snapshot.goals[0].target_amount == Decimal("0")

    def test_balance_may_be_negative(self):
        snapshot = UserFinance(bank_balance=Decimal("-250.50"))
        assert snapshot.bank_balance == Decimal("-250.50")

    def test_json_uses_camel_case_keys(self):
        snapshot = UserFinance(
            bank_balance=Decimal("500000"),
            special_payments=[
                SpecialPayment(id="sp2", name="Toma", total_amount=Decimal("120000"),
                               type=SpecialPaymentType.FIXED),
            ],
        )
        data = json.loads(snapshot.to_json())
        assert "bankBalance" in data
        assert "specialPayments" in data
        assert data["specialPayments"][0]["totalAmount"] == "120000"
        assert data["specialPayments"][0]["paidAmount"] == "0"
        assert data["specialPayments"][0]["type"] == "FIXED"

    def test_accepts_snake_case_names(self):
        snapshot = UserFinance.model_validate(
            {"bank_balance": "10", "special_payments": []}
        )
        assert snapshot.bank_balance == Decimal("10")

    def test_rejects_duplicate_ids(self):
        with pytest.raises(ValidationError, match="Duplicate ids in transactions"):
            UserFinance(
                bank_balance=Decimal("0"),
                transactions=[
                    Transaction(id="a", amount=Decimal("1"), type="INCOME", category="x"),
                    Transaction(id="a", amount=Decimal("2"), type="INCOME", category="y"),
                ],
            )

    def test_from_json_round_trip(self):
        snapshot = UserFinance(
            bank_balance=Decimal("1234.56"),
            transactions=[
                Transaction(amount=Decimal("10.25"), type="EXPENSE", category="tea", note="stall"),
                Transaction(amount=Decimal("99"), type="INCOME", category="gift"),
            ],
            loans=[
                Loan(name="Bank", total_amount=Decimal("500000"), remaining_amount=Decimal("420000"),
                     installment_amount=Decimal("12000"), next_payment_date=date(2026, 11, 5)),
            ],
            goals=[
                Goal(name="Trip", target_amount=Decimal("80000"), current_amount=Decimal("15000"),
                     deadline=date(2027, 6, 1), type=GoalType.SHORT),
            ],
        )
        reloaded = UserFinance.from_json(snapshot.to_json())
        assert reloaded.model_dump() == snapshot.model_dump()
        assert [t.id for t in reloaded.transactions] == [t.id for t in snapshot.transactions]


class TestEnums:
    """Tests for the enum values stored on disk."""

    def test_enum_values(self):
        assert TransactionType.INCOME.value == "INCOME"
        assert GoalType.LONG.value == "LONG"
        assert SpecialPaymentType.MONTHLY.value == "MONTHLY"

    def test_record_ids_are_unique(self):
        ids = {new_record_id() for _ in range(1000)}
        assert len(ids) == 1000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
