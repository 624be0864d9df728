"""Shared fixtures for ledger tests."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from src.config import GeminiSettings
from src.ledger import LedgerStore
from src.models.finance import SpecialPayment, SpecialPaymentType, UserFinance
from src.services.storage import InMemorySnapshotStorage


@pytest.fixture
def empty_snapshot() -> UserFinance:
    """Scenario starting point: 500000 balance, no records."""
    return UserFinance(bank_balance=Decimal("500000"))


@pytest.fixture
def payments_snapshot() -> UserFinance:
    return UserFinance(
        bank_balance=Decimal("500000"),
        special_payments=[
            SpecialPayment(id="sp1", name="Father's account", type=SpecialPaymentType.MONTHLY),
            SpecialPayment(
                id="sp2",
                name="Toma",
                total_amount=Decimal("120000"),
                paid_amount=Decimal("0"),
                type=SpecialPaymentType.FIXED,
            ),
        ],
    )


@pytest.fixture
def memory_storage(empty_snapshot) -> InMemorySnapshotStorage:
    return InMemorySnapshotStorage(payload=empty_snapshot.to_json())


@pytest.fixture
def store(memory_storage) -> LedgerStore:
    ledger = LedgerStore(memory_storage)
    ledger.initialize()
    return ledger


@pytest.fixture
def payments_store(payments_snapshot) -> LedgerStore:
    ledger = LedgerStore(InMemorySnapshotStorage(payload=payments_snapshot.to_json()))
    ledger.initialize()
    return ledger


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    return GeminiSettings(api_key="test-key", request_timeout_seconds=0.5)


class FakeGenerativeModel:
    """Stands in for genai.GenerativeModel; records prompts."""

    def __init__(self, text=None, error=None, delay=0.0):
        self.text = text
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    async def generate_content_async(self, prompt: str):
        import asyncio

        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


@pytest.fixture
def fake_model_factory():
    return FakeGenerativeModel
