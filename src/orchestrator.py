"""
Main Orchestrator for the Household Ledger

This module ties together all the components:
1. Ledger store (load at startup → mutate → save after each change)
2. Advisory report (snapshot → summary → Gemini → narrative)

DESIGN DECISION: The presentation layer only ever talks to the objects
built here. It never edits the snapshot directly.
"""

from typing import Optional

import structlog

from src.agents import FALLBACK_REPORT, AdvisoryReport, FinancialAdvisorAgent
from src.config import get_settings
from src.ledger import LedgerStore, summarize
from src.observability import configure_from_settings
from src.services.storage import JsonFileSnapshotStorage, SnapshotStorageInterface


logger = structlog.get_logger(__name__)


class AdvisoryReportFlow:
    """
    Orchestrates the advisory report.

    Flow:
    1. Read the store's current snapshot
    2. Compute the FinancialSummary
    3. Ask the advisor agent for a report

    Every failure, including a missing Gemini configuration, ends
    in the fixed fallback message.
    """

    def __init__(
        self,
        store: LedgerStore,
        advisor: Optional[FinancialAdvisorAgent] = None,
    ):
        self._store = store
        self._advisor = advisor

    def _get_advisor(self) -> Optional[FinancialAdvisorAgent]:
        if self._advisor is None:
            try:
                self._advisor = FinancialAdvisorAgent()
            except Exception as e:
                # Gemini not configured - reports fall back until it is
                logger.warning("advisor_unavailable", error=str(e))
                return None
        return self._advisor

    async def request_report(self) -> AdvisoryReport:
        summary = summarize(self._store.snapshot)
        advisor = self._get_advisor()
        if advisor is None:
            return AdvisoryReport(text=FALLBACK_REPORT, used_fallback=True)
        return await advisor.generate_report(summary)


def create_app_components(
    storage: Optional[SnapshotStorageInterface] = None,
    configure_logs: bool = True,
) -> tuple[LedgerStore, AdvisoryReportFlow]:
    """
    Factory function to create all application components.

    Args:
        storage: Snapshot storage. Defaults to the JSON file named by
                 StorageSettings (LEDGER_DATA_DIR / LEDGER_STORAGE_KEY).
        configure_logs: Configure structlog from AppSettings first.

    Returns:
        (ledger_store, advisory_report_flow), with the store already initialized
    """
    if configure_logs:
        configure_from_settings()

    if storage is None:
        storage = JsonFileSnapshotStorage(settings=get_settings().storage)

    store = LedgerStore(storage)
    store.initialize()

    return store, AdvisoryReportFlow(store)
