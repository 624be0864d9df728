"""AI Agents package."""

from src.agents.advisor import (
    EMPTY_REPORT,
    FALLBACK_REPORT,
    AdvisoryReport,
    FinancialAdvisorAgent,
    build_prompt,
)

__all__ = [
    "EMPTY_REPORT",
    "FALLBACK_REPORT",
    "AdvisoryReport",
    "FinancialAdvisorAgent",
    "build_prompt",
]
