"""
Financial Advisor Agent

DESIGN DECISION: The advisory report is generated by Gemini from a
handful of derived numbers. The ledger itself is never sent.

CRITICAL BOUNDARIES:
- CAN: Comment on the numbers it is given and suggest habits
- CANNOT: Change the ledger in any way
- MUST: Degrade to a fixed fallback message on any failure

The report request reads a summary computed at call time and has no
further interaction with the store. Concurrent requests are independent.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

import google.generativeai as genai
import structlog
from pydantic import BaseModel, Field

from src.config import GeminiSettings, get_settings
from src.ledger.metrics import FinancialSummary


logger = structlog.get_logger(__name__)

FALLBACK_REPORT = (
    "The financial report could not be generated right now. "
    "Please try again later."
)

EMPTY_REPORT = "Sorry, no analysis was returned for your data."


class AdvisoryReport(BaseModel):
    """Narrative report shown verbatim to the user."""

    text: str
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    used_fallback: bool = Field(
        default=False,
        description="True when the text is a fixed message, not model output"
    )


def _money(value: Decimal, currency_symbol: str) -> str:
    return f"{currency_symbol}{value:,.2f}"


def build_prompt(summary: FinancialSummary, currency_symbol: str = "৳") -> str:
    """Prompt embedding balance, income, expense, debt and goal count."""
    return f"""You are a professional financial advisor. Here is a user's financial information:
- Current balance: {_money(summary.bank_balance, currency_symbol)}
- Total income: {_money(summary.total_income, currency_symbol)}
- Total expense: {_money(summary.total_expense, currency_symbol)}
- Total outstanding debt: {_money(summary.total_outstanding_debt, currency_symbol)}
- Number of savings goals: {summary.goal_count}

Based on this information, write a short but useful financial report.
The report must cover these points as a list:
1. An assessment of the current financial position.
2. A comment on the spending pattern.
3. Advice on managing debt.
4. Three practical tips for increasing savings.

Lay it out clearly and keep the tone positive."""


class FinancialAdvisorAgent:
    """
    AI agent that turns a FinancialSummary into a narrative report.

    BOUNDARIES:
    - NEVER raises to the caller
    - NEVER sees individual transactions
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model: Optional[Any] = None,
        currency_symbol: Optional[str] = None,
    ):
        """
        Args:
            settings: Gemini settings; loaded from the environment if None.
            model: Pre-built model exposing generate_content_async
                   (used in tests). Built from settings if None.
            currency_symbol: Defaults to AppSettings.currency_symbol.
        """
        self._settings = settings or get_settings().gemini
        self._currency_symbol = currency_symbol or get_settings().app.currency_symbol
        self._model = model
        if self._model is None:
            self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            }
        )

    async def generate_report(self, summary: FinancialSummary) -> AdvisoryReport:
        """
        Ask the model for a report on the given summary.

        Transport errors, timeouts and blocked/empty responses all
        produce a fallback report.
        """
        prompt = build_prompt(summary, self._currency_symbol)

        try:
            response = await asyncio.wait_for(
                self._model.generate_content_async(prompt),
                timeout=self._settings.request_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "advisory_report_timeout",
                timeout_seconds=self._settings.request_timeout_seconds,
            )
            return AdvisoryReport(text=FALLBACK_REPORT, used_fallback=True)
        except Exception as e:
            logger.error(
                "advisory_report_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return AdvisoryReport(text=FALLBACK_REPORT, used_fallback=True)

        try:
            # .text raises ValueError when the response was blocked
            text = (response.text or "").strip()
        except ValueError as e:
            logger.warning("advisory_report_blocked", error=str(e))
            text = ""

        if not text:
            return AdvisoryReport(text=EMPTY_REPORT, used_fallback=True)

        logger.info("advisory_report_generated", length=len(text))
        return AdvisoryReport(text=text)
