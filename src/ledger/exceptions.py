"""Ledger exceptions."""


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidAmountError(LedgerError, ValueError):
    """Amount is missing, non-numeric, not finite, not positive or too large."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount!r}. Amounts must be positive numbers.")


class MetricUnavailableError(LedgerError, ValueError):
    """A derived metric was requested for a record it is not defined for."""
    pass
