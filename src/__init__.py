"""
Household Ledger - Source Package

A personal household finance tracker: transactions, loans, savings
goals and special payments to named people, kept in one local snapshot.

DESIGN PRINCIPLES:
1. The balance always matches the transaction history
2. Every mutation goes through the ledger store
3. Persistence failures never lose the in-memory state
4. Percentages and totals are computed, never stored
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Household Ledger Team"
