"""
Credits Gateway - Credit-Ledger Gateway Service

A FastAPI-based service that fronts the parent accounting service and
exposes a stable contract for balance reads, credit debits, checkout
sessions and transaction history.
"""

__version__ = "0.1.0"
