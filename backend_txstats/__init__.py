"""
Backend TxStats — transaction-history analytics for a single Solana account.

Walks the account's transaction history backwards from the newest
transaction, keeps the transactions inside a time window, and reports
fee, compute-unit and per-token SOL profit/loss statistics.
"""

__version__ = "0.1.0"
