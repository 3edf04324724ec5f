"""
Main entrypoint: analyze the last 30 days of an account's transaction history.

Reads API_URL, NETWORK, ACCOUNT, API_KEY and DEBUG from the environment (or
.env at the project root), walks the history backwards from the newest
transaction, and prints totals plus per-token SOL profit/loss.

Installed console script: txstats
"""

from backend_txstats.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
