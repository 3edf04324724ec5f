"""
Configuration management for Backend TxStats.

Loads and validates settings from environment variables and an optional .env
file once at startup. The resulting Settings value is passed explicitly to the
history client and CLI; nothing reads the environment after that.
"""

from backend_txstats.config.settings import Settings, load_settings  # noqa: F401

__all__ = ["Settings", "load_settings"]
