"""Storage adapters."""

from daily_tools.adapters.storage.data_store import DataStore, validate_date

__all__ = ["DataStore", "validate_date"]
