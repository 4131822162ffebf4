"""Database package exports."""

from cityledger.database.base import Base
from cityledger.database.models import City, Client, ExchangeRate, LedgerEntry, LedgerEntryType

__all__ = ["Base", "City", "Client", "LedgerEntry", "LedgerEntryType", "ExchangeRate"]
