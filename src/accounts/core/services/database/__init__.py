"""Storage context and options for the accounts database."""

from .db_context import AccountsDbContext, StorageOptions

__all__ = ["AccountsDbContext", "StorageOptions"]
