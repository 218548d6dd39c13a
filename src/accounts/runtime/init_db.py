"""Database initialization script."""

from loguru import logger

from src.accounts.core.services.database import AccountsDbContext


def init_db() -> None:
    """Create all account tables for the configured database."""
    with AccountsDbContext.from_config() as context:
        context.ensure_created()
    logger.info("Database initialized with tables.")


if __name__ == "__main__":
    init_db()
